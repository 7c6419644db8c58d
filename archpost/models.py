from __future__ import annotations
from dataclasses import dataclass, field
from typing import Dict, List

@dataclass(frozen=True)
class Category:
    name: str
    packages: List[str]

@dataclass(frozen=True)
class Manifest:
    categories: Dict[str, Category]  # insertion order == file order

    def names(self) -> List[str]:
        return list(self.categories)

    def has(self, name: str) -> bool:
        return name in self.categories

@dataclass
class Buckets:
    installed: List[str] = field(default_factory=list)
    repo_install: List[str] = field(default_factory=list)
    aur_install: List[str] = field(default_factory=list)
    unresolved: List[str] = field(default_factory=list)

@dataclass(frozen=True)
class InstallStep:
    tool: str  # pacman|yay
    action: str  # install-repo|install-aur
    packages: List[str]
    argv: List[str]
