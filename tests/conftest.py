from __future__ import annotations

import json
from typing import Dict, Iterable, List

import pytest


class FakeQuery:
    """In-memory PackageQuery: two name sets, every call recorded."""

    def __init__(self, installed: Iterable[str] = (), repo: Iterable[str] = ()):
        self.installed = set(installed)
        self.repo = set(repo)
        self.calls: List[tuple] = []

    def is_installed(self, name: str) -> bool:
        self.calls.append(("installed", name))
        return name in self.installed

    def is_in_repo(self, name: str) -> bool:
        self.calls.append(("repo", name))
        return name in self.repo


@pytest.fixture
def write_manifest(tmp_path):
    def _write(obj: Dict, name: str = "manifest.json") -> str:
        p = tmp_path / name
        p.write_text(json.dumps(obj), encoding="utf-8")
        return str(p)

    return _write
