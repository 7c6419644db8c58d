from __future__ import annotations
import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Callable, Dict, Iterable, List, Optional, Protocol, Tuple

from .models import Buckets, Manifest

logger = logging.getLogger(__name__)

INSTALLED = "installed"
IN_REPO = "repo"
NOT_FOUND = "missing"

class PackageQuery(Protocol):
    def is_installed(self, name: str) -> bool: ...
    def is_in_repo(self, name: str) -> bool: ...

def dedup_stable(xs: Iterable[str]) -> List[str]:
    seen = set()
    out: List[str] = []
    for x in xs:
        if x not in seen:
            seen.add(x)
            out.append(x)
    return out

def lookup(query: PackageQuery, name: str) -> str:
    if query.is_installed(name):
        return INSTALLED
    if query.is_in_repo(name):
        return IN_REPO
    return NOT_FOUND

def classify(
    manifest: Manifest,
    categories: List[str],
    aur_enabled: bool,
    aur_helper_available: bool,
    query: PackageQuery,
    jobs: int = 1,
    progress: Optional[Callable[[str, bool], None]] = None,
) -> Buckets:
    """
    Sorts every package of the selected categories into one of four buckets.

    Categories run in the given order, packages in manifest order. Category
    names missing from the manifest are skipped. A package listed more than
    once appears a single time, at its first position, with its first
    classification.

    With jobs > 1 the lookups run on a thread pool; results are still
    consumed in manifest order, so the buckets match a sequential run.
    """
    occurrences: List[str] = []
    for cat in categories:
        present = manifest.has(cat)
        if progress is not None:
            progress(cat, present)
        if not present:
            logger.info("skipping unknown category: %s", cat)
            continue
        occurrences.extend(manifest.categories[cat].packages)

    results = _lookup_all(query, occurrences, jobs)

    use_aur = aur_enabled and aur_helper_available
    # first classification of a name wins, across all buckets
    decided: Dict[str, str] = {}
    for name, state in results:
        decided.setdefault(name, state)

    out = Buckets()
    for name in dedup_stable(n for n, _ in results):
        state = decided[name]
        if state == INSTALLED:
            out.installed.append(name)
        elif state == IN_REPO:
            out.repo_install.append(name)
        elif use_aur:
            out.aur_install.append(name)
        else:
            out.unresolved.append(name)
    return out

def _lookup_all(query: PackageQuery, names: List[str], jobs: int) -> List[Tuple[str, str]]:
    if jobs <= 1 or len(names) < 2:
        return [(n, lookup(query, n)) for n in names]
    with ThreadPoolExecutor(max_workers=jobs) as ex:
        states = list(ex.map(lambda n: lookup(query, n), names))
    return list(zip(names, states))
