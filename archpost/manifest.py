from __future__ import annotations
import json
import logging
from typing import Any, Dict, List, Optional

from .errors import ManifestError
from .models import Category, Manifest

logger = logging.getLogger(__name__)

def load_manifest(path: str) -> Manifest:
    """
    Reads and validates a category manifest. Any problem is fatal.
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            raw = f.read()
    except OSError as e:
        raise ManifestError(f"cannot read '{path}': {e.strerror or e}") from e
    except UnicodeDecodeError as e:
        raise ManifestError(f"'{path}' is not valid UTF-8 (byte {e.start})") from e
    try:
        obj = json.loads(raw)
    except json.JSONDecodeError as e:
        raise ManifestError(f"'{path}' is not valid JSON: {e.msg} (line {e.lineno})") from e
    return parse_manifest(obj)

def parse_manifest(obj: Any) -> Manifest:
    if not isinstance(obj, dict):
        raise ManifestError("manifest must be a JSON object of categories")
    cats: Dict[str, Category] = {}
    for name, rec in obj.items():
        if not isinstance(rec, dict):
            raise ManifestError(f"category '{name}' must be an object")
        pkgs = rec.get("packages")
        if not isinstance(pkgs, list):
            raise ManifestError(f"category '{name}' has no 'packages' array")
        for p in pkgs:
            if not isinstance(p, str) or not p:
                raise ManifestError(f"category '{name}' contains an invalid package name: {p!r}")
        # unknown keys next to 'packages' are ignored
        cats[name] = Category(name=name, packages=list(pkgs))
    logger.debug("manifest: %d categories", len(cats))
    return Manifest(categories=cats)

def parse_category_filter(value: Optional[str]) -> Optional[List[str]]:
    if value is None:
        return None
    xs = [x.strip() for x in value.split(",")]
    return [x for x in xs if x]

def select_categories(manifest: Manifest, names: Optional[List[str]]) -> List[str]:
    # no filter -> every category, sorted by name like `jq keys`
    if not names:
        return sorted(manifest.names())
    seen = set()
    out: List[str] = []
    for n in names:
        if n not in seen:
            seen.add(n)
            out.append(n)
    return out
