from __future__ import annotations
from typing import List

from .models import Buckets

def summary_lines(b: Buckets) -> List[str]:
    lines = [
        "Summary:",
        f"  Already installed: {len(b.installed)}",
        f"  Repo (pacman) install: {len(b.repo_install)}",
        f"  AUR (yay) install: {len(b.aur_install)}",
        f"  Missing (no AUR): {len(b.unresolved)}",
    ]
    if b.installed:
        lines.append("  Skipped: " + " ".join(b.installed))
    return lines

def trailer_lines(b: Buckets, aur_helper_available: bool) -> List[str]:
    lines: List[str] = []
    if b.aur_install and not aur_helper_available:
        lines.append("AUR packages requested but 'yay' not found. You can install yay, then re-run with --aur.")
        lines.append("Missing AUR candidates: " + " ".join(b.aur_install))
    if b.unresolved:
        lines.append("These packages were not found in repos and AUR install was not enabled/available:")
        lines.append("  " + " ".join(b.unresolved))
    return lines
