from __future__ import annotations

import argparse
import logging
import os
import sys
from typing import List, Optional

from . import __version__
from .arch import AUR_HELPER, PACMAN, PacmanQuery, require_tool, which
from .classify import classify
from .constants import LOG_FORMAT, ExitCodes, Paths
from .errors import ManifestError, MissingToolError
from .history import parse_history
from .installer import apply_plan, plan_installs
from .manifest import load_manifest, parse_category_filter, select_categories
from .report import summary_lines, trailer_lines

logger = logging.getLogger(__name__)

EPILOG = """\
Examples:
  sudo archpost -f arch_post_install.json
  sudo archpost -f arch_post_install.json --categories "system_admin,networking,cybersecurity" --aur
"""

class _Parser(argparse.ArgumentParser):
    # bad usage exits 1, not argparse's 2
    def error(self, message: str) -> None:  # type: ignore[override]
        self.print_usage(sys.stderr)
        self.exit(ExitCodes.FAILURE, f"Error: {message}\n")

def build_parser() -> argparse.ArgumentParser:
    ap = _Parser(
        prog="archpost",
        description="Install Arch packages by category from a JSON manifest.",
        epilog=EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    ap.add_argument("-f", "--file", help="Path to JSON (e.g., arch_post_install.json)")
    ap.add_argument("--categories", default=None, help='Comma-separated subset of categories to install, e.g. "a,b,c"')
    ap.add_argument("--aur", action="store_true", help="Install packages missing from the repos via yay if present")
    ap.add_argument("--dry-run", action="store_true", help="Show what would be installed, but don't install")
    ap.add_argument("--no-confirm", action="store_true", help="Pass --noconfirm to pacman/yay")
    ap.add_argument("--jobs", type=int, default=1, help="Parallel package lookups (default: 1)")
    ap.add_argument("--review", action="store_true", help="Review the plan in a terminal UI before installing")
    ap.add_argument("--self-check", action="store_true", help="Report required/optional tools and exit")
    ap.add_argument("--history", action="store_true", help="Show recorded installer runs (newest first) and exit")
    ap.add_argument("--history-log", default=Paths.HISTORY_LOG, help="Where installer runs are recorded")
    ap.add_argument("--log-level", default="WARNING", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    ap.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return ap

def _setup_logging(level: str) -> None:
    logging.basicConfig(format=LOG_FORMAT, level=getattr(logging, level, logging.WARNING))
    logging.getLogger().setLevel(getattr(logging, level, logging.WARNING))

def self_check() -> int:
    print(f"{PACMAN}: {'OK' if which(PACMAN) else 'MISSING'} · {AUR_HELPER}: {'OK' if which(AUR_HELPER) else 'MISSING'}")
    return ExitCodes.SUCCESS if which(PACMAN) else ExitCodes.FAILURE

def show_history(path: str, limit: int = 50) -> int:
    entries = parse_history(path, max_entries=limit)
    if not entries:
        print(f"No history in {path}")
        return ExitCodes.SUCCESS
    for e in entries:
        cmd0 = (e.get("cmds") or [""])[0]
        print(f"[{e['ts']}] {e['action']:<13} rc={e['rc']:<4} {cmd0}")
    return ExitCodes.SUCCESS

def _print_category(name: str, present: bool) -> None:
    print(f"Processing category: {name}")
    if not present:
        print(f"  Skipping unknown category: {name}")

def _exit_code(rc: int) -> int:
    if rc == 0:
        return ExitCodes.SUCCESS
    return rc if 0 < rc < 256 else ExitCodes.FAILURE

def main(argv: Optional[List[str]] = None) -> int:
    ap = build_parser()
    args = ap.parse_args(argv)
    _setup_logging(args.log_level)

    if args.self_check:
        return self_check()
    if args.history:
        return show_history(args.history_log)

    if not args.file:
        print("Error: JSON file not provided.")
        ap.print_help()
        return ExitCodes.FAILURE
    if not os.path.isfile(args.file):
        print(f"Error: JSON file '{args.file}' not found.")
        return ExitCodes.FAILURE

    try:
        require_tool(PACMAN)
        manifest = load_manifest(args.file)
    except MissingToolError as e:
        print(f"Error: {e.tool} not found. This script is for Arch Linux.")
        return ExitCodes.FAILURE
    except ManifestError as e:
        print(f"Error: {e}")
        return ExitCodes.FAILURE

    categories = select_categories(manifest, parse_category_filter(args.categories))
    print("Categories to process: " + " ".join(categories))

    aur_helper = which(AUR_HELPER)
    if args.aur and not aur_helper:
        print(f"Warning: --aur specified but '{AUR_HELPER}' is not installed. AUR packages will be queued as missing.")

    buckets = classify(
        manifest,
        categories,
        aur_enabled=args.aur,
        aur_helper_available=aur_helper,
        query=PacmanQuery(),
        jobs=max(1, args.jobs),
        progress=_print_category,
    )
    for ln in summary_lines(buckets):
        print(ln)

    steps = plan_installs(buckets, no_confirm=args.no_confirm, aur_helper_available=aur_helper)

    if args.review and steps:
        from .ui_app import ReviewApp

        if not ReviewApp(buckets, steps, dry_run=args.dry_run).run():
            print("Aborted.")
            return ExitCodes.SUCCESS

    rc = apply_plan(steps, dry_run=args.dry_run, history_log=args.history_log)

    for ln in trailer_lines(buckets, aur_helper):
        print(ln)
    print("Done.")
    return _exit_code(rc)
