from __future__ import annotations
import logging
from typing import List

from .arch import AUR_HELPER, PACMAN, format_cmd, install_argv, run_install
from .history import log_history
from .models import Buckets, InstallStep

logger = logging.getLogger(__name__)

HEADINGS = {
    "install-repo": "Installing repo packages with pacman...",
    "install-aur": "Installing AUR packages with yay...",
}

def plan_installs(buckets: Buckets, no_confirm: bool = False, aur_helper_available: bool = True) -> List[InstallStep]:
    """
    One batched step per non-empty bucket: pacman first, then the AUR helper.
    """
    steps: List[InstallStep] = []
    if buckets.repo_install:
        steps.append(InstallStep(
            tool=PACMAN,
            action="install-repo",
            packages=list(buckets.repo_install),
            argv=install_argv(PACMAN, buckets.repo_install, no_confirm),
        ))
    if buckets.aur_install and aur_helper_available:
        steps.append(InstallStep(
            tool=AUR_HELPER,
            action="install-aur",
            packages=list(buckets.aur_install),
            argv=install_argv(AUR_HELPER, buckets.aur_install, no_confirm),
        ))
    return steps

def apply_plan(steps: List[InstallStep], dry_run: bool, history_log: str) -> int:
    rc_out = 0
    for st in steps:
        print(HEADINGS.get(st.action, f"Running {st.tool}..."))
        cmd = format_cmd(st.argv)
        if dry_run:
            print(f"[DRY-RUN] {cmd}")
            continue
        rc = run_install(st.argv)
        logger.info("%s rc=%d", cmd, rc)
        try:
            log_history(history_log, st.action, [cmd], rc)
        except OSError as e:
            logger.warning("could not write history log %s: %s", history_log, e)
        if rc != 0:
            print(f"  {st.tool} exited with rc={rc}")
            if rc_out == 0:
                rc_out = rc
    return rc_out
