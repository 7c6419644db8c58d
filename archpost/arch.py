from __future__ import annotations
import logging
import shutil
import subprocess
from typing import List, Tuple

from .errors import MissingToolError

logger = logging.getLogger(__name__)

PACMAN = "pacman"
AUR_HELPER = "yay"

def which(cmd: str) -> bool:
    return shutil.which(cmd) is not None

def require_tool(cmd: str) -> None:
    if not which(cmd):
        raise MissingToolError(cmd)

def run_capture(cmd: List[str]) -> Tuple[int, str]:
    try:
        p = subprocess.run(cmd, stdout=subprocess.PIPE, stderr=subprocess.STDOUT, text=True)
        return p.returncode, p.stdout
    except OSError as e:
        return 127, f"Cannot run {cmd[0]}: {e.strerror or e}"

def sh_quote(s: str) -> str:
    if s and all(c.isalnum() or c in "@%+=:,./-_" for c in s):
        return s
    return "'" + s.replace("'", "'\"'\"'") + "'"

def format_cmd(argv: List[str]) -> str:
    return " ".join(sh_quote(a) for a in argv)

class PacmanQuery:
    """
    Answers installed/in-repo questions through pacman exit codes.
    Non-zero rc (or pacman missing) means "no".
    """

    def is_installed(self, name: str) -> bool:
        rc, _ = run_capture([PACMAN, "-Qq", name])
        logger.debug("pacman -Qq %s -> rc=%d", name, rc)
        return rc == 0

    def is_in_repo(self, name: str) -> bool:
        rc, _ = run_capture([PACMAN, "-Si", name])
        logger.debug("pacman -Si %s -> rc=%d", name, rc)
        return rc == 0

def install_argv(tool: str, packages: List[str], no_confirm: bool = False) -> List[str]:
    argv = [tool, "-S", "--needed"]
    if no_confirm:
        argv.append("--noconfirm")
    return argv + list(packages)

def run_install(argv: List[str]) -> int:
    # stdin/stdout stay attached so pacman/yay can prompt
    try:
        return subprocess.call(argv)
    except OSError as e:
        logger.warning("cannot run installer %s: %s", argv[0], e)
        return 127
