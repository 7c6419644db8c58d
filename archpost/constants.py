from __future__ import annotations
import os

LOG_FORMAT = "[%(levelname)s] %(message)s"

class Paths:
    CACHE_DIR = os.environ.get("ARCHPOST_CACHE_DIR") or os.path.expanduser("~/.cache/archpost")
    HISTORY_LOG = os.path.join(CACHE_DIR, "history.log")

class ExitCodes:
    SUCCESS = 0
    FAILURE = 1
