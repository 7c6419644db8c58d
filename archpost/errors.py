from __future__ import annotations

class ArchPostError(Exception):
    """Base class for errors that abort a run."""

class ManifestError(ArchPostError):
    """Manifest file is unreadable or does not match the category schema."""

class MissingToolError(ArchPostError):
    def __init__(self, tool: str):
        super().__init__(f"{tool} not found")
        self.tool = tool
