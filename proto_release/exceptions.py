"""Custom exceptions for Proto Release."""

from typing import List, Optional


class ExternalToolError(Exception):
    """Raised when the schema compiler or the archiver exits non-zero."""

    def __init__(self, message: str, command: Optional[List[str]] = None, returncode: int = 1):
        self.command = command or []
        self.returncode = returncode
        super().__init__(message)


class GitTagError(Exception):
    """Raised when the release tag cannot be resolved from the git repository."""


class SettingsError(Exception):
    """Raised when the YAML settings file cannot be read."""
