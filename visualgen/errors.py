"""Error types raised by the scan and write stages.

The CLI turns any ``VisualgenError`` into a one-line diagnostic and a
nonzero exit status.
"""

from __future__ import annotations

from pathlib import Path


class VisualgenError(Exception):
    """Base class for fatal generation errors tied to one filesystem path."""

    def __init__(self, message: str, path: Path) -> None:
        super().__init__(message)
        self.path = path


class ScanError(VisualgenError):
    """Scan root is missing, not a directory, or cannot be listed."""


class WriteError(VisualgenError):
    """A destination manifest could not be written."""


__all__ = ["VisualgenError", "ScanError", "WriteError"]
