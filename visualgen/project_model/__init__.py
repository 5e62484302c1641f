"""Project model: scanning, filter derivation and ordering.

This package holds the non-rendering stages of generation:
- classification of a directory tree into compile/include file sets
- derivation of the IDE folder hierarchy from classified files
- canonical backslash path strings and their stable sort order
"""

from __future__ import annotations

from .types import FileRole, ScanOptions, ScanResult
from .scan import classify_file, file_extension, normalize_exclusion, scan_project
from .filters import derive_filter_paths
from .ordering import CANONICAL_SEPARATOR, canonical_path, parent_filter, sorted_paths

__all__ = [
    "FileRole",
    "ScanOptions",
    "ScanResult",
    "classify_file",
    "file_extension",
    "normalize_exclusion",
    "scan_project",
    "derive_filter_paths",
    "CANONICAL_SEPARATOR",
    "canonical_path",
    "parent_filter",
    "sorted_paths",
]
