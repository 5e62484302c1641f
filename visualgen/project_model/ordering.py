"""Canonical path strings and the stable order used in every manifest.

Manifests always use a backslash separator. Sorting on that string puts a
folder before everything below it since its text is a prefix of theirs.
"""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import PurePosixPath

CANONICAL_SEPARATOR = "\\"


def canonical_path(path: PurePosixPath) -> str:
    """Return ``path`` joined with backslashes; the root maps to ``""``."""
    if str(path) in {"", "."}:
        return ""
    return CANONICAL_SEPARATOR.join(path.parts)


def parent_filter(path: PurePosixPath) -> str:
    """Return the canonical filter name of the folder holding ``path``."""
    return canonical_path(path.parent)


def sorted_paths(paths: Iterable[PurePosixPath]) -> list[PurePosixPath]:
    """Return ``paths`` ordered by their canonical string form."""
    return sorted(paths, key=canonical_path)


__all__ = ["CANONICAL_SEPARATOR", "canonical_path", "parent_filter", "sorted_paths"]
