"""Folder ("filter") hierarchy implied by a set of classified files."""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import PurePosixPath


def _is_root(path: PurePosixPath) -> bool:
    text = str(path)
    return text in {"", ".", "/"}


def derive_filter_paths(paths: Iterable[PurePosixPath]) -> frozenset[PurePosixPath]:
    """Return every strict ancestor directory of ``paths``, root excluded.

    Walking up stops at the first ancestor already collected: an ancestor is
    only ever added together with all of its own ancestors.
    """
    filters: set[PurePosixPath] = set()
    for path in paths:
        for parent in path.parents:
            if _is_root(parent) or parent in filters:
                break
            filters.add(parent)
    return frozenset(filters)


__all__ = ["derive_filter_paths"]
