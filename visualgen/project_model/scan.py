"""Directory walk that classifies files into compile and include sets."""

from __future__ import annotations

import logging
import os
from pathlib import Path, PurePosixPath

from ..errors import ScanError
from ..gitignore import load_gitignore_matcher
from .types import FileRole, ScanOptions, ScanResult

logger = logging.getLogger(__name__)

_ROOT = PurePosixPath(".")


def normalize_exclusion(value: str) -> str:
    """Return ``value`` as a forward-slash relative path without edge separators.

    ``"build"``, ``"build/"``, ``"./build"`` and ``".\\build"`` all map to
    ``"build"``.
    """
    cleaned = value.strip().replace("\\", "/")
    parts = [part for part in cleaned.split("/") if part and part != "."]
    return "/".join(parts)


def file_extension(name: str) -> str:
    """Return the last extension of ``name`` including its dot, or ``""``."""
    return os.path.splitext(name)[1]


def classify_file(name: str, options: ScanOptions) -> frozenset[FileRole]:
    """Return the roles a file named ``name`` is listed under.

    An empty result means the file is dropped. Extension matching is exact, so
    ``.CPP`` does not match ``.cpp``.
    """
    if options.no_extension_filter:
        return frozenset({FileRole.COMPILE})
    extension = file_extension(name)
    roles: set[FileRole] = set()
    if extension in options.compile_extensions:
        roles.add(FileRole.COMPILE)
    if extension in options.include_extensions:
        roles.add(FileRole.INCLUDE)
    return frozenset(roles)


def _check_root(root: Path) -> None:
    if not root.exists():
        raise ScanError(f"Path not found: {root}", root)
    if not root.is_dir():
        raise ScanError(f"Not a directory: {root}", root)
    try:
        with os.scandir(root):
            pass
    except OSError as exc:
        raise ScanError(f"Cannot read directory {root}: {exc.strerror or exc}", root) from exc


def scan_project(root: Path, options: ScanOptions) -> ScanResult:
    """Walk ``root`` once and classify every relevant file.

    Excluded directories are pruned before descending. Hidden files and files
    named like an output manifest are skipped wherever they appear. Directory
    symlinks are not followed.
    """
    root = Path(root)
    _check_root(root)

    exclusions = {normalize_exclusion(item) for item in options.exclusions}
    exclusions.discard("")
    ignore_matcher = load_gitignore_matcher(root) if options.skip_gitignored else None

    compile_files: set[PurePosixPath] = set()
    include_files: set[PurePosixPath] = set()
    directories: set[PurePosixPath] = set()

    def on_walk_error(exc: OSError) -> None:
        logger.debug("Skipping unreadable directory %s: %s", exc.filename, exc.strerror or exc)

    for dirpath, dirnames, filenames in os.walk(root, onerror=on_walk_error):
        base = Path(dirpath)
        rel_base = PurePosixPath(*Path(os.path.relpath(dirpath, root)).parts)
        if rel_base != _ROOT:
            directories.add(rel_base)

        kept: list[str] = []
        for name in sorted(dirnames):
            rel_dir = rel_base / name
            if rel_dir.as_posix() in exclusions:
                logger.debug("Pruning excluded directory %s", rel_dir)
                continue
            if options.prune_hidden_dirs and name.startswith("."):
                logger.debug("Pruning hidden directory %s", rel_dir)
                continue
            if ignore_matcher is not None and ignore_matcher.is_ignored(base / name):
                logger.debug("Pruning gitignored directory %s", rel_dir)
                continue
            kept.append(name)
        dirnames[:] = kept

        for name in filenames:
            if not name or name.startswith("."):
                continue
            if name in options.manifest_names:
                continue
            path = base / name
            if not path.is_file():
                continue
            if ignore_matcher is not None and ignore_matcher.is_ignored(path):
                continue
            roles = classify_file(name, options)
            rel_file = rel_base / name
            if FileRole.COMPILE in roles:
                compile_files.add(rel_file)
            if FileRole.INCLUDE in roles:
                include_files.add(rel_file)

    logger.debug(
        "Scanned %s: %d compile, %d include, %d directories",
        root,
        len(compile_files),
        len(include_files),
        len(directories),
    )
    return ScanResult(
        compile_files=frozenset(compile_files),
        include_files=frozenset(include_files),
        directories=frozenset(directories),
    )


__all__ = ["normalize_exclusion", "file_extension", "classify_file", "scan_project"]
