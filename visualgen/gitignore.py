"""Gitignore-aware pruning for project scans.

Builds a matcher by querying git for ignored files and directories under the
scan root. The classifier uses it to optionally skip ignored content.
"""

from __future__ import annotations

import logging
import shutil
import subprocess
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)


def _is_within(path: Path, root: Path) -> bool:
    """Return whether ``path`` is at or under ``root`` after resolution."""
    try:
        path.relative_to(root)
        return True
    except ValueError:
        return False


@dataclass(frozen=True)
class GitIgnoreMatcher:
    """Resolved gitignore snapshot for a scan root.

    ``ignored_dirs`` holds resolved directory paths so a pruned directory
    rejects its whole subtree with one lookup.
    """

    root: Path
    ignored_files: frozenset[Path]
    ignored_dirs: frozenset[Path]

    def is_ignored(self, path: Path) -> bool:
        """Return whether ``path`` is ignored under this matcher root."""
        resolved = path.resolve()
        if not _is_within(resolved, self.root):
            return False
        if resolved in self.ignored_files:
            return True
        current = resolved
        while True:
            if current in self.ignored_dirs:
                return True
            if current == self.root:
                break
            parent = current.parent
            if parent == current:
                break
            current = parent
        return False


def _git_stdout(args: list[str]) -> bytes | None:
    try:
        proc = subprocess.run(
            ["git", *args],
            stdout=subprocess.PIPE,
            stderr=subprocess.DEVNULL,
            check=True,
        )
    except (OSError, subprocess.CalledProcessError):
        return None
    return proc.stdout


def load_gitignore_matcher(root: Path) -> GitIgnoreMatcher | None:
    """Build a matcher for ``root`` from ``git ls-files --ignored``.

    Returns ``None`` when git is unavailable, ``root`` is not inside a work
    tree, or a git command fails. Only ignored paths within ``root`` are kept,
    even when the repository root is higher.
    """
    if shutil.which("git") is None:
        logger.debug("git not found; gitignore pruning disabled")
        return None

    root = root.resolve()
    top_out = _git_stdout(["-C", str(root), "rev-parse", "--show-toplevel"])
    top_level = top_out.decode("utf-8", errors="replace").strip() if top_out else ""
    if not top_level:
        logger.debug("%s is not inside a git work tree; gitignore pruning disabled", root)
        return None

    repo_root = Path(top_level).resolve()
    if not _is_within(root, repo_root):
        return None

    listing = _git_stdout(
        [
            "-C",
            str(repo_root),
            "ls-files",
            "-z",
            "--others",
            "-i",
            "--exclude-standard",
            "--directory",
        ]
    )
    if listing is None:
        return None

    ignored_files: set[Path] = set()
    ignored_dirs: set[Path] = set()
    for raw in listing.split(b"\x00"):
        if not raw:
            continue
        rel = raw.decode("utf-8", errors="replace")
        is_dir = rel.endswith("/")
        rel = rel.rstrip("/")
        if not rel:
            continue
        abs_path = (repo_root / rel).resolve()
        if not _is_within(abs_path, root):
            continue
        if is_dir or abs_path.is_dir():
            ignored_dirs.add(abs_path)
        else:
            ignored_files.add(abs_path)

    return GitIgnoreMatcher(
        root=root,
        ignored_files=frozenset(ignored_files),
        ignored_dirs=frozenset(ignored_dirs),
    )


__all__ = ["GitIgnoreMatcher", "load_gitignore_matcher"]
