"""Tests for gitignore-aware scan pruning."""

from __future__ import annotations

import shutil
import subprocess
import tempfile
import unittest
from pathlib import Path, PurePosixPath
from unittest import mock

from visualgen.gitignore import GitIgnoreMatcher, load_gitignore_matcher
from visualgen.project_model import ScanOptions, scan_project


class GitIgnoreMatcherTests(unittest.TestCase):
    def test_matcher_rejects_whole_ignored_subtree(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            matcher = GitIgnoreMatcher(
                root=root,
                ignored_files=frozenset({root / "a.o"}),
                ignored_dirs=frozenset({root / "build"}),
            )

            self.assertTrue(matcher.is_ignored(root / "a.o"))
            self.assertTrue(matcher.is_ignored(root / "build" / "x" / "y.cpp"))
            self.assertFalse(matcher.is_ignored(root / "src" / "a.cpp"))
            self.assertFalse(matcher.is_ignored(root.parent / "a.o"))

    def test_no_matcher_without_git(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            with mock.patch("visualgen.gitignore.shutil.which", return_value=None):
                self.assertIsNone(load_gitignore_matcher(Path(tmp)))

    @unittest.skipIf(shutil.which("git") is None, "git is required for gitignore pruning tests")
    def test_scan_skips_gitignored_paths_when_enabled(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            subprocess.run(["git", "init", "-q", str(root)], check=True)
            (root / ".gitignore").write_text("build/\ngenerated.cpp\n", encoding="utf-8")
            (root / "build").mkdir()
            (root / "build" / "out.cpp").write_text("x\n", encoding="utf-8")
            (root / "generated.cpp").write_text("x\n", encoding="utf-8")
            (root / "main.cpp").write_text("x\n", encoding="utf-8")

            everything = scan_project(root, ScanOptions(compile_extensions=frozenset({".cpp"})))
            tracked = scan_project(
                root,
                ScanOptions(compile_extensions=frozenset({".cpp"}), skip_gitignored=True),
            )

            self.assertEqual(
                everything.compile_files,
                {PurePosixPath("build/out.cpp"), PurePosixPath("generated.cpp"), PurePosixPath("main.cpp")},
            )
            self.assertEqual(tracked.compile_files, {PurePosixPath("main.cpp")})


if __name__ == "__main__":
    unittest.main()
