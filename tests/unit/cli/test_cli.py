"""CLI argument handling tests.

Verifies how ``visualgen.cli.main`` maps arguments and saved defaults onto a
generation request, and how failures surface as exit messages.
"""

from __future__ import annotations

import io
import sys
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from visualgen import cli, config


def _touch(root: Path, relative: str) -> None:
    path = root / relative
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text("x\n", encoding="utf-8")


class CliTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.config_path = Path(self._tmp.name) / "config" / "config.json"
        patcher = mock.patch("visualgen.config.CONFIG_PATH", self.config_path)
        patcher.start()
        self.addCleanup(patcher.stop)
        self.addCleanup(self._tmp.cleanup)

    def _run(self, *argv: str) -> None:
        with mock.patch.object(sys, "argv", ["visualgen", *argv]):
            cli.main()

    def test_positional_extension_lists_drive_classification(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            _touch(root, "src/a.cpp")
            _touch(root, "src/b.h")
            _touch(root, "notes.txt")

            self._run(str(root), "Demo", '"cpp, .c"', "h,hpp", "-q")

            project = (root / "Demo.vcxproj").read_text(encoding="utf-8")
            self.assertIn('<ClCompile Include="src\\a.cpp" />', project)
            self.assertIn('<ClInclude Include="src\\b.h" />', project)
            self.assertNotIn("notes.txt", project)
            self.assertTrue((root / "Demo.vcxproj.filters").exists())

    def test_exclude_option_prunes_directories(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            _touch(root, "build/gen.cpp")
            _touch(root, "out/bin/x.cpp")
            _touch(root, "a.cpp")

            self._run(str(root), "Demo", "cpp", "--exclude", "build, out/bin", "-q")

            project = (root / "Demo.vcxproj").read_text(encoding="utf-8")
            self.assertIn('<ClCompile Include="a.cpp" />', project)
            self.assertNotIn("gen.cpp", project)
            self.assertNotIn("x.cpp", project)

    def test_dry_run_prints_manifests_without_writing(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            _touch(root, "a.cpp")

            stdout = io.StringIO()
            with mock.patch("sys.stdout", stdout):
                self._run(str(root), "Demo", "cpp", "--dry-run", "-q")

            output = stdout.getvalue()
            self.assertIn(f"==> {root / 'Demo.vcxproj'} <==\n", output)
            self.assertIn(f"==> {root / 'Demo.vcxproj.filters'} <==\n", output)
            self.assertIn('<ClCompile Include="a.cpp" />', output)
            self.assertNotIn("\x1b[", output)
            self.assertFalse((root / "Demo.vcxproj").exists())

    def test_merge_flag_defaults_to_output_manifest(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            _touch(root, "a.cpp")
            (root / "Demo.vcxproj").write_text(
                "<Project>\n  <ItemGroup>\n    <None Include=\"x.txt\" />\n  </ItemGroup>\n</Project>\n",
                encoding="utf-8",
            )

            self._run(str(root), "Demo", "cpp", "--merge", "-q")

            project = (root / "Demo.vcxproj").read_text(encoding="utf-8")
            self.assertTrue(project.startswith("<Project>\n<ItemGroup>\n\t<ClCompile Include=\"a.cpp\" />"))
            self.assertIn('<None Include="x.txt" />', project)

    def test_merge_flag_before_positionals_leaves_them_positional(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            _touch(root, "a.cpp")

            self._run("--merge", str(root), "Demo", "cpp", "-q")

            project = (root / "Demo.vcxproj").read_text(encoding="utf-8")
            self.assertIn('<ClCompile Include="a.cpp" />', project)

    def test_merge_source_reads_frame_from_given_manifest(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve() / "tree"
            _touch(root, "a.cpp")
            source = Path(tmp) / "template.vcxproj"
            source.write_text("<Project>\n  <!-- shared -->\n</Project>\n", encoding="utf-8")

            self._run(str(root), "Demo", "cpp", "--merge-source", str(source), "-q")

            project = (root / "Demo.vcxproj").read_text(encoding="utf-8")
            self.assertTrue(project.startswith("<Project>\n  <!-- shared -->\n<ItemGroup>\n"))
            self.assertEqual(source.read_text(encoding="utf-8"), "<Project>\n  <!-- shared -->\n</Project>\n")

    def test_merge_source_cannot_be_combined_with_footer(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            with mock.patch("sys.stderr", io.StringIO()):
                with self.assertRaises(SystemExit) as ctx:
                    self._run(tmp, "Demo", "--merge-source", "x.vcxproj", "--footer", "y")
            self.assertEqual(ctx.exception.code, 2)

    def test_header_and_footer_accept_file_references(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            _touch(root, "a.cpp")
            footer_file = Path(tmp) / "footer.xml"
            footer_file.write_text("<!-- from file -->\n", encoding="utf-8")

            self._run(str(root), "Demo", "cpp", "--header", "<!-- inline -->", "--footer", f"@{footer_file}", "-q")

            project = (root / "Demo.vcxproj").read_text(encoding="utf-8")
            self.assertIn("<!-- inline -->\n<ItemGroup>", project)
            self.assertTrue(project.endswith("<!-- from file -->\n</Project>\n"))

    def test_merge_cannot_be_combined_with_header(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            with mock.patch("sys.stderr", io.StringIO()):
                with self.assertRaises(SystemExit) as ctx:
                    self._run(tmp, "Demo", "--merge", "--header", "x")
            self.assertEqual(ctx.exception.code, 2)

    def test_missing_root_exits_with_message(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            missing = Path(tmp) / "missing"
            with self.assertRaises(SystemExit) as ctx:
                self._run(str(missing), "Demo", "-q")
            self.assertEqual(str(ctx.exception), f"Path not found: {missing}")

    def test_saved_defaults_fill_omitted_lists(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            _touch(root, "a.cpp")
            _touch(root, "a.h")
            _touch(root, "skip/b.cpp")

            self._run(str(root), "Demo", "cpp", "h", "--exclude", "skip", "--save-defaults", "--dry-run", "-q")
            self.assertEqual(config.load_compile_extensions(), {".cpp"})
            self.assertEqual(config.load_include_extensions(), {".h"})
            self.assertEqual(config.load_exclusions(), {"skip"})

            self._run(str(root), "Demo", "-q")

            project = (root / "Demo.vcxproj").read_text(encoding="utf-8")
            self.assertIn('<ClCompile Include="a.cpp" />', project)
            self.assertIn('<ClInclude Include="a.h" />', project)
            self.assertNotIn("b.cpp", project)

    def test_explicit_empty_lists_override_saved_defaults(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            _touch(root, "a.cpp")
            _touch(root, "notes.txt")
            config.save_defaults({".cpp"}, set(), set())

            self._run(str(root), "Demo", "", "", "-q")

            project = (root / "Demo.vcxproj").read_text(encoding="utf-8")
            self.assertIn('<ClCompile Include="notes.txt" />', project)


if __name__ == "__main__":
    unittest.main()
