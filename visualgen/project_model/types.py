"""Datatypes shared by the scan, filter and ordering stages."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from pathlib import PurePosixPath


class FileRole(enum.Enum):
    """Item kind a classified file is listed under."""

    COMPILE = "ClCompile"
    INCLUDE = "ClInclude"


@dataclass(frozen=True)
class ScanOptions:
    """Classification inputs for one scan.

    Both extension sets empty means every surviving file is compiled.
    ``manifest_names`` are filenames skipped anywhere in the tree so a previous
    run's output is never classified as a source.
    """

    compile_extensions: frozenset[str] = frozenset()
    include_extensions: frozenset[str] = frozenset()
    exclusions: frozenset[str] = frozenset()
    manifest_names: frozenset[str] = frozenset()
    skip_gitignored: bool = False
    prune_hidden_dirs: bool = False

    @property
    def no_extension_filter(self) -> bool:
        return not self.compile_extensions and not self.include_extensions


@dataclass(frozen=True)
class ScanResult:
    """Classified relative paths plus every directory the walk entered."""

    compile_files: frozenset[PurePosixPath] = frozenset()
    include_files: frozenset[PurePosixPath] = frozenset()
    directories: frozenset[PurePosixPath] = frozenset()

    def files_for(self, role: FileRole) -> frozenset[PurePosixPath]:
        if role is FileRole.COMPILE:
            return self.compile_files
        return self.include_files

    @property
    def classified_files(self) -> frozenset[PurePosixPath]:
        return self.compile_files | self.include_files


__all__ = ["FileRole", "ScanOptions", "ScanResult"]
