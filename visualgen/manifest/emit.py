"""Rendering and writing of the project and filters manifests."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from pathlib import Path, PurePosixPath

from ..errors import WriteError
from ..project_model import FileRole, canonical_path, parent_filter
from .frame import ManifestFrame
from .xml import (
    ITEM_GROUP_CLOSE,
    ITEM_GROUP_OPEN,
    MSBUILD_NAMESPACE,
    PROJECT_CLOSE,
    XML_DECLARATION,
    xml_escape,
)

logger = logging.getLogger(__name__)

FILTERS_HEADER = XML_DECLARATION + f'<Project ToolsVersion="4.0" xmlns="{MSBUILD_NAMESPACE}">\n' + "\n"
FILTERS_FOOTER = PROJECT_CLOSE


def _group(lines: list[str]) -> str:
    if not lines:
        return ""
    return ITEM_GROUP_OPEN + "".join(lines) + ITEM_GROUP_CLOSE + "\n"


def render_item_group(role: FileRole, paths: Sequence[PurePosixPath]) -> str:
    """Return one ``<ItemGroup>`` of self-closing items, or ``""`` if empty."""
    return _group([f'\t<{role.value} Include="{xml_escape(canonical_path(path))}" />\n' for path in paths])


def render_filtered_item_group(role: FileRole, paths: Sequence[PurePosixPath]) -> str:
    """Return an item group whose items name their parent folder as filter.

    Files at the scan root belong to no folder and get no ``<Filter>`` child.
    """
    lines: list[str] = []
    for path in paths:
        include = xml_escape(canonical_path(path))
        filter_name = parent_filter(path)
        if not filter_name:
            lines.append(f'\t<{role.value} Include="{include}" />\n')
            continue
        lines.append(f'\t<{role.value} Include="{include}">\n')
        lines.append(f"\t\t<Filter>{xml_escape(filter_name)}</Filter>\n")
        lines.append(f"\t</{role.value}>\n")
    return _group(lines)


def render_filter_declarations(filters: Sequence[PurePosixPath]) -> str:
    lines: list[str] = []
    for path in filters:
        lines.append(f'\t<Filter Include="{xml_escape(canonical_path(path))}">\n')
        lines.append("\t</Filter>\n")
    return _group(lines)


def render_project_manifest(
    frame: ManifestFrame,
    compile_files: Sequence[PurePosixPath],
    include_files: Sequence[PurePosixPath],
) -> str:
    """Return the project manifest: header, include group, compile group, footer."""
    body = render_item_group(FileRole.INCLUDE, include_files) + render_item_group(FileRole.COMPILE, compile_files)
    return frame.wrap(body)


def render_filters_manifest(
    filters: Sequence[PurePosixPath],
    compile_files: Sequence[PurePosixPath],
    include_files: Sequence[PurePosixPath],
) -> str:
    """Return the filters manifest: folder declarations, then include and compile items."""
    return (
        FILTERS_HEADER
        + render_filter_declarations(filters)
        + render_filtered_item_group(FileRole.INCLUDE, include_files)
        + render_filtered_item_group(FileRole.COMPILE, compile_files)
        + FILTERS_FOOTER
    )


def write_manifest(path: Path, text: str, encoding: str = "utf-8") -> None:
    """Overwrite ``path`` with ``text`` using ``\\n`` line endings.

    Characters ``encoding`` cannot represent are written as XML character
    references.
    """
    try:
        with open(path, "w", encoding=encoding, errors="xmlcharrefreplace", newline="\n") as handle:
            handle.write(text)
    except OSError as exc:
        raise WriteError(f"Cannot write {path}: {exc.strerror or exc}", Path(path)) from exc
    logger.info("Wrote %s", path)


def write_manifests(outputs: Sequence[tuple[Path, str, str]]) -> None:
    """Write each ``(path, text, encoding)`` entry in order.

    A failure stops immediately; files already written are left in place.
    """
    for path, text, encoding in outputs:
        write_manifest(path, text, encoding)


__all__ = [
    "FILTERS_HEADER",
    "FILTERS_FOOTER",
    "render_item_group",
    "render_filtered_item_group",
    "render_filter_declarations",
    "render_project_manifest",
    "render_filters_manifest",
    "write_manifest",
    "write_manifests",
]
