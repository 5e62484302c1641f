"""Header/footer frames the generated item groups are inserted into.

A frame is built one of three ways: from the built-in template, from the
template plus caller-supplied text, or from an existing manifest (see
``merge.py``). The emitter only ever sees the resulting ``ManifestFrame``.
"""

from __future__ import annotations

from dataclasses import dataclass

from .xml import MSBUILD_NAMESPACE, PROJECT_CLOSE, XML_DECLARATION, xml_escape

FRAME_FRESH = "fresh"
FRAME_CUSTOM = "custom"
FRAME_MERGE = "merge"
FRAME_MERGE_FALLBACK = "merge-fallback"


@dataclass(frozen=True)
class ManifestFrame:
    """Immutable text bracketing the generated block zone.

    ``encoding`` is the one the project manifest is written with; a merged
    frame keeps the encoding its source manifest was read with.
    """

    header: str
    footer: str
    mode: str = FRAME_FRESH
    encoding: str = "utf-8"

    def wrap(self, body: str) -> str:
        return self.header + body + self.footer


def project_header(project_name: str) -> str:
    """Return the template project header with its ``Globals`` property group.

    ``ProjectGuid`` carries the project name; no GUID is generated.
    """
    name = xml_escape(project_name)
    return (
        XML_DECLARATION
        + f'<Project DefaultTargets="Build" ToolsVersion="4" xmlns="{MSBUILD_NAMESPACE}">\n'
        + "\n"
        + '<PropertyGroup Label="Globals">\n'
        + f"\t<ProjectGuid>{name}</ProjectGuid>\n"
        + f"\t<RootNamespace>{name}</RootNamespace>\n"
        + "</PropertyGroup>\n"
        + "\n"
    )


def fresh_frame(project_name: str) -> ManifestFrame:
    return ManifestFrame(header=project_header(project_name), footer=PROJECT_CLOSE, mode=FRAME_FRESH)


def _line_terminated(text: str) -> str:
    if not text or text.endswith("\n"):
        return text
    return text + "\n"


def custom_frame(project_name: str, header_text: str = "", footer_text: str = "") -> ManifestFrame:
    """Return the template frame with raw text after the header and before the footer.

    Non-empty custom text is newline-terminated so the generated groups always
    start on their own line.
    """
    return ManifestFrame(
        header=project_header(project_name) + _line_terminated(header_text),
        footer=_line_terminated(footer_text) + PROJECT_CLOSE,
        mode=FRAME_CUSTOM,
    )


__all__ = [
    "FRAME_FRESH",
    "FRAME_CUSTOM",
    "FRAME_MERGE",
    "FRAME_MERGE_FALLBACK",
    "ManifestFrame",
    "project_header",
    "fresh_frame",
    "custom_frame",
]
