"""MSBuild XML spellings shared by the frame and emitter modules."""

from __future__ import annotations

from xml.sax.saxutils import escape

XML_DECLARATION = '<?xml version="1.0" encoding="utf-8"?>\n'
MSBUILD_NAMESPACE = "http://schemas.microsoft.com/developer/msbuild/2003"
ITEM_GROUP_OPEN = "<ItemGroup>\n"
ITEM_GROUP_CLOSE = "</ItemGroup>\n"
PROJECT_CLOSE = "</Project>\n"


def xml_escape(value: str) -> str:
    """Escape ``value`` for use in element text or a double-quoted attribute."""
    return escape(value, {'"': "&quot;"})


__all__ = [
    "XML_DECLARATION",
    "MSBUILD_NAMESPACE",
    "ITEM_GROUP_OPEN",
    "ITEM_GROUP_CLOSE",
    "PROJECT_CLOSE",
    "xml_escape",
]
