"""Manifest frames, merge extraction and rendering.

- ``frame``: template and custom header/footer frames
- ``merge``: frame extraction from an existing project manifest
- ``emit``: project/filters manifest rendering and writing
"""

from __future__ import annotations

from .frame import (
    FRAME_CUSTOM,
    FRAME_FRESH,
    FRAME_MERGE,
    FRAME_MERGE_FALLBACK,
    ManifestFrame,
    custom_frame,
    fresh_frame,
    project_header,
)
from .merge import StructuralBlock, frame_from_text, locate_blocks, merge_frame, read_manifest, read_manifest_text
from .emit import (
    render_filters_manifest,
    render_item_group,
    render_project_manifest,
    write_manifest,
    write_manifests,
)

__all__ = [
    "FRAME_CUSTOM",
    "FRAME_FRESH",
    "FRAME_MERGE",
    "FRAME_MERGE_FALLBACK",
    "ManifestFrame",
    "custom_frame",
    "fresh_frame",
    "project_header",
    "StructuralBlock",
    "frame_from_text",
    "locate_blocks",
    "merge_frame",
    "read_manifest",
    "read_manifest_text",
    "render_filters_manifest",
    "render_item_group",
    "render_project_manifest",
    "write_manifest",
    "write_manifests",
]
