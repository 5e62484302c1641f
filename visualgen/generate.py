"""End-to-end generation: scan, derive filters, frame, render, write."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from .manifest import (
    ManifestFrame,
    custom_frame,
    fresh_frame,
    merge_frame,
    render_filters_manifest,
    render_project_manifest,
    write_manifests,
)
from .project_model import ScanOptions, derive_filter_paths, scan_project, sorted_paths

logger = logging.getLogger(__name__)

PROJECT_SUFFIX = ".vcxproj"
FILTERS_SUFFIX = ".vcxproj.filters"


def manifest_names(project_name: str) -> tuple[str, str]:
    """Return the project and filters manifest filenames for ``project_name``."""
    return project_name + PROJECT_SUFFIX, project_name + FILTERS_SUFFIX


def validate_project_name(project_name: str) -> str:
    name = project_name.strip()
    if not name:
        raise ValueError("Project name must not be empty.")
    if "/" in name or "\\" in name:
        raise ValueError(f"Project name must not contain path separators: {project_name!r}")
    return name


@dataclass(frozen=True)
class GenerationRequest:
    """Inputs for one run.

    ``merge`` selects merge mode; ``merge_source`` defaults to the output
    project manifest. ``header_text``/``footer_text`` select the custom frame
    and are ignored in merge mode.
    """

    root: Path
    project_name: str
    compile_extensions: frozenset[str] = frozenset()
    include_extensions: frozenset[str] = frozenset()
    exclusions: frozenset[str] = frozenset()
    merge: bool = False
    merge_source: Path | None = None
    header_text: str | None = None
    footer_text: str | None = None
    skip_gitignored: bool = False
    prune_hidden_dirs: bool = False
    dry_run: bool = False


@dataclass(frozen=True)
class GenerationResult:
    project_path: Path
    filters_path: Path
    project_text: str
    filters_text: str
    compile_count: int
    include_count: int
    filter_count: int
    frame_mode: str
    written: bool


def build_frame(request: GenerationRequest, project_name: str, project_path: Path) -> ManifestFrame:
    """Pick the frame for ``request``: merge, custom text, or the template."""
    if request.merge:
        source = request.merge_source if request.merge_source is not None else project_path
        return merge_frame(source, project_name)
    if request.header_text is not None or request.footer_text is not None:
        return custom_frame(project_name, request.header_text or "", request.footer_text or "")
    return fresh_frame(project_name)


def generate_project(request: GenerationRequest) -> GenerationResult:
    """Run one generation pass and write both manifests unless ``dry_run``.

    Both texts are rendered before anything is written, so a scan failure
    never leaves partial output. Raises ``ScanError``, ``WriteError`` or
    ``ValueError`` (bad project name).
    """
    project_name = validate_project_name(request.project_name)
    root = Path(request.root)
    project_filename, filters_filename = manifest_names(project_name)
    project_path = root / project_filename
    filters_path = root / filters_filename

    logger.info("Processing %s to %s", root, project_path)
    options = ScanOptions(
        compile_extensions=frozenset(request.compile_extensions),
        include_extensions=frozenset(request.include_extensions),
        exclusions=frozenset(request.exclusions),
        manifest_names=frozenset({project_filename, filters_filename}),
        skip_gitignored=request.skip_gitignored,
        prune_hidden_dirs=request.prune_hidden_dirs,
    )
    scan = scan_project(root, options)

    compile_files = sorted_paths(scan.compile_files)
    include_files = sorted_paths(scan.include_files)
    filters = sorted_paths(derive_filter_paths(scan.classified_files))

    frame = build_frame(request, project_name, project_path)
    logger.debug("Using %s frame", frame.mode)

    project_text = render_project_manifest(frame, compile_files, include_files)
    filters_text = render_filters_manifest(filters, compile_files, include_files)

    if not request.dry_run:
        write_manifests([(project_path, project_text, frame.encoding), (filters_path, filters_text, "utf-8")])

    return GenerationResult(
        project_path=project_path,
        filters_path=filters_path,
        project_text=project_text,
        filters_text=filters_text,
        compile_count=len(compile_files),
        include_count=len(include_files),
        filter_count=len(filters),
        frame_mode=frame.mode,
        written=not request.dry_run,
    )


__all__ = [
    "PROJECT_SUFFIX",
    "FILTERS_SUFFIX",
    "GenerationRequest",
    "GenerationResult",
    "manifest_names",
    "validate_project_name",
    "build_frame",
    "generate_project",
]
