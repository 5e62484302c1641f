"""Command-line front door for visualgen.

Parses CLI options, fills omitted lists from persisted defaults, and runs one
generation pass. Fatal errors exit with a one-line diagnostic.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from . import config
from .errors import VisualgenError
from .generate import GenerationRequest, GenerationResult, generate_project
from .highlight import DEFAULT_STYLE, highlight_manifest

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(levelname)s: %(message)s"


def _read_frame_text(value: str | None) -> str | None:
    """Return literal text, or the contents of ``FILE`` for ``@FILE`` values."""
    if value is None or not value.startswith("@"):
        return value
    path = Path(value[1:])
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise SystemExit(f"Cannot read {path}: {exc}") from exc


def _configure_logging(verbose: bool, quiet: bool) -> None:
    level = logging.INFO
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.WARNING
    logging.basicConfig(level=level, format=LOG_FORMAT)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="visualgen",
        description="Generate a Visual Studio project (.vcxproj and .vcxproj.filters) from a directory tree.",
        epilog='Example: visualgen local/path/to/dir ProjectName "cpp,c" "h,hpp"',
    )
    parser.add_argument("root", help="Directory to scan; manifests are written here.")
    parser.add_argument("name", help="Project name (output is NAME.vcxproj and NAME.vcxproj.filters).")
    parser.add_argument(
        "compile_extensions",
        nargs="?",
        default=None,
        help='Comma-separated compile extensions, e.g. "cpp,c". Defaults to saved defaults.',
    )
    parser.add_argument(
        "include_extensions",
        nargs="?",
        default=None,
        help='Comma-separated include extensions, e.g. "h,hpp". Defaults to saved defaults.',
    )
    parser.add_argument("--exclude", default=None, help="Comma-separated directories to skip, e.g. build,out.")
    parser.add_argument(
        "--merge",
        action="store_true",
        help="Merge file lists into the existing output project manifest.",
    )
    parser.add_argument(
        "--merge-source",
        default=None,
        metavar="MANIFEST",
        help="Merge into the frame of MANIFEST instead of the output manifest (implies --merge).",
    )
    parser.add_argument("--header", default=None, help="Text (or @FILE) inserted after the template header.")
    parser.add_argument("--footer", default=None, help="Text (or @FILE) inserted before the closing tag.")
    parser.add_argument("--skip-gitignored", action="store_true", help="Skip files and directories ignored by git.")
    parser.add_argument("--prune-hidden-dirs", action="store_true", help="Do not descend into directories starting with '.'.")
    parser.add_argument("--dry-run", action="store_true", help="Print both manifests instead of writing them.")
    parser.add_argument("--style", default=DEFAULT_STYLE, help="Pygments style name for --dry-run output.")
    parser.add_argument("--no-color", action="store_true", help="Disable color output even on TTY.")
    parser.add_argument(
        "--save-defaults",
        action="store_true",
        help="Store the effective extension and exclusion lists as defaults.",
    )
    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument("-v", "--verbose", action="store_true", help="Log debug details.")
    verbosity.add_argument("-q", "--quiet", action="store_true", help="Only log warnings and errors.")
    return parser


def print_manifests(result: GenerationResult, style: str, color: bool) -> None:
    """Write both rendered manifests to stdout, each under a path banner."""
    for path, text in ((result.project_path, result.project_text), (result.filters_path, result.filters_text)):
        sys.stdout.write(f"==> {path} <==\n")
        sys.stdout.write(highlight_manifest(text, style) if color else text)


def main() -> None:
    """Parse CLI arguments and generate the manifest pair.

    Omitted extension and exclusion lists come from the persisted config; an
    explicit empty string overrides a stored default.
    """
    parser = _build_parser()
    args = parser.parse_args()
    merge = args.merge or args.merge_source is not None
    if merge and (args.header is not None or args.footer is not None):
        parser.error("--merge/--merge-source cannot be combined with --header/--footer.")
    _configure_logging(args.verbose, args.quiet)

    compile_extensions = (
        config.parse_extension_list(args.compile_extensions)
        if args.compile_extensions is not None
        else config.load_compile_extensions()
    )
    include_extensions = (
        config.parse_extension_list(args.include_extensions)
        if args.include_extensions is not None
        else config.load_include_extensions()
    )
    exclusions = config.parse_path_list(args.exclude) if args.exclude is not None else config.load_exclusions()

    if args.save_defaults:
        config.save_defaults(compile_extensions, include_extensions, exclusions)

    request = GenerationRequest(
        root=Path(args.root),
        project_name=args.name,
        compile_extensions=compile_extensions,
        include_extensions=include_extensions,
        exclusions=exclusions,
        merge=merge,
        merge_source=Path(args.merge_source) if args.merge_source is not None else None,
        header_text=_read_frame_text(args.header),
        footer_text=_read_frame_text(args.footer),
        skip_gitignored=args.skip_gitignored,
        prune_hidden_dirs=args.prune_hidden_dirs,
        dry_run=args.dry_run,
    )
    try:
        result = generate_project(request)
    except (VisualgenError, ValueError) as exc:
        raise SystemExit(str(exc)) from exc

    logger.info(
        "%d compile, %d include, %d filters (%s frame)",
        result.compile_count,
        result.include_count,
        result.filter_count,
        result.frame_mode,
    )
    if args.dry_run:
        color = not args.no_color and sys.stdout.isatty()
        print_manifests(result, args.style, color)


if __name__ == "__main__":
    main()
