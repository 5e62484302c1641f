"""Frame extraction from an existing project manifest.

The manifest is scanned as text, never parsed as XML. Every ``<ItemGroup>``
span is located; the ones listing ``ClCompile``/``ClInclude`` items belong to
this tool and are dropped, everything else is carried over verbatim into the
header or footer. Regenerating from the tool's own output is byte-stable.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, replace
from pathlib import Path

from .frame import FRAME_MERGE, FRAME_MERGE_FALLBACK, ManifestFrame, fresh_frame
from .xml import PROJECT_CLOSE

logger = logging.getLogger(__name__)

START_TOKEN_RE = re.compile(r"<ItemGroup(?=[\s>/])")
END_TOKEN = "</ItemGroup>"
ROOT_CLOSE_TOKEN = "</Project>"

_END_TOKEN_RE = re.compile(re.escape(END_TOKEN))
_OWNED_ITEM_RE = re.compile(r"<(?:ClCompile|ClInclude)(?=[\s>/])")
_COMMENT_RE = re.compile(r"<!--.*?-->", re.DOTALL)
_LEADING_BLANK_LINES_RE = re.compile(r"\A(?:[ \t\r]*\n)+")

# utf-8-sig also accepts plain UTF-8; latin-1 decodes any byte sequence.
READ_ENCODINGS = ("utf-8-sig", "latin-1")


@dataclass(frozen=True)
class StructuralBlock:
    """One ``<ItemGroup>`` span: ``text == source[start:end]``."""

    start: int
    end: int
    text: str

    @property
    def owned(self) -> bool:
        """Whether the block lists compile/include items this tool regenerates.

        Commented-out items do not count.
        """
        return _OWNED_ITEM_RE.search(_COMMENT_RE.sub("", self.text)) is not None


def _comment_spans(text: str) -> list[tuple[int, int]]:
    spans = [(match.start(), match.end()) for match in _COMMENT_RE.finditer(text)]
    unterminated = text.find("<!--", spans[-1][1] if spans else 0)
    if unterminated >= 0:
        spans.append((unterminated, len(text)))
    return spans


def _enclosing_comment_end(spans: list[tuple[int, int]], offset: int) -> int | None:
    for start, end in spans:
        if start <= offset < end:
            return end
        if start > offset:
            break
    return None


def _find_outside_comments(pattern: re.Pattern[str], text: str, pos: int, spans: list[tuple[int, int]]):
    while True:
        match = pattern.search(text, pos)
        if match is None:
            return None
        comment_end = _enclosing_comment_end(spans, match.start())
        if comment_end is None:
            return match
        pos = comment_end


def _self_closing_end(text: str, start: int) -> int | None:
    """Return the end offset of a ``<ItemGroup ... />`` tag opened at ``start``."""
    tag_end = text.find(">", start)
    if tag_end < 0 or text[tag_end - 1] != "/":
        return None
    return tag_end + 1


def locate_blocks(text: str) -> list[StructuralBlock]:
    """Return non-overlapping item-group spans in document order.

    A block runs from a start token to the first end token after it; nesting
    is not recognized. Tokens inside ``<!-- -->`` comments are ignored. An
    unterminated start token ends the scan and leaves the remainder as plain
    text.
    """
    comments = _comment_spans(text)
    blocks: list[StructuralBlock] = []
    pos = 0
    while True:
        match = _find_outside_comments(START_TOKEN_RE, text, pos, comments)
        if match is None:
            break
        start = match.start()
        end = _self_closing_end(text, start)
        if end is None:
            close = _find_outside_comments(_END_TOKEN_RE, text, start, comments)
            if close is None:
                break
            end = close.end()
        blocks.append(StructuralBlock(start=start, end=end, text=text[start:end]))
        pos = end
    return blocks


def _line_start(text: str, offset: int) -> int:
    """Back ``offset`` up to its line start when only indentation precedes it."""
    line_start = text.rfind("\n", 0, offset) + 1
    if text[line_start:offset].strip(" \t"):
        return offset
    return line_start


def _strip_leading_blank_lines(text: str) -> str:
    return _LEADING_BLANK_LINES_RE.sub("", text, count=1)


def frame_from_text(text: str) -> ManifestFrame:
    """Split manifest ``text`` into the frame around its owned item groups.

    With owned blocks, the header is everything before the first one and the
    footer joins every non-blank gap between them with the text after the
    last one. Without owned blocks, new groups go in front of the first
    foreign item group, else in front of ``</Project>``; a manifest lacking
    both becomes the header and gets a minimal closing footer.
    """
    blocks = locate_blocks(text)
    owned = [block for block in blocks if block.owned]

    if owned:
        header = text[: _line_start(text, owned[0].start)]
        pieces: list[str] = []
        for previous, following in zip(owned, owned[1:]):
            gap = text[previous.end : following.start]
            if gap.strip():
                # Drop the indentation that led into the next owned block.
                pieces.append(gap.rstrip(" \t"))
        pieces.append(text[owned[-1].end :])
        footer = _strip_leading_blank_lines("".join(pieces))
        return ManifestFrame(header=header, footer=footer, mode=FRAME_MERGE)

    anchor = blocks[0].start if blocks else text.rfind(ROOT_CLOSE_TOKEN)
    if anchor >= 0:
        cut = _line_start(text, anchor)
        return ManifestFrame(header=text[:cut], footer=text[cut:], mode=FRAME_MERGE)

    header = text if text.endswith("\n") else text + "\n"
    return ManifestFrame(header=header, footer=PROJECT_CLOSE, mode=FRAME_MERGE)


def read_manifest(path: Path) -> tuple[str, str] | None:
    """Return ``(text, encoding)`` for ``path``, or ``None`` when it cannot be read.

    Text that is not UTF-8 (a cp1252 manifest, say) decodes as latin-1, so
    writing it back with the returned encoding reproduces the original bytes.
    """
    path = Path(path)
    for encoding in READ_ENCODINGS:
        try:
            text = path.read_text(encoding=encoding)
        except UnicodeDecodeError:
            continue
        except OSError as exc:
            logger.info("Cannot read %s (%s); using the default project template", path, exc)
            return None
        # The BOM is not written back.
        return text, "utf-8" if encoding == "utf-8-sig" else encoding
    return None


def read_manifest_text(path: Path) -> str | None:
    """Return the text of ``path`` or ``None`` when it cannot be read."""
    content = read_manifest(path)
    return None if content is None else content[0]


def merge_frame(path: Path, project_name: str) -> ManifestFrame:
    """Build a frame from the manifest at ``path``.

    An unreadable or blank manifest is not an error: the template frame is
    returned instead, marked ``merge-fallback``. The frame records the
    encoding the manifest was read with.
    """
    content = read_manifest(path)
    if content is None or not content[0].strip():
        template = fresh_frame(project_name)
        return ManifestFrame(header=template.header, footer=template.footer, mode=FRAME_MERGE_FALLBACK)
    text, encoding = content
    frame = replace(frame_from_text(text), encoding=encoding)
    logger.debug(
        "Merging into %s (%s, %d header chars, %d footer chars)",
        path,
        encoding,
        len(frame.header),
        len(frame.footer),
    )
    return frame


__all__ = [
    "START_TOKEN_RE",
    "END_TOKEN",
    "ROOT_CLOSE_TOKEN",
    "StructuralBlock",
    "locate_blocks",
    "frame_from_text",
    "READ_ENCODINGS",
    "read_manifest",
    "read_manifest_text",
    "merge_frame",
]
