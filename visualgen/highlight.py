"""Terminal highlighting for manifests printed by ``--dry-run``.

Uses Pygments' XML lexer; any Pygments failure leaves the text plain.
"""

from __future__ import annotations

DEFAULT_STYLE = "monokai"

_PYGMENTS_READY = False
_PYGMENTS_AVAILABLE = False
_PYGMENTS_HIGHLIGHT = None
_PYGMENTS_XML_LEXER = None
_PYGMENTS_TERMINAL_FORMATTER = None
_PYGMENTS_GET_STYLE_BY_NAME = None
_PYGMENTS_FORMATTERS: dict[str, object] = {}


def _ensure_pygments_loaded() -> bool:
    global _PYGMENTS_READY
    global _PYGMENTS_AVAILABLE
    global _PYGMENTS_HIGHLIGHT
    global _PYGMENTS_XML_LEXER
    global _PYGMENTS_TERMINAL_FORMATTER
    global _PYGMENTS_GET_STYLE_BY_NAME

    if _PYGMENTS_READY:
        return _PYGMENTS_AVAILABLE

    _PYGMENTS_READY = True
    try:
        from pygments import highlight as pygments_highlight
        from pygments.formatters import TerminalFormatter
        from pygments.lexers import XmlLexer
        from pygments.styles import get_style_by_name
    except ImportError:
        _PYGMENTS_AVAILABLE = False
        return False

    _PYGMENTS_HIGHLIGHT = pygments_highlight
    _PYGMENTS_XML_LEXER = XmlLexer
    _PYGMENTS_TERMINAL_FORMATTER = TerminalFormatter
    _PYGMENTS_GET_STYLE_BY_NAME = get_style_by_name
    _PYGMENTS_AVAILABLE = True
    return True


def normalize_style(style: str) -> str:
    """Return ``style`` when Pygments knows it, else the default style."""
    if not _ensure_pygments_loaded():
        return DEFAULT_STYLE
    try:
        assert _PYGMENTS_GET_STYLE_BY_NAME is not None
        _PYGMENTS_GET_STYLE_BY_NAME(style)
    except Exception:
        return DEFAULT_STYLE
    return style


def _formatter_for_style(style: str):
    formatter = _PYGMENTS_FORMATTERS.get(style)
    if formatter is not None:
        return formatter
    assert _PYGMENTS_TERMINAL_FORMATTER is not None
    formatter = _PYGMENTS_TERMINAL_FORMATTER(style=style)
    _PYGMENTS_FORMATTERS[style] = formatter
    return formatter


def highlight_manifest(text: str, style: str = DEFAULT_STYLE) -> str:
    """Return ``text`` with ANSI XML highlighting, or unchanged on failure."""
    if not _ensure_pygments_loaded():
        return text
    formatter = _formatter_for_style(normalize_style(style))
    try:
        assert _PYGMENTS_HIGHLIGHT is not None and _PYGMENTS_XML_LEXER is not None
        rendered = _PYGMENTS_HIGHLIGHT(text, _PYGMENTS_XML_LEXER(), formatter)
    except Exception:
        return text
    return rendered or text
