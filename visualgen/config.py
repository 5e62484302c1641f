"""Persistent JSON defaults for extension and exclusion lists.

Stores the compile/include extension sets and excluded directories used when
the command line leaves them out. All access is defensive: malformed or
missing config falls back safely.
"""

from __future__ import annotations

import json
from collections.abc import Iterable
from pathlib import Path

from platformdirs import user_config_dir

APP_NAME = "visualgen"
CONFIG_FILENAME = "config.json"
DEFAULT_CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME
CONFIG_PATH = DEFAULT_CONFIG_PATH

COMPILE_EXTENSIONS_KEY = "compile_extensions"
INCLUDE_EXTENSIONS_KEY = "include_extensions"
EXCLUDE_KEY = "exclude"


def normalize_extension(value: str) -> str:
    """Return ``value`` as a dot-prefixed extension, or ``""`` when blank.

    Surrounding quotes, dots and spaces are trimmed: ``" .cpp"`` -> ``".cpp"``.
    """
    cleaned = value.strip().strip("\"'").strip(". ")
    return f".{cleaned}" if cleaned else ""


def parse_extension_list(text: str) -> frozenset[str]:
    """Parse a comma-separated extension list such as ``"cpp, .c"``."""
    extensions = {normalize_extension(item) for item in text.strip().strip("\"'").split(",")}
    extensions.discard("")
    return frozenset(extensions)


def parse_path_list(text: str) -> frozenset[str]:
    """Parse a comma-separated list of relative directory names."""
    items = {item.strip() for item in text.strip().strip("\"'").split(",")}
    items.discard("")
    return frozenset(items)


def load_config() -> dict[str, object]:
    """Load the persisted JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    try:
        data = json.loads(CONFIG_PATH.read_text(encoding="utf-8"))
    except Exception:
        return {}
    return data if isinstance(data, dict) else {}


def save_config(data: dict[str, object]) -> None:
    """Persist config data as pretty-printed JSON.

    Any filesystem/serialization error is ignored so a read-only config
    directory never fails a generation run.
    """
    try:
        CONFIG_PATH.parent.mkdir(parents=True, exist_ok=True)
        CONFIG_PATH.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
    except Exception:
        pass


def _load_string_list(key: str) -> list[str]:
    value = load_config().get(key)
    if not isinstance(value, list):
        return []
    return [item for item in value if isinstance(item, str)]


def load_compile_extensions() -> frozenset[str]:
    extensions = {normalize_extension(item) for item in _load_string_list(COMPILE_EXTENSIONS_KEY)}
    extensions.discard("")
    return frozenset(extensions)


def load_include_extensions() -> frozenset[str]:
    extensions = {normalize_extension(item) for item in _load_string_list(INCLUDE_EXTENSIONS_KEY)}
    extensions.discard("")
    return frozenset(extensions)


def load_exclusions() -> frozenset[str]:
    items = {item.strip() for item in _load_string_list(EXCLUDE_KEY)}
    items.discard("")
    return frozenset(items)


def save_defaults(
    compile_extensions: Iterable[str],
    include_extensions: Iterable[str],
    exclusions: Iterable[str],
) -> None:
    """Persist the given lists, sorted, as the new defaults."""
    config = load_config()
    config[COMPILE_EXTENSIONS_KEY] = sorted(compile_extensions)
    config[INCLUDE_EXTENSIONS_KEY] = sorted(include_extensions)
    config[EXCLUDE_KEY] = sorted(exclusions)
    save_config(config)
