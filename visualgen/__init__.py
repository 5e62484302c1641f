"""Public package surface for visualgen.

Exports ``main`` for programmatic CLI invocation and ``generate_project`` for
library use. Most implementation lives in submodules under ``visualgen``.
"""

from __future__ import annotations

from .generate import GenerationRequest, GenerationResult, generate_project


def main(*args, **kwargs):
    """Lazily import CLI entrypoint to keep package imports lightweight."""
    from .cli import main as _main

    return _main(*args, **kwargs)

__all__ = ["main", "GenerationRequest", "GenerationResult", "generate_project"]
