"""
project: Dungeon Crawler
module: __init__.py
License: MIT

Procedural dungeon layout generation.

The generation core lives in :mod:`crawler.dungeon`; structured logging helpers
in :mod:`crawler.logging_utils`. Rendering and page wiring are left to callers,
which consume ``Dungeon.to_dict()``.
"""

from pathlib import Path


def _load_version() -> str:
    version_file = Path(__file__).resolve().parent.parent / "VERSION"
    try:
        return version_file.read_text(encoding="utf-8").strip()
    except OSError:
        return "0.1.0"


__version__ = _load_version()
