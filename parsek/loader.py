# parsek/loader.py
"""Input loading for the command-line driver."""

from __future__ import annotations
from pathlib    import Path


def load_text(source: str) -> str:
    """
    Return the contents of `source` if it names an existing file,
    otherwise `source` itself. Line endings are normalised to "\\n".
    """
    path = Path(source)
    try:
        is_file = path.is_file()
    except (OSError, ValueError):
        # not representable as a path (too long, NUL bytes, ...)
        is_file = False
    text = path.read_text(encoding="utf-8") if is_file else source
    return text.replace("\r\n", "\n").replace("\r", "\n")
