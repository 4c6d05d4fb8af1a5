# parsek/scan/__init__.py
"""Scanner: an immutable cursor over an input buffer.

Contract
--------
Every combinator and token matcher talks to the input only through a
`Scanner`. Scanner values are never mutated: each advancing operation
returns a new scanner and leaves the receiver untouched, so a combinator
can always resume from the scanner it was handed.

- `clone() -> Scanner`
- `cursor() -> int`                       # byte offset
- `match(pattern) -> (bytes|None, Scanner)`  # no partial advance on failure
- `skip_whitespace() -> (bytes, Scanner)`
- `at_end() -> bool`

`SimpleScanner` is the reference implementation: a shared UTF-8 buffer
and its decoded text, each with an integer cursor, and patterns compiled
by the `regex` library.
"""

from __future__ import annotations
from functools  import lru_cache
from typing     import Optional, Pattern, Tuple, Union

import regex

_WS = regex.compile(rb"[ \t\r\n]+")


class Scanner:
    """Minimal interface the combinators expect."""
    def clone(self) -> "Scanner":
        raise NotImplementedError
    def cursor(self) -> int:
        raise NotImplementedError
    def match(self, pattern: Union[str, bytes]) -> Tuple[Optional[bytes], "Scanner"]:
        raise NotImplementedError
    def skip_whitespace(self) -> Tuple[bytes, "Scanner"]:
        raise NotImplementedError
    def at_end(self) -> bool:
        raise NotImplementedError


@lru_cache(maxsize=256)
def _compile(pattern: Union[str, bytes]) -> Pattern:
    # matching starts at the cursor, so a leading "^" means "here"
    if isinstance(pattern, str):
        if pattern.startswith("^"):
            pattern = r"\G" + pattern[1:]
    elif pattern.startswith(b"^"):
        pattern = rb"\G" + pattern[1:]
    return regex.compile(pattern)


class SimpleScanner(Scanner):
    """
    SimpleScanner
    =============
    Scanner over an in-memory UTF-8 buffer.

    - `str` input is encoded as UTF-8; `bytes` input must be valid UTF-8,
      otherwise construction raises `ValueError` before any parsing.
    - `cursor()` is a byte offset. A decoded view with its own character
      cursor is kept alongside, so `str` patterns match characters and
      `bytes` patterns match bytes.
    - A `bytes` match that ends inside a multi-byte character is a miss.
    - Cloning shares both views and copies the cursors, so it is O(1).
    - Patterns match in place at the cursor; a leading `^` anchors there.
    """
    __slots__ = ("_text", "_chars", "_i", "_c")

    def __init__(self, text: Union[bytes, str], cursor: int = 0):
        if isinstance(text, str):
            chars, text = text, text.encode("utf-8")
        else:
            text = bytes(text)
            try:
                chars = text.decode("utf-8")
            except UnicodeDecodeError as e:
                raise ValueError(f"input is not valid UTF-8: {e}") from e
        if not 0 <= cursor <= len(text):
            raise ValueError(f"cursor {cursor} outside input of length {len(text)}")
        try:
            c = len(text[:cursor].decode("utf-8"))
        except UnicodeDecodeError:
            raise ValueError(f"cursor {cursor} is inside a multi-byte character") from None
        self._text = text
        self._chars = chars
        self._i = cursor
        self._c = c

    @property
    def text(self) -> bytes:
        return self._text

    def _at(self, cursor: int, chars_cursor: int) -> "SimpleScanner":
        s = SimpleScanner.__new__(SimpleScanner)
        s._text = self._text
        s._chars = self._chars
        s._i = cursor
        s._c = chars_cursor
        return s

    def _on_boundary(self, i: int) -> bool:
        return i >= len(self._text) or (self._text[i] & 0xC0) != 0x80

    # ---- Scanner API ----
    def clone(self) -> "SimpleScanner":
        return self._at(self._i, self._c)

    def cursor(self) -> int:
        return self._i

    def match(self, pattern: Union[str, bytes]) -> Tuple[Optional[bytes], "SimpleScanner"]:
        rgx = _compile(pattern)
        if isinstance(pattern, str):
            m = rgx.match(self._chars, self._c)
            if m is None:
                return None, self
            tok = m.group(0).encode("utf-8")
            return tok, self._at(self._i + len(tok), m.end())
        m = rgx.match(self._text, self._i)
        if m is None or not self._on_boundary(m.end()):
            return None, self
        tok = m.group(0)
        return tok, self._at(m.end(), self._c + len(tok.decode("utf-8")))

    def skip_whitespace(self) -> Tuple[bytes, "SimpleScanner"]:
        m = _WS.match(self._text, self._i)
        if m is None:
            return b"", self.clone()
        ws = m.group(0)
        # whitespace is ASCII, bytes and characters advance together
        return ws, self._at(m.end(), self._c + len(ws))

    def at_end(self) -> bool:
        return self._i >= len(self._text)

    def __repr__(self) -> str:
        return f"SimpleScanner(cursor={self._i}, size={len(self._text)})"
