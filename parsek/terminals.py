# parsek/terminals.py
"""Token matchers: leaf parsers that turn a regex match into a Terminal.

Each matcher skips leading whitespace, then matches at the cursor. On a
miss the scanner it was given is returned, whitespace included, so the
matchers can be dropped into any combinator.
"""

from __future__ import annotations
from typing     import List, Optional, Sequence, Tuple, Union

from .ast           import Node, Terminal
from .combinators   import Parser
from .scan          import Scanner

Pattern = Union[str, bytes]

# "..." with backslash escapes
STRING_PATTERN = r'"(?:\\.|[^"\\])*"'


def _terminal(name: str, tok: bytes, pos: int) -> Terminal:
    return Terminal(name=name, value=tok.decode("utf-8"), position=pos)


def Token(pattern: Pattern, name: str) -> Parser:
    """Match `pattern` and produce `Terminal(name, text, offset)`."""
    def parse(s: Scanner) -> Tuple[Optional[Node], Scanner]:
        _, news = s.skip_whitespace()
        pos = news.cursor()
        tok, news = news.match(pattern)
        if tok is None:
            return None, s
        return _terminal(name, tok, pos), news
    return parse


def OrdTokens(patterns: Sequence[Pattern], names: Sequence[str]) -> Parser:
    """Try `patterns` in order; the first that matches names the Terminal."""
    if len(patterns) != len(names):
        raise ValueError(f"OrdTokens: {len(patterns)} patterns but {len(names)} names")
    pairs: List[Tuple[Pattern, str]] = list(zip(patterns, names))

    def parse(s: Scanner) -> Tuple[Optional[Node], Scanner]:
        _, news = s.skip_whitespace()
        pos = news.cursor()
        for pattern, name in pairs:
            tok, after = news.match(pattern)
            if tok is not None:
                return _terminal(name, tok, pos), after
        return None, s
    return parse


def String() -> Parser:
    """Double-quoted string literal; the Terminal keeps the quotes."""
    return Token(STRING_PATTERN, "STRING")


def End() -> Parser:
    """Succeed only when nothing but whitespace is left."""
    def parse(s: Scanner) -> Tuple[Optional[Node], Scanner]:
        _, news = s.skip_whitespace()
        if not news.at_end():
            return None, s
        return Terminal(name="EOF", value="", position=news.cursor()), news
    return parse
