# parsek/combinators.py
"""Parser combinators.

A parser is any callable `Scanner -> (Node | None, Scanner)`. A `None`
node means the parser did not match; the scanner it returns alongside
must then be positioned where the attempt started.

The five primitives below build new parsers out of existing ones:

    And(nodify, p1, p2, ...)         sequence, all or nothing
    OrdChoice(nodify, p1, p2, ...)   first alternative that matches
    Kleene(nodify, elem, sep=None)   zero or more, never fails
    Many(nodify, elem, sep=None)     one or more
    Maybe(nodify, p)                 a single attempt

`nodify` receives the list of child nodes a combinator accumulated and
returns the node to hand back. If it is None the list itself is returned.
`nodify` is called once per successful application and never on failure.

There is no infinite-loop detection: an element parser that can succeed
without consuming input will spin `Kleene` and `Many` forever.

Each nesting level of a recursive grammar costs a handful of Python
frames, so nesting depth is bounded by the interpreter recursion limit.
`run` applies a top-level parser and turns hitting that bound into
`DepthError`; the combinators themselves never raise while parsing.
"""

from __future__ import annotations
import logging
import sys
from typing     import Callable, List, Optional, Tuple

from .ast   import Node, Nodify
from .scan  import Scanner

log = logging.getLogger("parsek.combinators")

Parser = Callable[[Scanner], Tuple[Optional[Node], Scanner]]


def _docallback(nodify: Optional[Nodify], ns: List[Node]) -> Optional[Node]:
    if nodify is not None:
        return nodify(ns)
    return ns


def _check_parsers(kind: str, parsers: Tuple[Parser, ...]) -> None:
    if not parsers:
        raise ValueError(f"{kind} needs at least one parser")
    for i, p in enumerate(parsers):
        if not callable(p):
            raise TypeError(f"{kind}: parser #{i} is not callable: {p!r}")


def And(nodify: Optional[Nodify], *parsers: Parser) -> Parser:
    """Match every parser in order, each starting where the previous stopped.

    If one of them fails the whole sequence fails and the scanner given
    to the sequence is returned untouched.
    """
    _check_parsers("And", parsers)

    def parse(s: Scanner) -> Tuple[Optional[Node], Scanner]:
        ns: List[Node] = []
        news = s.clone()
        for k, parser in enumerate(parsers):
            n, news = parser(news)
            if n is None:
                if log.isEnabledFor(logging.DEBUG):
                    log.debug("And: item %d failed at %d, back to %d", k, news.cursor(), s.cursor())
                return None, s
            ns.append(n)
        return _docallback(nodify, ns), news
    return parse


def OrdChoice(nodify: Optional[Nodify], *parsers: Parser) -> Parser:
    """Try each parser on its own clone of the scanner; the first match wins.

    The winning node is passed to `nodify` as a one-element list.
    """
    _check_parsers("OrdChoice", parsers)

    def parse(s: Scanner) -> Tuple[Optional[Node], Scanner]:
        for parser in parsers:
            n, news = parser(s.clone())
            if n is not None:
                return _docallback(nodify, [n]), news
        if log.isEnabledFor(logging.DEBUG):
            log.debug("OrdChoice: no alternative of %d matched at %d", len(parsers), s.cursor())
        return None, s
    return parse


def _repeat(elem: Parser, sep: Optional[Parser], s: Scanner) -> Tuple[List[Node], Scanner]:
    # A separator that matched is kept even when no element follows it:
    # the failed element returns the scanner it was given, which already
    # sits past the separator.
    ns: List[Node] = []
    news = s.clone()
    while True:
        n, news = elem(news)
        if n is None:
            break
        ns.append(n)
        if sep is not None:
            n, news = sep(news)
            if n is None:
                break
    return ns, news


def _check_repeat(kind: str, elem: Parser, sep: Optional[Parser]) -> None:
    if not callable(elem):
        raise TypeError(f"{kind}: element parser is not callable: {elem!r}")
    if sep is not None and not callable(sep):
        raise TypeError(f"{kind}: separator parser is not callable: {sep!r}")


def Kleene(nodify: Optional[Nodify], elem: Parser, sep: Optional[Parser] = None) -> Parser:
    """Zero or more `elem`, separated by `sep` when one is given.

    Never fails. With no match at all `nodify` gets an empty list and the
    scanner comes back at its entry position.
    """
    _check_repeat("Kleene", elem, sep)

    def parse(s: Scanner) -> Tuple[Optional[Node], Scanner]:
        ns, news = _repeat(elem, sep, s)
        return _docallback(nodify, ns), news
    return parse


def Many(nodify: Optional[Nodify], elem: Parser, sep: Optional[Parser] = None) -> Parser:
    """One or more `elem`, separated by `sep` when one is given.

    Fails, returning the entry scanner, if the first `elem` does not match.
    """
    _check_repeat("Many", elem, sep)

    def parse(s: Scanner) -> Tuple[Optional[Node], Scanner]:
        ns, news = _repeat(elem, sep, s)
        if not ns:
            if log.isEnabledFor(logging.DEBUG):
                log.debug("Many: no element at %d", s.cursor())
            return None, s
        return _docallback(nodify, ns), news
    return parse


def Maybe(nodify: Optional[Nodify], parser: Parser) -> Parser:
    """Apply `parser` once.

    A miss is a real failure (None with the entry scanner), not an empty
    success like `Kleene`. Grammars that need an always-succeeding
    optional must supply their own fallback, e.g. `OrdChoice` with a
    parser that returns `EMPTY`.
    """
    if not callable(parser):
        raise TypeError(f"Maybe: parser is not callable: {parser!r}")

    def parse(s: Scanner) -> Tuple[Optional[Node], Scanner]:
        n, news = parser(s.clone())
        if n is None:
            if log.isEnabledFor(logging.DEBUG):
                log.debug("Maybe: no match at %d", s.cursor())
            return None, s
        return _docallback(nodify, [n]), news
    return parse


class DepthError(SyntaxError):
    """Input nests deeper than the recursion limit lets the parser follow."""


def run(parser: Parser, s: Scanner) -> Tuple[Optional[Node], Scanner]:
    """Apply a top-level `parser` to `s`, reporting runaway nesting as DepthError."""
    try:
        return parser(s)
    except RecursionError:
        raise DepthError(
            f"input nested too deeply at offset {s.cursor()} "
            f"(recursion limit {sys.getrecursionlimit()})") from None
