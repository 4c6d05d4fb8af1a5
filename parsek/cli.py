# parsek/cli.py
"""parsek – command-line driver for the bundled grammars

Usage)
    $ parsek expr "1 + 2 * (3 - 4)"
    $ parsek expr formula.txt --eval
    $ parsek json data.json -D
    $ parsek json '{"a": [1, 2.5, true]}' --eval

Commands
--------
- expr : parse an arithmetic expression, print its AST (or value with -e)
- json : parse a JSON document, print its AST (or Python data with -e)

SOURCE is read as a file when such a file exists, otherwise it is taken
as the input text itself. Debug mode (-D/--debug) prints stage summaries
and turns on combinator backtracking logs.
"""

from __future__ import annotations
import argparse
import json
import logging
import sys
from typing import Any, Callable, Optional

from .ast       import Node, dump
from .combinators import run
from .loader    import load_text
from .scan      import SimpleScanner

# ------------------------------
# Helpers
# ------------------------------

def _eprint(*args, **kw) -> None:
    print(*args, file=sys.stderr, **kw)


def _caret_snippet(src: str, pos: int) -> str:
    """Line containing `pos` with a caret under it."""
    start = src.rfind("\n", 0, pos)
    start = 0 if start < 0 else start + 1
    end = src.find("\n", pos)
    end = len(src) if end < 0 else end
    return f"{src[start:end]}\n{' ' * (pos - start)}^"


def _parse_all(parser, text: str, debug: bool) -> Node:
    """Run `parser` over the whole of `text`; raise SyntaxError otherwise."""
    s = SimpleScanner(text)
    n, news = run(parser, s)
    _, rest = news.skip_whitespace()
    if debug:
        _eprint("[DEBUG] parsed | matched=%s stop=%d size=%d" %
                (n is not None, rest.cursor(), len(s.text)))
    if n is not None and rest.at_end():
        return n
    stop = rest.cursor() if n is not None else s.cursor()
    # cursors are byte offsets, the snippet is built from text
    pos = len(s.text[:stop].decode("utf-8", errors="ignore"))
    what = "unexpected input" if n is not None else "no match"
    raise SyntaxError(f"{what} at offset {stop}\n{_caret_snippet(text, pos)}")


def _run(args, parser, convert: Callable[[Node], Any], show: Callable[[Any], str]) -> int:
    if args.debug:
        logging.basicConfig(level=logging.DEBUG, format="[%(name)s] %(message)s")
    try:
        text = load_text(args.source)
        if args.debug:
            _eprint("[DEBUG] input ready | chars=%d" % len(text))
        n = _parse_all(parser, text, args.debug)
        out = show(convert(n)) if args.eval else dump(n)
    except SyntaxError as e:
        _eprint("[SYNTAX ERROR]")
        _eprint(str(e))
        return 2
    except Exception as e:
        _eprint("[ERROR]", type(e).__name__, str(e))
        return 2
    print(out)
    return 0

# ------------------------------
# Commands
# ------------------------------

def cmd_expr(args) -> int:
    from .grammars import expr
    return _run(args, expr.expr, expr.evaluate, str)


def cmd_json(args) -> int:
    from .grammars import json as jsongrammar
    return _run(args, jsongrammar.y, jsongrammar.value,
                lambda v: json.dumps(v, indent=2, sort_keys=True))

# ------------------------------
# Entrypoint
# ------------------------------

def main(argv: Optional[list[str]] = None) -> int:
    ap = argparse.ArgumentParser(prog="parsek", description="parsek parser-combinator demo CLI")
    sub = ap.add_subparsers(dest="cmd", required=True)

    p_expr = sub.add_parser("expr", help="parse an arithmetic expression")
    p_expr.add_argument("source", help="expression text or a file containing it")
    p_expr.add_argument("-e", "--eval", action="store_true", help="print the computed value instead of the AST")
    p_expr.add_argument("-D", "--debug", action="store_true", help="print debug information")
    p_expr.set_defaults(func=cmd_expr)

    p_json = sub.add_parser("json", help="parse a JSON document")
    p_json.add_argument("source", help="JSON text or a file containing it")
    p_json.add_argument("-e", "--eval", action="store_true", help="print the converted Python data instead of the AST")
    p_json.add_argument("-D", "--debug", action="store_true", help="print debug information")
    p_json.set_defaults(func=cmd_json)

    args = ap.parse_args(argv)
    return int(args.func(args))

if __name__ == "__main__":
    sys.exit(main())
