# parsek/grammars/expr.py
"""Arithmetic expression grammar.

    expr   := term (("+" | "-") term)*
    term   := factor (("*" | "/") factor)*
    factor := FLOAT | INT | "(" expr ")" | "-" factor

A chain of two or more operands becomes `NonTerminal("SUM")` or
`NonTerminal("PRODUCT")` with operator terminals kept between operands;
a lone operand is passed through unchanged. Unary minus builds
`NonTerminal("NEG")`.
"""

from __future__     import annotations
import operator
from typing         import Callable, Dict, List, Optional, Tuple, Union

from ..ast          import Node, NonTerminal, Terminal
from ..combinators  import And, Kleene, OrdChoice, run
from ..scan         import Scanner, SimpleScanner
from ..terminals    import OrdTokens, Token

Number = Union[int, float]

_OPS: Dict[str, Callable[[Number, Number], Number]] = {
    "PLUS":  operator.add,
    "MINUS": operator.sub,
    "STAR":  operator.mul,
    "SLASH": operator.truediv,
}

# ---- Terminals ----
number      = OrdTokens([r"[0-9]*\.[0-9]+", r"[0-9]+"], ["FLOAT", "INT"])
addop       = OrdTokens([r"\+", r"-"], ["PLUS", "MINUS"])
mulop       = OrdTokens([r"\*", r"/"], ["STAR", "SLASH"])
minus       = Token(r"-", "MINUS")
openparan   = Token(r"\(", "OPENPARAN")
closeparan  = Token(r"\)", "CLOSEPARAN")


# ---- Callbacks ----
def _one2one(ns: List[Node]) -> Optional[Node]:
    return ns[0] if ns else None

def _chain(name: str):
    def nodify(ns: List[Node]) -> Node:
        first, rest = ns
        if not rest:
            return first
        children = [first]
        for op, operand in rest:
            children.extend((op, operand))
        return NonTerminal(name=name, children=children)
    return nodify

def _paren(ns: List[Node]) -> Node:
    return ns[1]

def _neg(ns: List[Node]) -> Node:
    return NonTerminal(name="NEG", children=[ns[1]])


# ---- Rules ----
def expr(s: Scanner) -> Tuple[Optional[Node], Scanner]:
    return _sum(s)

def factor(s: Scanner) -> Tuple[Optional[Node], Scanner]:
    return _factor(s)

_factor = OrdChoice(
    _one2one,
    number,
    And(_paren, openparan, expr, closeparan),
    And(_neg, minus, factor),
)
_prod = And(_chain("PRODUCT"), factor, Kleene(None, And(None, mulop, factor)))
_sum = And(_chain("SUM"), _prod, Kleene(None, And(None, addop, _prod)))


# ---- Public API ----
def parse(text: Union[str, bytes]) -> Optional[Node]:
    """Parse an expression and return the AST root, or None.

    Raises DepthError when parentheses or unary minus nest too deeply.
    """
    n, _ = run(expr, SimpleScanner(text))
    return n


def evaluate(n: Node) -> Number:
    """Compute the value of an expression AST, left to right."""
    if isinstance(n, Terminal):
        if n.name == "INT":
            return int(n.value)
        if n.name == "FLOAT":
            return float(n.value)
        raise ValueError(f"unexpected terminal {n.name!r}")
    if isinstance(n, NonTerminal):
        if n.name == "NEG":
            return -evaluate(n.children[0])
        if n.name in ("SUM", "PRODUCT"):
            acc = evaluate(n.children[0])
            it = iter(n.children[1:])
            for op, operand in zip(it, it):
                acc = _OPS[op.name](acc, evaluate(operand))
            return acc
        raise ValueError(f"unexpected non-terminal {n.name!r}")
    raise ValueError(f"not an expression node: {n!r}")
