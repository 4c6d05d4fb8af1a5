# parsek/grammars/json.py
"""JSON grammar built from parsek combinators.

    value      := TRUE | FALSE | NULL | STRING | FLOAT | INT | array | object
    array      := "[" values "]"
    object     := "{" properties "}"
    values     := (value ("," value)*)?
    properties := (property ("," property)*)?
    property   := STRING ":" value

Arrays become `NonTerminal("VALUES")`, objects `NonTerminal("PROPERTIES")`
whose children are `PropertyNode`s sorted by property name. `value()`
turns such a tree into plain Python data.
"""

from __future__     import annotations
import json as _stdjson
from dataclasses    import dataclass
from pathlib        import Path
from typing         import Any, ClassVar, List, Optional, Tuple, Union

from ..ast          import Node, NonTerminal, Terminal
from ..combinators  import And, Kleene, Maybe, OrdChoice, run
from ..scan         import Scanner, SimpleScanner
from ..terminals    import String, Token


@dataclass(frozen=True)
class PropertyNode:
    """One `"name": value` pair of an object."""
    name: ClassVar[str] = "PROPERTY"
    propname: str   # raw literal, quotes included
    node: Node

    @property
    def value(self) -> str:
        return self.propname

    @property
    def children(self) -> Tuple[Node, ...]:
        return (self.node,)


# ---- Terminals ----
tRue    = Token(r"true", "TRUE")
fAlse   = Token(r"false", "FALSE")
nUll    = Token(r"null", "NULL")
sTring  = String()
fLoat   = Token(r"-?(?:[0-9]*\.[0-9]+(?:[eE][-+]?[0-9]+)?|[0-9]+[eE][-+]?[0-9]+)", "FLOAT")
iNt     = Token(r"-?[0-9]+", "INT")

comma       = Token(r",", "COMMA")
colon       = Token(r":", "COLON")
opensqr     = Token(r"\[", "OPENSQR")
closesqr    = Token(r"\]", "CLOSESQR")
openbrace   = Token(r"\{", "OPENBRACE")
closebrace  = Token(r"\}", "CLOSEBRACE")


# ---- Callbacks ----
def _first(ns: List[Node]) -> Optional[Node]:
    return ns[0] if ns else None

def _second(ns: List[Node]) -> Optional[Node]:
    return ns[1] if ns else None

def _values(ns: List[Node]) -> Node:
    return NonTerminal(name="VALUES", children=ns)

def _properties(ns: List[Node]) -> Node:
    return NonTerminal(name="PROPERTIES", children=sorted(ns, key=lambda p: p.propname))

def _property(ns: List[Node]) -> Optional[Node]:
    if not ns:
        return None
    return PropertyNode(propname=ns[0].value, node=ns[2])


# ---- Rules ----
def jsonvalue(s: Scanner) -> Tuple[Optional[Node], Scanner]:
    return _jsonvalue(s)

values      = Kleene(_values, jsonvalue, comma)
array       = And(_second, opensqr, values, closesqr)
prop        = And(_property, sTring, colon, jsonvalue)
properties  = Kleene(_properties, prop, comma)
obj         = And(_second, openbrace, properties, closebrace)

_jsonvalue = OrdChoice(_first, tRue, fAlse, nUll, sTring, fLoat, iNt, array, obj)

# Document entry point.
y = Maybe(_first, jsonvalue)


# ---- Public API ----
def parse(text: Union[str, bytes]) -> Optional[Node]:
    """Parse a JSON document and return the AST root, or None.

    Raises ValueError for bytes that are not UTF-8 and DepthError when
    arrays or objects nest deeper than the recursion limit allows.
    """
    n, _ = run(y, SimpleScanner(text))
    return n


def parse_file(path: Union[str, Path]) -> Optional[Node]:
    """Parse the JSON document stored in `path`."""
    return parse(Path(path).read_bytes())


def value(n: Node) -> Any:
    """Convert a JSON AST into Python data."""
    if isinstance(n, Terminal):
        if n.name == "INT":
            return int(n.value)
        if n.name == "FLOAT":
            return float(n.value)
        if n.name == "STRING":
            return _unquote(n.value)
        if n.name == "TRUE":
            return True
        if n.name == "FALSE":
            return False
        if n.name == "NULL":
            return None
        raise ValueError(f"unexpected terminal {n.name!r}")
    if isinstance(n, NonTerminal):
        if n.name == "VALUES":
            return [value(c) for c in n.children]
        if n.name == "PROPERTIES":
            m = {}
            for c in n.children:
                if not isinstance(c, PropertyNode):
                    raise ValueError(f"expected PropertyNode, got {c!r}")
                m[_unquote(c.propname)] = value(c.node)
            return m
        raise ValueError(f"unexpected non-terminal {n.name!r}")
    raise ValueError(f"not a JSON node: {n!r}")


def _unquote(lit: str) -> str:
    # escapes follow JSON rules; raw control characters are tolerated
    return _stdjson.loads(lit, strict=False)
