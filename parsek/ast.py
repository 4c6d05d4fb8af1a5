# parsek/ast.py
"""AST node model.

- Terminal    : one matched token (name, text, byte offset)
- NonTerminal : a rule's result (name, optional value, ordered children)
- A plain list of nodes is also a node; it is what the combinators hand
  back when a grammar supplies no construction callback.

Grammars are free to add their own node variants. The combinators pass
nodes around opaquely and never look inside them.
"""

from __future__     import annotations
from dataclasses    import dataclass, field
from typing         import Any, Callable, List, Optional, Tuple

# Open polymorphic node value: Terminal, NonTerminal, list of nodes, or a
# grammar-defined variant.
Node = Any

# Construction callback: ordered child nodes -> one node (or None).
Nodify = Callable[[List[Node]], Optional[Node]]


@dataclass(frozen=True)
class Terminal:
    name: str       # token kind
    value: str      # matched text
    position: int = 0   # byte offset where the token starts


@dataclass(frozen=True)
class NonTerminal:
    name: str
    value: str = ""
    children: Tuple[Node, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        # callbacks usually hand over the accumulated list as-is
        if not isinstance(self.children, tuple):
            object.__setattr__(self, "children", tuple(self.children))


# "Nothing matched" sentinel for grammars that want an always-present value.
EMPTY = Terminal(name="", value="", position=0)


def node_name(n: Node) -> Optional[str]:
    """Symbolic name of a node, or None for lists and nameless variants."""
    return getattr(n, "name", None)


def dump(n: Node, indent: str = "  ") -> str:
    """Render a tree one node per line, children indented under parents."""
    lines: List[str] = []
    _dump(n, "", indent, lines)
    return "\n".join(lines)


def _dump(n: Node, prefix: str, indent: str, out: List[str]) -> None:
    if isinstance(n, Terminal):
        out.append(f"{prefix}{n.name} : {n.value}")
    elif isinstance(n, list):
        if not n:
            out.append(f"{prefix}[]")
            return
        out.append(f"{prefix}[")
        for c in n:
            _dump(c, prefix + indent, indent, out)
        out.append(f"{prefix}]")
    elif node_name(n) is not None:
        # NonTerminal and grammar variants exposing name/value/children
        value = getattr(n, "value", "")
        out.append(f"{prefix}{n.name} : {value}" if value else f"{prefix}{n.name}")
        for c in getattr(n, "children", ()):
            _dump(c, prefix + indent, indent, out)
    else:
        out.append(f"{prefix}{n!r}")
