# parsek/__init__.py
"""parsek: parser combinators over an immutable scanner.

This package provides:
- AST nodes (Terminal, NonTerminal) and the EMPTY sentinel
- The Scanner contract and a regex-backed SimpleScanner
- The combinators And, OrdChoice, Kleene, Many, Maybe
- Token matchers (Token, OrdTokens, String, End)

Example grammars live in `parsek.grammars`.
"""

from .ast import Node, Nodify, Terminal, NonTerminal, EMPTY, node_name, dump
from .scan import Scanner, SimpleScanner
from .combinators import Parser, And, OrdChoice, Kleene, Many, Maybe, DepthError, run
from .terminals import Token, OrdTokens, String, End

__version__ = "0.1.0"
