# parsek/grammars/__init__.py
"""Example grammars written with parsek combinators.

- `json` : JSON documents -> AST -> Python data
- `expr` : arithmetic expressions -> AST -> number
"""

from . import expr, json
