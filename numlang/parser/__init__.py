"""
numlang Parser Package

Implements a recursive descent parser with inline semantic checks.
Produces a flat trace of recognized statements plus diagnostics.

Key Features:
- One token of lookahead, no backtracking
- Shallow expression capture with parenthesis tracking
- Block scoping driven through the symbol table
- Statement-level error recovery and synchronization

Author: xwest
"""

from .statements import Statement, StatementKind
from .parser import Parser, parse_string, parse_file
from .errors import ParseError

__all__ = [
    # Core parser
    "Parser",
    "parse_string",
    "parse_file",

    # Trace records
    "Statement",
    "StatementKind",

    # Error handling
    "ParseError",
]
