"""
Heuristic type inference over captured expression tokens.

The parser does not build expression trees; it hands the raw token run
of an expression to infer_expression_type. Any real literal, or any
name bound to a double, makes the whole expression double. A string
literal makes it a string. Everything else is long.
"""

from typing import Sequence

from ..lexer.tokens import Token, TokenType
from .symbol_table import SymbolTable, ValueType


def infer_expression_type(tokens: Sequence[Token], symbols: SymbolTable) -> ValueType:
    """
    Infer the type of an expression from its tokens.

    Names that do not resolve contribute nothing; reporting them is the
    caller's business.
    """
    if any(token.type == TokenType.STRING for token in tokens):
        return ValueType.STRING

    if any(token.type == TokenType.REAL for token in tokens):
        return ValueType.DOUBLE

    for token in tokens:
        if token.type != TokenType.IDENTIFIER:
            continue
        declaration = symbols.lookup(token.lexeme)
        if declaration is not None and declaration.value_type == ValueType.DOUBLE:
            return ValueType.DOUBLE

    return ValueType.LONG


def is_narrowing(target: ValueType, value: ValueType) -> bool:
    """A double value flowing into a long variable."""
    return target == ValueType.LONG and value == ValueType.DOUBLE
