"""
Token definitions for the numlang lexer.

This module defines every token type of the language:
- Keywords (the two numeric type names, control flow, I/O, booleans)
- Operators (arithmetic, relational, logical, assignment forms)
- Literals (integers, reals, strings)
- Punctuation and delimiters

Author: xwest
"""

from enum import Enum, auto
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any


class TokenType(Enum):
    """
    Enumeration of all token types in numlang.

    Organized by category for clarity and maintainability.
    """

    # ========================================================================
    # Special Tokens
    # ========================================================================
    EOF = auto()                    # End of input

    # ========================================================================
    # Literals
    # ========================================================================
    INTEGER = auto()                # 42
    REAL = auto()                   # 3.14
    STRING = auto()                 # "hello"
    TRUE = auto()                   # true
    FALSE = auto()                  # false

    # ========================================================================
    # Identifiers and Keywords
    # ========================================================================
    IDENTIFIER = auto()             # _x, total, y2

    # Type keywords
    LONG = auto()                   # long
    DOUBLE = auto()                 # double

    # Control flow keywords
    IF = auto()                     # if
    THEN = auto()                   # then
    ELSE = auto()                   # else
    WHILE = auto()                  # while
    BREAK = auto()                  # break

    # I/O keywords
    READ = auto()                   # read
    WRITE = auto()                  # write

    # ========================================================================
    # Operators
    # ========================================================================

    # Arithmetic operators
    PLUS = auto()                   # +
    MINUS = auto()                  # -
    MULTIPLY = auto()               # *
    DIVIDE = auto()                 # /

    # Assignment operators
    ASSIGN = auto()                 # =
    PLUS_ASSIGN = auto()            # +=
    MINUS_ASSIGN = auto()           # -=
    MULTIPLY_ASSIGN = auto()        # *=
    DIVIDE_ASSIGN = auto()          # /=

    # Comparison operators
    EQUAL = auto()                  # ==
    NOT_EQUAL = auto()              # != and <>
    LESS_THAN = auto()              # <
    GREATER_THAN = auto()           # >
    LESS_EQUAL = auto()             # <=
    GREATER_EQUAL = auto()          # >=

    # Logical operators
    LOGICAL_AND = auto()            # &&
    LOGICAL_OR = auto()             # ||
    LOGICAL_NOT = auto()            # !

    # ========================================================================
    # Punctuation and Delimiters
    # ========================================================================
    LEFT_PAREN = auto()             # (
    RIGHT_PAREN = auto()            # )
    LEFT_BRACE = auto()             # {
    RIGHT_BRACE = auto()            # }
    SEMICOLON = auto()              # ;


@dataclass(frozen=True)
class SourceLocation:
    """
    Represents a location in the source code.

    Lines and columns are 1-based; offset is the character index.
    """
    filename: str
    line: int
    column: int
    offset: int

    def __str__(self) -> str:
        return f"{self.filename}:{self.line}:{self.column}"

    def __repr__(self) -> str:
        return f"SourceLocation({self.filename!r}, {self.line}, {self.column}, {self.offset})"


@dataclass(frozen=True)
class Token:
    """
    Represents a lexical token in numlang.

    Contains the token type, lexeme (raw source slice), decoded literal
    value and the location of its first character.
    """
    type: TokenType
    lexeme: str
    value: Any                      # int, float, str or bool; None otherwise
    location: SourceLocation

    def __str__(self) -> str:
        text = f"{self.type.name}({self.lexeme!r})@{self.line}:{self.column}"
        if self.value is not None and self.type != TokenType.IDENTIFIER:
            return f"{text} {self.value!r}"
        return text

    def __repr__(self) -> str:
        return (f"Token({self.type.name}, {self.lexeme!r}, "
                f"{self.value!r}, {self.location!r})")

    @property
    def line(self) -> int:
        return self.location.line

    @property
    def column(self) -> int:
        return self.location.column

    @property
    def is_literal(self) -> bool:
        """Check if this token is a literal value."""
        return self.type in LITERALS

    @property
    def is_keyword(self) -> bool:
        """Check if this token is a reserved word."""
        return self.type in KEYWORD_TYPES

    @property
    def is_operator(self) -> bool:
        """Check if this token is an operator or delimiter."""
        return self.type in OPERATOR_TYPES

    @property
    def is_identifier(self) -> bool:
        """Check if this token is an identifier."""
        return self.type == TokenType.IDENTIFIER


# Reserved words. Read-only for the lifetime of the process.
KEYWORDS = MappingProxyType({
    # Types
    "long": TokenType.LONG,
    "double": TokenType.DOUBLE,

    # Control flow
    "if": TokenType.IF,
    "then": TokenType.THEN,
    "else": TokenType.ELSE,
    "while": TokenType.WHILE,
    "break": TokenType.BREAK,

    # I/O
    "read": TokenType.READ,
    "write": TokenType.WRITE,

    # Booleans
    "true": TokenType.TRUE,
    "false": TokenType.FALSE,
})

OPERATORS = MappingProxyType({
    # Arithmetic
    "+": TokenType.PLUS,
    "-": TokenType.MINUS,
    "*": TokenType.MULTIPLY,
    "/": TokenType.DIVIDE,

    # Assignment
    "=": TokenType.ASSIGN,
    "+=": TokenType.PLUS_ASSIGN,
    "-=": TokenType.MINUS_ASSIGN,
    "*=": TokenType.MULTIPLY_ASSIGN,
    "/=": TokenType.DIVIDE_ASSIGN,

    # Comparison
    "==": TokenType.EQUAL,
    "!=": TokenType.NOT_EQUAL,
    "<>": TokenType.NOT_EQUAL,
    "<": TokenType.LESS_THAN,
    ">": TokenType.GREATER_THAN,
    "<=": TokenType.LESS_EQUAL,
    ">=": TokenType.GREATER_EQUAL,

    # Logical
    "&&": TokenType.LOGICAL_AND,
    "||": TokenType.LOGICAL_OR,
    "!": TokenType.LOGICAL_NOT,

    # Punctuation
    "(": TokenType.LEFT_PAREN,
    ")": TokenType.RIGHT_PAREN,
    "{": TokenType.LEFT_BRACE,
    "}": TokenType.RIGHT_BRACE,
    ";": TokenType.SEMICOLON,
})

LITERALS = frozenset({
    TokenType.INTEGER, TokenType.REAL, TokenType.STRING,
    TokenType.TRUE, TokenType.FALSE,
})

KEYWORD_TYPES = frozenset(KEYWORDS.values())

OPERATOR_TYPES = frozenset(OPERATORS.values())

# Keywords that begin a new statement or declaration; used as parser
# synchronization points.
STATEMENT_KEYWORDS = frozenset({
    TokenType.IF, TokenType.WHILE, TokenType.READ, TokenType.WRITE,
    TokenType.LONG, TokenType.DOUBLE,
})

ASSIGNMENT_OPERATORS = frozenset({
    TokenType.ASSIGN, TokenType.PLUS_ASSIGN, TokenType.MINUS_ASSIGN,
    TokenType.MULTIPLY_ASSIGN, TokenType.DIVIDE_ASSIGN,
})
