"""
numlang Lexer Package

Implements the lexical analyzer (tokenizer) for numlang.

Key Features:
- Single pass, at most one character of lookahead
- 64-bit integer and real literals, single-line strings
- Line and block comments
- Error tolerance: malformed input is recorded and scanning continues
- Source location tracking for every token

Author: xwest
"""

from .tokens import Token, TokenType, SourceLocation, KEYWORDS
from .lexer import Lexer, tokenize_string, tokenize_file
from .errors import Diagnostic, DiagnosticSink, Severity, Category, LexerError

__all__ = [
    "Lexer",
    "Token",
    "TokenType",
    "SourceLocation",
    "KEYWORDS",
    "tokenize_string",
    "tokenize_file",
    "Diagnostic",
    "DiagnosticSink",
    "Severity",
    "Category",
    "LexerError",
]
