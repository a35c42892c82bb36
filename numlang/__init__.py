"""
numlang Front End Package

Tokenizer, recursive descent parser and inline semantic checks for a
small imperative teaching language with two numeric types (long and
double), conditionals, loops, lexically scoped blocks and read/write
statements.

Architecture:
    numlang/
    ├── lexer/           # Tokenization and diagnostics
    ├── parser/          # Syntax analysis and statement trace
    ├── analyzer/        # Scopes and numeric type checks
    ├── frontend.py      # One-call pipeline
    └── cli.py           # Command line driver

Author: xwest
License: MIT
"""

__version__ = "0.1.0"
__author__ = "xwest"
__email__ = "dev@numlang.org"
__license__ = "MIT"

from .lexer import Lexer, Token, TokenType, Diagnostic, DiagnosticSink, Severity, Category
from .parser import Parser, Statement, StatementKind
from .analyzer import SymbolTable, ValueType
from .frontend import FrontendOptions, FrontendResult, analyze_source, analyze_file

__all__ = [
    # Core classes
    "Lexer",
    "Parser",
    "SymbolTable",

    # Data
    "Token", "TokenType", "Statement", "StatementKind", "ValueType",
    "Diagnostic", "DiagnosticSink", "Severity", "Category",

    # Pipeline
    "FrontendOptions", "FrontendResult", "analyze_source", "analyze_file",

    # Version info
    "__version__",
    "__author__",
    "__email__",
    "__license__",
]
