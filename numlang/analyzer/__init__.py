"""
numlang Semantic Analysis Package

Scope management and numeric type checks used inline by the parser:
- Stack-of-scopes symbol table with shadowing
- Heuristic expression type inference
- Narrowing-assignment and undeclared-name diagnostics

Author: xwest
"""

from .symbol_table import SymbolTable, Scope, Declaration, ValueType
from .type_inference import infer_expression_type, is_narrowing
from .errors import SemanticError, RedeclarationError

__all__ = [
    # Symbol management
    "SymbolTable", "Scope", "Declaration", "ValueType",

    # Type inference
    "infer_expression_type", "is_narrowing",

    # Error handling
    "SemanticError", "RedeclarationError",
]
