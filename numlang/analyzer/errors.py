"""
Semantic error handling for numlang.

Covers scope resolution and numeric type compatibility: undeclared
names, narrowing assignments, non-numeric conditions and redeclarations.

Author: xwest
"""

from typing import Any, Optional

from ..lexer.tokens import SourceLocation
from ..lexer.errors import Diagnostic, Severity, Category


class SemanticError(Exception):
    """
    Exception raised when a scope or type rule is violated.

    Contains detailed diagnostic information for error reporting.
    """

    def __init__(
        self,
        message: str,
        location: SourceLocation,
        code: Optional[str] = None,
        help_text: Optional[str] = None,
        severity: Severity = Severity.ERROR
    ):
        super().__init__(message)
        self.diagnostic = Diagnostic(
            message=message,
            location=location,
            severity=severity,
            category=Category.SEMANTIC,
            code=code,
            help_text=help_text
        )

    def __str__(self) -> str:
        return str(self.diagnostic)


class RedeclarationError(SemanticError):
    """
    Raised by SymbolTable.declare when a name already exists in the
    innermost scope. The original binding is kept in `existing`.
    """

    def __init__(self, name: str, location: SourceLocation, existing: Any):
        super().__init__(
            f"variable '{name}' was already declared in this scope (line {existing.line})",
            location,
            code="S011",
            help_text="The first declaration stays in effect.",
            severity=Severity.WARNING
        )
        self.name = name
        self.existing = existing


# Semantic error codes for categorization
SEMANTIC_ERROR_CODES = {
    "S001": "Narrowing assignment",
    "S003": "Non-numeric condition",
    "S010": "Undeclared variable",
    "S011": "Variable redeclaration",
}


def create_undeclared_variable_error(name: str, location: SourceLocation) -> SemanticError:
    """Create an error for a name with no visible declaration."""
    return SemanticError(
        f"variable '{name}' used without declaration",
        location,
        code="S010",
        help_text=f"Declare '{name}' with 'long' or 'double' before using it."
    )


def create_narrowing_assignment_error(name: str, declared: Any, inferred: Any,
                                      location: SourceLocation) -> SemanticError:
    """Create an error for assigning a wider value into a narrower variable."""
    return SemanticError(
        f"narrowing assignment not allowed: cannot assign {inferred.value} to {declared.value} '{name}'",
        location,
        code="S001",
        help_text=f"'{name}' is declared {declared.value}; declare it double to hold real values."
    )


def create_non_numeric_condition_error(inferred: Any, location: SourceLocation) -> SemanticError:
    """Create an error for an if condition that is not numeric."""
    return SemanticError(
        f"condition must be numeric, found {inferred.value}",
        location,
        code="S003",
        help_text="Conditions are numeric; zero is false and any other value is true."
    )


def create_redeclaration_warning(error: RedeclarationError, severity: Severity) -> Diagnostic:
    """Build the diagnostic for a redeclaration at the requested severity."""
    diagnostic = error.diagnostic
    return Diagnostic(
        message=diagnostic.message,
        location=diagnostic.location,
        severity=severity,
        category=diagnostic.category,
        code=diagnostic.code,
        help_text=diagnostic.help_text
    )
