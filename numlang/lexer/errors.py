"""
Diagnostics and error handling for the numlang lexer.

Defines the diagnostic record shared by every stage of the front end,
the append-only sink that collects them, and the lexer's own error
factories.

Author: xwest
"""

import logging
import sys
from enum import Enum
from typing import Iterator, List, Optional, TextIO
from dataclasses import dataclass

from .tokens import SourceLocation


logger = logging.getLogger(__name__)


class Severity(Enum):
    """How serious a diagnostic is."""
    ERROR = "error"
    WARNING = "warning"


class Category(Enum):
    """Which stage of the front end produced a diagnostic."""
    LEXICAL = "lexical"
    SYNTACTIC = "syntactic"
    SEMANTIC = "semantic"


@dataclass(frozen=True)
class Diagnostic:
    """A position-tagged message produced by any stage."""
    message: str
    location: SourceLocation
    severity: Severity
    category: Category
    code: Optional[str] = None
    help_text: Optional[str] = None

    @property
    def line(self) -> int:
        return self.location.line

    @property
    def column(self) -> int:
        return self.location.column

    @property
    def is_error(self) -> bool:
        return self.severity == Severity.ERROR

    def __str__(self) -> str:
        result = f"{self.severity.value.upper()}: {self.message}\n"
        result += f"  --> {self.location}\n"

        if self.help_text:
            result += f"  help: {self.help_text}\n"

        return result


class DiagnosticSink:
    """
    Append-only collector of diagnostics.

    One sink is shared by the lexer and the parser of a single
    compilation; insertion order is preserved and entries are never
    removed.
    """

    def __init__(self):
        self._diagnostics: List[Diagnostic] = []

    def add(self, diagnostic: Diagnostic) -> Diagnostic:
        logger.debug("diagnostic recorded: %s at %s", diagnostic.message, diagnostic.location)
        self._diagnostics.append(diagnostic)
        return diagnostic

    def record(
        self,
        message: str,
        location: SourceLocation,
        category: Category,
        severity: Severity = Severity.ERROR,
        code: Optional[str] = None,
        help_text: Optional[str] = None
    ) -> Diagnostic:
        """Create and append a diagnostic."""
        return self.add(Diagnostic(
            message=message,
            location=location,
            severity=severity,
            category=category,
            code=code,
            help_text=help_text
        ))

    def has_diagnostics(self) -> bool:
        return len(self._diagnostics) > 0

    def has_errors(self) -> bool:
        """Check if any error-severity diagnostic was recorded."""
        return any(d.is_error for d in self._diagnostics)

    @property
    def errors(self) -> List[Diagnostic]:
        return [d for d in self._diagnostics if d.severity == Severity.ERROR]

    @property
    def warnings(self) -> List[Diagnostic]:
        return [d for d in self._diagnostics if d.severity == Severity.WARNING]

    def by_category(self, category: Category) -> List[Diagnostic]:
        return [d for d in self._diagnostics if d.category == category]

    def print_all(self, stream: Optional[TextIO] = None):
        """Print every diagnostic in insertion order (stderr by default)."""
        stream = stream if stream is not None else sys.stderr
        for diagnostic in self._diagnostics:
            stream.write(str(diagnostic))

    def __iter__(self) -> Iterator[Diagnostic]:
        return iter(list(self._diagnostics))

    def __len__(self) -> int:
        return len(self._diagnostics)

    def __getitem__(self, index: int) -> Diagnostic:
        return self._diagnostics[index]

    def __repr__(self) -> str:
        return f"DiagnosticSink({len(self.errors)} errors, {len(self.warnings)} warnings)"


class LexerError(Exception):
    """
    Raised inside the lexer when a malformed token is found.

    The lexer's main loop catches it, records the diagnostic and keeps
    scanning; it never escapes tokenization on its own.
    """

    def __init__(
        self,
        message: str,
        location: SourceLocation,
        code: Optional[str] = None,
        help_text: Optional[str] = None
    ):
        super().__init__(message)
        self.diagnostic = Diagnostic(
            message=message,
            location=location,
            severity=Severity.ERROR,
            category=Category.LEXICAL,
            code=code,
            help_text=help_text
        )

    def __str__(self) -> str:
        return str(self.diagnostic)


# Common error codes for categorization
ERROR_CODES = {
    "L001": "Invalid character",
    "L002": "Unterminated string literal",
    "L003": "Invalid numeric literal",
    "L004": "Unterminated block comment",
    "L005": "Incomplete logical operator",
}


# Helper functions for creating common errors
def create_invalid_character_error(char: str, location: SourceLocation) -> LexerError:
    """Create an error for an unrecognized character."""
    if char.isprintable():
        help_text = f"The character '{char}' is not valid in numlang source code."
    else:
        help_text = f"Non-printable character (Unicode: U+{ord(char):04X}) is not allowed."

    return LexerError(
        message=f"unexpected character: '{char}'",
        location=location,
        code="L001",
        help_text=help_text
    )


def create_incomplete_operator_error(char: str, location: SourceLocation) -> LexerError:
    """Create an error for a lone '&' or '|'."""
    return LexerError(
        message=f"unexpected symbol '{char}', did you mean '{char}{char}'?",
        location=location,
        code="L005",
        help_text="Logical operators are written with a doubled character."
    )


def create_unterminated_string_error(location: SourceLocation, reached_newline: bool) -> LexerError:
    """Create an error for a string literal that never closes."""
    if reached_newline:
        message = "unterminated string literal: strings must close on the same line"
    else:
        message = "unterminated string literal"

    return LexerError(
        message=message,
        location=location,
        code="L002",
        help_text='String literals must be closed with a matching " quote.'
    )


def create_invalid_number_error(lexeme: str, location: SourceLocation, reason: str) -> LexerError:
    """Create an error for a numeric literal that cannot be decoded."""
    return LexerError(
        message=f"invalid numeric literal: '{lexeme}'",
        location=location,
        code="L003",
        help_text=reason
    )


def create_unterminated_comment_error(location: SourceLocation) -> LexerError:
    """Create an error for a block comment without its closing delimiter."""
    return LexerError(
        message="unterminated block comment",
        location=location,
        code="L004",
        help_text="Block comments opened with '/*' must be closed with '*/'."
    )
