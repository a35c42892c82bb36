"""
Error handling for the numlang parser.

Provides syntax error reporting and the synchronization helpers used to
resume parsing at the next statement boundary.

Author: xwest
"""

from typing import List, Optional, Sequence

from ..lexer.tokens import Token, TokenType, SourceLocation, STATEMENT_KEYWORDS
from ..lexer.errors import Diagnostic, Severity, Category


class ParseError(Exception):
    """
    Exception raised when a required token is missing.

    The parser abandons the statement being parsed; `token` is the token
    actually found. When `synchronize` is set the parser then skips to
    the next statement boundary, otherwise it resumes where it stopped.
    """

    def __init__(
        self,
        message: str,
        location: SourceLocation,
        token: Optional[Token] = None,
        code: Optional[str] = None,
        help_text: Optional[str] = None,
        synchronize: bool = True
    ):
        super().__init__(message)
        self.diagnostic = Diagnostic(
            message=message,
            location=location,
            severity=Severity.ERROR,
            category=Category.SYNTACTIC,
            code=code,
            help_text=help_text
        )
        self.token = token
        self.synchronize = synchronize

    def __str__(self) -> str:
        return str(self.diagnostic)


class SyntaxErrorRecovery:
    """
    Utilities for error recovery in the parser.

    After a failed statement the parser discards tokens until the last
    consumed token was a ';' or the next token starts a new statement.
    """

    @staticmethod
    def suggest_missing_token(expected: TokenType) -> Optional[str]:
        """Suggest what token might be missing."""
        token_suggestions = {
            TokenType.SEMICOLON: "Add a semicolon ';' to end the statement",
            TokenType.LEFT_PAREN: "Add an opening parenthesis '('",
            TokenType.RIGHT_PAREN: "Add a closing parenthesis ')'",
            TokenType.LEFT_BRACE: "Add an opening brace '{' to start a block",
            TokenType.RIGHT_BRACE: "Add a closing brace '}'",
            TokenType.THEN: "Add 'then' after the if condition",
            TokenType.IDENTIFIER: "Add a variable name",
        }

        return token_suggestions.get(expected)

    @staticmethod
    def is_boundary(tokens: Sequence[Token], current_pos: int) -> bool:
        """Check whether parsing may resume at current_pos."""
        if current_pos > 0 and tokens[current_pos - 1].type == TokenType.SEMICOLON:
            return True
        return tokens[current_pos].type in STATEMENT_KEYWORDS

    @staticmethod
    def synchronize_to_statement_boundary(tokens: Sequence[Token], current_pos: int) -> int:
        """
        Synchronize parser to the next statement boundary.

        Returns the position to resume parsing from; never moves past the
        EOF token.
        """
        while tokens[current_pos].type != TokenType.EOF:
            if SyntaxErrorRecovery.is_boundary(tokens, current_pos):
                return current_pos
            current_pos += 1

        return current_pos


# Common parser error codes for categorization
PARSER_ERROR_CODES = {
    "P001": "Unexpected token",
    "P004": "Unclosed block",
    "P005": "Nesting too deep",
}


def describe(token_type: TokenType) -> str:
    """Human-readable spelling of a token type."""
    spellings = {
        TokenType.SEMICOLON: "';'",
        TokenType.LEFT_PAREN: "'('",
        TokenType.RIGHT_PAREN: "')'",
        TokenType.LEFT_BRACE: "'{'",
        TokenType.RIGHT_BRACE: "'}'",
        TokenType.THEN: "'then'",
        TokenType.IDENTIFIER: "an identifier",
        TokenType.EOF: "end of input",
    }
    return spellings.get(token_type, token_type.name)


def create_unexpected_token_error(expected: TokenType, found: Token, context: str) -> ParseError:
    """Create an error for a required token that is not there."""
    found_str = describe(found.type) if found.type == TokenType.EOF else f"'{found.lexeme}'"

    return ParseError(
        message=f"syntactic error: expected {describe(expected)} {context}, found {found_str}",
        location=found.location,
        token=found,
        code="P001",
        help_text=SyntaxErrorRecovery.suggest_missing_token(expected)
    )


def create_unclosed_block_error(open_location: SourceLocation, found: Token) -> ParseError:
    """Create an error for a block whose closing brace never came."""
    return ParseError(
        message="syntactic error: missing '}' to close the block",
        location=found.location,
        token=found,
        code="P004",
        help_text=f"The block opened at {open_location} was never closed."
    )


def create_nesting_too_deep_error(found: Token, limit: int) -> ParseError:
    """
    Create an error for a statement nested past the parser's limit.

    The caller skips the offending statement itself, so no further
    synchronization is needed.
    """
    return ParseError(
        message=f"syntactic error: statements nested more than {limit} levels deep",
        location=found.location,
        token=found,
        code="P005",
        help_text="Split deeply nested blocks and conditionals into flatter code.",
        synchronize=False
    )


def collect_lexemes(tokens: List[Token]) -> str:
    """Reconstruct expression text from its tokens."""
    return " ".join(token.lexeme for token in tokens)
