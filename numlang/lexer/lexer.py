"""
numlang Lexer - turns source text into tokens

Single left-to-right pass. Every branch is decided by the current
character plus at most one character of lookahead. Malformed input is
recorded as a diagnostic and scanning carries on with the next
character, so one bad literal never hides the ones after it.

Author: xwest
"""

import logging
import math
import re
from typing import List, Optional

from .tokens import Token, TokenType, SourceLocation, KEYWORDS, OPERATORS
from .errors import (
    DiagnosticSink, LexerError, create_invalid_character_error,
    create_incomplete_operator_error, create_unterminated_string_error,
    create_invalid_number_error, create_unterminated_comment_error
)


logger = logging.getLogger(__name__)

# Integer literals decode to the signed 64-bit range of `long`.
LONG_MAX = 2 ** 63 - 1
LONG_MAX_DIGITS = len(str(LONG_MAX))

WHITESPACE = " \t\r\n"


class Lexer:
    """
    numlang lexical analyzer.

    Converts source code text into a list of tokens terminated by an
    EOF token, recording malformed input in a DiagnosticSink.
    """

    def __init__(self, source: str, filename: str = "<unknown>",
                 diagnostics: Optional[DiagnosticSink] = None):
        """
        Initialize the lexer with source code.

        Args:
            source: Full source text
            filename: Name of source file for error reporting
            diagnostics: Sink shared with later stages; a fresh one is
                created when omitted
        """
        self.source = source if source is not None else ""
        self.filename = filename
        self.diagnostics = diagnostics if diagnostics is not None else DiagnosticSink()
        self.pos = 0
        self.line = 1
        self.column = 1
        self.tokens: List[Token] = []

        self._compile_patterns()

    def _compile_patterns(self):
        """Compile regex patterns used by the lexer."""
        # A real needs at least one digit after the dot, so "1." is an
        # integer followed by a stray '.'.
        self.number_pattern = re.compile(r'[0-9]+(\.[0-9]+)?')
        self.identifier_pattern = re.compile(r'[A-Za-z_][A-Za-z0-9_]*')

    def tokenize(self) -> List[Token]:
        """
        Tokenize the entire source code.

        Returns:
            List of tokens ending with exactly one EOF token
        """
        self.pos = 0
        self.line = 1
        self.column = 1
        self.tokens = []

        while self.pos < len(self.source):
            try:
                token = self._next_token()
                if token:
                    self.tokens.append(token)
            except LexerError as e:
                # Helpers consume the offending text before raising, so
                # scanning simply resumes at the current position.
                self.diagnostics.add(e.diagnostic)

        self.tokens.append(Token(TokenType.EOF, "", None, self._location()))
        logger.debug("tokenized %s: %d tokens", self.filename, len(self.tokens))

        return self.tokens

    def _next_token(self) -> Optional[Token]:
        """Scan one lexical element; returns None for whitespace and comments."""
        start = self._location()
        current_char = self.source[self.pos]

        if current_char in WHITESPACE:
            self._advance()
            return None

        # Comments
        if current_char == '/' and self._peek() == '/':
            self._skip_line_comment()
            return None
        if current_char == '/' and self._peek() == '*':
            self._skip_block_comment(start)
            return None

        if current_char == '"':
            return self._tokenize_string(start)

        if current_char.isdigit() and current_char.isascii():
            return self._tokenize_number(start)

        if current_char.isascii() and (current_char.isalpha() or current_char == '_'):
            return self._tokenize_identifier_or_keyword(start)

        # Operators and punctuation (two-character forms first)
        for op_len in (2, 1):
            potential_op = self.source[self.pos:self.pos + op_len]
            if len(potential_op) == op_len and potential_op in OPERATORS:
                self._advance_by(op_len)
                return Token(OPERATORS[potential_op], potential_op, None, start)

        self._advance()
        if current_char in "&|":
            raise create_incomplete_operator_error(current_char, start)
        raise create_invalid_character_error(current_char, start)

    def _skip_line_comment(self):
        while self.pos < len(self.source) and self.source[self.pos] != '\n':
            self._advance()

    def _skip_block_comment(self, start: SourceLocation):
        self._advance_by(2)  # Skip '/*'
        while self.pos < len(self.source):
            if self.source[self.pos] == '*' and self._peek() == '/':
                self._advance_by(2)
                return
            self._advance()

        raise create_unterminated_comment_error(start)

    def _tokenize_string(self, start: SourceLocation) -> Token:
        """Tokenize a string literal; it must close before the end of the line."""
        self._advance()  # Skip opening quote
        value_parts = []

        while self.pos < len(self.source) and self.source[self.pos] != '"':
            char = self.source[self.pos]
            self._advance()
            if char == '\n':
                raise create_unterminated_string_error(start, reached_newline=True)
            value_parts.append(char)

        if self.pos >= len(self.source):
            raise create_unterminated_string_error(start, reached_newline=False)

        self._advance()  # Skip closing quote

        lexeme = self.source[start.offset:self.pos]
        return Token(TokenType.STRING, lexeme, ''.join(value_parts), start)

    def _tokenize_number(self, start: SourceLocation) -> Token:
        """Tokenize integer or real literals."""
        match = self.number_pattern.match(self.source, self.pos)
        lexeme = match.group(0)
        self._advance_by(len(lexeme))

        if match.group(1):
            value = float(lexeme)
            if math.isinf(value):
                raise create_invalid_number_error(lexeme, start, "Real literal is out of range")
            return Token(TokenType.REAL, lexeme, value, start)

        # int() refuses very long digit strings, and anything longer than
        # LONG_MAX is out of range anyway.
        digits = lexeme.lstrip('0') or '0'
        if len(digits) > LONG_MAX_DIGITS or int(digits) > LONG_MAX:
            raise create_invalid_number_error(
                lexeme, start, f"Integer literals must not exceed {LONG_MAX}"
            )
        return Token(TokenType.INTEGER, lexeme, int(digits), start)

    def _tokenize_identifier_or_keyword(self, start: SourceLocation) -> Token:
        """Tokenize an identifier or reserved word."""
        match = self.identifier_pattern.match(self.source, self.pos)
        lexeme = match.group(0)
        self._advance_by(len(lexeme))

        token_type = KEYWORDS.get(lexeme, TokenType.IDENTIFIER)

        if token_type == TokenType.IDENTIFIER:
            value = lexeme
        elif token_type in (TokenType.TRUE, TokenType.FALSE):
            value = token_type == TokenType.TRUE
        else:
            value = None

        return Token(token_type, lexeme, value, start)

    def _location(self) -> SourceLocation:
        return SourceLocation(self.filename, self.line, self.column, self.pos)

    def _advance(self):
        """Advance position by one character, updating line/column."""
        if self.pos < len(self.source):
            if self.source[self.pos] == '\n':
                self.line += 1
                self.column = 1
            else:
                self.column += 1
            self.pos += 1

    def _advance_by(self, count: int):
        """Advance position by multiple characters."""
        for _ in range(count):
            self._advance()

    def _peek(self, offset: int = 1) -> str:
        """Peek at character ahead without advancing."""
        peek_pos = self.pos + offset
        if peek_pos < len(self.source):
            return self.source[peek_pos]
        return '\0'

    def has_errors(self) -> bool:
        """Check if the sink holds any errors."""
        return self.diagnostics.has_errors()


def tokenize_string(source: str, filename: str = "<string>") -> List[Token]:
    """
    Convenience function to tokenize a source string.

    Args:
        source: Source code string
        filename: Filename for error reporting

    Returns:
        List of tokens

    Raises:
        LexerError: If lexing recorded any error
    """
    lexer = Lexer(source, filename)
    tokens = lexer.tokenize()

    if lexer.has_errors():
        first = lexer.diagnostics.errors[0]
        raise LexerError(first.message, first.location, code=first.code, help_text=first.help_text)

    return tokens


def tokenize_file(filepath: str) -> List[Token]:
    """
    Convenience function to tokenize a source file.

    Raises:
        LexerError: If lexing recorded any error
        IOError: If file cannot be read
    """
    with open(filepath, 'r', encoding='utf-8') as f:
        source = f.read()

    return tokenize_string(source, filepath)
