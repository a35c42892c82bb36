"""
numlang Recursive Descent Parser

Consumes the token list with one token of lookahead, drives the symbol
table as blocks open and close, and runs the scope and numeric type
checks inline while it goes. The output is a flat trace of recognized
statements rather than an expression tree.

Author: xwest
"""

import logging
from typing import List, Optional, Sequence

from ..lexer.tokens import (
    Token, TokenType, SourceLocation, ASSIGNMENT_OPERATORS
)
from ..lexer.errors import DiagnosticSink, Severity
from ..analyzer.symbol_table import SymbolTable, ValueType
from ..analyzer.type_inference import infer_expression_type, is_narrowing
from ..analyzer.errors import (
    SemanticError, RedeclarationError, create_undeclared_variable_error,
    create_narrowing_assignment_error, create_non_numeric_condition_error,
    create_redeclaration_warning
)
from .statements import Statement, StatementKind
from .errors import (
    ParseError, SyntaxErrorRecovery, create_unexpected_token_error,
    create_unclosed_block_error, create_nesting_too_deep_error, collect_lexemes
)


logger = logging.getLogger(__name__)

# Tokens that end a captured expression when not inside parentheses.
EXPRESSION_TERMINATORS = frozenset({
    TokenType.RIGHT_PAREN, TokenType.SEMICOLON, TokenType.RIGHT_BRACE,
})

NUMERIC_LITERALS = frozenset({TokenType.INTEGER, TokenType.REAL})

# Statements nest through mutually recursive methods; deeper nesting is
# reported instead of exhausting the interpreter stack.
MAX_NESTING_DEPTH = 128


class Parser:
    """
    numlang recursive descent parser.

    Grammar:
        program      := declaration* EOF
        declaration  := ("long"|"double") IDENTIFIER ("=" expr)? ";" | statement
        statement    := "read" "(" IDENTIFIER ")" ";"
                      | "write" "(" expr ")" ";"
                      | "if" "(" expr ")" "then" statement ("else" statement)?
                      | "while" "(" expr ")" block
                      | block
                      | expr ";"
        block        := "{" declaration* "}"

    The position is an index into an immutable token tuple. A missing
    required token abandons the statement being parsed; parsing resumes
    at the next statement boundary.
    """

    def __init__(self, tokens: Sequence[Token],
                 diagnostics: Optional[DiagnosticSink] = None,
                 symbol_table: Optional[SymbolTable] = None,
                 warnings_as_errors: bool = False,
                 report_redeclarations: bool = True):
        """
        Initialize parser with a list of tokens.

        Args:
            tokens: Tokens from the lexer, ending with EOF
            diagnostics: Sink shared with the lexer
            symbol_table: Scope stack to drive; a fresh one when omitted
            warnings_as_errors: Record redeclarations as errors
            report_redeclarations: Record redeclarations at all
        """
        tokens = list(tokens)
        if not tokens or tokens[-1].type != TokenType.EOF:
            last = tokens[-1].location if tokens else SourceLocation("<eof>", 1, 1, 0)
            tokens.append(Token(TokenType.EOF, "", None, last))

        self.tokens = tuple(tokens)
        self.current = 0
        self.diagnostics = diagnostics if diagnostics is not None else DiagnosticSink()
        self.symbol_table = symbol_table if symbol_table is not None else SymbolTable()
        self.warnings_as_errors = warnings_as_errors
        self.report_redeclarations = report_redeclarations
        self.statements: List[Statement] = []
        self.nesting = 0

    def parse(self) -> List[Statement]:
        """
        Parse the token stream into a statement trace.

        Returns:
            Top-level statements in source order. Problems end up in
            self.diagnostics; nothing is raised.
        """
        self.current = 0
        self.nesting = 0
        self.statements = []

        while not self._is_at_end():
            statement = self._declaration()
            if statement:
                self.statements.append(statement)

        logger.debug("parsed %d top-level statements", len(self.statements))
        return self.statements

    # Grammar rules

    def _declaration(self) -> Optional[Statement]:
        """Parse one declaration or statement, recovering from syntax errors."""
        start = self.current
        try:
            if self._check(TokenType.LONG) or self._check(TokenType.DOUBLE):
                return self._parse_variable_declaration()
            return self._parse_statement()

        except ParseError as e:
            self.diagnostics.add(e.diagnostic)
            self._synchronize(start, scan=e.synchronize)
            return None

    def _parse_variable_declaration(self) -> Statement:
        type_token = self._advance()
        value_type = ValueType.from_keyword(type_token.lexeme)

        name_token = self._consume(TokenType.IDENTIFIER, "after the type")
        content = f"{type_token.lexeme} {name_token.lexeme}"

        try:
            declaration = self.symbol_table.declare(
                name_token.lexeme, value_type, type_token.line, location=name_token.location
            )
        except RedeclarationError as e:
            self._report_redeclaration(e)
            declaration = None

        expression_type = None
        if self._match(TokenType.ASSIGN):
            initializer = self._capture_expression()
            content += f" = {collect_lexemes(initializer)}"
            expression_type = infer_expression_type(initializer, self.symbol_table)
            if (declaration is not None and len(initializer) == 1
                    and initializer[0].type in NUMERIC_LITERALS):
                declaration.value = initializer[0].value

        self._consume(TokenType.SEMICOLON, "after the declaration")

        return Statement(
            StatementKind.VARIABLE_DECL, content, type_token.location,
            expression_type=expression_type, target=name_token.lexeme
        )

    def _parse_statement(self) -> Statement:
        if self.nesting >= MAX_NESTING_DEPTH:
            error = create_nesting_too_deep_error(self._peek(), MAX_NESTING_DEPTH)
            self._skip_statement()
            raise error

        self.nesting += 1
        try:
            if self._check(TokenType.READ):
                return self._parse_read_statement()
            elif self._check(TokenType.WRITE):
                return self._parse_write_statement()
            elif self._check(TokenType.IF):
                return self._parse_if_statement()
            elif self._check(TokenType.WHILE):
                return self._parse_while_statement()
            elif self._check(TokenType.LEFT_BRACE):
                return self._parse_block_statement()
            else:
                return self._parse_expression_statement()
        finally:
            self.nesting -= 1

    def _parse_read_statement(self) -> Statement:
        keyword = self._advance()
        self._consume(TokenType.LEFT_PAREN, "after 'read'")
        name_token = self._consume(TokenType.IDENTIFIER, "inside read()")
        self._consume(TokenType.RIGHT_PAREN, "to close read()")
        self._consume(TokenType.SEMICOLON, "after read()")

        declaration = self.symbol_table.lookup(name_token.lexeme)
        if declaration is None:
            self._report(create_undeclared_variable_error(name_token.lexeme, name_token.location))

        return Statement(
            StatementKind.READ, name_token.lexeme, keyword.location,
            expression_type=declaration.value_type if declaration else None,
            target=name_token.lexeme
        )

    def _parse_write_statement(self) -> Statement:
        keyword = self._advance()
        self._consume(TokenType.LEFT_PAREN, "after 'write'")
        expression = self._capture_expression()
        self._consume(TokenType.RIGHT_PAREN, "to close write()")
        self._consume(TokenType.SEMICOLON, "after write()")

        # Only the leading name is checked; literals never are.
        if expression and expression[0].type == TokenType.IDENTIFIER:
            first = expression[0]
            if not self.symbol_table.exists(first.lexeme):
                self._report(create_undeclared_variable_error(first.lexeme, first.location))

        return Statement(
            StatementKind.WRITE, collect_lexemes(expression), keyword.location,
            expression_type=infer_expression_type(expression, self.symbol_table)
        )

    def _parse_if_statement(self) -> Statement:
        keyword = self._advance()
        self._consume(TokenType.LEFT_PAREN, "after 'if'")
        condition = self._capture_expression()
        self._consume(TokenType.RIGHT_PAREN, "to close the if condition")
        self._consume(TokenType.THEN, "after the if condition")

        condition_type = infer_expression_type(condition, self.symbol_table)
        if not condition_type.is_numeric:
            anchor = condition[0].location if condition else keyword.location
            self._report(create_non_numeric_condition_error(condition_type, anchor))

        then_branch = self._parse_statement()
        children = [then_branch]

        content = f"if ({collect_lexemes(condition)})"
        if self._match(TokenType.ELSE):
            children.append(self._parse_statement())
            content += " [else]"

        return Statement(
            StatementKind.IF, content, keyword.location,
            expression_type=condition_type, children=children
        )

    def _parse_while_statement(self) -> Statement:
        keyword = self._advance()
        self._consume(TokenType.LEFT_PAREN, "after 'while'")
        condition = self._capture_expression()
        self._consume(TokenType.RIGHT_PAREN, "to close the while condition")
        self._check_or_raise(TokenType.LEFT_BRACE, "to start the while body")

        body = self._parse_block_statement()

        return Statement(
            StatementKind.WHILE, collect_lexemes(condition), keyword.location,
            expression_type=infer_expression_type(condition, self.symbol_table),
            children=[body]
        )

    def _parse_block_statement(self) -> Statement:
        """Parse a block; its scope is closed even when '}' is missing."""
        open_brace = self._consume(TokenType.LEFT_BRACE, "to open a block")
        self.symbol_table.begin_scope()
        children = []

        try:
            while not self._check(TokenType.RIGHT_BRACE) and not self._is_at_end():
                statement = self._declaration()
                if statement:
                    children.append(statement)

            if not self._match(TokenType.RIGHT_BRACE):
                error = create_unclosed_block_error(open_brace.location, self._peek())
                self.diagnostics.add(error.diagnostic)
        finally:
            self.symbol_table.end_scope()

        content = "".join(f"\n  {child}" for child in children)
        return Statement(StatementKind.BLOCK, content, open_brace.location, children=children)

    def _parse_expression_statement(self) -> Statement:
        start = self._peek()
        expression = self._capture_expression()
        self._consume(TokenType.SEMICOLON, "after the expression")

        expression_type = None
        target = None
        if (len(expression) >= 2 and expression[0].type == TokenType.IDENTIFIER
                and expression[1].type in ASSIGNMENT_OPERATORS):
            target_token = expression[0]
            target = target_token.lexeme
            expression_type = infer_expression_type(expression[2:], self.symbol_table)

            declaration = self.symbol_table.lookup(target)
            if declaration is None:
                self._report(create_undeclared_variable_error(target, target_token.location))
            elif is_narrowing(declaration.value_type, expression_type):
                self._report(create_narrowing_assignment_error(
                    target, declaration.value_type, expression_type, target_token.location
                ))
        elif expression:
            expression_type = infer_expression_type(expression, self.symbol_table)

        return Statement(
            StatementKind.EXPRESSION, collect_lexemes(expression), start.location,
            expression_type=expression_type, target=target
        )

    def _capture_expression(self) -> List[Token]:
        """
        Collect tokens up to the first ')' , ';' or '}' outside of
        parentheses opened within the expression.
        """
        captured = []
        depth = 0

        while not self._is_at_end():
            token = self._peek()
            if depth == 0 and token.type in EXPRESSION_TERMINATORS:
                break
            if token.type == TokenType.LEFT_PAREN:
                depth += 1
            elif token.type == TokenType.RIGHT_PAREN:
                depth -= 1
            captured.append(self._advance())

        return captured

    # Diagnostics

    def _report(self, error: SemanticError):
        self.diagnostics.add(error.diagnostic)

    def _report_redeclaration(self, error: RedeclarationError):
        logger.warning("line %d: variable '%s' was already declared in this scope",
                       error.diagnostic.line, error.name)
        if not self.report_redeclarations:
            return
        severity = Severity.ERROR if self.warnings_as_errors else Severity.WARNING
        self.diagnostics.add(create_redeclaration_warning(error, severity))

    def _synchronize(self, start: int, scan: bool = True):
        """Skip to the next statement boundary, always making progress."""
        if scan:
            self.current = SyntaxErrorRecovery.synchronize_to_statement_boundary(
                self.tokens, self.current
            )
        if self.current == start and not self._is_at_end():
            self._advance()

    def _skip_statement(self):
        """Discard one statement unparsed, keeping braces balanced."""
        depth = 0
        while not self._is_at_end():
            token = self._peek()
            if depth == 0 and token.type == TokenType.RIGHT_BRACE:
                return
            self._advance()
            if token.type == TokenType.LEFT_BRACE:
                depth += 1
            elif token.type == TokenType.RIGHT_BRACE:
                depth -= 1
                if depth == 0:
                    return
            elif depth == 0 and token.type == TokenType.SEMICOLON:
                return

    # Utility methods

    def _match(self, token_type: TokenType) -> bool:
        """Check if current token matches type and consume if so."""
        if self._check(token_type):
            self._advance()
            return True
        return False

    def _check(self, token_type: TokenType) -> bool:
        """Check if current token matches type without consuming."""
        if self._is_at_end():
            return False
        return self._peek().type == token_type

    def _advance(self) -> Token:
        """Consume and return current token."""
        if not self._is_at_end():
            self.current += 1
        return self._previous()

    def _is_at_end(self) -> bool:
        return self._peek().type == TokenType.EOF

    def _peek(self) -> Token:
        return self.tokens[self.current]

    def _previous(self) -> Token:
        if self.current > 0:
            return self.tokens[self.current - 1]
        return self.tokens[0]

    def _consume(self, token_type: TokenType, context: str) -> Token:
        """Consume token of expected type or raise error."""
        self._check_or_raise(token_type, context)
        return self._advance()

    def _check_or_raise(self, token_type: TokenType, context: str):
        if not self._check(token_type):
            raise create_unexpected_token_error(token_type, self._peek(), context)


def parse_string(source: str, filename: str = "<string>") -> List[Statement]:
    """
    Convenience function to parse a source string.

    Raises:
        LexerError: If lexing fails
        ParseError: If the first recorded error is syntactic
        SemanticError: If the first recorded error is semantic
    """
    from ..lexer import tokenize_string
    from ..lexer.errors import Category

    tokens = tokenize_string(source, filename)
    parser = Parser(tokens)
    statements = parser.parse()

    if parser.diagnostics.has_errors():
        first = parser.diagnostics.errors[0]
        if first.category == Category.SEMANTIC:
            raise SemanticError(first.message, first.location, code=first.code,
                                help_text=first.help_text)
        raise ParseError(first.message, first.location, code=first.code,
                         help_text=first.help_text)

    return statements


def parse_file(filepath: str) -> List[Statement]:
    """
    Convenience function to parse a source file.

    Raises:
        LexerError, ParseError, SemanticError: as parse_string
        IOError: If file cannot be read
    """
    with open(filepath, 'r', encoding='utf-8') as f:
        source = f.read()

    return parse_string(source, filepath)
