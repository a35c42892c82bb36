"""
One-call front end: source text -> tokens -> statement trace.

Each call builds its own Lexer, Parser, SymbolTable and DiagnosticSink,
so separate compilations never share state.

Author: xwest
"""

import logging
from typing import List, Optional, Tuple
from dataclasses import dataclass, field, replace

from .lexer.tokens import Token
from .lexer.lexer import Lexer
from .lexer.errors import Diagnostic, DiagnosticSink, Category
from .parser.parser import Parser
from .parser.statements import Statement
from .analyzer.symbol_table import SymbolTable, Scope


logger = logging.getLogger(__name__)


@dataclass
class FrontendOptions:
    """Knobs for a single compilation."""
    filename: str = "<string>"
    warnings_as_errors: bool = False
    report_redeclarations: bool = True
    stop_after_lexical_errors: bool = False


@dataclass
class FrontendResult:
    """Everything the front end produced for one source text."""
    tokens: List[Token]
    statements: List[Statement]
    diagnostics: DiagnosticSink
    symbol_table: SymbolTable
    options: FrontendOptions = field(default_factory=FrontendOptions)
    parsed: bool = True

    @property
    def scopes(self) -> Tuple[Scope, ...]:
        """Scopes still open after parsing; normally just the global one."""
        return self.symbol_table.scopes

    @property
    def errors(self) -> List[Diagnostic]:
        return self.diagnostics.errors

    @property
    def warnings(self) -> List[Diagnostic]:
        return self.diagnostics.warnings

    def has_errors(self) -> bool:
        """Check if the front end found any errors."""
        return self.diagnostics.has_errors()

    def has_warnings(self) -> bool:
        return len(self.diagnostics.warnings) > 0


def analyze_source(source: str, options: Optional[FrontendOptions] = None) -> FrontendResult:
    """
    Tokenize and parse a complete source text.

    Args:
        source: Full program text
        options: Compilation options; defaults when omitted

    Returns:
        FrontendResult with tokens, statement trace, diagnostics and the
        final symbol table
    """
    options = options if options is not None else FrontendOptions()
    diagnostics = DiagnosticSink()
    symbol_table = SymbolTable()

    logger.info("Lexing %s...", options.filename)
    lexer = Lexer(source, options.filename, diagnostics)
    tokens = lexer.tokenize()

    if options.stop_after_lexical_errors and diagnostics.by_category(Category.LEXICAL):
        logger.info("Lexical errors found, skipping parse")
        return FrontendResult(tokens, [], diagnostics, symbol_table, options, parsed=False)

    logger.info("Parsing %s...", options.filename)
    parser = Parser(
        tokens,
        diagnostics=diagnostics,
        symbol_table=symbol_table,
        warnings_as_errors=options.warnings_as_errors,
        report_redeclarations=options.report_redeclarations
    )
    statements = parser.parse()

    logger.info("%s: %d errors, %d warnings",
                options.filename, len(diagnostics.errors), len(diagnostics.warnings))

    return FrontendResult(tokens, statements, diagnostics, symbol_table, options)


def analyze_file(filepath: str, options: Optional[FrontendOptions] = None) -> FrontendResult:
    """
    Analyze a source file.

    Raises:
        IOError: If file cannot be read
    """
    with open(filepath, 'r', encoding='utf-8') as f:
        source = f.read()

    options = options if options is not None else FrontendOptions()
    options = replace(options, filename=filepath)
    return analyze_source(source, options)
