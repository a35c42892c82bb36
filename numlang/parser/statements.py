"""
Statement trace records produced by the numlang parser.

The parser does not build an evaluable tree. Each recognized statement
becomes one Statement record: its kind, the reconstructed text of its
expression or body, where it starts, and the few structured facts the
inline checks worked out.

Author: xwest
"""

from typing import Iterator, List, Optional
from dataclasses import dataclass, field
from enum import Enum

from ..lexer.tokens import SourceLocation
from ..analyzer.symbol_table import ValueType


class StatementKind(Enum):
    """Enumeration of statement kinds."""
    VARIABLE_DECL = "varDecl"
    READ = "read"
    WRITE = "write"
    IF = "if"
    WHILE = "while"
    BLOCK = "block"
    EXPRESSION = "expr"


@dataclass
class Statement:
    """One recognized statement."""
    kind: StatementKind
    content: str
    location: SourceLocation
    expression_type: Optional[ValueType] = None
    target: Optional[str] = None
    children: List['Statement'] = field(default_factory=list)

    @property
    def line(self) -> int:
        return self.location.line

    @property
    def column(self) -> int:
        return self.location.column

    def walk(self) -> Iterator['Statement']:
        """Yield this statement and every nested one, depth first."""
        yield self
        for child in self.children:
            yield from child.walk()

    def __str__(self) -> str:
        return f"{self.kind.value} -> {self.content} (line {self.line})"
