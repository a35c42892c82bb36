"""
Symbol table and scope management for numlang.

A stack of scopes mirrors block nesting: entering a block pushes an
empty scope, leaving it pops the scope and every declaration in it.
The global scope is created once and is never popped.

Author: xwest
"""

import logging
from typing import Any, Dict, List, Optional, Tuple
from dataclasses import dataclass, field
from enum import Enum

from ..lexer.tokens import SourceLocation
from .errors import RedeclarationError


logger = logging.getLogger(__name__)


class ValueType(Enum):
    """Types a variable can be declared with or an expression inferred as."""
    LONG = "long"
    DOUBLE = "double"
    STRING = "string"   # only ever inferred, never declared

    @property
    def is_numeric(self) -> bool:
        return self in (ValueType.LONG, ValueType.DOUBLE)

    @classmethod
    def from_keyword(cls, keyword: str) -> 'ValueType':
        """Map a type keyword ('long' / 'double') to its ValueType."""
        value_type = cls(keyword)
        if not value_type.is_numeric:
            raise ValueError(f"'{keyword}' is not a declarable type")
        return value_type


@dataclass
class Declaration:
    """A declared variable."""
    name: str
    value_type: ValueType
    line: int
    scope: str
    value: Optional[Any] = None     # stored for display, never checked
    location: Optional[SourceLocation] = None

    def __str__(self) -> str:
        return f"{self.value_type.value} {self.name}"


@dataclass
class Scope:
    """One block's name -> declaration bindings."""
    name: str
    depth: int
    symbols: Dict[str, Declaration] = field(default_factory=dict)

    def __contains__(self, name: str) -> bool:
        return name in self.symbols

    def __len__(self) -> int:
        return len(self.symbols)

    def __str__(self) -> str:
        return f"Scope({self.name}, {len(self.symbols)} symbols)"


class SymbolTable:
    """
    Stack of scopes for nested block scoping.

    Callers must pair every begin_scope() with exactly one end_scope().
    """

    def __init__(self):
        """Initialize the symbol table with a global scope."""
        self._scopes: List[Scope] = [Scope("global", 0)]
        self._blocks_opened = 0

    @property
    def global_scope(self) -> Scope:
        return self._scopes[0]

    @property
    def current_scope(self) -> Scope:
        return self._scopes[-1]

    @property
    def depth(self) -> int:
        """Number of open scopes above the global one."""
        return len(self._scopes) - 1

    @property
    def scopes(self) -> Tuple[Scope, ...]:
        """Open scopes, outermost first."""
        return tuple(self._scopes)

    def begin_scope(self) -> Scope:
        """Push a new empty scope."""
        self._blocks_opened += 1
        scope = Scope(f"block{self._blocks_opened}", len(self._scopes))
        self._scopes.append(scope)
        logger.info("ENTER scope %s", scope.name)
        return scope

    def end_scope(self) -> Scope:
        """Pop the innermost scope, discarding its declarations."""
        if len(self._scopes) == 1:
            raise RuntimeError("cannot discard the global scope")
        scope = self._scopes.pop()
        logger.info("LEAVE scope %s", scope.name)
        return scope

    def declare(self, name: str, value_type: ValueType, line: int,
                location: Optional[SourceLocation] = None,
                value: Optional[Any] = None) -> Declaration:
        """
        Declare a variable in the innermost scope.

        Raises:
            RedeclarationError: if `name` already exists in the innermost
                scope; the existing declaration is left untouched
        """
        if location is None:
            location = SourceLocation("<unknown>", line, 1, 0)

        scope = self.current_scope
        if name in scope:
            raise RedeclarationError(name, location, scope.symbols[name])

        declaration = Declaration(
            name=name,
            value_type=value_type,
            line=line,
            scope=scope.name,
            value=value,
            location=location
        )
        logger.info("Insert: %s (%s) in %s", name, value_type.value, scope.name)
        scope.symbols[name] = declaration
        return declaration

    def lookup(self, name: str) -> Optional[Declaration]:
        """Find the nearest declaration of `name`, innermost scope first."""
        for scope in reversed(self._scopes):
            if name in scope:
                return scope.symbols[name]
        return None

    def exists(self, name: str) -> bool:
        return self.lookup(name) is not None

    def exists_in_current_scope(self, name: str) -> bool:
        return name in self.current_scope

    def declarations(self) -> List[Declaration]:
        """All declarations of the open scopes, outermost first."""
        result = []
        for scope in self._scopes:
            result.extend(scope.symbols.values())
        return result

    def format_table(self) -> str:
        """Render the open scopes as a fixed-width table."""
        header = f"{'Name':<10} {'Type':<10} {'Value':<10} {'Scope':<10} Line"
        lines = ["=== SYMBOL TABLE ===", header, "-" * len(header)]
        for decl in self.declarations():
            value = decl.value if decl.value is not None else "-"
            lines.append(
                f"{decl.name:<10} {decl.value_type.value:<10} {str(value):<10} "
                f"{decl.scope:<10} {decl.line}"
            )
        return "\n".join(lines)

    def __str__(self) -> str:
        return f"SymbolTable(current: {self.current_scope})"
