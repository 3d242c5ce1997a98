"""
Scoped Symbol Table
===================

A stack of lexical scopes mapping names to symbols. Scope 0 is the
global (program) scope; it is created with the table and can never be
popped. Lookups search from the innermost scope outwards, so an inner
definition shadows an outer one of the same name.

Usage
-----
>>> table = SymbolTable()
>>> table.insert("main", Symbol(SymbolKind.FUNCTION, DataType.INT))
>>> with table.scope():
...     table.lookup("main").data_type
<DataType.INT: 'int'>
"""

from contextlib import contextmanager
from dataclasses import dataclass
from enum import Enum, auto
from typing import Iterator, Optional

from rcc.tinyc.types import DataType
from rcc.tinyc.errors import InternalCompilerError


class SymbolKind(Enum):
    """What a name refers to."""
    FUNCTION = auto()
    VARIABLE = auto()


@dataclass(frozen=True)
class Symbol:
    """
    Metadata bound to a name.

    Attributes:
        kind: Function or variable
        data_type: Return type for functions, value type for variables
    """
    kind: SymbolKind
    data_type: DataType


class SymbolTable:
    """
    Stack of scopes, each an insertion-ordered name -> Symbol mapping.

    Every enter_scope() must be paired with an exit_scope(); the scope()
    context manager does the pairing even when the body raises.
    """

    def __init__(self):
        self._scopes: list[dict[str, Symbol]] = [{}]

    @property
    def depth(self) -> int:
        """Number of scopes currently on the stack (1 = global only)."""
        return len(self._scopes)

    def enter_scope(self) -> None:
        """Push a new, empty innermost scope."""
        self._scopes.append({})

    def exit_scope(self) -> None:
        """
        Pop the innermost scope.

        Raises:
            InternalCompilerError: If only the global scope is left
        """
        if len(self._scopes) == 1:
            raise InternalCompilerError("attempted to exit the global scope")
        self._scopes.pop()

    @contextmanager
    def scope(self) -> Iterator["SymbolTable"]:
        """Enter a scope for the duration of a with-block."""
        self.enter_scope()
        try:
            yield self
        finally:
            self.exit_scope()

    def insert(self, name: str, symbol: Symbol) -> None:
        """
        Bind name in the innermost scope.

        An existing binding of the same name in that scope is replaced.
        """
        self._scopes[-1][name] = symbol

    def lookup(self, name: str) -> Optional[Symbol]:
        """Find name, innermost scope first; None if it is not bound."""
        for scope in reversed(self._scopes):
            if name in scope:
                return scope[name]
        return None

    def lookup_local(self, name: str) -> Optional[Symbol]:
        """Find name in the innermost scope only."""
        return self._scopes[-1].get(name)

    def names(self) -> list[str]:
        """Names bound in the innermost scope, in insertion order."""
        return list(self._scopes[-1])
