"""
Tiny-C Semantic Analyzer
========================

Walks the AST after parsing and proves it type-safe, so the code
generator can emit code without any further checks.

Rules
-----
- Functions are analyzed in declaration order. Each function's symbol
  is bound in the global scope *before* its body is walked, so a
  function can call itself but not a function defined further down.
- Each function body gets its own scope, exited on every path.
- Expression types:

  | Expression        | Type                                   |
  |-------------------|----------------------------------------|
  | integer literal   | int                                    |
  | absent            | void                                   |
  | call f()          | declared return type of f              |
  | left op right     | common type of both sides              |

- Every return value must have the function's declared return type.
- A function may be defined only once.

The first error found aborts analysis.
"""

import logging
from typing import Optional

from rcc.tinyc.ast import (
    ProgramNode,
    FunctionNode,
    Statement,
    ReturnStatement,
    Expression,
    NumberLiteral,
    CallExpression,
    BinaryExpression,
)
from rcc.tinyc.types import DataType
from rcc.tinyc.symbols import Symbol, SymbolKind, SymbolTable
from rcc.tinyc.errors import (
    UndefinedSymbolError,
    DuplicateDeclarationError,
    TypeMismatchError,
    ReturnTypeMismatchError,
    InternalCompilerError,
)

logger = logging.getLogger(__name__)


class Analyzer:
    """
    Scoped semantic analyzer.

    A fresh symbol table is built for every analyze() call, so one
    Analyzer can be reused without state leaking between programs.

    Example:
        Analyzer().analyze(parse_source("int main() { return 0; }"))
    """

    def __init__(self):
        self.symbols = SymbolTable()

    def analyze(self, program: ProgramNode) -> None:
        """
        Check a whole program.

        Raises:
            CSemanticError: The first semantic error found
        """
        self.symbols = SymbolTable()
        for function in program.functions:
            self._analyze_function(function)
        logger.debug(f"Analyzed {len(program.functions)} function(s)")

    def _analyze_function(self, function: FunctionNode) -> None:
        if self.symbols.lookup_local(function.name) is not None:
            raise DuplicateDeclarationError(function.name, function.location)

        self.symbols.insert(
            function.name,
            Symbol(SymbolKind.FUNCTION, function.return_type),
        )

        with self.symbols.scope():
            for stmt in function.body:
                self._analyze_statement(stmt, function.return_type)

    def _analyze_statement(self, stmt: Statement, return_type: DataType) -> None:
        if isinstance(stmt, ReturnStatement):
            found = self.expression_type(stmt.value)
            if found != return_type:
                raise ReturnTypeMismatchError(return_type, found, stmt.location)
        else:
            raise InternalCompilerError(
                f"unsupported statement {type(stmt).__name__}",
                stmt.location,
            )

    def expression_type(self, expr: Optional[Expression]) -> DataType:
        """
        Compute the static type of an expression.

        Raises:
            UndefinedSymbolError: For a call to an unknown name
            TypeMismatchError: For operands of different types
        """
        if expr is None:
            return DataType.VOID

        if isinstance(expr, NumberLiteral):
            return DataType.INT

        if isinstance(expr, CallExpression):
            symbol = self.symbols.lookup(expr.function_name)
            if symbol is None:
                raise UndefinedSymbolError(expr.function_name, expr.location)
            return symbol.data_type

        if isinstance(expr, BinaryExpression):
            left = self.expression_type(expr.left)
            right = self.expression_type(expr.right)
            if left != right:
                raise TypeMismatchError(left, right, expr.location)
            return left

        raise InternalCompilerError(
            f"unsupported expression {type(expr).__name__}",
            expr.location,
        )


# =============================================================================
# Convenience Functions
# =============================================================================

def analyze(program: ProgramNode) -> None:
    """Run a fresh Analyzer over program, raising the first semantic error."""
    Analyzer().analyze(program)
