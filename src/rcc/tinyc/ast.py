"""
Tiny-C Abstract Syntax Tree (AST) Definitions
=============================================

This module defines the AST node types produced by the parser and
consumed by the analyzer and the code generator.

Node Hierarchy
--------------
ASTNode (base)
├── ProgramNode - root node, ordered functions
├── FunctionNode - function definition
├── Statements
│   └── ReturnStatement - return with optional value
└── Expressions
    ├── NumberLiteral - unsigned integer constant
    ├── CallExpression - zero-argument function call
    └── BinaryExpression - + - * / with two operands

Design Notes
------------
- All nodes are frozen dataclasses: the parser builds them once and
  nothing downstream mutates them
- Each node stores its source location for error reporting
- A BinaryExpression exclusively owns its two children
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional

from rcc.errors import SourceLocation
from rcc.tinyc.types import DataType


# =============================================================================
# AST Node Base Classes
# =============================================================================

@dataclass(frozen=True)
class ASTNode:
    """
    Base class for all AST nodes.

    Attributes:
        location: Source location where this node appears
    """
    location: SourceLocation = field(compare=False)


@dataclass(frozen=True)
class Expression(ASTNode):
    """Base class for all expression nodes."""
    pass


@dataclass(frozen=True)
class Statement(ASTNode):
    """Base class for all statement nodes."""
    pass


# =============================================================================
# Expression Nodes
# =============================================================================

class BinaryOperator(Enum):
    """
    Binary arithmetic operators.

    Each member carries its source symbol and its precedence; a higher
    number binds tighter.
    """

    ADD = ("+", 1)
    SUBTRACT = ("-", 1)
    MULTIPLY = ("*", 2)
    DIVIDE = ("/", 2)

    def __init__(self, symbol: str, precedence: int):
        self.symbol = symbol
        self.precedence = precedence

    def __str__(self) -> str:
        return self.symbol


@dataclass(frozen=True)
class NumberLiteral(Expression):
    """
    Integer literal expression.

    Attributes:
        value: The unsigned integer value
    """
    value: int = 0


@dataclass(frozen=True)
class CallExpression(Expression):
    """
    Zero-argument function call.

    Attributes:
        function_name: Name of the called function
    """
    function_name: str = ""


@dataclass(frozen=True)
class BinaryExpression(Expression):
    """
    Binary operation expression (left op right).

    Attributes:
        operator: The binary operator
        left: Left operand expression
        right: Right operand expression
    """
    operator: BinaryOperator = None
    left: Expression = None
    right: Expression = None


# =============================================================================
# Statement Nodes
# =============================================================================

@dataclass(frozen=True)
class ReturnStatement(Statement):
    """
    Return statement.

    Attributes:
        value: Optional return value expression (None for 'return;')
    """
    value: Optional[Expression] = None


# =============================================================================
# Declarations and Program Root
# =============================================================================

@dataclass(frozen=True)
class FunctionNode(ASTNode):
    """
    Function definition.

    Attributes:
        name: Function name
        return_type: Declared return type
        body: Statements in source order
    """
    name: str = ""
    return_type: DataType = DataType.VOID
    body: tuple[Statement, ...] = ()


@dataclass(frozen=True)
class ProgramNode(ASTNode):
    """
    Root node of the AST.

    Attributes:
        functions: Function definitions in source order, which is also
                   the order they are analyzed and emitted in
    """
    functions: tuple[FunctionNode, ...] = ()


# =============================================================================
# AST Visitor Pattern
# =============================================================================

class ASTVisitor:
    """
    Base class for AST visitors.

    Dispatches on the node's class name. Subclasses override the
    visit_* methods they care about; unhandled nodes fall through to
    generic_visit, which visits child nodes.

    Usage:
        class CallCollector(ASTVisitor):
            def visit_CallExpression(self, node):
                ...

        CallCollector().visit(program)
    """

    def visit(self, node: ASTNode) -> Any:
        method_name = f"visit_{node.__class__.__name__}"
        visitor = getattr(self, method_name, self.generic_visit)
        return visitor(node)

    def generic_visit(self, node: ASTNode) -> None:
        """Visit all child nodes, including those held in tuples."""
        for field_value in node.__dict__.values():
            if isinstance(field_value, ASTNode):
                self.visit(field_value)
            elif isinstance(field_value, tuple):
                for item in field_value:
                    if isinstance(item, ASTNode):
                        self.visit(item)


# =============================================================================
# AST Pretty Printer
# =============================================================================

class ASTPrinter(ASTVisitor):
    """
    Pretty printer for AST debugging.

    Usage:
        printer = ASTPrinter()
        print(printer.print(ast))

    Output:
        Program
          Function: int main()
            Return ((1 * 2) + 3)
    """

    def __init__(self):
        self.output: list[str] = []
        self.indent_level = 0

    def print(self, node: ASTNode) -> str:
        """Print the AST and return as string."""
        self.output = []
        self.indent_level = 0
        self.visit(node)
        return "\n".join(self.output)

    def _emit(self, text: str) -> None:
        indent = "  " * self.indent_level
        self.output.append(f"{indent}{text}")

    def visit_ProgramNode(self, node: ProgramNode):
        self._emit("Program")
        self.indent_level += 1
        for function in node.functions:
            self.visit(function)
        self.indent_level -= 1

    def visit_FunctionNode(self, node: FunctionNode):
        self._emit(f"Function: {node.return_type} {node.name}()")
        self.indent_level += 1
        for stmt in node.body:
            self.visit(stmt)
        self.indent_level -= 1

    def visit_ReturnStatement(self, node: ReturnStatement):
        if node.value is not None:
            self._emit(f"Return {expression_to_string(node.value)}")
        else:
            self._emit("Return")


def expression_to_string(expr: Optional[Expression]) -> str:
    """
    Render an expression fully parenthesized, e.g. '((1 * 2) + 3)'.

    Used by the AST printer and handy in tests for checking tree shape.
    """
    if expr is None:
        return ""
    if isinstance(expr, NumberLiteral):
        return str(expr.value)
    if isinstance(expr, CallExpression):
        return f"{expr.function_name}()"
    if isinstance(expr, BinaryExpression):
        left = expression_to_string(expr.left)
        right = expression_to_string(expr.right)
        return f"({left} {expr.operator} {right})"
    return f"<{type(expr).__name__}>"
