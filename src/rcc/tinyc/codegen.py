"""
AArch64 Code Generator for Tiny-C
=================================

This module lowers an analyzed Tiny-C AST to AArch64 assembly text.
It assumes the analyzer has already accepted the program: no type
checks happen here, and any node shape the language does not allow
is reported as an internal compiler error.

Code Generation Strategy
------------------------
Expressions are evaluated with a fixed two-register discipline rather
than a register allocator:

| Register | Usage                                        |
|----------|----------------------------------------------|
| w0       | primary: expression results, return values   |
| w1       | secondary: one-level spill of a right operand |
| x29, x30 | frame pointer / link register, saved at calls |

For 'left op right' the right operand is generated first into w0 and
copied into w1, then the left operand is generated into w0, so the
combining instruction always sees left in w0 and right in w1:

    <right>  -> w0
    mov     w1, w0
    <left>   -> w0
    add     w0, w0, w1

Limitation: w1 is a single spill slot. When the left operand itself
contains a binary operation (or a call, which may use w1) the spilled
right operand is overwritten, e.g. '(1 + 2) * (3 + 4)'. Lifting this
needs a real register allocator or an operand stack in the generated
code.

Calls save x29/x30 around a branch-and-link; the callee leaves its
result in w0.

Generated Assembly Format
-------------------------
    .globl _main
    _main:
        mov w0, 42
        ret
    <blank line>

Usage
-----
>>> from rcc.tinyc.parser import parse_source
>>> from rcc.tinyc.codegen import CodeGenerator
>>> asm = CodeGenerator().generate(parse_source('int main() { return 42; }'))
>>> print(asm)
"""

import logging

from rcc.tinyc.ast import (
    ProgramNode,
    FunctionNode,
    Statement,
    ReturnStatement,
    Expression,
    NumberLiteral,
    CallExpression,
    BinaryExpression,
    BinaryOperator,
)
from rcc.tinyc.errors import InternalCompilerError

logger = logging.getLogger(__name__)


# Operator -> AArch64 mnemonic
ARITHMETIC_MNEMONICS: dict[BinaryOperator, str] = {
    BinaryOperator.ADD: "add",
    BinaryOperator.SUBTRACT: "sub",
    BinaryOperator.MULTIPLY: "mul",
    BinaryOperator.DIVIDE: "sdiv",
}

# Largest immediate a single 'mov' can load
MOV_IMMEDIATE_MAX = 0xFFFF


class CodeGenerator:
    """
    Generates AArch64 assembly from a Tiny-C AST.

    Output is deterministic: the same program always produces the same
    text, byte for byte.

    Attributes:
        PRIMARY: Register holding expression results
        SECONDARY: Register holding the spilled right operand
    """

    PRIMARY = "w0"
    SECONDARY = "w1"
    INDENT = "    "

    def __init__(self):
        self._output: list[str] = []

    def generate(self, program: ProgramNode) -> str:
        """
        Generate assembly code from an analyzed AST.

        Args:
            program: The root AST node

        Returns:
            Assembly text, one block per function in source order
        """
        self._output = []

        for function in program.functions:
            self._generate_function(function)

        logger.debug(
            f"Generated {len(self._output)} line(s) for "
            f"{len(program.functions)} function(s)"
        )
        if not self._output:
            return ""
        return "\n".join(self._output) + "\n"

    # =========================================================================
    # Assembly Output Methods
    # =========================================================================

    def _emit(self, line: str = "") -> None:
        self._output.append(line)

    def _emit_label(self, label: str) -> None:
        self._emit(f"{label}:")

    def _emit_instruction(self, mnemonic: str, *operands: str) -> None:
        """Emit an indented instruction with comma-separated operands."""
        if operands:
            self._emit(f"{self.INDENT}{mnemonic} {', '.join(operands)}")
        else:
            self._emit(f"{self.INDENT}{mnemonic}")

    @staticmethod
    def function_label(name: str) -> str:
        """Assembly label for a function name."""
        return f"_{name}"

    # =========================================================================
    # Functions and Statements
    # =========================================================================

    def _generate_function(self, function: FunctionNode) -> None:
        label = self.function_label(function.name)
        self._emit(f".globl {label}")
        self._emit_label(label)

        for stmt in function.body:
            self._generate_statement(stmt)

        # Never fall through into the next function's label
        if not function.body or not isinstance(function.body[-1], ReturnStatement):
            self._emit_instruction("ret")

        self._emit()

    def _generate_statement(self, stmt: Statement) -> None:
        if isinstance(stmt, ReturnStatement):
            self._generate_return(stmt)
        else:
            raise InternalCompilerError(
                f"cannot generate code for {type(stmt).__name__}",
                stmt.location,
            )

    def _generate_return(self, stmt: ReturnStatement) -> None:
        if stmt.value is not None:
            self._generate_expression(stmt.value)
        self._emit_instruction("ret")

    # =========================================================================
    # Expression Code Generation
    # =========================================================================

    def _generate_expression(self, expr: Expression) -> None:
        """Generate code leaving the value of expr in the primary register."""
        if isinstance(expr, NumberLiteral):
            self._generate_number(expr)
        elif isinstance(expr, CallExpression):
            self._generate_call(expr)
        elif isinstance(expr, BinaryExpression):
            self._generate_binary(expr)
        else:
            raise InternalCompilerError(
                f"cannot generate code for {type(expr).__name__}",
                expr.location,
            )

    def _generate_number(self, expr: NumberLiteral) -> None:
        value = expr.value
        if value <= MOV_IMMEDIATE_MAX:
            self._emit_instruction("mov", self.PRIMARY, str(value))
            return

        # 32-bit constant: low half first, then patch in the high half
        self._emit_instruction("mov", self.PRIMARY, str(value & 0xFFFF))
        self._emit_instruction("movk", self.PRIMARY, str(value >> 16), "lsl 16")

    def _generate_call(self, expr: CallExpression) -> None:
        self._emit_instruction("stp", "x29", "x30", "[sp, #-16]!")
        self._emit_instruction("bl", self.function_label(expr.function_name))
        self._emit_instruction("ldp", "x29", "x30", "[sp]", "#16")

    def _generate_binary(self, expr: BinaryExpression) -> None:
        mnemonic = ARITHMETIC_MNEMONICS.get(expr.operator)
        if mnemonic is None:
            raise InternalCompilerError(
                f"unsupported operator {expr.operator!r}",
                expr.location,
            )

        self._generate_expression(expr.right)
        self._emit_instruction("mov", self.SECONDARY, self.PRIMARY)
        self._generate_expression(expr.left)
        self._emit_instruction(mnemonic, self.PRIMARY, self.PRIMARY, self.SECONDARY)


# =============================================================================
# Convenience Functions
# =============================================================================

def generate(program: ProgramNode) -> str:
    """Generate assembly for an analyzed program."""
    return CodeGenerator().generate(program)
