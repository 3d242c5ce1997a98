"""
Tiny-C Compiler Error Hierarchy
===============================

This module defines the exception hierarchy for the Tiny-C compiler.
All exceptions inherit from TinyCError, which itself inherits from
the base RccError for consistent error handling across the package.

Exception Hierarchy
-------------------
TinyCError (base for all Tiny-C errors)
├── CSyntaxError - lexer and parser syntax errors
│   ├── InvalidCharacterError - unexpected character
│   └── ParseError - parser errors
│       ├── UnexpectedTokenError - wrong token for the grammar rule
│       ├── UnexpectedEndOfInputError - token stream ran out
│       ├── MismatchedParenthesesError - unbalanced '(' / ')'
│       ├── InvalidExpressionError - operands and operators don't resolve
│       └── UnimplementedError - construct outside the language subset
├── CSemanticError - semantic analysis errors
│   ├── UndefinedSymbolError - call to an unknown function
│   ├── DuplicateDeclarationError - function defined twice
│   └── CTypeError - type errors
│       ├── TypeMismatchError - binary operands of different types
│       └── ReturnTypeMismatchError - return value vs declared type
└── CCodeGenError - code generation errors
    └── InternalCompilerError - broken invariant from an earlier stage

Only the first error is ever reported: every stage aborts compilation
as soon as it detects a problem.

Error Message Format
--------------------
All errors include source location information when known:

    hello.c:1:21: error: unexpected token ')'
        int main() { return 1); }
                            ^
    hint: expected ';'
"""

from typing import Optional

from rcc.errors import RccError, SourceLocation
from rcc.tinyc.types import DataType


# =============================================================================
# Base Tiny-C Exception
# =============================================================================

class TinyCError(RccError):
    """
    Base exception for all Tiny-C compiler errors.

    Provides source location tracking, source line context, and
    helpful hints in the formatted message.

    Attributes:
        message: The error description
        location: Where in the source the error occurred
        hint: A suggestion for fixing the error
        source_line: The actual source text at the error location
    """

    def __init__(
        self,
        message: str,
        location: Optional[SourceLocation] = None,
        hint: Optional[str] = None,
        source_line: Optional[str] = None,
    ):
        self.message = message
        self.location = location
        self.hint = hint
        self.source_line = source_line
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """
        Format the error message with location, source context, and hint.

            hello.c:5:12: error: undefined symbol 'fo'
                int main() { return fo(); }
                                    ^
            hint: ...
        """
        parts = []

        if self.location:
            parts.append(f"{self.location}: error: {self.message}")
        else:
            parts.append(f"error: {self.message}")

        # Source context with caret pointer
        if self.source_line is not None and self.location is not None:
            parts.append(f"    {self.source_line}")
            if self.location.column > 0:
                padding = " " * (4 + self.location.column - 1)
                parts.append(f"{padding}^")

        if self.hint:
            parts.append(f"hint: {self.hint}")

        return "\n".join(parts)


# =============================================================================
# Syntax Errors (Lexer and Parser)
# =============================================================================

class CSyntaxError(TinyCError):
    """
    Syntax error in Tiny-C source code.

    Raised when the lexer or parser encounters input that cannot be
    tokenized or parsed according to the grammar.
    """
    pass


class InvalidCharacterError(CSyntaxError):
    """
    Invalid character in source code.

    Raised when the lexer encounters a character that cannot start
    any token of the language.
    """

    def __init__(
        self,
        char: str,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.char = char
        super().__init__(
            f"invalid character '{char}' (0x{ord(char):02X})",
            location=location,
            source_line=source_line,
        )


class ParseError(CSyntaxError):
    """
    Base class for parser errors.

    The parser never recovers: the first ParseError aborts parsing
    and no partial AST is returned.
    """
    pass


class UnexpectedTokenError(ParseError):
    """
    Unexpected token during parsing.

    Raised when the parser encounters a token that doesn't match
    the grammar rule being parsed.
    """

    def __init__(
        self,
        found: str,
        expected: Optional[str] = None,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.found = found
        self.expected = expected

        hint = None
        if expected:
            hint = f"expected {expected}"

        super().__init__(
            f"unexpected token '{found}'",
            location=location,
            hint=hint,
            source_line=source_line,
        )


class UnexpectedEndOfInputError(ParseError):
    """
    Token stream exhausted while a construct was still open.

    Example:
        int main() { return 1;      // missing '}'
    """

    def __init__(
        self,
        expected: str,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.expected = expected
        super().__init__(
            f"unexpected end of input, expected {expected}",
            location=location,
            source_line=source_line,
        )


class MismatchedParenthesesError(ParseError):
    """
    Unbalanced parentheses in an expression.

    Raised for a ')' with no matching '(' and for a '(' that is
    still open when the expression ends.
    """

    def __init__(
        self,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        super().__init__(
            "mismatched parentheses",
            location=location,
            source_line=source_line,
        )


class InvalidExpressionError(ParseError):
    """
    Operands and operators don't reduce to a single value.

    Examples:
        return 1 2;     // too many operands
        return 1 +;     // not enough operands
    """

    def __init__(
        self,
        reason: str,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.reason = reason
        super().__init__(
            f"invalid expression: {reason}",
            location=location,
            source_line=source_line,
        )


class UnimplementedError(ParseError):
    """
    Construct outside the supported language subset.

    Only 'return' statements are recognised inside a function body.
    """

    def __init__(
        self,
        construct: str,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.construct = construct
        super().__init__(
            f"not implemented: {construct}",
            location=location,
            hint="only 'return' statements are supported",
            source_line=source_line,
        )


# =============================================================================
# Semantic Errors (Type Checking and Analysis)
# =============================================================================

class CSemanticError(TinyCError):
    """
    Semantic error in Tiny-C source code.

    Raised during analysis when the code is syntactically correct but
    violates the language rules.
    """
    pass


class UndefinedSymbolError(CSemanticError):
    """Call to a function that has not been defined (yet)."""

    def __init__(
        self,
        name: str,
        location: Optional[SourceLocation] = None,
    ):
        self.name = name
        super().__init__(
            f"undefined symbol '{name}'",
            location=location,
            hint="functions must be defined before they are called",
        )


class DuplicateDeclarationError(CSemanticError):
    """
    Function defined more than once in the same scope.

    Both definitions would otherwise emit the same assembly label.
    """

    def __init__(
        self,
        name: str,
        location: Optional[SourceLocation] = None,
    ):
        self.name = name
        super().__init__(
            f"redefinition of '{name}'",
            location=location,
        )


class CTypeError(CSemanticError):
    """
    Type-related error.

    Attributes:
        expected_type: The type that was required
        actual_type: The type that was found
    """

    def __init__(
        self,
        message: str,
        expected_type: Optional[DataType] = None,
        actual_type: Optional[DataType] = None,
        location: Optional[SourceLocation] = None,
    ):
        self.expected_type = expected_type
        self.actual_type = actual_type

        hint = None
        if expected_type and actual_type:
            hint = f"expected '{expected_type}', got '{actual_type}'"

        super().__init__(message, location=location, hint=hint)


class TypeMismatchError(CTypeError):
    """Operands of a binary operator have different types."""

    def __init__(
        self,
        left: DataType,
        right: DataType,
        location: Optional[SourceLocation] = None,
    ):
        self.left = left
        self.right = right
        super().__init__(
            f"type mismatch: '{left}' and '{right}'",
            location=location,
        )


class ReturnTypeMismatchError(CTypeError):
    """Returned value's type differs from the function's declared type."""

    def __init__(
        self,
        expected: DataType,
        found: DataType,
        location: Optional[SourceLocation] = None,
    ):
        self.expected = expected
        self.found = found
        super().__init__(
            f"return type mismatch: function returns '{expected}'",
            expected_type=expected,
            actual_type=found,
            location=location,
        )


# =============================================================================
# Code Generation Errors
# =============================================================================

class CCodeGenError(TinyCError):
    """
    Error during code generation.

    The code generator relies on analysis having rejected every illegal
    program, so these never describe a user mistake.
    """
    pass


class InternalCompilerError(CCodeGenError):
    """
    An invariant established by an earlier stage does not hold.

    Raised for unsupported node shapes reaching the code generator and
    for symbol table misuse such as popping the global scope.
    """

    def __init__(self, message: str, location: Optional[SourceLocation] = None):
        super().__init__(
            f"internal compiler error: {message}",
            location=location,
        )
