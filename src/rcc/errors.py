"""
rcc Error Hierarchy
===================

This module defines the root of the exception hierarchy for rcc.
All exceptions inherit from RccError, allowing callers to catch every
compiler-related error with a single except clause if desired.

Exception Hierarchy
-------------------
RccError (base)
└── TinyCError (compiler errors, see rcc.tinyc.errors)
    ├── CSyntaxError - lexer and parser errors
    ├── CSemanticError - analyzer errors
    └── CCodeGenError - internal code generation errors

Design Philosophy
-----------------
Each exception captures source location information (filename, line, column)
when applicable. This allows for detailed error messages that help users
quickly locate and fix issues in their source code.

Error messages follow this format:
    filename:line:column: error: description
    source_line_text
        ^ (pointer to error location)
    hint: suggestion for fixing (when available)
"""

from dataclasses import dataclass


# =============================================================================
# Base Exception Class
# =============================================================================

class RccError(Exception):
    """
    Base exception for all rcc errors.

    All exceptions in the package inherit from this class, allowing callers
    to catch all compiler errors with a single except clause:

        try:
            compile_c(source)
        except RccError as e:
            print(f"Error: {e}")
    """
    pass


# =============================================================================
# Source Location Tracking
# =============================================================================

@dataclass(frozen=True)
class SourceLocation:
    """
    Represents a location in source code for error reporting.

    Tokens, AST nodes and errors all carry one of these. The frozen
    design ensures locations cannot be accidentally modified.

    Attributes:
        filename: Name of the source file (or "<input>" for string input)
        line: Line number (1-indexed)
        column: Column number (1-indexed)
    """
    filename: str
    line: int
    column: int

    def __str__(self) -> str:
        """Format as 'filename:line:column' for error messages."""
        return f"{self.filename}:{self.line}:{self.column}"
