"""
rcc - A Tiny C-like Language Compiler
=====================================

rcc compiles a tiny subset of C to AArch64 assembly.

Main Components
---------------
- **tinyc**: the compiler itself (lexer, parser, analyzer, code generator)
- **cli**: the `rcc` command-line tool

Quick Start
-----------
Compile a string:
    >>> from rcc import compile_c
    >>> print(compile_c("int main() { return 42; }"))

Or use the command-line tool:
    $ rcc hello.c              # writes hello.s
    $ rcc -p hello.c           # also prints tokens, AST and assembly
"""

__version__ = "0.1.0"

from rcc.errors import RccError, SourceLocation
from rcc.tinyc import (
    RccCompiler,
    CompilerOptions,
    compile_c,
    compile_file,
    TinyCError,
)

__all__ = [
    "__version__",
    "RccError",
    "SourceLocation",
    "RccCompiler",
    "CompilerOptions",
    "compile_c",
    "compile_file",
    "TinyCError",
]
