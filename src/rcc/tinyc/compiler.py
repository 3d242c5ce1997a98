"""
Tiny-C Compiler Main Module
===========================

This module provides the main compiler interface. It runs the complete
pipeline strictly in sequence:

    Source → Lex → Parse → Analyze → Generate → Assembly

Usage
-----
Command line:
    $ rcc hello.c              # writes hello.s

Programmatic:
    >>> from rcc.tinyc import compile_c
    >>> asm = compile_c('int main() { return 42; }')

Error Handling
--------------
Each stage raises the first error it finds and compilation stops
there. Nothing is returned or written for a program that fails.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from rcc.tinyc.lexer import CLexer, CToken
from rcc.tinyc.parser import CParser
from rcc.tinyc.analyzer import Analyzer
from rcc.tinyc.codegen import CodeGenerator
from rcc.tinyc.ast import ProgramNode

logger = logging.getLogger(__name__)


@dataclass
class CompilerOptions:
    """
    Compiler configuration options.

    Attributes:
        output_suffix: Suffix of the assembly file written next to the
                       input when no explicit output path is given
        keep_tokens: Keep the token list on the CompilerResult
    """
    output_suffix: str = ".s"
    keep_tokens: bool = False


@dataclass
class CompilerResult:
    """
    Result of a successful compilation.

    Attributes:
        filename: Source filename
        success: True once assembly has been generated
        assembly: Generated assembly code
        ast: The analyzed syntax tree
        tokens: Lexed tokens (only when CompilerOptions.keep_tokens)
        token_count: Number of tokens lexed, EOF included
    """
    filename: str = ""
    success: bool = False
    assembly: str = ""
    ast: Optional[ProgramNode] = None
    tokens: list[CToken] = field(default_factory=list)
    token_count: int = 0


class RccCompiler:
    """
    Tiny-C to AArch64 compiler.

    Every compile call builds a fresh lexer, parser, analyzer (with its
    own symbol table) and code generator; nothing carries over between
    calls.

    Example:
        compiler = RccCompiler()
        result = compiler.compile_file("hello.c")
        print(result.assembly)
    """

    def __init__(self, options: Optional[CompilerOptions] = None):
        self.options = options or CompilerOptions()

    def compile_source(self, source: str, filename: str = "<input>") -> CompilerResult:
        """
        Compile source code to assembly.

        Args:
            source: Tiny-C source code
            filename: Source filename for error messages

        Returns:
            CompilerResult containing the assembly and intermediate stages

        Raises:
            TinyCError: The first error of whichever stage failed
        """
        result = CompilerResult(filename=filename)

        # Stage 1: Lexical analysis
        tokens = list(CLexer(source, filename).tokenize())
        result.token_count = len(tokens)
        if self.options.keep_tokens:
            result.tokens = tokens
        logger.debug(f"{filename}: {len(tokens)} tokens")

        # Stage 2: Parsing
        ast = CParser(tokens, filename, source.splitlines()).parse()
        result.ast = ast

        # Stage 3: Semantic analysis
        Analyzer().analyze(ast)

        # Stage 4: Code generation
        result.assembly = CodeGenerator().generate(ast)
        result.success = True

        logger.debug(f"{filename}: compiled {len(ast.functions)} function(s)")
        return result

    def compile_file(self, filepath: str | Path) -> CompilerResult:
        """
        Compile a source file to assembly.

        Raises:
            TinyCError: If compilation fails
            FileNotFoundError: If the source file does not exist
        """
        path = Path(filepath)
        if not path.exists():
            raise FileNotFoundError(f"Source file not found: {filepath}")

        source = path.read_text(encoding="utf-8")
        return self.compile_source(source, str(filepath))

    def output_path_for(self, filepath: str | Path) -> Path:
        """Default assembly path for a source file (hello.c -> hello.s)."""
        return Path(filepath).with_suffix(self.options.output_suffix)


# =============================================================================
# Convenience Functions
# =============================================================================

def compile_c(source: str, filename: str = "<input>") -> str:
    """
    Compile Tiny-C source code to AArch64 assembly.

    Args:
        source: Tiny-C source code
        filename: Source filename for error messages

    Returns:
        Generated assembly code

    Raises:
        TinyCError: If compilation fails

    Example:
        >>> print(compile_c('int main() { return 42; }'), end="")
        .globl _main
        _main:
            mov w0, 42
            ret
        <BLANKLINE>
    """
    return RccCompiler().compile_source(source, filename).assembly


def compile_file(
    filepath: str | Path,
    output_path: Optional[str | Path] = None,
) -> str:
    """
    Compile a Tiny-C source file to assembly.

    The output file is only written after every stage has succeeded.

    Args:
        filepath: Path to the source file
        output_path: Optional path to write the assembly to

    Returns:
        Generated assembly code

    Raises:
        TinyCError: If compilation fails
        FileNotFoundError: If source file not found
    """
    result = RccCompiler().compile_file(filepath)

    if output_path:
        Path(output_path).write_text(result.assembly, encoding="utf-8")

    return result.assembly
