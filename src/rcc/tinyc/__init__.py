"""
Tiny-C Compiler
===============

This package implements a compiler for a deliberately tiny C-like
language, producing AArch64 assembly.

The language has functions returning int or void, zero-argument
calls, return statements, unsigned integer literals and the binary
operators + - * / with parentheses and the usual precedence.

Pipeline
--------
The stages run strictly one after another:

    Source → Lexer → Parser → AST → Analyzer → Code Generator → Assembly

Each stage relies on the previous one: the parser hands over a
well-formed tree, the analyzer proves it type-safe, and the code
generator emits code without re-checking anything.

Usage
-----
>>> from rcc.tinyc import compile_c
>>> print(compile_c('int main() { return 1 + 2; }'))

Not supported
-------------
- variables and assignment
- if/while/for or any other control flow
- function parameters and arguments
- arrays, pointers, structs
"""

from rcc.tinyc.compiler import (
    RccCompiler,
    CompilerOptions,
    CompilerResult,
    compile_c,
    compile_file,
)
from rcc.tinyc.errors import (
    TinyCError,
    CSyntaxError,
    InvalidCharacterError,
    ParseError,
    UnexpectedTokenError,
    UnexpectedEndOfInputError,
    MismatchedParenthesesError,
    InvalidExpressionError,
    UnimplementedError,
    CSemanticError,
    UndefinedSymbolError,
    DuplicateDeclarationError,
    CTypeError,
    TypeMismatchError,
    ReturnTypeMismatchError,
    CCodeGenError,
    InternalCompilerError,
)
from rcc.tinyc.lexer import CLexer, CTokenType, CTokenKind, CToken
from rcc.tinyc.parser import CParser, parse_source
from rcc.tinyc.analyzer import Analyzer, analyze
from rcc.tinyc.codegen import CodeGenerator, generate
from rcc.tinyc.symbols import Symbol, SymbolKind, SymbolTable
from rcc.tinyc.types import DataType
from rcc.tinyc.ast import (
    ASTNode,
    ASTPrinter,
    ProgramNode,
    FunctionNode,
    ReturnStatement,
    BinaryExpression,
    BinaryOperator,
    CallExpression,
    NumberLiteral,
)

__all__ = [
    # Main API
    "RccCompiler",
    "CompilerOptions",
    "CompilerResult",
    "compile_c",
    "compile_file",
    # Errors
    "TinyCError",
    "CSyntaxError",
    "InvalidCharacterError",
    "ParseError",
    "UnexpectedTokenError",
    "UnexpectedEndOfInputError",
    "MismatchedParenthesesError",
    "InvalidExpressionError",
    "UnimplementedError",
    "CSemanticError",
    "UndefinedSymbolError",
    "DuplicateDeclarationError",
    "CTypeError",
    "TypeMismatchError",
    "ReturnTypeMismatchError",
    "CCodeGenError",
    "InternalCompilerError",
    # Lexer
    "CLexer",
    "CTokenType",
    "CTokenKind",
    "CToken",
    # Parser
    "CParser",
    "parse_source",
    # Analyzer
    "Analyzer",
    "analyze",
    "Symbol",
    "SymbolKind",
    "SymbolTable",
    "DataType",
    # Code Generator
    "CodeGenerator",
    "generate",
    # AST Nodes
    "ASTNode",
    "ASTPrinter",
    "ProgramNode",
    "FunctionNode",
    "ReturnStatement",
    "BinaryExpression",
    "BinaryOperator",
    "CallExpression",
    "NumberLiteral",
]
