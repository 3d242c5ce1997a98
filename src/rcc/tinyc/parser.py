"""
Tiny-C Parser
=============

This module implements the parser for the Tiny-C language. It takes a
stream of tokens from the lexer and builds an Abstract Syntax Tree.

Declarations and statements are parsed by recursive descent; expressions
are parsed with the operator-precedence (shunting-yard) algorithm.

Grammar (Simplified EBNF)
-------------------------
program         ::= function_def*
function_def    ::= type_spec IDENTIFIER '(' ')' '{' statement* '}'
type_spec       ::= 'int' | 'void'
statement       ::= return_stmt
return_stmt     ::= 'return' expr? ';'

expr            ::= operand (binary_op operand)*
operand         ::= NUMBER | IDENTIFIER '(' ')' | '(' expr ')'
binary_op       ::= '+' | '-' | '*' | '/'

Operator Precedence
-------------------
| Operators | Precedence | Associativity |
|-----------|------------|---------------|
| * /       | 2          | left          |
| + -       | 1          | left          |

Expression Parsing
------------------
Two explicit stacks are kept while scanning tokens left to right:

- the operand stack holds finished sub-expressions
- the operator stack holds pending binary operators and '(' markers

Before an operator is pushed, every operator on top of the stack with
greater or equal precedence is applied first; that is what makes
'1 - 2 - 3' parse as '(1 - 2) - 3'. A ')' applies operators down to the
matching marker. Applying an operator pops the right operand, then the
left one, and pushes the combined BinaryExpression. Scanning stops at
the first token that cannot belong to an expression (normally ';').

Example Usage
-------------
>>> from rcc.tinyc.parser import parse_source
>>> ast = parse_source('int main() { return 1 * 2 + 3; }')
>>> ast.functions[0].name
'main'
"""

import logging
from dataclasses import dataclass
from typing import Optional, Sequence

from rcc.errors import SourceLocation
from rcc.tinyc.lexer import CLexer, CToken, CTokenType
from rcc.tinyc.types import type_from_keyword
from rcc.tinyc.ast import (
    ProgramNode,
    FunctionNode,
    Statement,
    ReturnStatement,
    Expression,
    BinaryExpression,
    CallExpression,
    NumberLiteral,
    BinaryOperator,
)
from rcc.tinyc.errors import (
    UnexpectedTokenError,
    UnexpectedEndOfInputError,
    MismatchedParenthesesError,
    InvalidExpressionError,
    UnimplementedError,
)

logger = logging.getLogger(__name__)


# Operator tokens -> binary operators
BINARY_OPERATORS: dict[CTokenType, BinaryOperator] = {
    CTokenType.PLUS: BinaryOperator.ADD,
    CTokenType.MINUS: BinaryOperator.SUBTRACT,
    CTokenType.STAR: BinaryOperator.MULTIPLY,
    CTokenType.SLASH: BinaryOperator.DIVIDE,
}


@dataclass(frozen=True)
class _PendingOperator:
    """
    Entry on the operator stack.

    A None operator marks an open parenthesis.
    """
    token: CToken
    operator: Optional[BinaryOperator] = None

    @property
    def is_marker(self) -> bool:
        return self.operator is None


class CParser:
    """
    Parser for Tiny-C.

    Parses a sequence of tokens into an AST. The token sequence is read
    left to right with one token of lookahead and is never modified.
    Parsing stops at the first error; there is no recovery and no
    partial result.

    Attributes:
        tokens: Tokens to parse (an EOF token is assumed at the end)
        filename: Source filename for error reporting
    """

    def __init__(
        self,
        tokens: Sequence[CToken],
        filename: str = "<input>",
        source_lines: Optional[list[str]] = None,
    ):
        """
        Initialize the parser.

        Args:
            tokens: Tokens from the lexer
            filename: Source filename for error messages
            source_lines: Source text split into lines, for error context
        """
        self.tokens = list(tokens)
        self.filename = filename
        self.source_lines = source_lines or []

        # A stream that simply runs out behaves as if it ended in EOF
        if not self.tokens or self.tokens[-1].type != CTokenType.EOF:
            self.tokens.append(self._make_eof())

        self._pos = 0

    def parse(self) -> ProgramNode:
        """
        Parse the token stream into an AST.

        Returns:
            ProgramNode with every function in source order

        Raises:
            ParseError: At the first syntax error
        """
        functions = []
        while not self._at_end():
            functions.append(self._parse_function())

        logger.debug(f"Parsed {len(functions)} function(s) from {self.filename}")
        return ProgramNode(
            location=SourceLocation(self.filename, 1, 1),
            functions=tuple(functions),
        )

    # =========================================================================
    # Token Access Methods
    # =========================================================================

    def _make_eof(self) -> CToken:
        """Synthesize an EOF token just past the last real token."""
        if not self.tokens:
            return CToken(CTokenType.EOF, None, 1, 1, self.filename)
        last = self.tokens[-1]
        return CToken(
            CTokenType.EOF,
            None,
            last.line,
            last.column + len(str(last.value)),
            last.filename,
        )

    def _at_end(self) -> bool:
        return self._peek().type == CTokenType.EOF

    def _peek(self) -> CToken:
        return self.tokens[self._pos]

    def _advance(self) -> CToken:
        """Consume and return the current token (EOF is never consumed)."""
        token = self.tokens[self._pos]
        if token.type != CTokenType.EOF:
            self._pos += 1
        return token

    def _check(self, *types: CTokenType) -> bool:
        return self._peek().type in types

    def _match(self, *types: CTokenType) -> Optional[CToken]:
        if self._check(*types):
            return self._advance()
        return None

    def _expect(self, token_type: CTokenType, expected: str) -> CToken:
        """
        Expect and consume a specific token type.

        Args:
            token_type: The expected token type
            expected: Description of what was expected, for the error

        Raises:
            UnexpectedEndOfInputError: If the stream is exhausted
            UnexpectedTokenError: If a different token is found
        """
        if self._check(token_type):
            return self._advance()
        raise self._unexpected(expected)

    def _unexpected(self, expected: str):
        """Build the error for the current token not matching 'expected'."""
        current = self._peek()
        if current.type == CTokenType.EOF:
            return UnexpectedEndOfInputError(
                expected,
                current.location,
                self._get_source_line(current.line),
            )
        return UnexpectedTokenError(
            current.text,
            expected=expected,
            location=current.location,
            source_line=self._get_source_line(current.line),
        )

    def _get_source_line(self, line: int) -> Optional[str]:
        if 0 < line <= len(self.source_lines):
            return self.source_lines[line - 1]
        return None

    # =========================================================================
    # Function Parsing
    # =========================================================================

    def _parse_function(self) -> FunctionNode:
        """Parse 'type name ( ) { statements }'."""
        type_token = self._peek()
        if not type_token.is_type_keyword():
            raise self._unexpected("type specifier")
        self._advance()
        return_type = type_from_keyword(type_token.value)

        name_token = self._expect(CTokenType.IDENTIFIER, "identifier")
        self._expect(CTokenType.LPAREN, "'('")
        self._expect(CTokenType.RPAREN, "')'")
        self._expect(CTokenType.LBRACE, "'{'")

        body = []
        while not self._check(CTokenType.RBRACE):
            body.append(self._parse_statement())

        self._expect(CTokenType.RBRACE, "'}'")

        logger.debug(
            f"Parsed function '{name_token.value}' returning {return_type} "
            f"with {len(body)} statement(s)"
        )
        return FunctionNode(
            location=type_token.location,
            name=name_token.value,
            return_type=return_type,
            body=tuple(body),
        )

    # =========================================================================
    # Statement Parsing
    # =========================================================================

    def _parse_statement(self) -> Statement:
        """Parse a statement; only 'return' is part of the language."""
        token = self._peek()

        if token.type == CTokenType.RETURN:
            return self._parse_return_statement()
        if token.type == CTokenType.EOF:
            raise self._unexpected("'}'")

        raise UnimplementedError(
            f"statement starting with '{token.text}'",
            location=token.location,
            source_line=self._get_source_line(token.line),
        )

    def _parse_return_statement(self) -> ReturnStatement:
        """Parse 'return ;' or 'return expr ;'."""
        location = self._expect(CTokenType.RETURN, "'return'").location

        if self._match(CTokenType.SEMICOLON):
            return ReturnStatement(location=location, value=None)

        value = self._parse_expression()
        self._expect(CTokenType.SEMICOLON, "';'")
        return ReturnStatement(location=location, value=value)

    # =========================================================================
    # Expression Parsing (operator precedence)
    # =========================================================================

    def _parse_expression(self) -> Optional[Expression]:
        """
        Parse an expression with the two-stack operator-precedence method.

        Returns:
            The expression, or None if no operand was found at all

        Raises:
            MismatchedParenthesesError: For unbalanced parentheses
            InvalidExpressionError: If operands and operators don't
                reduce to exactly one value
        """
        operands: list[Expression] = []
        operators: list[_PendingOperator] = []

        while True:
            token = self._peek()

            if token.type == CTokenType.NUMBER:
                self._advance()
                operands.append(NumberLiteral(location=token.location, value=token.value))

            elif token.type == CTokenType.IDENTIFIER:
                operands.append(self._parse_call())

            elif token.type == CTokenType.LPAREN:
                self._advance()
                operators.append(_PendingOperator(token))

            elif token.type == CTokenType.RPAREN:
                self._advance()
                self._close_parenthesis(token, operands, operators)

            elif token.type in BINARY_OPERATORS:
                self._advance()
                operator = BINARY_OPERATORS[token.type]
                while (
                    operators
                    and not operators[-1].is_marker
                    and operators[-1].operator.precedence >= operator.precedence
                ):
                    self._apply_operator(operators.pop(), operands)
                operators.append(_PendingOperator(token, operator))

            else:
                # Not part of the expression; left for the caller
                break

        while operators:
            pending = operators.pop()
            if pending.is_marker:
                raise MismatchedParenthesesError(
                    pending.token.location,
                    self._get_source_line(pending.token.line),
                )
            self._apply_operator(pending, operands)

        if not operands:
            return None
        if len(operands) > 1:
            extra = operands[1]
            raise InvalidExpressionError(
                "too many operands",
                extra.location,
                self._get_source_line(extra.location.line),
            )
        return operands[0]

    def _parse_call(self) -> CallExpression:
        """Parse 'name ( )', the only form an identifier may take."""
        name_token = self._advance()
        self._expect(CTokenType.LPAREN, f"'(' after '{name_token.value}'")
        self._expect(CTokenType.RPAREN, "')'")
        return CallExpression(location=name_token.location, function_name=name_token.value)

    def _close_parenthesis(
        self,
        token: CToken,
        operands: list[Expression],
        operators: list[_PendingOperator],
    ) -> None:
        """Apply pending operators down to the matching '(' marker."""
        while True:
            if not operators:
                raise MismatchedParenthesesError(
                    token.location,
                    self._get_source_line(token.line),
                )
            pending = operators.pop()
            if pending.is_marker:
                return
            self._apply_operator(pending, operands)

    def _apply_operator(self, pending: _PendingOperator, operands: list[Expression]) -> None:
        """Replace the top two operands with one BinaryExpression."""
        if len(operands) < 2:
            raise InvalidExpressionError(
                "not enough operands",
                pending.token.location,
                self._get_source_line(pending.token.line),
            )
        right = operands.pop()
        left = operands.pop()
        operands.append(
            BinaryExpression(
                location=pending.token.location,
                operator=pending.operator,
                left=left,
                right=right,
            )
        )


# =============================================================================
# Convenience Functions
# =============================================================================

def parse_source(source: str, filename: str = "<input>") -> ProgramNode:
    """
    Parse Tiny-C source code into an AST.

    Combines lexing and parsing.

    Args:
        source: The source code
        filename: Source filename for error messages

    Returns:
        The root ProgramNode of the AST

    Raises:
        CSyntaxError: If lexing or parsing fails
    """
    tokens = list(CLexer(source, filename).tokenize())
    return CParser(tokens, filename, source.splitlines()).parse()
