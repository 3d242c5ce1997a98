"""
Tiny-C Parser Test Suite
========================

Tests for the recursive-descent declaration parser and the
operator-precedence expression parser.

Test Organization
-----------------
- TestFunctions: function definitions and program structure
- TestReturnStatements: return with and without a value
- TestExpressions: precedence, associativity and parentheses
- TestParseErrors: syntax errors and their locations
- TestASTNodes: node equality, immutability and printing
"""

import dataclasses

import pytest
from rcc.errors import SourceLocation
from rcc.tinyc.lexer import CLexer
from rcc.tinyc.parser import CParser, parse_source
from rcc.tinyc.types import DataType
from rcc.tinyc.ast import (
    ProgramNode,
    FunctionNode,
    ReturnStatement,
    BinaryExpression,
    BinaryOperator,
    CallExpression,
    NumberLiteral,
    ASTPrinter,
    expression_to_string,
)
from rcc.tinyc.errors import (
    ParseError,
    UnexpectedTokenError,
    UnexpectedEndOfInputError,
    MismatchedParenthesesError,
    InvalidExpressionError,
    UnimplementedError,
)


def parse_return_value(expr_source: str):
    """Parse 'int main() { return <expr_source>; }' and return the value."""
    program = parse_source(f"int main() {{ return {expr_source}; }}", "test.c")
    return program.functions[0].body[0].value


def parse_expr(expr_source: str) -> str:
    """Parse an expression and render it fully parenthesized."""
    return expression_to_string(parse_return_value(expr_source))


# =============================================================================
# Function Tests
# =============================================================================

class TestFunctions:
    """Tests for function definitions."""

    def test_empty_program(self):
        """An empty token stream is an empty program."""
        program = parse_source("", "test.c")
        assert isinstance(program, ProgramNode)
        assert program.functions == ()

    def test_simple_function(self):
        """Parse a minimal function."""
        program = parse_source("int main() { return 42; }", "test.c")
        assert len(program.functions) == 1

        func = program.functions[0]
        assert isinstance(func, FunctionNode)
        assert func.name == "main"
        assert func.return_type == DataType.INT
        assert len(func.body) == 1
        assert isinstance(func.body[0], ReturnStatement)
        assert func.body[0].value == NumberLiteral(func.location, 42)

    def test_void_function(self):
        """Parse a void function with an empty body."""
        program = parse_source("void nothing() { }", "test.c")
        func = program.functions[0]
        assert func.return_type == DataType.VOID
        assert func.body == ()

    def test_functions_keep_source_order(self):
        """Functions appear in the order they were written."""
        source = """
            int one() { return 1; }
            void two() { return; }
            int three() { return 3; }
        """
        program = parse_source(source, "test.c")
        assert [f.name for f in program.functions] == ["one", "two", "three"]

    def test_multiple_statements(self):
        """A body may hold several return statements."""
        program = parse_source("int f() { return 1; return 2; }", "test.c")
        values = [stmt.value.value for stmt in program.functions[0].body]
        assert values == [1, 2]

    def test_function_location(self):
        """A function's location is its type keyword."""
        program = parse_source("\n  int main() { return 0; }", "test.c")
        assert program.functions[0].location == SourceLocation("test.c", 2, 3)

    def test_stream_without_eof(self):
        """A token stream that simply runs out is treated as ending in EOF."""
        tokens = list(CLexer("int main() { return 1; }", "test.c").tokenize())[:-1]
        program = CParser(tokens, "test.c").parse()
        assert program.functions[0].name == "main"

    def test_truncated_stream_without_eof(self):
        """Running out of tokens mid-function is an end-of-input error."""
        tokens = list(CLexer("int main() { return 1;", "test.c").tokenize())[:-1]
        with pytest.raises(UnexpectedEndOfInputError):
            CParser(tokens, "test.c").parse()


# =============================================================================
# Return Statement Tests
# =============================================================================

class TestReturnStatements:
    """Tests for return statements."""

    def test_return_without_value(self):
        """'return;' has no value."""
        program = parse_source("void f() { return; }", "test.c")
        assert program.functions[0].body[0].value is None

    def test_return_empty_parentheses(self):
        """Balanced parentheses around nothing leave no value."""
        assert parse_return_value("()") is None

    def test_return_location(self):
        """A return statement is located at the 'return' keyword."""
        program = parse_source("int main() { return 0; }", "test.c")
        assert program.functions[0].body[0].location == SourceLocation("test.c", 1, 14)

    def test_return_call(self):
        """A return value may be a zero-argument call."""
        value = parse_return_value("foo()")
        assert isinstance(value, CallExpression)
        assert value.function_name == "foo"


# =============================================================================
# Expression Tests
# =============================================================================

class TestExpressions:
    """Tests for operator-precedence expression parsing."""

    def test_number(self):
        """A lone literal is a NumberLiteral."""
        value = parse_return_value("7")
        assert isinstance(value, NumberLiteral)
        assert value.value == 7

    def test_multiplication_binds_tighter(self):
        """Multiplication binds tighter than addition."""
        assert parse_expr("1 * 2 + 3") == "((1 * 2) + 3)"
        assert parse_expr("1 + 2 * 3") == "(1 + (2 * 3))"

    def test_division_binds_tighter(self):
        """Division binds tighter than subtraction."""
        assert parse_expr("10 - 6 / 2") == "(10 - (6 / 2))"

    def test_left_associativity(self):
        """Operators of equal precedence group to the left."""
        assert parse_expr("1 - 2 - 3") == "((1 - 2) - 3)"
        assert parse_expr("8 / 4 / 2") == "((8 / 4) / 2)"
        assert parse_expr("1 + 2 - 3") == "((1 + 2) - 3)"
        assert parse_expr("2 * 3 / 4") == "((2 * 3) / 4)"

    def test_parentheses_override_precedence(self):
        """Parentheses group sub-expressions."""
        assert parse_expr("1 * (2 + 3)") == "(1 * (2 + 3))"
        assert parse_expr("(1 + 2) * 3") == "((1 + 2) * 3)"
        assert parse_expr("1 - (2 - 3)") == "(1 - (2 - 3))"

    def test_redundant_parentheses(self):
        """Nested parentheses around a value leave just the value."""
        assert parse_expr("((7))") == "7"

    def test_calls_as_operands(self):
        """Calls can appear anywhere an operand can."""
        assert parse_expr("foo() + bar() * 2") == "(foo() + (bar() * 2))"

    def test_binary_expression_structure(self):
        """The tree holds operator and operands in the expected places."""
        value = parse_return_value("1 * 2 + 3")
        assert isinstance(value, BinaryExpression)
        assert value.operator == BinaryOperator.ADD
        assert value.right.value == 3
        assert value.left.operator == BinaryOperator.MULTIPLY
        assert value.left.left.value == 1
        assert value.left.right.value == 2

    def test_binary_location_is_operator(self):
        """A binary expression is located at its operator."""
        value = parse_return_value("1 + 2")
        assert value.location == SourceLocation("test.c", 1, 23)

    def test_long_chain(self):
        """Longer mixed chains group correctly."""
        assert parse_expr("1 + 2 * 3 - 4 / 2") == "((1 + (2 * 3)) - (4 / 2))"


# =============================================================================
# Parse Error Tests
# =============================================================================

class TestParseErrors:
    """Tests for syntax errors."""

    def test_unclosed_parenthesis(self):
        """A '(' still open at the end of the expression."""
        with pytest.raises(MismatchedParenthesesError):
            parse_return_value("(()")

    def test_unopened_parenthesis(self):
        """A ')' with no matching '('."""
        with pytest.raises(MismatchedParenthesesError):
            parse_return_value("1)")

    def test_leading_close_parenthesis(self):
        """A ')' before anything else."""
        with pytest.raises(MismatchedParenthesesError):
            parse_return_value(")")

    def test_too_many_operands(self):
        """Two operands with no operator between them."""
        with pytest.raises(InvalidExpressionError) as exc_info:
            parse_return_value("1 2")
        assert exc_info.value.reason == "too many operands"
        assert exc_info.value.location == SourceLocation("test.c", 1, 23)

    def test_missing_right_operand(self):
        """A trailing operator."""
        with pytest.raises(InvalidExpressionError) as exc_info:
            parse_return_value("1 +")
        assert exc_info.value.reason == "not enough operands"

    def test_missing_left_operand(self):
        """A leading operator (there is no unary minus)."""
        with pytest.raises(InvalidExpressionError) as exc_info:
            parse_return_value("- 1")
        assert exc_info.value.reason == "not enough operands"

    def test_identifier_without_call(self):
        """An identifier must be followed by '()'."""
        with pytest.raises(UnexpectedTokenError) as exc_info:
            parse_return_value("foo")
        assert exc_info.value.found == ";"

    def test_missing_semicolon(self):
        """A return statement must end in ';'."""
        with pytest.raises(UnexpectedTokenError) as exc_info:
            parse_source("int main() { return 1 }", "test.c")
        assert exc_info.value.found == "}"
        assert exc_info.value.expected == "';'"

    def test_missing_closing_brace(self):
        """Running out of tokens inside a body."""
        with pytest.raises(UnexpectedEndOfInputError) as exc_info:
            parse_source("int main() { return 1;", "test.c")
        assert exc_info.value.expected == "'}'"

    def test_missing_type(self):
        """A function must start with a type."""
        with pytest.raises(UnexpectedTokenError) as exc_info:
            parse_source("main() { return 1; }", "test.c")
        assert exc_info.value.expected == "type specifier"

    def test_missing_name(self):
        """A function needs a name."""
        with pytest.raises(UnexpectedTokenError):
            parse_source("int () { return 1; }", "test.c")

    def test_parameters_not_supported(self):
        """Functions take no parameters."""
        with pytest.raises(UnexpectedTokenError):
            parse_source("int f(int) { return 1; }", "test.c")

    def test_unsupported_statement(self):
        """Only return statements exist."""
        with pytest.raises(UnimplementedError):
            parse_source("int main() { foo(); }", "test.c")

    def test_truncated_header(self):
        """Running out of tokens in the function header."""
        with pytest.raises(UnexpectedEndOfInputError):
            parse_source("int main(", "test.c")

    def test_error_message_format(self):
        """Parse errors show the location, the source line and a hint."""
        with pytest.raises(ParseError) as exc_info:
            parse_source("int main() { return 1 }", "test.c")
        assert str(exc_info.value) == (
            "test.c:1:23: error: unexpected token '}'\n"
            "    int main() { return 1 }\n"
            "                          ^\n"
            "hint: expected ';'"
        )


# =============================================================================
# AST Node Tests
# =============================================================================

class TestASTNodes:
    """Tests for AST node behaviour and printing."""

    def test_equality_ignores_location(self):
        """Nodes compare equal by content, not position."""
        a = NumberLiteral(SourceLocation("a.c", 1, 1), 5)
        b = NumberLiteral(SourceLocation("b.c", 9, 9), 5)
        assert a == b

    def test_nodes_are_immutable(self):
        """Nodes cannot be modified once built."""
        node = NumberLiteral(SourceLocation("a.c", 1, 1), 5)
        with pytest.raises(dataclasses.FrozenInstanceError):
            node.value = 6

    def test_operator_precedence_values(self):
        """Multiplicative operators outrank additive ones."""
        assert BinaryOperator.MULTIPLY.precedence > BinaryOperator.ADD.precedence
        assert BinaryOperator.DIVIDE.precedence == BinaryOperator.MULTIPLY.precedence
        assert BinaryOperator.SUBTRACT.precedence == BinaryOperator.ADD.precedence
        assert str(BinaryOperator.DIVIDE) == "/"

    def test_ast_printer(self):
        """The printer shows functions and their statements."""
        program = parse_source(
            "int main() { return 1 * 2 + 3; } void f() { return; }",
            "test.c",
        )
        assert ASTPrinter().print(program) == (
            "Program\n"
            "  Function: int main()\n"
            "    Return ((1 * 2) + 3)\n"
            "  Function: void f()\n"
            "    Return"
        )

    def test_parse_is_deterministic(self):
        """Parsing the same source twice gives equal trees."""
        source = "int f() { return 1; } int main() { return f() * (2 - 1); }"
        assert parse_source(source, "test.c") == parse_source(source, "test.c")
