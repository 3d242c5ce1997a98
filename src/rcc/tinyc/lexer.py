"""
Tiny-C Lexer (Tokenizer)
========================

This module implements the lexer for the Tiny-C language.
It converts source text into a stream of positioned tokens for the parser.

Token Categories
----------------
- Types: int, void
- Keywords: return
- Identifiers: function names
- Integer literals: decimal, unsigned, at most 32 bits
- Operators: + - * /
- Separators: ( ) { } ;

Comments
--------
- Single-line: // comment
- Multi-line: /* comment */

Example Usage
-------------
>>> from rcc.tinyc.lexer import CLexer
>>> source = 'int main() { return 42; }'
>>> for token in CLexer(source, "test.c").tokenize():
...     print(token)
Token(INT, 'int', 1:1)
Token(IDENTIFIER, 'main', 1:5)
Token(LPAREN, '(', 1:9)
Token(RPAREN, ')', 1:10)
Token(LBRACE, '{', 1:12)
Token(RETURN, 'return', 1:14)
Token(NUMBER, 42, 1:21)
Token(SEMICOLON, ';', 1:23)
Token(RBRACE, '}', 1:25)
Token(EOF, 1:26)
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Iterator, Optional
import string

from rcc.errors import SourceLocation
from rcc.tinyc.errors import CSyntaxError, InvalidCharacterError


# Largest value an integer literal may take (unsigned 32-bit)
MAX_INT_LITERAL = 0xFFFFFFFF


# =============================================================================
# Token Type Enumeration
# =============================================================================

class CTokenType(Enum):
    """Token types for the Tiny-C language."""

    EOF = auto()            # End of file

    # === Identifiers and Literals ===
    IDENTIFIER = auto()     # Function names
    NUMBER = auto()         # Integer literals

    # === Type Keywords ===
    INT = auto()            # int
    VOID = auto()           # void

    # === Keywords ===
    RETURN = auto()         # return

    # === Operators ===
    PLUS = auto()           # +
    MINUS = auto()          # -
    STAR = auto()           # *
    SLASH = auto()          # /

    # === Separators ===
    LPAREN = auto()         # (
    RPAREN = auto()         # )
    LBRACE = auto()         # {
    RBRACE = auto()         # }
    SEMICOLON = auto()      # ;


class CTokenKind(Enum):
    """Broad category of a token, as seen by error messages and dumps."""

    SEPARATOR = "separator"
    KEYWORD = "keyword"
    TYPE = "type"
    IDENTIFIER = "identifier"
    OPERATOR = "operator"
    INTEGER_LITERAL = "integer_literal"
    EOF = "eof"


_TOKEN_KINDS: dict[CTokenType, CTokenKind] = {
    CTokenType.EOF: CTokenKind.EOF,
    CTokenType.IDENTIFIER: CTokenKind.IDENTIFIER,
    CTokenType.NUMBER: CTokenKind.INTEGER_LITERAL,
    CTokenType.INT: CTokenKind.TYPE,
    CTokenType.VOID: CTokenKind.TYPE,
    CTokenType.RETURN: CTokenKind.KEYWORD,
    CTokenType.PLUS: CTokenKind.OPERATOR,
    CTokenType.MINUS: CTokenKind.OPERATOR,
    CTokenType.STAR: CTokenKind.OPERATOR,
    CTokenType.SLASH: CTokenKind.OPERATOR,
    CTokenType.LPAREN: CTokenKind.SEPARATOR,
    CTokenType.RPAREN: CTokenKind.SEPARATOR,
    CTokenType.LBRACE: CTokenKind.SEPARATOR,
    CTokenType.RBRACE: CTokenKind.SEPARATOR,
    CTokenType.SEMICOLON: CTokenKind.SEPARATOR,
}


# =============================================================================
# Keyword Mapping
# =============================================================================

# Built once at import time and never mutated afterwards
KEYWORDS: dict[str, CTokenType] = {
    "int": CTokenType.INT,
    "void": CTokenType.VOID,
    "return": CTokenType.RETURN,
}

SINGLE_CHAR_TOKENS: dict[str, CTokenType] = {
    "+": CTokenType.PLUS,
    "-": CTokenType.MINUS,
    "*": CTokenType.STAR,
    "/": CTokenType.SLASH,
    "(": CTokenType.LPAREN,
    ")": CTokenType.RPAREN,
    "{": CTokenType.LBRACE,
    "}": CTokenType.RBRACE,
    ";": CTokenType.SEMICOLON,
}


# =============================================================================
# Token Data Class
# =============================================================================

@dataclass(frozen=True)
class CToken:
    """
    Represents a single token from Tiny-C source code.

    Attributes:
        type: The CTokenType classification
        value: Token value (string for names and symbols, int for numbers)
        line: Line number in source (1-indexed)
        column: Column number in source (1-indexed)
        filename: Name of the source file
    """
    type: CTokenType
    value: str | int | None
    line: int
    column: int
    filename: str = "<input>"

    def __repr__(self) -> str:
        """Format token for debugging output."""
        if self.value is not None:
            if isinstance(self.value, int):
                return f"Token({self.type.name}, {self.value}, {self.line}:{self.column})"
            return f"Token({self.type.name}, {self.value!r}, {self.line}:{self.column})"
        return f"Token({self.type.name}, {self.line}:{self.column})"

    @property
    def location(self) -> SourceLocation:
        """Return a SourceLocation for error reporting."""
        return SourceLocation(self.filename, self.line, self.column)

    @property
    def kind(self) -> CTokenKind:
        """Broad category of this token."""
        return _TOKEN_KINDS[self.type]

    @property
    def text(self) -> str:
        """Source spelling of the token ('end of input' for EOF)."""
        if self.type == CTokenType.EOF:
            return "end of input"
        return str(self.value)

    def is_type_keyword(self) -> bool:
        """Return True if this token is a type keyword."""
        return self.type in (CTokenType.INT, CTokenType.VOID)


# =============================================================================
# Lexer Implementation
# =============================================================================

class CLexer:
    """
    Tokenizes Tiny-C source code.

    Usage:
        lexer = CLexer(source_text, filename)
        tokens = list(lexer.tokenize())

    Attributes:
        source: The source code being tokenized
        filename: Name of the source file (for error reporting)
    """

    IDENT_START = string.ascii_letters + "_"
    IDENT_CHARS = string.ascii_letters + string.digits + "_"

    def __init__(self, source: str, filename: str = "<input>"):
        """
        Initialize the lexer with source code.

        Args:
            source: The source code to tokenize
            filename: Name of the source file (for error messages)
        """
        self.source = source
        self.filename = filename

        self._pos = 0
        self._line = 1
        self._column = 1
        self._line_start_pos = 0

    def tokenize(self) -> Iterator[CToken]:
        """
        Generate tokens from the source code.

        Yields:
            CToken objects, always terminated by a single EOF token

        Raises:
            CSyntaxError: If invalid input is encountered
        """
        while not self._at_end():
            self._skip_whitespace_and_comments()

            if self._at_end():
                break

            yield self._scan_token()

        yield self._make_token(CTokenType.EOF, None)

    # =========================================================================
    # Character Access Methods
    # =========================================================================

    def _at_end(self) -> bool:
        return self._pos >= len(self.source)

    def _peek(self, offset: int = 0) -> str:
        """Character at current position + offset, or '' past the end."""
        pos = self._pos + offset
        if pos >= len(self.source):
            return ""
        return self.source[pos]

    def _advance(self) -> str:
        """Consume and return the current character, tracking line/column."""
        if self._at_end():
            return ""

        char = self.source[self._pos]
        self._pos += 1

        if char == "\n":
            self._line += 1
            self._column = 1
            self._line_start_pos = self._pos
        else:
            self._column += 1

        return char

    # =========================================================================
    # Token Creation
    # =========================================================================

    def _make_token(
        self,
        token_type: CTokenType,
        value: str | int | None,
        start_line: Optional[int] = None,
        start_column: Optional[int] = None,
    ) -> CToken:
        return CToken(
            type=token_type,
            value=value,
            line=start_line or self._line,
            column=start_column or self._column,
            filename=self.filename,
        )

    def _get_current_line(self) -> str:
        """Get the current line of source text for error reporting."""
        line_end = self.source.find("\n", self._line_start_pos)
        if line_end == -1:
            line_end = len(self.source)
        return self.source[self._line_start_pos:line_end]

    # =========================================================================
    # Whitespace and Comment Handling
    # =========================================================================

    def _skip_whitespace_and_comments(self) -> None:
        while not self._at_end():
            char = self._peek()

            if char in " \t\n\r\f\v":
                self._advance()
                continue

            if char == "/" and self._peek(1) == "/":
                while not self._at_end() and self._peek() != "\n":
                    self._advance()
                continue

            if char == "/" and self._peek(1) == "*":
                self._skip_multi_line_comment()
                continue

            break

    def _skip_multi_line_comment(self) -> None:
        """
        Skip a multi-line comment (/* ... */).

        Raises:
            CSyntaxError: If comment is not terminated
        """
        start_line = self._line
        start_col = self._column

        self._advance()
        self._advance()

        while not self._at_end():
            if self._peek() == "*" and self._peek(1) == "/":
                self._advance()
                self._advance()
                return
            self._advance()

        raise CSyntaxError(
            "unterminated multi-line comment",
            SourceLocation(self.filename, start_line, start_col),
            hint="add closing */ to terminate the comment",
        )

    # =========================================================================
    # Token Scanning
    # =========================================================================

    def _scan_token(self) -> CToken:
        start_line = self._line
        start_column = self._column

        char = self._peek()

        if char in self.IDENT_START:
            return self._scan_identifier(start_line, start_column)

        if char and char in string.digits:
            return self._scan_number(start_line, start_column)

        if char in SINGLE_CHAR_TOKENS:
            self._advance()
            return self._make_token(SINGLE_CHAR_TOKENS[char], char, start_line, start_column)

        raise InvalidCharacterError(
            char,
            SourceLocation(self.filename, start_line, start_column),
            self._get_current_line(),
        )

    def _scan_identifier(self, start_line: int, start_column: int) -> CToken:
        """Scan an identifier, or a keyword found in the keyword table."""
        chars = []
        while self._peek() and self._peek() in self.IDENT_CHARS:
            chars.append(self._advance())

        name = "".join(chars)
        token_type = KEYWORDS.get(name, CTokenType.IDENTIFIER)
        return self._make_token(token_type, name, start_line, start_column)

    def _scan_number(self, start_line: int, start_column: int) -> CToken:
        """
        Scan a decimal integer literal.

        Raises:
            CSyntaxError: If the value does not fit in 32 unsigned bits
        """
        chars = []
        while self._peek() and self._peek() in string.digits:
            chars.append(self._advance())

        text = "".join(chars)
        value = int(text)
        if value > MAX_INT_LITERAL:
            raise CSyntaxError(
                f"integer literal '{text}' out of range",
                SourceLocation(self.filename, start_line, start_column),
                hint=f"literals must not exceed {MAX_INT_LITERAL}",
                source_line=self._get_current_line(),
            )

        return self._make_token(CTokenType.NUMBER, value, start_line, start_column)
