"""
Tiny-C Type System
==================

The language has exactly two types, both usable only as function
return types:

| Type | Keyword | Meaning                         |
|------|---------|---------------------------------|
| INT  | int     | 32-bit integer, returned in w0  |
| VOID | void    | no value                        |

Integer literals are INT; an absent return expression is VOID.
"""

from enum import Enum


class DataType(Enum):
    """Static type of a function or an expression."""

    INT = "int"
    VOID = "void"

    def __str__(self) -> str:
        """Format as the C keyword for error messages."""
        return self.value


# Type keyword spelling -> DataType
TYPE_KEYWORDS: dict[str, DataType] = {
    "int": DataType.INT,
    "void": DataType.VOID,
}


def type_from_keyword(keyword: str) -> DataType:
    """
    Map a type keyword to its DataType.

    Raises:
        KeyError: If the keyword is not a type name
    """
    return TYPE_KEYWORDS[keyword]
