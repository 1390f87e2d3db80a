"""
Token model consumed by the SEXPR parser.

Tokens are produced by an external scanner; this module only defines the value
type the parser understands and a helper for building tokens from plain data.

Token types:
    NUMBER: numeric literal, `value` holds the original source text.
    IDENT: identifier, `value` holds the name.
    LPAREN / RPAREN: list delimiters, no meaningful payload.
    EOF: optional end marker. The parser treats it like an exhausted source.

Any other type string is accepted but is never a valid start of an expression.

Example:
    >>> Token(NUMBER, "42")
    Token(NUMBER, 42)

Exports:
    - Token
    - token_from_dict
    - NUMBER, IDENT, LPAREN, RPAREN, EOF
"""

from collections.abc import Mapping
from typing import Any

NUMBER = "NUMBER"
IDENT = "IDENT"
LPAREN = "LPAREN"
RPAREN = "RPAREN"
EOF = "EOF"

DELIMITER_TEXT = {LPAREN: "(", RPAREN: ")"}


class Token:
    """Represents a single lexical token of an S-expression.

    Attributes:
        type (str): The token type (e.g. 'NUMBER', 'IDENT', 'LPAREN').
        value (str): The raw source text of the token.
        line (int): The 1-based line number where the token appears, 0 if unknown.
        col (int): The 1-based column number where the token starts, 0 if unknown.
    """

    def __init__(self, type_: str, value: str = "", line: int = 0, col: int = 0):
        """Initializes a new Token instance.

        Args:
            type_ (str): The token's type.
            value (str, optional): The literal text. Parens default to "(" / ")".
            line (int, optional): The line number (default is 0).
            col (int, optional): The column number (default is 0).
        """
        self.type = type_
        self.value = value or DELIMITER_TEXT.get(type_, "")
        self.line = line
        self.col = col

    def __repr__(self) -> str:
        """Returns a concise summary of the token's type and value."""
        return f"Token({self.type}, {self.value})"

    def __eq__(self, other: Any) -> bool:
        """Tokens are equal when type, value and position all match."""
        return (
            isinstance(other, Token)
            and self.type == other.type
            and self.value == other.value
            and self.line == other.line
            and self.col == other.col
        )

    def __hash__(self) -> int:
        """Hashes the same fields `__eq__` compares."""
        return hash((self.type, self.value, self.line, self.col))


def _field(data: Mapping[str, Any], key: str, kind: type, default: Any) -> Any:
    value = data.get(key, default)
    # bool is an int subclass but never a valid position
    if not isinstance(value, kind) or isinstance(value, bool):
        raise ValueError(
            f"Token field {key!r} must be {kind.__name__}, got {value!r}"
        )
    return value


def token_from_dict(data: Mapping[str, Any]) -> Token:
    """Builds a Token from a mapping such as a decoded JSON object.

    Values are taken as-is: `value` must already be a string, so numeric text
    is never re-formatted on the way in.

    Args:
        data (Mapping[str, Any]): Must contain a string `type`; `value` (str),
            `line` and `col` (int) are optional.

    Returns:
        Token: The constructed token.

    Raises:
        ValueError: If `data` is not a mapping, has no string `type`, or holds
            a field of the wrong type (including null).
    """
    if not isinstance(data, Mapping):
        raise ValueError(f"Token entry must be an object, got {data!r}")
    type_ = data.get("type")
    if not isinstance(type_, str) or not type_:
        raise ValueError(f"Token entry has no type: {dict(data)!r}")
    return Token(
        type_,
        _field(data, "value", str, ""),
        _field(data, "line", int, 0),
        _field(data, "col", int, 0),
    )


__all__ = [
    "EOF",
    "IDENT",
    "LPAREN",
    "NUMBER",
    "RPAREN",
    "Token",
    "token_from_dict",
]
