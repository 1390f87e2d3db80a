"""
SEXPR Parser

Parses a stream of S-expression tokens into `Expression` trees.

The grammar is small:

    expression := NUMBER | IDENT | call
    call       := LPAREN expression expression* RPAREN

The parser is a recursive-descent parser with a single token of lookahead. It
pulls tokens from any iterable one at a time and never looks back, so the
token source may be a list, a generator, or a lexer object that supports
iteration. Each call to `parse()` returns one complete top-level expression;
calling it again continues from where the previous call stopped.

The descent into nested calls is tracked on an explicit stack of open lists,
not on the Python call stack, so nesting depth is limited only by memory.

Parser Behavior
---------------
- Operates in strict mode by default: a token that cannot start an expression
  raises `ParseError`, and a list opened right before the end of input is
  reported as unmatched.
- With `strict=False` such tokens, and a `(` with nothing after it, yield
  `None` instead.
- A `RPAREN` where an expression should start, or a list that is still open
  when the tokens run out, always raises `ParseError("Unmatched Parentheses!")`.
- The first error aborts the whole `parse()` call. No partial tree is returned.

Error Messages
--------------
- "Unmatched Parentheses!": the grammar's own error, raised in both modes.
- "Unexpected token <token>": strict mode only. An addition beyond unmatched
  parentheses for tokens that can never start an expression; lenient mode
  reports these as absence or as unmatched parentheses instead.

Entry Points
------------
- `parse()`: Parse the next top-level expression, or return None at end of input.
- `parse_all()`: Parse every remaining top-level expression into a list.
- Iterating a Parser yields top-level expressions until input is exhausted.

Raises
------
ParseError
    Subclass of the built-in SyntaxError; `str(err)` reads
    "Syntax error: <message>".
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from typing import Any

from sexpr.sexpr_ast import Expression, Identifier, Number, ProcedureCall
from sexpr.sexpr_tokens import EOF, IDENT, LPAREN, NUMBER, RPAREN, Token

UNMATCHED_PARENTHESES = "Unmatched Parentheses!"


class ParseError(SyntaxError):
    """Raised when the token stream does not form a valid expression.

    The message is "Unmatched Parentheses!" for unbalanced lists. Strict
    parsers additionally raise "Unexpected token <token>" for tokens that
    cannot start an expression; that second message does not occur with
    `strict=False`.

    Attributes:
        message (str): Human-readable description, e.g. "Unmatched Parentheses!".
        token (Token | None): The lookahead token when the error was raised,
            or None if the input was exhausted.
    """

    def __init__(self, message: str, token: Token | None = None):
        """Initializes the error.

        Args:
            message (str): The bare message, without the "Syntax error: " prefix.
            token (Token | None, optional): Offending lookahead token, if any.
        """
        super().__init__(message)
        self.message = message
        self.token = token

    def __str__(self) -> str:
        """Returns the display form, "Syntax error: <message>"."""
        return f"Syntax error: {self.message}"

    def __eq__(self, other: Any) -> bool:
        """Two errors are equal when their messages are equal."""
        return isinstance(other, ParseError) and self.message == other.message

    def __hash__(self) -> int:
        return hash(self.message)


class Parser:
    """
    SEXPR Parser Class

    Attributes
    ----------
    tokens : Iterator[Token]
        The forward-only token source.
    current : Token | None
        One-token lookahead. None once the source is exhausted.
    strict : bool
        Whether unrecognized expression starts are errors (see module docs).

    Methods
    -------
    parse() -> Expression | None
        Parse one top-level expression.
    parse_all() -> list[Expression]
        Parse until the input is exhausted.
    advance() -> Token | None
        Move the lookahead to the next token.
    generate(node) -> Expression
        Consume the lookahead and hand back the node built from it.
    """

    def __init__(self, tokens: Iterable[Token], strict: bool = True) -> None:
        """Initializes the parser and loads the first token into the lookahead.

        Args:
            tokens (Iterable[Token]): Any iterable of tokens, consumed once.
            strict (bool, optional): Raise on tokens that cannot start an
                expression. Defaults to True.
        """
        self.tokens: Iterator[Token] = iter(tokens)
        self.strict: bool = strict
        self.current: Token | None = None
        self.advance()

    @property
    def exhausted(self) -> bool:
        """True once the lookahead is empty (end of input or an EOF token)."""
        return self.current is None

    def advance(self) -> Token | None:
        """Pulls the next token into the lookahead, discarding the previous one.

        Returns:
            Token | None: The new lookahead, or None at end of input. Stays None
            on further calls.
        """
        tok = next(self.tokens, None)
        # EOF marks the end just like a drained iterator
        if tok is not None and tok.type == EOF:
            tok = None
            self.tokens = iter(())
        self.current = tok
        return tok

    def parse(self) -> Expression | None:
        """
        Parse the next expression, or return None if there is none.

        Each entry of `open_lists` holds the parts (operator first, then
        operands) collected so far for a `(` that has not been closed yet.

        Raises:
            ParseError: On unbalanced parentheses, or, in strict mode, a token
                that cannot start an expression.
        """
        open_lists: list[list[Expression]] = []
        while True:
            tok = self.current
            node: Expression | None = None
            if tok is None:
                pass
            elif tok.type == NUMBER:
                node = self.generate(Number(tok.value))
            elif tok.type == IDENT:
                node = self.generate(Identifier(tok.value))
            elif tok.type == LPAREN:
                self.advance()
                open_lists.append([])
                continue
            elif tok.type == RPAREN:
                # a closer needs an open list that already has its operator
                if not open_lists or not open_lists[-1]:
                    raise ParseError(UNMATCHED_PARENTHESES, tok)
                parts = open_lists.pop()
                node = self.generate(ProcedureCall(parts[0], parts[1:]))
            elif self.strict:
                raise ParseError(f"Unexpected token {tok}", tok)

            while node is None:
                if not open_lists:
                    return None
                parts = open_lists.pop()
                # an operand slot that yields nothing can never be closed
                if parts or self.strict:
                    raise ParseError(UNMATCHED_PARENTHESES, self.current)
                # lenient: an operator-less list is absent, which the enclosing list sees next

            if not open_lists:
                return node
            open_lists[-1].append(node)

    def generate(self, node: Expression) -> Expression:
        """Advances past the token `node` was built from and returns `node`."""
        self.advance()
        return node

    def parse_all(self) -> list[Expression]:
        """Parse every remaining top-level expression."""
        return list(self)

    def __iter__(self) -> Iterator[Expression]:
        """Yields top-level expressions until `parse()` returns None."""
        while True:
            node = self.parse()
            if node is None:
                return
            yield node


__all__ = ["ParseError", "Parser", "UNMATCHED_PARENTHESES"]
