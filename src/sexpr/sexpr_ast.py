"""
Defines the abstract syntax tree (AST) produced by the SEXPR parser.

Classes:
    Expression:
        Common base of every node. Provides structural equality, `to_dict`
        serialization and `to_source` re-serialization.

    Identifier:
        A bare symbolic token, e.g. `+` or `foo`.

    Number:
        A numeric literal kept as its original text. No numeric conversion or
        validation happens here; that is left to whatever consumes the tree.

    ProcedureCall:
        A parenthesized `(operator operand...)` form. The operator and every
        operand are full expressions, so calls nest arbitrarily, including an
        operator that is itself a call.

    ExpressionDict:
        TypedDict shape of a serialized node, suitable for JSON output.

Nodes are built bottom-up by the parser, own their children exclusively and
are not mutated after construction. Every whole-tree operation (equality,
hashing, repr, `to_dict`, `to_source`) walks the tree with an explicit stack,
so arbitrarily deep trees never hit the interpreter's recursion limit.

Example:
    call = ProcedureCall(Identifier("+"), [Number("1"), Number("2")])
    call.to_source()  # "(+ 1 2)"
"""

from collections.abc import Callable
from typing import Any, TypedDict, TypeVar

T = TypeVar("T")


class ExpressionDict(TypedDict, total=False):
    """
    TypedDict representation of an Expression used for serialization.

    Fields:
        kind (str): One of "identifier", "number", "call".
        name (str): Identifier text (identifier nodes only).
        literal (str): Original numeric text (number nodes only).
        operator (ExpressionDict): Operator subexpression (call nodes only).
        operands (list[ExpressionDict]): Operand subexpressions (call nodes only).
    """

    kind: str
    name: str
    literal: str
    operator: "ExpressionDict"
    operands: list["ExpressionDict"]


def fold(
    root: "Expression",
    leaf: Callable[["Expression"], T],
    call: Callable[["ProcedureCall", T, list[T]], T],
) -> T:
    """
    Combine a tree bottom-up without recursion.

    Args:
        root (Expression): Tree to walk.
        leaf (Callable): Maps a leaf node to a result.
        call (Callable): Maps a call node and the results of its operator and
            operands to a result.

    Returns:
        T: The result for `root`.
    """
    results: list[T] = []
    stack: list[tuple[Expression, bool]] = [(root, False)]
    while stack:
        node, children_done = stack.pop()
        if not isinstance(node, ProcedureCall):
            results.append(leaf(node))
        elif children_done:
            n = len(node.operands) + 1
            parts = results[-n:]
            del results[-n:]
            results.append(call(node, parts[0], parts[1:]))
        else:
            stack.append((node, True))
            for child in reversed((node.operator, *node.operands)):
                stack.append((child, False))
    return results[0]


class Expression:
    """Base class for all AST nodes. Not instantiated directly."""

    kind: str = "expression"

    __slots__ = ()

    def _fields(self) -> tuple[Any, ...]:
        raise NotImplementedError

    def __eq__(self, other: Any) -> bool:
        """Structural equality: same node classes, same text, same shape."""
        pairs: list[tuple[Any, Any]] = [(self, other)]
        while pairs:
            a, b = pairs.pop()
            if type(a) is not type(b):
                return False
            if isinstance(a, ProcedureCall):
                if len(a.operands) != len(b.operands):
                    return False
                pairs.append((a.operator, b.operator))
                pairs.extend(zip(a.operands, b.operands))
            elif a._fields() != b._fields():
                return False
        return True

    def __hash__(self) -> int:
        return fold(
            self,
            lambda n: hash((n.kind, n._fields())),
            lambda n, op, rest: hash((n.kind, op, tuple(rest))),
        )

    def to_dict(self) -> ExpressionDict:
        raise NotImplementedError

    def to_source(self) -> str:
        raise NotImplementedError


class Identifier(Expression):
    """A bare name such as `x` or `+`."""

    kind = "identifier"

    __slots__ = ("name",)

    def __init__(self, name: str):
        self.name = name

    def _fields(self) -> tuple[Any, ...]:
        return (self.name,)

    def __repr__(self) -> str:
        return f"Identifier({self.name!r})"

    def to_dict(self) -> ExpressionDict:
        return {"kind": self.kind, "name": self.name}

    def to_source(self) -> str:
        return self.name


class Number(Expression):
    """A numeric literal. `literal` is exactly the text the scanner produced."""

    kind = "number"

    __slots__ = ("literal",)

    def __init__(self, literal: str):
        self.literal = literal

    def _fields(self) -> tuple[Any, ...]:
        return (self.literal,)

    def __repr__(self) -> str:
        return f"Number({self.literal!r})"

    def to_dict(self) -> ExpressionDict:
        return {"kind": self.kind, "literal": self.literal}

    def to_source(self) -> str:
        return self.literal


class ProcedureCall(Expression):
    """
    A procedure call `(operator operand...)`.

    Args:
        operator (Expression): The expression in operator position.
        operands (list[Expression], optional): Operands in source order.

    Attributes:
        operator (Expression): Operator subexpression.
        operands (tuple[Expression, ...]): Operand subexpressions.
    """

    kind = "call"

    __slots__ = ("operator", "operands")

    def __init__(self, operator: Expression, operands: list[Expression] | None = None):
        self.operator = operator
        self.operands: tuple[Expression, ...] = tuple(operands or ())

    def _fields(self) -> tuple[Any, ...]:
        return (self.operator, self.operands)

    def __repr__(self) -> str:
        return fold(
            self,
            repr,
            lambda n, op, rest: f"ProcedureCall({op}, [{', '.join(rest)}])",
        )

    def to_dict(self) -> ExpressionDict:
        def call(n: ProcedureCall, op: Any, rest: list[Any]) -> ExpressionDict:
            return {"kind": n.kind, "operator": op, "operands": rest}

        return fold(self, lambda n: n.to_dict(), call)

    def to_source(self) -> str:
        return fold(
            self,
            lambda n: n.to_source(),
            lambda n, op, rest: "(" + " ".join([op, *rest]) + ")",
        )


__all__ = [
    "Expression",
    "ExpressionDict",
    "Identifier",
    "Number",
    "ProcedureCall",
    "fold",
]
