import json

import hypothesis.strategies as st
from hypothesis import given

from sexpr.sexpr_ast import Identifier, Number, ProcedureCall


def test_identifier_repr() -> None:
    assert repr(Identifier("x")) == "Identifier('x')"


def test_number_repr() -> None:
    assert repr(Number("1")) == "Number('1')"


def test_call_repr() -> None:
    call = ProcedureCall(Identifier("+"), [Number("1"), Number("2")])
    assert repr(call) == "ProcedureCall(Identifier('+'), [Number('1'), Number('2')])"


def test_leaf_equality() -> None:
    assert Number("1") == Number("1")
    assert Number("1") != Number("1.0")
    assert Identifier("1") != Number("1")
    assert Identifier("x") != "x"


def test_call_equality_is_structural() -> None:
    a = ProcedureCall(Identifier("f"), [ProcedureCall(Identifier("g"), [Number("1")])])
    b = ProcedureCall(Identifier("f"), [ProcedureCall(Identifier("g"), [Number("1")])])
    c = ProcedureCall(Identifier("f"), [ProcedureCall(Identifier("g"), [Number("2")])])
    assert a == b
    assert a != c
    assert hash(a) == hash(b)


def test_call_operand_order_matters() -> None:
    a = ProcedureCall(Identifier("-"), [Number("1"), Number("2")])
    b = ProcedureCall(Identifier("-"), [Number("2"), Number("1")])
    assert a != b


def test_call_without_operands() -> None:
    call = ProcedureCall(Identifier("f"))
    assert call.operands == ()
    assert call.to_source() == "(f)"


def test_call_operands_not_shared_with_caller() -> None:
    operands = [Number("1")]
    call = ProcedureCall(Identifier("f"), operands)
    operands.append(Number("2"))
    assert call.operands == (Number("1"),)


def test_to_dict_nested() -> None:
    call = ProcedureCall(
        Identifier("+"),
        [Number("1"), ProcedureCall(Identifier("-"), [Number("2"), Number("3")])],
    )
    d = call.to_dict()
    assert d["kind"] == "call"
    assert d["operator"] == {"kind": "identifier", "name": "+"}
    assert d["operands"][0] == {"kind": "number", "literal": "1"}
    inner = d["operands"][1]
    assert inner["kind"] == "call"
    assert [o["literal"] for o in inner["operands"]] == ["2", "3"]
    json.dumps(d)


def test_to_source_nested() -> None:
    call = ProcedureCall(
        ProcedureCall(Identifier("compose"), [Identifier("f"), Identifier("g")]),
        [Number("10")],
    )
    assert call.to_source() == "((compose f g) 10)"


@given(st.text(min_size=1))  # type: ignore[misc]
def test_number_to_source_is_verbatim(text: str) -> None:
    assert Number(text).to_source() == text


@given(st.text(min_size=1))  # type: ignore[misc]
def test_identifier_to_source_is_verbatim(text: str) -> None:
    assert Identifier(text).to_source() == text


def chain(depth: int, leaf: str = "1") -> ProcedureCall:
    node = ProcedureCall(Identifier("f"), [Number(leaf)])
    for _ in range(depth - 1):
        node = ProcedureCall(Identifier("f"), [node])
    return node


def test_deep_tree_operations() -> None:
    depth = 5000
    a, b, c = chain(depth), chain(depth), chain(depth, "2")
    assert a == b
    assert a != c
    assert hash(a) == hash(b)
    assert a.to_source() == "(f " * depth + "1" + ")" * depth
    assert repr(a).startswith("ProcedureCall(Identifier('f'), [ProcedureCall(")
    d = a.to_dict()
    for _ in range(depth):
        assert d["kind"] == "call"
        d = d["operands"][0]
    assert d == {"kind": "number", "literal": "1"}


def test_deep_tree_in_operator_position() -> None:
    node = Number("0")
    for i in range(3000):
        node = ProcedureCall(node, [Identifier(str(i))])
    assert node.to_source().startswith("(" * 3000 + "0 0)")
    assert node.to_source().endswith(" 2999)")
