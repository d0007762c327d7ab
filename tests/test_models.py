import math

import pytest

from traffic_graph import Absolute, InvalidExpressionError, Relative, Snapshot, parse_update


def test_relative_operators():
    assert Relative("add", 2).apply(3) == 5
    assert Relative("subtract", 1).apply(0) == -1
    assert Relative("multiply", 3).apply(2) == 6
    assert Relative("divide", 4).apply(2) == 0.5


def test_absolute_ignores_current_weight():
    assert Absolute(7).apply(100) == 7


def test_relative_unknown_operator():
    with pytest.raises(InvalidExpressionError) as exc_info:
        Relative("power", 2).apply(3)
    assert exc_info.value.expression == "power"


def test_relative_divide_by_zero():
    with pytest.raises(InvalidExpressionError) as exc_info:
        Relative("divide", 0).apply(3)
    assert isinstance(exc_info.value.cause, ZeroDivisionError)


@pytest.mark.parametrize(
    "value, expected",
    [
        (3, Absolute(3.0)),
        (-0.5, Absolute(-0.5)),
        ("4", Absolute(4.0)),
        ("+=1", Relative("add", 1.0)),
        ("-=2.5", Relative("subtract", 2.5)),
        ("*=3", Relative("multiply", 3.0)),
        ("/=4", Relative("divide", 4.0)),
        (Relative("add", 1), Relative("add", 1)),
    ],
)
def test_parse_update(value, expected):
    assert parse_update(value) == expected


@pytest.mark.parametrize("value", ["%=2", "+=", "heavy", True, None])
def test_parse_update_rejects(value):
    with pytest.raises(InvalidExpressionError):
        parse_update(value)  # type: ignore[arg-type]


def test_snapshot_derives_enumeration_and_positions():
    snapshot = Snapshot(data={"a": {"c": 1.0, "b": 2.0}, "b": {"d": 3.0}})
    assert snapshot.vertices == ("a", "c", "b", "d")
    assert dict(snapshot.positions) == {"a": 0, "c": 1, "b": 2, "d": 3}
    assert snapshot.size == 4
    assert snapshot.timestamp > 0


def test_snapshot_copies_input():
    data = {"a": {"b": 1.0}}
    snapshot = Snapshot(data=data)
    data["a"]["b"] = math.inf
    assert snapshot.outgoing("a") == {"b": 1.0}
    assert snapshot.outgoing("zzz") == {}
