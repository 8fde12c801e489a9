"""Tests for native conversion helpers."""

import pytest

from std_core import decode, encode
from std_core.convert import from_python, to_python
from std_core.options import DEPTH_LIMIT_MAX
from std_core.values import (
    VBool,
    VCompound,
    VDecimal,
    VFloatingPoint,
    VInteger,
    VList,
    VString,
)


def test_from_python_nested():
    v = from_python({"a": [1, 2.5, "x", True], "b": {}})
    assert v == VCompound({
        "a": VList([VInteger(1), VFloatingPoint(2.5), VString("x"), VBool(True)]),
        "b": VCompound({}),
    })


def test_from_python_bool_is_not_integer():
    assert from_python(False) == VBool(False)


def test_from_python_tuple():
    assert from_python((1, 2)) == VList([VInteger(1), VInteger(2)])


def test_from_python_keeps_literals():
    d = VDecimal(-1, "0", "75")
    assert from_python({"x": d})["x"] is d


def test_from_python_rejects_none():
    with pytest.raises(TypeError):
        from_python(None)


def test_from_python_rejects_non_str_keys():
    with pytest.raises(TypeError):
        from_python({1: "a"})


def test_to_python():
    v = decode('{ a: [1, 2.5, "x", true], b: -0.75d }')
    out = to_python(v)
    assert out["a"] == [1, 2.5, "x", True]
    assert out["b"] == VDecimal(-1, "0", "75", "d")


def test_to_python_rejects_unknown():
    with pytest.raises(TypeError):
        to_python("plain")


def test_native_tree_encodes():
    assert encode(from_python({"shape": "hexagon", "size": 2})) == '{ shape: "hexagon", size: 2 }'


def test_from_python_depth_limit():
    obj = []
    for _ in range(3000):
        obj = [obj]
    with pytest.raises(ValueError) as ei:
        from_python(obj)
    assert "depth limit exceeded" in str(ei.value)


def test_to_python_depth_limit():
    v = VList([])
    for _ in range(3000):
        v = VList([v])
    with pytest.raises(ValueError):
        to_python(v)


def test_depth_cap_round_trip():
    obj = []
    for _ in range(DEPTH_LIMIT_MAX - 1):
        obj = [obj]
    assert to_python(from_python(obj)) == obj
