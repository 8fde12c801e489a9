"""Tests for the encoder."""

import math

import pytest

from std_core.encoder import encode, format_float, format_key, quote_string
from std_core.errors import EncodeError
from std_core.options import DEPTH_LIMIT_MAX, EncodeOptions
from std_core.values import (
    VBool,
    VCompound,
    VDecimal,
    VFloat,
    VFloatingPoint,
    VInteger,
    VList,
    VLong,
    VShort,
    VString,
)


# ---------------------------------------------------------------------------
# Containers
# ---------------------------------------------------------------------------

def test_empty_containers():
    assert encode(VCompound({})) == "{}"
    assert encode(VList([])) == "[]"


def test_compound_keys_sorted():
    v = VCompound({"b": VBool(True), "a": VInteger(1)})
    assert encode(v) == "{ a: 1, b: true }"


def test_list_spacing():
    assert encode(VList([VInteger(1), VString("x")])) == '[ 1, "x" ]'


def test_nested():
    v = VCompound({"a": VList([VInteger(1), VCompound({"b": VString("x")})])})
    assert encode(v) == '{ a: [ 1, { b: "x" } ] }'


def test_sorting_is_by_code_point():
    v = VCompound({"b": VInteger(1), "B": VInteger(2), "_": VInteger(3)})
    assert encode(v) == "{ B: 2, _: 3, b: 1 }"


# ---------------------------------------------------------------------------
# Keys and strings
# ---------------------------------------------------------------------------

@pytest.mark.parametrize("key, expected", [
    ("min_width", "min_width"),
    ("_x-1", "_x-1"),
    ("a b", '"a b"'),
    ("1x", '"1x"'),
    ("-a", '"-a"'),
    ("", '""'),
    ("é", '"é"'),
])
def test_format_key(key, expected):
    assert format_key(key) == expected


def test_quote_string_short_escapes():
    assert quote_string('a"b\\c\n\r\t') == '"a\\"b\\\\c\\n\\r\\t"'


def test_quote_string_control_characters():
    assert quote_string("\x01\x1f") == '"\\u0001\\u001f"'


def test_quote_string_keeps_non_ascii():
    assert quote_string("こんにちは世界") == '"こんにちは世界"'
    assert quote_string("&6poly-α-olefin&r") == '"&6poly-α-olefin&r"'


# ---------------------------------------------------------------------------
# Numbers
# ---------------------------------------------------------------------------

@pytest.mark.parametrize("f, expected", [
    (1.0, "1.0"),
    (100.0, "100.0"),
    (0.1, "0.1"),
    (-0.0, "-0.0"),
    (1e16, "1e+16"),
    (2.5e-7, "2.5e-07"),
])
def test_format_float(f, expected):
    assert format_float(f) == expected


@pytest.mark.parametrize("f", [math.inf, -math.inf, math.nan])
def test_format_float_non_finite(f):
    with pytest.raises(EncodeError):
        format_float(f)


def test_floating_point_holding_int():
    assert encode(VFloatingPoint(3)) == "3.0"


def test_integer():
    assert encode(VInteger(-42)) == "-42"


@pytest.mark.parametrize("value, expected", [
    (VDecimal(-1, "0", "75", "d"), "-0.75d"),
    (VShort(1, "123", "", "s"), "123s"),
    (VLong(-1, "123", "", "L"), "-123L"),
    (VFloat(1, "1", "50", "f"), "1.50f"),
])
def test_suffix_literals(value, expected):
    assert encode(value) == expected


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------

def test_none_root():
    with pytest.raises(EncodeError):
        encode(None)


def test_none_nested():
    with pytest.raises(EncodeError):
        encode(VCompound({"a": None}))


def test_unknown_type():
    with pytest.raises(EncodeError) as ei:
        encode(VList([object()]))
    assert "unsupported value type object" in str(ei.value)


def test_native_types_rejected():
    with pytest.raises(EncodeError):
        encode({"a": 1})


def test_integer_out_of_range():
    with pytest.raises(EncodeError):
        encode(VInteger(2**63))


def test_string_payload_must_be_str():
    with pytest.raises(EncodeError):
        encode(VString(5))


def test_non_str_key():
    with pytest.raises(EncodeError):
        encode(VCompound({1: VInteger(1)}))


# ---------------------------------------------------------------------------
# Indented layout
# ---------------------------------------------------------------------------

def test_indent_layout():
    v = VCompound({"b": VCompound({}), "a": VList([VInteger(1), VInteger(2)])})
    assert encode(v, EncodeOptions(indent=2)) == (
        "{\n"
        "  a: [\n"
        "    1\n"
        "    2\n"
        "  ]\n"
        "  b: {}\n"
        "}"
    )


def test_indent_scalar_root():
    assert encode(VString("x"), EncodeOptions(indent=4)) == '"x"'


def test_negative_indent_rejected():
    with pytest.raises(ValueError):
        EncodeOptions(indent=-1)


# ---------------------------------------------------------------------------
# Depth limit
# ---------------------------------------------------------------------------

def _nested_lists(depth):
    v = VList([])
    for _ in range(depth - 1):
        v = VList([v])
    return v


def test_deep_tree_rejected():
    with pytest.raises(EncodeError) as ei:
        encode(_nested_lists(3000))
    assert "depth limit exceeded" in str(ei.value)


def test_deep_compound_rejected():
    v = VCompound({})
    for _ in range(DEPTH_LIMIT_MAX):
        v = VCompound({"a": v})
    with pytest.raises(EncodeError):
        encode(v)


def test_default_depth_encodes_full_cap():
    text = encode(_nested_lists(DEPTH_LIMIT_MAX))
    assert text.startswith("[ [ ")
    assert text.count("[") == DEPTH_LIMIT_MAX


def test_custom_encode_depth():
    opts = EncodeOptions(max_depth=2)
    assert encode(_nested_lists(2), opts) == "[ [] ]"
    with pytest.raises(EncodeError):
        encode(_nested_lists(3), opts)


def test_encode_max_depth_capped():
    with pytest.raises(ValueError):
        EncodeOptions(max_depth=DEPTH_LIMIT_MAX + 1)
