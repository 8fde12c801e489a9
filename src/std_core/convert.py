"""Conversion between value trees and plain Python objects."""

from __future__ import annotations

from typing import Any

from .options import DEPTH_LIMIT_MAX
from .values import (
    VALUE_TYPES,
    Value,
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


def _check_level(level: int) -> None:
    if level >= DEPTH_LIMIT_MAX:
        raise ValueError(f"depth limit exceeded ({DEPTH_LIMIT_MAX})")


def from_python(obj: Any) -> Value:
    """Build a value tree from dict / list / tuple / str / bool / int / float.

    Existing ``Value`` instances are kept as they are, so suffixed literals
    can be mixed into native structures.
    """
    return _from_python(obj, 0)


def _from_python(obj: Any, level: int) -> Value:
    if isinstance(obj, VALUE_TYPES):
        return obj
    if isinstance(obj, dict):
        _check_level(level)
        entries: dict[str, Value] = {}
        for k, v in obj.items():
            if not isinstance(k, str):
                raise TypeError(f"compound keys must be str, got {type(k).__name__}")
            entries[k] = _from_python(v, level + 1)
        return VCompound(entries)
    if isinstance(obj, (list, tuple)):
        _check_level(level)
        return VList([_from_python(v, level + 1) for v in obj])
    if isinstance(obj, str):
        return VString(obj)
    # bool before int: bool is an int subclass
    if isinstance(obj, bool):
        return VBool(obj)
    if isinstance(obj, int):
        return VInteger(obj)
    if isinstance(obj, float):
        return VFloatingPoint(obj)
    raise TypeError(f"cannot convert {type(obj).__name__} to an STD value")


def to_python(value: Value) -> Any:
    """Unwrap a value tree into native objects.

    Suffixed literals have no lossless native form and are returned as is;
    use ``.value`` or ``.to_decimal()`` on them for a number.
    """
    return _to_python(value, 0)


def _to_python(value: Value, level: int) -> Any:
    if isinstance(value, VCompound):
        _check_level(level)
        return {k: _to_python(v, level + 1) for k, v in value.entries.items()}
    if isinstance(value, VList):
        _check_level(level)
        return [_to_python(v, level + 1) for v in value.items]
    if isinstance(value, (VString, VBool, VInteger, VFloatingPoint)):
        return value.value
    if isinstance(value, (VShort, VLong, VFloat, VDecimal)):
        return value
    raise TypeError(f"not an STD value: {type(value).__name__}")
