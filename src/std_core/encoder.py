"""Encoder: renders a value tree as canonical STD text."""

from __future__ import annotations

import math
import re

from .errors import EncodeError
from .options import EncodeOptions
from .values import (
    INT64_MAX,
    INT64_MIN,
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

_IDENT_RE = re.compile(r"[A-Za-z_][A-Za-z0-9_-]*")
_ESCAPE_RE = re.compile(r'[\\"\x00-\x1f]')
_SHORT_ESCAPES = {
    "\\": "\\\\",
    '"': '\\"',
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
}


def _escape_char(m: re.Match) -> str:
    ch = m.group()
    return _SHORT_ESCAPES.get(ch) or f"\\u{ord(ch):04x}"


def quote_string(s: str) -> str:
    """Quote *s*; non-ASCII text is written as is."""
    return '"' + _ESCAPE_RE.sub(_escape_char, s) + '"'


def format_key(key: str) -> str:
    if _IDENT_RE.fullmatch(key):
        return key
    return quote_string(key)


def format_float(f: float) -> str:
    if not math.isfinite(f):
        raise EncodeError(f"cannot encode non-finite float {f!r}")
    s = repr(f)
    if not any(c in s for c in ".eE"):
        s += ".0"
    return s


class Encoder:
    """Collects the text of one value. Not reusable across calls."""

    def __init__(self, options: EncodeOptions | None = None) -> None:
        options = options or EncodeOptions()
        self._indent = options.indent
        self._max_depth = options.max_depth
        self._parts: list[str] = []

    def encode(self, value: Value) -> str:
        self._value(value, 0)
        return "".join(self._parts)

    def _value(self, value: Value, level: int) -> None:
        write = self._parts.append
        if value is None:
            raise EncodeError("cannot encode a missing value (None)")
        if isinstance(value, VCompound):
            self._compound(value, level)
        elif isinstance(value, VList):
            self._list(value, level)
        elif isinstance(value, VString):
            if not isinstance(value.value, str):
                raise EncodeError(f"VString holds {type(value.value).__name__}, not str")
            write(quote_string(value.value))
        elif isinstance(value, VBool):
            write("true" if value.value else "false")
        elif isinstance(value, VInteger):
            if isinstance(value.value, bool) or not isinstance(value.value, int):
                raise EncodeError(f"VInteger holds {type(value.value).__name__}, not int")
            if not INT64_MIN <= value.value <= INT64_MAX:
                raise EncodeError(f"integer {value.value} out of 64-bit range")
            write(str(value.value))
        elif isinstance(value, VFloatingPoint):
            write(format_float(float(value.value)))
        elif isinstance(value, (VShort, VLong, VFloat, VDecimal)):
            write(value.text())
        else:
            raise EncodeError(f"unsupported value type {type(value).__name__}")

    # -- containers -----------------------------------------------------

    def _enter(self, level: int) -> None:
        if level >= self._max_depth:
            raise EncodeError(f"depth limit exceeded ({self._max_depth})")

    def _compound(self, c: VCompound, level: int) -> None:
        self._enter(level)
        write = self._parts.append
        if not c.entries:
            write("{}")
            return
        for key in c.entries:
            if not isinstance(key, str):
                raise EncodeError(f"compound key must be str, got {type(key).__name__}")
        write("{")
        for i, key in enumerate(sorted(c.entries)):
            self._separator(i, level + 1)
            write(format_key(key))
            write(": ")
            self._value(c.entries[key], level + 1)
        self._closing(level)
        write("}")

    def _list(self, lst: VList, level: int) -> None:
        self._enter(level)
        write = self._parts.append
        if not lst.items:
            write("[]")
            return
        write("[")
        for i, item in enumerate(lst.items):
            self._separator(i, level + 1)
            self._value(item, level + 1)
        self._closing(level)
        write("]")

    def _separator(self, index: int, level: int) -> None:
        if self._indent is None:
            self._parts.append(" " if index == 0 else ", ")
        else:
            self._parts.append("\n" + " " * (self._indent * level))

    def _closing(self, level: int) -> None:
        if self._indent is None:
            self._parts.append(" ")
        else:
            self._parts.append("\n" + " " * (self._indent * level))


def encode(value: Value, options: EncodeOptions | None = None) -> str:
    """Render *value* as STD text."""
    return Encoder(options).encode(value)
