"""Value types for STD Core."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from decimal import Decimal
from typing import ClassVar, Union

_DIGITS_RE = re.compile(r"[0-9]+")

INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1


# ---------------------------------------------------------------------------
# Containers
# ---------------------------------------------------------------------------

@dataclass
class VCompound:
    """Key/value container. Keys keep insertion order in memory."""

    entries: dict[str, "Value"] = field(default_factory=dict)

    def __len__(self) -> int:
        return len(self.entries)

    def __contains__(self, key: str) -> bool:
        return key in self.entries

    def __getitem__(self, key: str) -> "Value":
        return self.entries[key]

    def __setitem__(self, key: str, value: "Value") -> None:
        self.entries[key] = value

    def __delitem__(self, key: str) -> None:
        del self.entries[key]

    def get(self, key: str, default: "Value | None" = None) -> "Value | None":
        return self.entries.get(key, default)

    def has(self, key: str) -> bool:
        return key in self.entries

    def get_string(self, key: str) -> str:
        """Return the text of a string entry, or ``""``."""
        v = self.entries.get(key)
        if isinstance(v, VString):
            return v.value
        return ""

    def get_list(self, key: str) -> list["Value"]:
        """Return the items of a list entry, or an empty list."""
        v = self.entries.get(key)
        if isinstance(v, VList):
            return v.items
        return []

    def get_strings(self, key: str) -> list[str]:
        """Return the string items of a list entry. Non-strings are skipped."""
        return [v.value for v in self.get_list(key) if isinstance(v, VString)]


@dataclass
class VList:
    items: list["Value"] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self):
        return iter(self.items)

    def __getitem__(self, index: int) -> "Value":
        return self.items[index]


# ---------------------------------------------------------------------------
# Scalars
# ---------------------------------------------------------------------------

@dataclass
class VString:
    value: str

    def __str__(self) -> str:
        return self.value


@dataclass
class VBool:
    value: bool

    def __str__(self) -> str:
        return str(self.value).lower()


@dataclass
class VInteger:
    """Bare integer literal, signed 64-bit."""

    value: int

    def __str__(self) -> str:
        return str(self.value)


@dataclass
class VFloatingPoint:
    """Bare literal with a ``.`` or exponent and no suffix."""

    value: float

    def __str__(self) -> str:
        return repr(self.value)


# ---------------------------------------------------------------------------
# Suffixed literals
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class _SuffixLiteral:
    """Numeric literal kept in its written form. Immutable.

    ``int_part`` and ``frac_part`` are the digit strings on either side of
    the ``.``; ``frac_part`` is empty when no fraction was written.
    ``suffix`` keeps the case it was written in.
    """

    sign: int
    int_part: str
    frac_part: str = ""
    suffix: str = ""

    SUFFIXES: ClassVar[str] = ""

    def __post_init__(self) -> None:
        if not self.suffix:
            object.__setattr__(self, "suffix", self.SUFFIXES[0])
        if self.suffix not in self.SUFFIXES:
            raise ValueError(
                f"{type(self).__name__}: suffix must be one of {self.SUFFIXES!r}, "
                f"got {self.suffix!r}"
            )
        if self.sign not in (1, -1):
            raise ValueError(f"{type(self).__name__}: sign must be 1 or -1, got {self.sign!r}")
        if not _DIGITS_RE.fullmatch(self.int_part):
            raise ValueError(f"{type(self).__name__}: bad integer digits {self.int_part!r}")
        if self.frac_part and not _DIGITS_RE.fullmatch(self.frac_part):
            raise ValueError(f"{type(self).__name__}: bad fraction digits {self.frac_part!r}")

    def _number_text(self) -> str:
        s = "-" + self.int_part if self.sign < 0 else self.int_part
        if self.frac_part:
            s += "." + self.frac_part
        return s

    @property
    def value(self) -> float:
        """Host float computed from the preserved digits."""
        return float(self._number_text())

    def to_decimal(self) -> Decimal:
        """Exact decimal value of the written digits."""
        return Decimal(self._number_text())

    def text(self) -> str:
        """Canonical text, identical to what was decoded."""
        return self._number_text() + self.suffix

    def __str__(self) -> str:
        return self.text()


@dataclass(frozen=True)
class VShort(_SuffixLiteral):
    SUFFIXES: ClassVar[str] = "sS"


@dataclass(frozen=True)
class VLong(_SuffixLiteral):
    SUFFIXES: ClassVar[str] = "lL"


@dataclass(frozen=True)
class VFloat(_SuffixLiteral):
    SUFFIXES: ClassVar[str] = "fF"


@dataclass(frozen=True)
class VDecimal(_SuffixLiteral):
    SUFFIXES: ClassVar[str] = "dD"


LITERAL_TYPES: dict[str, type[_SuffixLiteral]] = {
    "s": VShort,
    "l": VLong,
    "f": VFloat,
    "d": VDecimal,
}

SuffixLiteral = Union[VShort, VLong, VFloat, VDecimal]

Value = Union[
    VCompound,
    VList,
    VString,
    VBool,
    VInteger,
    VFloatingPoint,
    VShort,
    VLong,
    VFloat,
    VDecimal,
]

VALUE_TYPES: tuple[type, ...] = (
    VCompound,
    VList,
    VString,
    VBool,
    VInteger,
    VFloatingPoint,
    VShort,
    VLong,
    VFloat,
    VDecimal,
)
