"""Exception hierarchy for STD Core."""

from __future__ import annotations


class STDCoreError(ValueError):
    """Base class for every error raised by the codec."""


# ---------------------------------------------------------------------------
# Decode errors
# ---------------------------------------------------------------------------

class DecodeError(STDCoreError):
    """Raised when input text cannot be turned into a value tree.

    ``offset`` is the 0-based character offset of the problem; ``line`` and
    ``column`` are 1-based and derived from it.
    """

    def __init__(self, message: str, offset: int, line: int = 0, column: int = 0) -> None:
        if line:
            where = f"line {line}, column {column} (offset {offset})"
        else:
            where = f"offset {offset}"
        super().__init__(f"{message} at {where}")
        self.message = message
        self.offset = offset
        self.line = line
        self.column = column


class LexError(DecodeError):
    """Invalid character sequence."""


class STDSyntaxError(DecodeError):
    """Token sequence violates the grammar (also malformed escapes)."""


class NumberRangeError(DecodeError):
    """Integer literal outside the signed 64-bit range."""


# ---------------------------------------------------------------------------
# Encode / internal errors
# ---------------------------------------------------------------------------

class EncodeError(STDCoreError):
    """Raised for a missing or unrecognised value handed to the encoder."""


class BuilderStateError(STDCoreError):
    """Builder stacks are inconsistent. Indicates a parser defect."""
