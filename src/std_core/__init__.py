"""STD Core: codec for stringified typed data (STD) text."""

from .codec import decode, encode
from .convert import from_python, to_python
from .errors import (
    BuilderStateError,
    DecodeError,
    EncodeError,
    LexError,
    NumberRangeError,
    STDCoreError,
    STDSyntaxError,
)
from .options import DecodeOptions, EncodeOptions
from .values import (
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

__all__ = [
    "decode",
    "encode",
    "from_python",
    "to_python",
    "DecodeOptions",
    "EncodeOptions",
    "Value",
    "VBool",
    "VCompound",
    "VDecimal",
    "VFloat",
    "VFloatingPoint",
    "VInteger",
    "VList",
    "VLong",
    "VShort",
    "VString",
    "STDCoreError",
    "DecodeError",
    "LexError",
    "STDSyntaxError",
    "NumberRangeError",
    "EncodeError",
    "BuilderStateError",
]
