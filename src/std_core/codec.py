"""Public entry points: decode and encode.

Every call builds its own scanner, parser, builder and encoder, so calls
from several threads never share state.
"""

from __future__ import annotations

import io
import logging
from typing import IO, Union

from .encoder import Encoder
from .errors import LexError
from .options import DecodeOptions, EncodeOptions
from .parser import Parser
from .values import Value

logger = logging.getLogger(__name__)

Source = Union[str, bytes, bytearray, IO[str], IO[bytes]]


def _read_text(source: Source) -> str:
    if hasattr(source, "read"):
        source = source.read()
    if isinstance(source, (bytes, bytearray)):
        try:
            return bytes(source).decode("utf-8-sig")
        except UnicodeDecodeError as exc:
            raise LexError(f"invalid UTF-8 ({exc.reason})", exc.start) from None
    if not isinstance(source, str):
        raise TypeError(f"cannot decode from {type(source).__name__}")
    return source


def decode(source: Source, options: DecodeOptions | None = None) -> Value:
    """Parse a whole STD document and return its root value.

    *source* may be text, UTF-8 bytes, or a readable file object yielding
    either. Raises a ``DecodeError`` subclass on malformed input.
    """
    text = _read_text(source)
    logger.debug("decoding %d characters", len(text))
    value = Parser(text, options).parse()
    logger.debug("decoded root %s", type(value).__name__)
    return value


def encode(
    value: Value,
    fp: IO[str] | IO[bytes] | None = None,
    options: EncodeOptions | None = None,
) -> str:
    """Render *value* as STD text and return it.

    When *fp* is given the text is also written to it; binary sinks get
    UTF-8 bytes. Raises ``EncodeError`` for a missing or unknown value.
    """
    text = Encoder(options).encode(value)
    logger.debug("encoded %s into %d characters", type(value).__name__, len(text))
    if fp is not None:
        if isinstance(fp, (io.RawIOBase, io.BufferedIOBase)) or "b" in str(getattr(fp, "mode", "")):
            fp.write(text.encode("utf-8"))
        else:
            fp.write(text)
    return text
