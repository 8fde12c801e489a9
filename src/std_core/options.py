"""Decode / encode options."""

from __future__ import annotations

from dataclasses import dataclass

DEPTH_LIMIT_DEFAULT = 256
# Each nesting level costs two Python frames in the parser, the encoder and
# the converters; this keeps a full-depth walk under the default recursion
# limit of 1000.
DEPTH_LIMIT_MAX = 300


def _check_depth(max_depth: int) -> None:
    if not 1 <= max_depth <= DEPTH_LIMIT_MAX:
        raise ValueError(f"max_depth must be between 1 and {DEPTH_LIMIT_MAX}, got {max_depth}")


@dataclass
class DecodeOptions:
    max_depth: int = DEPTH_LIMIT_DEFAULT
    allow_duplicate_keys: bool = True  # last write wins

    def __post_init__(self) -> None:
        _check_depth(self.max_depth)


@dataclass
class EncodeOptions:
    """``indent=None`` renders the canonical single-line form.

    With an integer, every pair / element goes on its own line, commas are
    left out and nested levels are indented by that many spaces.

    ``max_depth`` bounds container nesting; it defaults to the largest depth
    any ``DecodeOptions`` can accept, so every decodable tree encodes.
    """

    indent: int | None = None
    max_depth: int = DEPTH_LIMIT_MAX

    def __post_init__(self) -> None:
        if self.indent is not None and self.indent < 0:
            raise ValueError(f"indent must not be negative, got {self.indent}")
        _check_depth(self.max_depth)
