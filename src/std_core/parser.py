"""Recursive-descent parser: tokens in, builder actions out.

Grammar::

    document := value EOF
    value    := compound | list | string | number | bool
    compound := '{' (key ':' value [','])* '}'
    list     := '[' (value [','])* ']'
    key      := bare-word | string | number spelled like a bare-word

Commas between items are optional; a newline (or any whitespace) is an
equally good separator and a trailing comma is tolerated.
"""

from __future__ import annotations

import math
import re

from .builder import Builder
from .errors import NumberRangeError, STDSyntaxError
from .options import DecodeOptions
from .scanner import Scanner, Token, TokenType, locate
from .values import (
    INT64_MAX,
    INT64_MIN,
    LITERAL_TYPES,
    Value,
    VBool,
    VFloatingPoint,
    VInteger,
    VString,
)

_NUMBER_PARTS_RE = re.compile(
    r"(?P<sign>[+-]?)(?P<int>[0-9]+)(?:\.(?P<frac>[0-9]+))?"
    r"(?P<exp>[eE][+-]?[0-9]+)?(?P<suffix>[sSlLfFdD]?)"
)
_KEY_WORD_RE = re.compile(r"[A-Za-z0-9_-]+")

_BOOLEANS = {"true": True, "false": False}

_SIMPLE_ESCAPES = {
    '"': '"',
    "\\": "\\",
    "/": "/",
    "b": "\b",
    "f": "\f",
    "n": "\n",
    "r": "\r",
    "t": "\t",
}

_HEX = frozenset("0123456789abcdefABCDEF")


# ---------------------------------------------------------------------------
# Literal conversion
# ---------------------------------------------------------------------------

def unescape_string(body: str, body_offset: int = 0, text: str | None = None) -> str:
    """Decode the escapes in a raw string body.

    *body_offset* is where *body* starts in *text*; both are only used to
    place errors.
    """
    if "\\" not in body:
        return body

    def fail(message: str, i: int) -> STDSyntaxError:
        offset = body_offset + i
        line, column = locate(text, offset) if text is not None else (0, 0)
        return STDSyntaxError(message, offset, line, column)

    out: list[str] = []
    i = 0
    n = len(body)
    while i < n:
        ch = body[i]
        if ch != "\\":
            out.append(ch)
            i += 1
            continue
        if i + 1 >= n:
            raise fail("trailing backslash in string", i)
        esc = body[i + 1]
        if esc in _SIMPLE_ESCAPES:
            out.append(_SIMPLE_ESCAPES[esc])
            i += 2
            continue
        if esc != "u":
            raise fail(f"invalid escape \\{esc}", i)

        code = _hex4(body, i, fail)
        i += 6
        if 0xD800 <= code <= 0xDBFF:
            # high surrogate: must be followed by \uDC00-\uDFFF
            if body.startswith("\\u", i):
                low = _hex4(body, i, fail)
                if 0xDC00 <= low <= 0xDFFF:
                    out.append(chr(0x10000 + ((code - 0xD800) << 10) + (low - 0xDC00)))
                    i += 6
                    continue
            raise fail("unpaired surrogate in string", i - 6)
        if 0xDC00 <= code <= 0xDFFF:
            raise fail("unpaired surrogate in string", i - 6)
        out.append(chr(code))
    return "".join(out)


def _hex4(body: str, i: int, fail) -> int:
    digits = body[i + 2:i + 6]
    if len(digits) < 4:
        raise fail("short unicode escape", i)
    if not all(c in _HEX for c in digits):
        raise fail(f"invalid hex escape \\u{digits}", i)
    return int(digits, 16)


def number_value(tok: Token) -> Value:
    """Classify a NUMBER token into the matching value variant."""
    m = _NUMBER_PARTS_RE.fullmatch(tok.value)
    if m is None:
        raise STDSyntaxError(f"malformed number {tok.value!r}", tok.offset, tok.line, tok.column)

    suffix = m.group("suffix")
    if suffix:
        if m.group("exp"):
            raise STDSyntaxError(
                f"exponent not allowed on suffixed number {tok.value!r}",
                tok.offset, tok.line, tok.column,
            )
        cls = LITERAL_TYPES[suffix.lower()]
        return cls(
            sign=-1 if m.group("sign") == "-" else 1,
            int_part=m.group("int"),
            frac_part=m.group("frac") or "",
            suffix=suffix,
        )

    if m.group("frac") is not None or m.group("exp"):
        f = float(tok.value)
        if math.isinf(f):
            raise NumberRangeError(
                f"floating-point literal {_abbreviate(tok.value)!r} out of range",
                tok.offset, tok.line, tok.column,
            )
        return VFloatingPoint(f)

    # int64 has at most 19 significant digits; longer runs are rejected
    # before int() so huge literals never reach the conversion limit
    digits = m.group("int").lstrip("0") or "0"
    i = int(digits) if len(digits) <= 19 else None
    if i is not None and m.group("sign") == "-":
        i = -i
    if i is None or not INT64_MIN <= i <= INT64_MAX:
        raise NumberRangeError(
            f"integer literal {_abbreviate(tok.value)!r} out of 64-bit range",
            tok.offset, tok.line, tok.column,
        )
    return VInteger(i)


def _abbreviate(text: str, limit: int = 40) -> str:
    return text if len(text) <= limit else text[:limit] + "..."


# ---------------------------------------------------------------------------
# Parser
# ---------------------------------------------------------------------------

def _describe(tok: Token) -> str:
    if tok.type is TokenType.EOF:
        return "end of input"
    if tok.type is TokenType.STRING:
        return f'STRING "{tok.value}"'
    return f"{tok.type.name} {tok.value!r}"


class Parser:
    """Single-use parser for one document.

    Holds one token of lookahead and drives its own ``Builder``.
    """

    def __init__(self, text: str, options: DecodeOptions | None = None) -> None:
        self._text = text
        self._options = options or DecodeOptions()
        self._scanner = Scanner(text)
        self._tok = self._scanner.next_token()
        self.builder = Builder()

    # -- token helpers --------------------------------------------------

    def _advance(self) -> Token:
        tok = self._tok
        self._tok = self._scanner.next_token()
        return tok

    def _error(self, tok: Token, expected: str) -> STDSyntaxError:
        if tok.type is TokenType.EOF:
            msg = f"unexpected end of input - expected {expected}"
        else:
            msg = f"unexpected token {_describe(tok)} - expected {expected}"
        return STDSyntaxError(msg, tok.offset, tok.line, tok.column)

    def _expect(self, type_: TokenType, expected: str) -> Token:
        if self._tok.type is not type_:
            raise self._error(self._tok, expected)
        return self._advance()

    def _enter(self, tok: Token) -> None:
        if self.builder.depth >= self._options.max_depth:
            raise STDSyntaxError(
                f"depth limit exceeded ({self._options.max_depth})",
                tok.offset, tok.line, tok.column,
            )

    # -- grammar --------------------------------------------------------

    def parse(self) -> Value:
        self._value()
        if self._tok.type is not TokenType.EOF:
            tok = self._tok
            raise STDSyntaxError(
                f"extra data after root value: {_describe(tok)}",
                tok.offset, tok.line, tok.column,
            )
        return self.builder.result()

    def _value(self) -> None:
        tok = self._tok
        t = tok.type
        if t is TokenType.LBRACE:
            self._compound()
        elif t is TokenType.LBRACKET:
            self._list()
        elif t is TokenType.STRING:
            self._advance()
            self.builder.push_scalar(VString(self._string(tok)))
        elif t is TokenType.NUMBER:
            self._advance()
            self.builder.push_scalar(number_value(tok))
        elif t is TokenType.WORD:
            if tok.value not in _BOOLEANS:
                raise STDSyntaxError(
                    f"bare word {tok.value!r} is not a value (quote it as a string)",
                    tok.offset, tok.line, tok.column,
                )
            self._advance()
            self.builder.push_scalar(VBool(_BOOLEANS[tok.value]))
        else:
            raise self._error(tok, "value")

    def _compound(self) -> None:
        self._enter(self._tok)
        self._advance()
        self.builder.begin_compound()
        seen: set[str] | None = None if self._options.allow_duplicate_keys else set()

        while self._tok.type is not TokenType.RBRACE:
            key_tok = self._tok
            key = self._key()
            if seen is not None:
                if key in seen:
                    raise STDSyntaxError(
                        f"duplicate key {key!r}", key_tok.offset, key_tok.line, key_tok.column
                    )
                seen.add(key)
            self._expect(TokenType.COLON, "':'")
            self.builder.set_pending_key(key)
            self._value()
            self.builder.commit_pair()
            if self._tok.type is TokenType.COMMA:
                self._advance()

        self._advance()
        self.builder.end_compound()

    def _list(self) -> None:
        self._enter(self._tok)
        self._advance()
        self.builder.begin_list()

        while self._tok.type is not TokenType.RBRACKET:
            if self._tok.type in (TokenType.COMMA, TokenType.EOF):
                raise self._error(self._tok, "value or ']'")
            self._value()
            self.builder.commit_list_item()
            if self._tok.type is TokenType.COMMA:
                self._advance()

        self._advance()
        self.builder.end_list()

    def _key(self) -> str:
        tok = self._tok
        if tok.type is TokenType.WORD:
            self._advance()
            return tok.value
        if tok.type is TokenType.STRING:
            self._advance()
            return self._string(tok)
        if tok.type is TokenType.NUMBER and _KEY_WORD_RE.fullmatch(tok.value):
            self._advance()
            return tok.value
        raise self._error(tok, "key or '}'")

    def _string(self, tok: Token) -> str:
        return unescape_string(tok.value, tok.offset + 1, self._text)


def parse(text: str, options: DecodeOptions | None = None) -> Value:
    """Parse a complete STD document held in *text*."""
    return Parser(text, options).parse()
