"""Lexical scanner: turns STD text into tokens.

Structural punctuation is a single character. Quoted strings are returned
raw (escapes untouched); unescaping belongs to the parser. A run starting
with a sign or digit may be a number or a bare-word (``250`` vs ``1-2``);
the longer match wins and a tie goes to the number.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Iterator

from .errors import LexError


class TokenType(Enum):
    LBRACE = "{"
    RBRACE = "}"
    LBRACKET = "["
    RBRACKET = "]"
    COLON = ":"
    COMMA = ","
    STRING = "STRING"
    WORD = "WORD"
    NUMBER = "NUMBER"
    EOF = "EOF"


@dataclass(frozen=True, slots=True)
class Token:
    """A token and where it starts.

    For STRING tokens ``value`` is the body between the quotes, still
    escaped; for every other kind it is the source text.
    """

    type: TokenType
    value: str
    offset: int
    line: int
    column: int


_PUNCTUATION: dict[str, TokenType] = {
    "{": TokenType.LBRACE,
    "}": TokenType.RBRACE,
    "[": TokenType.LBRACKET,
    "]": TokenType.RBRACKET,
    ":": TokenType.COLON,
    ",": TokenType.COMMA,
}

_WHITESPACE = " \t\r\n"

# ASCII digits only: \d would also accept other Unicode digits.
_NUMBER_RE = re.compile(r"[+-]?[0-9]+(?:\.[0-9]+)?(?:[eE][+-]?[0-9]+)?[sSlLfFdD]?")
_WORD_RE = re.compile(r"[A-Za-z0-9_-]+")


def locate(text: str, offset: int) -> tuple[int, int]:
    """Return the 1-based (line, column) of *offset* in *text*."""
    line = text.count("\n", 0, offset) + 1
    line_start = text.rfind("\n", 0, offset) + 1
    return line, offset - line_start + 1


class Scanner:
    """Cursor over the input. ``next_token()`` advances it by one token."""

    def __init__(self, text: str) -> None:
        self._text = text
        self._pos = 0
        self._line = 1
        self._line_start = 0

    def _error(self, message: str, offset: int) -> LexError:
        line, column = locate(self._text, offset)
        return LexError(message, offset, line, column)

    def _skip_whitespace(self) -> None:
        text = self._text
        n = len(text)
        pos = self._pos
        while pos < n and text[pos] in _WHITESPACE:
            if text[pos] == "\n":
                self._line += 1
                self._line_start = pos + 1
            pos += 1
        self._pos = pos

    def _make(self, type_: TokenType, value: str, start: int) -> Token:
        return Token(type_, value, start, self._line, start - self._line_start + 1)

    def next_token(self) -> Token:
        self._skip_whitespace()
        text = self._text
        start = self._pos
        if start >= len(text):
            return self._make(TokenType.EOF, "", start)

        ch = text[start]
        punct = _PUNCTUATION.get(ch)
        if punct is not None:
            self._pos = start + 1
            return self._make(punct, ch, start)

        if ch == '"':
            return self._scan_string(start)

        num = _NUMBER_RE.match(text, start)
        word = _WORD_RE.match(text, start)
        num_len = num.end() - start if num else 0
        word_len = word.end() - start if word else 0

        if num_len and num_len >= word_len:
            end = num.end()
            if end < len(text) and text[end] == ".":
                raise self._error(f"malformed number {text[start:end + 1]!r}", start)
            self._pos = end
            return self._make(TokenType.NUMBER, num.group(), start)

        if word_len:
            self._pos = word.end()
            return self._make(TokenType.WORD, word.group(), start)

        raise self._error(f"invalid character {ch!r}", start)

    def _scan_string(self, start: int) -> Token:
        text = self._text
        n = len(text)
        i = start + 1
        while i < n:
            c = text[i]
            if c == "\\":
                i += 2
                continue
            if c == '"':
                break
            i += 1
        else:
            raise self._error("unterminated string", start)

        body = text[start + 1:i]
        token = self._make(TokenType.STRING, body, start)
        newlines = body.count("\n")
        if newlines:
            self._line += newlines
            self._line_start = start + 1 + body.rfind("\n") + 1
        self._pos = i + 1
        return token


def tokenize(text: str) -> Iterator[Token]:
    """Yield every token of *text*, ending with a single EOF token."""
    scanner = Scanner(text)
    while True:
        tok = scanner.next_token()
        yield tok
        if tok.type is TokenType.EOF:
            return
