"""Tokenizer for bot commands written in comments.

The tokenizer is a cursor: an immutable position over the original text.
Advancing returns a new cursor, so any number of grammars can try the same
input without disturbing each other. Offsets are always absolute indices into
the original text, which keeps error positions meaningful when only a slice
of a comment is being parsed.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Iterator, Optional, Tuple, Type, Union

from ..errors import LexError, ParseError

WHITESPACE = frozenset(" \t\n\r\x0b\x0c")
# Opening delimiter -> closing delimiter.
QUOTE_PAIRS = {
    '"': '"',
    "“": "”",
}
QUOTE_CHARS = frozenset(QUOTE_PAIRS) | frozenset(QUOTE_PAIRS.values())
ESCAPE = "\\"


@dataclass(frozen=True)
class Word:
    value: str
    start: int
    end: int


@dataclass(frozen=True)
class Quote:
    value: str
    start: int
    end: int


Token = Union[Word, Quote]


@dataclass(frozen=True)
class Tokenizer:
    text: str
    position: int = 0
    end: Optional[int] = None

    @property
    def limit(self) -> int:
        return len(self.text) if self.end is None else self.end

    def peek_token(self) -> Optional[Token]:
        """Return the next token without consuming it."""
        token, _ = self.next_token()
        return token

    def next_token(self) -> Tuple[Optional[Token], "Tokenizer"]:
        """Return the next token and the cursor positioned after it.

        At end of input the token is ``None`` and the cursor sits at the end
        of the slice. Raises ``LexError`` for an unterminated quote.
        """
        text = self.text
        limit = self.limit
        pos = self.position
        while pos < limit:
            ch = text[pos]
            # Closing-only delimiters outside a quote are skipped.
            if ch in WHITESPACE or (ch in QUOTE_CHARS and ch not in QUOTE_PAIRS):
                pos += 1
                continue
            break

        if pos >= limit:
            return None, replace(self, position=limit)
        if text[pos] in QUOTE_PAIRS:
            return self._consume_quote(pos)

        start = pos
        while pos < limit and text[pos] not in WHITESPACE and text[pos] not in QUOTE_CHARS:
            pos += 1
        return Word(text[start:pos], start, pos), replace(self, position=pos)

    def _consume_quote(self, start: int) -> Tuple[Token, "Tokenizer"]:
        text = self.text
        limit = self.limit
        closing = QUOTE_PAIRS[text[start]]
        chars = []
        pos = start + 1
        while pos < limit:
            ch = text[pos]
            if ch == ESCAPE and pos + 1 < limit and text[pos + 1] in (closing, ESCAPE):
                chars.append(text[pos + 1])
                pos += 2
                continue
            if ch == closing:
                pos += 1
                return Quote("".join(chars), start, pos), replace(self, position=pos)
            chars.append(ch)
            pos += 1
        raise LexError(text, start)

    def tokens(self) -> Iterator[Token]:
        cursor = self
        while True:
            token, cursor = cursor.next_token()
            if token is None:
                return
            yield token

    def at_end(self) -> bool:
        return self.peek_token() is None

    def error(self, error_cls: Type[ParseError]) -> ParseError:
        """Build an error anchored at the current position."""
        return error_cls(self.text, self.position)
