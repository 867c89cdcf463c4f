"""Finds bot commands inside a comment body.

A command starts right after a mention of the bot (``@triagebot``) and runs to
the end of that line. Mentions inside code (fenced blocks, indented blocks and
inline code spans) are ignored so quoted examples are never executed.
"""

from __future__ import annotations

import logging
import re
from typing import Iterator, List, Optional, Sequence, Tuple, Union

from ..errors import ParseError
from ..models import Command
from .dispatcher import CommandDispatcher
from .tokenizer import Tokenizer

LOGGER = logging.getLogger(__name__)

# A fence closes on a run of the same character at least as long as the opener.
FENCED_CODE = re.compile(
    r"^[ ]{0,3}(`{3,}|~{3,})[^\n]*\n.*?(?:^[ ]{0,3}\1(?:(?<=`)`*|(?<=~)~*)[ \t]*$|\Z)",
    re.MULTILINE | re.DOTALL,
)
# Code spans never cross a blank line.
INLINE_CODE = re.compile(r"(`+)(?!`)(?:(?!\n[ \t]*\n).)+?(?<!`)\1(?!`)", re.DOTALL)
INDENT = re.compile(r"^(?: {4}|\t)")
LIST_ITEM = re.compile(r"^[ ]{0,3}(?:[-*+]|\d{1,9}[.)])(?:[ \t]|$)")

ParsedItem = Union[Command, ParseError]


def _indented_code_ranges(text: str) -> List[Tuple[int, int]]:
    ranges: List[Tuple[int, int]] = []
    offset = 0
    previous_blank = True
    in_block = False
    in_list = False
    for line in text.splitlines(keepends=True):
        stripped = line.strip()
        indented = bool(INDENT.match(line))
        # Indented lines under a list item continue the item.
        if indented and stripped and not in_list and (previous_blank or in_block):
            ranges.append((offset, offset + len(line)))
            in_block = True
        elif stripped:
            in_block = False
            if not indented:
                in_list = bool(LIST_ITEM.match(line)) or (in_list and not previous_blank)
        previous_blank = not stripped
        offset += len(line)
    return ranges


def code_ranges(text: str) -> List[Tuple[int, int]]:
    """Return the (start, end) spans of ``text`` that are code."""
    ranges = [match.span() for match in FENCED_CODE.finditer(text)]

    def _inside_fence(pos: int) -> bool:
        return any(start <= pos < end for start, end in ranges)

    for match in INLINE_CODE.finditer(text):
        if not _inside_fence(match.start()):
            ranges.append(match.span())
    for span in _indented_code_ranges(text):
        if not _inside_fence(span[0]):
            ranges.append(span)
    return sorted(ranges)


class CommandInput:
    """Iterates over the commands addressed to the bot in one comment."""

    def __init__(
        self,
        text: str,
        bot_names: Sequence[str],
        dispatcher: Optional[CommandDispatcher] = None,
    ) -> None:
        if not bot_names:
            raise ValueError("at least one bot name is required")
        self._text = text
        self._dispatcher = dispatcher or CommandDispatcher()
        names = "|".join(re.escape(name) for name in bot_names)
        self._mention = re.compile(rf"(?<![\w@/])@(?:{names})(?![\w-])", re.IGNORECASE)
        self._code = code_ranges(text)

    def _in_code(self, pos: int) -> bool:
        return any(start <= pos < end for start, end in self._code)

    def parse_commands(self) -> Iterator[ParsedItem]:
        """Yield each command or parse error in order of appearance."""
        text = self._text
        pos = 0
        while True:
            match = self._mention.search(text, pos)
            if match is None:
                return
            if self._in_code(match.start()):
                pos = match.end()
                continue

            line_end = text.find("\n", match.end())
            if line_end == -1:
                line_end = len(text)
            toks = Tokenizer(text, position=match.end(), end=line_end)
            try:
                result = self._dispatcher.parse(toks)
            except ParseError as exc:
                LOGGER.debug("Failed to parse command at offset %s: %s", exc.position, exc)
                yield exc
                pos = line_end
                continue

            if result is None:
                pos = match.end()
                continue
            command, toks = result
            yield command
            pos = max(toks.position, match.end())
