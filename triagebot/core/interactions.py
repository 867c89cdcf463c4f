"""Replies the bot posts back on issues."""

from __future__ import annotations

from dataclasses import dataclass

from .errors import ParseError

FOOTER = (
    "Please file an issue on the triagebot repository if there's a problem with this bot."
)


def render_parse_error(error: ParseError) -> str:
    """Quote the offending line of the comment with a marker under the error."""
    text = error.text
    position = min(max(error.position, 0), len(text))
    line_start = text.rfind("\n", 0, position) + 1
    line_end = text.find("\n", position)
    if line_end == -1:
        line_end = len(text)
    line = text[line_start:line_end].rstrip("\r")
    column = position - line_start
    marker = " " * column + "^"
    return f"```text\n{line}\n{marker}\n```"


@dataclass(frozen=True)
class ErrorComment:
    message: str

    @classmethod
    def from_parse_error(cls, error: ParseError) -> "ErrorComment":
        return cls(f"{error.message}\n\n{render_parse_error(error)}")

    def body(self) -> str:
        return f"**Error**: {self.message}\n\n{FOOTER}"
