"""Custom exception hierarchy for triagebot."""

from __future__ import annotations


class TriagebotError(Exception):
    """Base error type."""


class ConfigError(TriagebotError):
    pass


class GitHubError(TriagebotError):
    pass


class UnknownLabels(GitHubError):
    """Raised when labels requested for an issue do not exist in the repository."""

    def __init__(self, labels: list[str]) -> None:
        self.labels = list(labels)
        rendered = ", ".join(self.labels)
        super().__init__(f"Unknown labels: {rendered}")


class ZulipError(TriagebotError):
    pass


class TeamError(TriagebotError):
    """Raised when the team roster cannot be fetched or decoded."""
    pass


class ParseError(TriagebotError):
    """A command could not be parsed.

    Carries the full input text and the position (string index) at which
    parsing stopped so replies can point at the offending spot.
    """

    message = "parse error"

    def __init__(self, text: str, position: int, message: str | None = None) -> None:
        self.text = text
        self.position = position
        if message is not None:
            self.message = message
        super().__init__(self.message)

    @property
    def byte_offset(self) -> int:
        """Offset of the error in the UTF-8 encoding of the input."""
        return len(self.text[: self.position].encode("utf-8"))

    def __str__(self) -> str:
        space = 10
        start = max(self.position - space, 0)
        end = min(len(self.text), self.position + space)
        before = self.text[start : self.position]
        after = self.text[self.position : end]
        return f"...'{before}' | error: {self.message} at >| '{after}'..."


class LexError(ParseError):
    message = "unterminated quoted string"


class MissingTitle(ParseError):
    message = "missing required summary title"


class NoLabel(ParseError):
    message = "no label specified"


class EmptyLabel(ParseError):
    message = "empty label"
