"""Domain models for triagebot."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple, Union


@dataclass(frozen=True, order=True)
class Label:
    """A GitHub label name. Comparison is exact and case-sensitive."""

    name: str

    def __str__(self) -> str:
        return self.name


class DeltaKind(str, Enum):
    ADD = "add"
    REMOVE = "remove"


@dataclass(frozen=True)
class LabelDelta:
    kind: DeltaKind
    label: Label

    @classmethod
    def add(cls, name: str) -> "LabelDelta":
        return cls(DeltaKind.ADD, Label(name))

    @classmethod
    def remove(cls, name: str) -> "LabelDelta":
        return cls(DeltaKind.REMOVE, Label(name))

    def __str__(self) -> str:
        sign = "+" if self.kind == DeltaKind.ADD else "-"
        return f"{sign}{self.label.name}"


class MembershipStatus(str, Enum):
    MEMBER = "member"
    OUTSIDER = "outsider"
    # The membership check itself failed.
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class NoteSummary:
    title: str


@dataclass(frozen=True)
class NoteRemove:
    title: str


@dataclass(frozen=True)
class Second:
    pass


@dataclass(frozen=True)
class Relabel:
    deltas: Tuple[LabelDelta, ...]


Command = Union[NoteSummary, NoteRemove, Second, Relabel]


@dataclass
class RelabelConfig:
    allow_unauthenticated: Tuple[str, ...] = ()


@dataclass
class MajorChangeConfig:
    enabling_label: str
    second_label: str
    zulip_stream: int
    zulip_ping: str


@dataclass
class NoteConfig:
    enabled: bool = True


@dataclass
class RepoConfig:
    name: str
    relabel: Optional[RelabelConfig] = None
    major_change: Optional[MajorChangeConfig] = None
    note: Optional[NoteConfig] = None


@dataclass
class Issue:
    repo: str
    number: int
    title: str
    html_url: str
    labels: List[Label] = field(default_factory=list)

    def has_label(self, name: str) -> bool:
        return any(label.name == name for label in self.labels)


@dataclass
class CommentEvent:
    """A comment posted on an issue or pull request."""

    repo: str
    issue_number: int
    author: str
    body: str
    html_url: str = ""
