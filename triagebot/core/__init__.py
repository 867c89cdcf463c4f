"""Core domain logic for triagebot."""

from .config import Config, load_config
from .errors import (
    ConfigError,
    EmptyLabel,
    GitHubError,
    LexError,
    MissingTitle,
    NoLabel,
    ParseError,
    TeamError,
    TriagebotError,
    UnknownLabels,
    ZulipError,
)
from .models import (
    Command,
    CommentEvent,
    DeltaKind,
    Issue,
    Label,
    LabelDelta,
    MajorChangeConfig,
    MembershipStatus,
    NoteConfig,
    NoteRemove,
    NoteSummary,
    Relabel,
    RelabelConfig,
    RepoConfig,
    Second,
)

__all__ = [
    "Config",
    "load_config",
    "Command",
    "CommentEvent",
    "DeltaKind",
    "Issue",
    "Label",
    "LabelDelta",
    "MajorChangeConfig",
    "MembershipStatus",
    "NoteConfig",
    "NoteRemove",
    "NoteSummary",
    "Relabel",
    "RelabelConfig",
    "RepoConfig",
    "Second",
    "TriagebotError",
    "ConfigError",
    "GitHubError",
    "UnknownLabels",
    "ZulipError",
    "TeamError",
    "ParseError",
    "LexError",
    "MissingTitle",
    "NoLabel",
    "EmptyLabel",
]
