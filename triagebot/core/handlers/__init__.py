"""Handlers that carry out parsed commands."""

from .context import CommandContext
from .major_change import MajorChangeHandler
from .note import NoteHandler
from .relabel import RelabelHandler

__all__ = ["CommandContext", "MajorChangeHandler", "NoteHandler", "RelabelHandler"]
