"""Shared data passed to command handlers."""

from __future__ import annotations

from dataclasses import dataclass

from ..models import CommentEvent, Issue, RepoConfig


@dataclass(frozen=True)
class CommandContext:
    event: CommentEvent
    issue: Issue
    repo: RepoConfig
