"""Common utilities for command handlers."""

from __future__ import annotations

from typing import TYPE_CHECKING

from ..interactions import ErrorComment
from .context import CommandContext

if TYPE_CHECKING:
    from ...github import GitHubManager


class BaseCommandHandler:
    """Provides helper methods for replying on the issue."""

    def __init__(self, github_manager: "GitHubManager") -> None:
        self._github_manager = github_manager

    async def _reply(self, context: CommandContext, text: str) -> None:
        await self._github_manager.post_comment(
            context.event.repo, context.event.issue_number, text
        )

    async def _reply_error(self, context: CommandContext, message: str) -> None:
        await self._reply(context, ErrorComment(message).body())
