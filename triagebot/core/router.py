"""Routes issue comments to command handlers."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Awaitable, Callable, Dict, Optional, Type

from .commands.input import CommandInput
from .config import Config
from .errors import ParseError
from .handlers import CommandContext, MajorChangeHandler, NoteHandler, RelabelHandler
from .interactions import ErrorComment
from .models import CommentEvent, NoteRemove, NoteSummary, Relabel, Second
from .team import TeamClient

if TYPE_CHECKING:
    from ..github import GitHubManager
    from ..zulip import ZulipClient

LOGGER = logging.getLogger(__name__)

CommandHandler = Callable[[object, CommandContext], Awaitable[None]]


class CommentRouter:
    """Central orchestrator translating comments into handler calls."""

    def __init__(
        self,
        config: Config,
        github_manager: "GitHubManager",
        team_client: TeamClient,
        zulip_client: Optional["ZulipClient"] = None,
    ) -> None:
        self._config = config
        self._github_manager = github_manager
        self._relabel = RelabelHandler(github_manager=github_manager, team_client=team_client)
        self._notes = NoteHandler(github_manager)
        self._command_handlers: Dict[Type, CommandHandler] = {
            Relabel: self._relabel.handle,
            NoteSummary: self._notes.handle,
            NoteRemove: self._notes.handle,
        }
        if zulip_client is not None:
            self._major_change = MajorChangeHandler(
                github_manager=github_manager,
                team_client=team_client,
                zulip_client=zulip_client,
            )
            self._command_handlers[Second] = self._major_change.handle_second

    async def handle_comment(self, event: CommentEvent) -> None:
        if event.author.lower() in {name.lower() for name in self._config.bot_names}:
            LOGGER.debug("Ignoring comment by the bot itself on %s#%s", event.repo, event.issue_number)
            return

        repo = self._config.get_repo(event.repo)
        if repo is None:
            LOGGER.debug("Ignoring comment on unconfigured repository %s", event.repo)
            return

        items = list(CommandInput(event.body, self._config.bot_names).parse_commands())
        if not items:
            return

        issue = await self._github_manager.get_issue(event.repo, event.issue_number)
        context = CommandContext(event=event, issue=issue, repo=repo)
        for item in items:
            if isinstance(item, ParseError):
                LOGGER.info(
                    "Parse error in comment by %s on %s#%s: %s",
                    event.author,
                    event.repo,
                    event.issue_number,
                    item.message,
                )
                comment = ErrorComment.from_parse_error(item)
                await self._github_manager.post_comment(event.repo, event.issue_number, comment.body())
                continue

            handler = self._command_handlers.get(type(item))
            if handler is None:
                LOGGER.warning("No handler available for %s on %s", type(item).__name__, event.repo)
                continue
            LOGGER.info("Executing %s for %s on %s#%s", item, event.author, event.repo, event.issue_number)
            await handler(item, context)
