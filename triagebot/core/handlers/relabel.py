"""Handler for the `label` command.

Anyone may change the labels matched by the repo's ``allow-unauthenticated``
patterns; team members may change any label. Labels must already exist in the
repository. A successful change gets no reply, to keep notifications quiet.
"""

from __future__ import annotations

import logging
from typing import Optional

from ..acl import CheckFilterResult, check_filter
from ..errors import ConfigError, GitHubError, UnknownLabels
from ..labels import compute_label_deltas
from ..models import MembershipStatus, Relabel
from ..team import TeamClient
from .base import BaseCommandHandler
from .context import CommandContext

LOGGER = logging.getLogger(__name__)


def denial_message(label: str, result: CheckFilterResult) -> Optional[str]:
    if result == CheckFilterResult.DENY:
        return f"Label {label} can only be set by team members"
    if result == CheckFilterResult.DENY_UNKNOWN:
        return (
            f"Label {label} can only be set by team members; "
            "we were unable to check if you are a team member."
        )
    return None


class RelabelHandler(BaseCommandHandler):
    """Authorizes and applies label changes."""

    def __init__(self, *, github_manager, team_client: TeamClient) -> None:
        super().__init__(github_manager)
        self._team_client = team_client

    async def handle(self, command: Relabel, context: CommandContext) -> None:
        config = context.repo.relabel
        if config is None:
            LOGGER.debug("Relabeling is not enabled for %s", context.repo.name)
            return

        event = context.event
        membership: Optional[MembershipStatus] = None
        for delta in command.deltas:
            name = delta.label.name
            if membership is None:
                membership = await self._team_client.membership(event.author)
            try:
                result = check_filter(name, membership, config.allow_unauthenticated)
            except ConfigError as exc:
                LOGGER.error("Invalid relabel configuration for %s: %s", context.repo.name, exc)
                await self._reply_error(
                    context, f"Unable to check permissions for label {name}."
                )
                return
            message = denial_message(name, result)
            if message:
                LOGGER.info("Denied label change %s by %s on %s#%s", delta, event.author, event.repo, event.issue_number)
                await self._reply_error(context, message)
                return

        to_add, to_remove = compute_label_deltas(command.deltas)
        LOGGER.info(
            "Relabeling %s#%s for %s: add=%s remove=%s",
            event.repo,
            event.issue_number,
            event.author,
            [label.name for label in to_add],
            [label.name for label in to_remove],
        )

        try:
            await self._github_manager.add_labels(event.repo, event.issue_number, to_add)
        except UnknownLabels as exc:
            LOGGER.error("Failed to add %s to %s#%s: %s", to_add, event.repo, event.issue_number, exc)
            await self._reply(context, str(exc))
            raise
        except GitHubError as exc:
            LOGGER.error("Failed to add %s to %s#%s: %s", to_add, event.repo, event.issue_number, exc)
            raise

        for label in to_remove:
            try:
                await self._github_manager.remove_label(event.repo, event.issue_number, label)
            except GitHubError as exc:
                LOGGER.error("Failed to remove %s from %s#%s: %s", label, event.repo, event.issue_number, exc)
                raise
