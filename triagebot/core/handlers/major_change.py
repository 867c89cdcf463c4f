"""Handler for `second` on major change proposals."""

from __future__ import annotations

import asyncio
import logging

from ..models import Label, MembershipStatus, Second
from ..team import TeamClient
from ...zulip.client import ZulipClient, zulip_topic_from_issue
from .base import BaseCommandHandler
from .context import CommandContext

LOGGER = logging.getLogger(__name__)


class MajorChangeHandler(BaseCommandHandler):
    """Records a second on a proposal and announces it on Zulip."""

    def __init__(
        self,
        *,
        github_manager,
        team_client: TeamClient,
        zulip_client: ZulipClient,
    ) -> None:
        super().__init__(github_manager)
        self._team_client = team_client
        self._zulip_client = zulip_client

    async def handle_second(self, command: Second, context: CommandContext) -> None:
        config = context.repo.major_change
        if config is None:
            LOGGER.debug("Major change proposals are not enabled for %s", context.repo.name)
            return

        issue = context.issue
        event = context.event
        if not issue.has_label(config.enabling_label):
            await self._reply_error(
                context,
                f"This issue cannot be seconded; it lacks the `{config.enabling_label}` label.",
            )
            return

        membership = await self._team_client.membership(event.author)
        if membership == MembershipStatus.UNKNOWN:
            await self._reply_error(
                context,
                "Only team members can second issues; "
                "we were unable to check if you are a team member.",
            )
            return
        if membership != MembershipStatus.MEMBER:
            await self._reply_error(context, "Only team members can second issues.")
            return

        url = event.html_url or issue.html_url
        message = (
            f"@*{config.zulip_ping}*: Proposal [#{issue.number}]({url}) has been seconded, "
            "and will be approved in 10 days if no objections are raised."
        )
        topic = zulip_topic_from_issue(issue.title, issue.number, issue.repo)
        LOGGER.info("Proposal %s#%s seconded by %s", issue.repo, issue.number, event.author)

        await asyncio.gather(
            self._github_manager.add_labels(issue.repo, issue.number, [Label(config.second_label)]),
            self._zulip_client.send_message(config.zulip_stream, topic, message),
        )