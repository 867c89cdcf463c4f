"""Tests for CommentRouter."""

from __future__ import annotations

from dataclasses import replace
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

import pytest

from triagebot.core.config import Config
from triagebot.core.models import Label, MembershipStatus
from triagebot.core.router import CommentRouter


@pytest.fixture
def config(repo_config):
    return Config(
        repos={"rust-lang/compiler-team": repo_config},
        config_dir=Path("/tmp"),
        bot_names=["triagebot"],
    )


@pytest.fixture
def zulip_client():
    client = MagicMock()
    client.send_message = AsyncMock(return_value=1)
    return client


@pytest.fixture
def router(config, github_manager, team_client, zulip_client, test_issue):
    github_manager.get_issue.return_value = test_issue
    return CommentRouter(config, github_manager, team_client, zulip_client)


class TestCommentRouter:
    """Router dispatch tests."""

    @pytest.mark.asyncio
    async def test_plain_comment_is_ignored(self, router, comment_event, github_manager):
        event = replace(comment_event, body="LGTM, thanks for working on this!")

        await router.handle_comment(event)

        github_manager.get_issue.assert_not_awaited()
        assert github_manager.comments == []

    @pytest.mark.asyncio
    async def test_relabel_dispatched(self, router, comment_event, github_manager):
        event = replace(comment_event, body="@triagebot label +T-lang -I-slow")

        await router.handle_comment(event)

        github_manager.add_labels.assert_awaited_once_with(
            "rust-lang/compiler-team", 42, [Label("T-lang")]
        )
        github_manager.remove_label.assert_awaited_once_with(
            "rust-lang/compiler-team", 42, Label("I-slow")
        )

    @pytest.mark.asyncio
    async def test_parse_error_posts_excerpt(self, router, comment_event, github_manager):
        event = replace(comment_event, body="Some context.\n@triagebot note\n")

        await router.handle_comment(event)

        text = github_manager.comments[-1]
        assert text.startswith("**Error**: missing required summary title")
        assert "@triagebot note\n" in text
        assert "               ^" in text

    @pytest.mark.asyncio
    async def test_second_dispatched(self, router, comment_event, team_client, zulip_client):
        team_client.membership.return_value = MembershipStatus.MEMBER
        event = replace(comment_event, body="@triagebot second")

        await router.handle_comment(event)

        zulip_client.send_message.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_second_without_zulip_is_skipped(
        self, config, github_manager, team_client, comment_event, test_issue
    ):
        github_manager.get_issue.return_value = test_issue
        router = CommentRouter(config, github_manager, team_client)
        event = replace(comment_event, body="@triagebot second")

        await router.handle_comment(event)

        team_client.membership.assert_not_awaited()
        assert github_manager.comments == []

    @pytest.mark.asyncio
    async def test_note_dispatched(self, router, comment_event, github_manager):
        event = replace(comment_event, body='@triagebot note "Design notes"')

        await router.handle_comment(event)

        assert "Design notes" in github_manager.comments[-1]

    @pytest.mark.asyncio
    async def test_unconfigured_repo(self, router, comment_event, github_manager):
        event = replace(comment_event, repo="someone/else", body="@triagebot label +T-lang")

        await router.handle_comment(event)

        github_manager.get_issue.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_repo_lookup_is_case_insensitive(self, router, comment_event, github_manager):
        event = replace(comment_event, repo="Rust-Lang/Compiler-Team", body="@triagebot label +T-lang")

        await router.handle_comment(event)

        github_manager.add_labels.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_bot_comments_are_ignored(self, router, comment_event, github_manager):
        event = replace(comment_event, author="triagebot", body="@triagebot label +T-lang")

        await router.handle_comment(event)

        github_manager.get_issue.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_commands_run_in_order(self, router, comment_event, github_manager):
        event = replace(
            comment_event,
            body="@triagebot label +T-lang\n@triagebot note\n@triagebot label -T-lang",
        )

        await router.handle_comment(event)

        assert github_manager.add_labels.await_count == 2
        assert len(github_manager.comments) == 1
        github_manager.remove_label.assert_awaited_once()
