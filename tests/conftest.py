"""Shared fixtures for handler and router tests."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock

import pytest

from triagebot.core.handlers.context import CommandContext
from triagebot.core.models import (
    CommentEvent,
    Issue,
    Label,
    MajorChangeConfig,
    MembershipStatus,
    NoteConfig,
    RelabelConfig,
    RepoConfig,
)


@pytest.fixture
def github_manager():
    """GitHub manager double that records posted comments."""

    manager = MagicMock()
    comments: list[str] = []

    async def _post(repo: str, number: int, body: str) -> int:
        print(f"\n{'='*60}")
        print(f"GITHUB COMMENT on {repo}#{number}")
        print(f"{'-'*60}")
        print(body)
        print(f"{'='*60}\n")
        comments.append(body)
        return len(comments)

    manager.post_comment = AsyncMock(side_effect=_post)
    manager.comments = comments
    manager.add_labels = AsyncMock()
    manager.remove_label = AsyncMock()
    manager.edit_comment = AsyncMock()
    manager.find_comment = AsyncMock(return_value=None)
    manager.get_issue = AsyncMock()
    return manager


@pytest.fixture
def team_client():
    client = MagicMock()
    client.membership = AsyncMock(return_value=MembershipStatus.OUTSIDER)
    return client


@pytest.fixture
def repo_config():
    return RepoConfig(
        name="rust-lang/compiler-team",
        relabel=RelabelConfig(allow_unauthenticated=("T-*", "I-*", "!I-*nominated")),
        major_change=MajorChangeConfig(
            enabling_label="major-change",
            second_label="final-comment-period",
            zulip_stream=233931,
            zulip_ping="T-compiler",
        ),
        note=NoteConfig(),
    )


@pytest.fixture
def test_issue():
    return Issue(
        repo="rust-lang/compiler-team",
        number=42,
        title="Promote a target to tier 2",
        html_url="https://github.com/rust-lang/compiler-team/issues/42",
        labels=[Label("major-change"), Label("T-compiler")],
    )


@pytest.fixture
def comment_event():
    return CommentEvent(
        repo="rust-lang/compiler-team",
        issue_number=42,
        author="contributor",
        body="",
        html_url="https://github.com/rust-lang/compiler-team/issues/42#issuecomment-1",
    )


@pytest.fixture
def command_context(comment_event, test_issue, repo_config):
    return CommandContext(event=comment_event, issue=test_issue, repo=repo_config)
