"""Tests for NoteHandler and the summary comment format."""

from __future__ import annotations

from dataclasses import replace

import pytest

from triagebot.core.handlers.note import (
    SUMMARY_END,
    SUMMARY_START,
    NoteEntry,
    NoteHandler,
    parse_summary,
    render_summary,
)
from triagebot.core.models import NoteConfig, NoteRemove, NoteSummary
from triagebot.github.client import IssueComment

COMMENT_URL = "https://github.com/rust-lang/compiler-team/issues/42#issuecomment-1"


class TestSummaryFormat:
    """Tests for rendering and reading the summary comment."""

    def test_render_contains_markers(self):
        body = render_summary([NoteEntry("Plan", COMMENT_URL, "alice")])
        print(f"\n OUTPUT:\n{body}")
        assert body.startswith(SUMMARY_START)
        assert body.endswith(SUMMARY_END)
        assert f"- [Plan]({COMMENT_URL}) by [@alice](https://github.com/alice)" in body

    def test_parse_reads_rendered_entries(self):
        entries = [
            NoteEntry("Plan", COMMENT_URL, "alice"),
            NoteEntry("Open [questions]", COMMENT_URL + "2", "bob"),
        ]
        assert parse_summary(render_summary(entries)) == entries

    def test_parse_without_markers(self):
        assert parse_summary("- [Plan](url) by [@alice](x)") == []

    def test_empty_summary(self):
        body = render_summary([])
        assert "*No notes yet.*" in body
        assert parse_summary(body) == []


class TestNoteHandler:
    """Note command handler tests."""

    @pytest.fixture
    def handler(self, github_manager):
        return NoteHandler(github_manager)

    @pytest.mark.asyncio
    async def test_creates_summary_comment(self, handler, command_context, github_manager):
        await handler.handle(NoteSummary(title="Next steps"), command_context)

        body = github_manager.comments[-1]
        assert parse_summary(body) == [NoteEntry("Next steps", COMMENT_URL, "contributor")]
        github_manager.edit_comment.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_updates_existing_summary(self, handler, command_context, github_manager):
        existing = render_summary([NoteEntry("Plan", "u1", "alice")])
        github_manager.find_comment.return_value = IssueComment(id=7, body=existing)

        await handler.handle(NoteSummary(title="Next steps"), command_context)

        repo, number, comment_id, body = github_manager.edit_comment.await_args.args
        assert (repo, number, comment_id) == ("rust-lang/compiler-team", 42, 7)
        assert [entry.title for entry in parse_summary(body)] == ["Plan", "Next steps"]
        assert github_manager.comments == []

    @pytest.mark.asyncio
    async def test_same_title_replaces_entry(self, handler, command_context, github_manager):
        existing = render_summary([NoteEntry("Plan", "u1", "alice")])
        github_manager.find_comment.return_value = IssueComment(id=7, body=existing)

        await handler.handle(NoteSummary(title="Plan"), command_context)

        body = github_manager.edit_comment.await_args.args[3]
        assert parse_summary(body) == [NoteEntry("Plan", COMMENT_URL, "contributor")]

    @pytest.mark.asyncio
    async def test_remove_entry(self, handler, command_context, github_manager):
        existing = render_summary(
            [NoteEntry("Plan", "u1", "alice"), NoteEntry("Risks", "u2", "bob")]
        )
        github_manager.find_comment.return_value = IssueComment(id=7, body=existing)

        await handler.handle(NoteRemove(title="Plan"), command_context)

        body = github_manager.edit_comment.await_args.args[3]
        assert parse_summary(body) == [NoteEntry("Risks", "u2", "bob")]

    @pytest.mark.asyncio
    async def test_remove_missing_entry(self, handler, command_context, github_manager):
        await handler.handle(NoteRemove(title="Plan"), command_context)

        assert "There is no note titled `Plan`" in github_manager.comments[-1]
        github_manager.edit_comment.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_disabled(self, handler, command_context, github_manager):
        context = replace(
            command_context, repo=replace(command_context.repo, note=NoteConfig(enabled=False))
        )

        await handler.handle(NoteSummary(title="Plan"), context)

        github_manager.find_comment.assert_not_awaited()
        assert github_manager.comments == []
