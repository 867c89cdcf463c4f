"""Tests for the Zulip client."""

from __future__ import annotations

from unittest.mock import MagicMock, patch

import pytest
import requests

from triagebot.core.errors import ZulipError
from triagebot.zulip.client import MAX_TOPIC_LENGTH, ZulipClient, zulip_topic_from_issue


class TestTopicName:
    """Tests for zulip_topic_from_issue."""

    def test_short_title(self):
        topic = zulip_topic_from_issue("Promote a target to tier 2", 42, "rust-lang/compiler-team")
        assert topic == "Promote a target to tier 2 compiler-team#42"

    def test_long_title_is_truncated(self):
        title = "Stabilize a very long feature name " * 4
        print(f"\n INPUT: {title!r}")
        topic = zulip_topic_from_issue(title, 1234, "rust-lang/compiler-team")
        print(f" OUTPUT: {topic!r}")
        assert len(topic) == MAX_TOPIC_LENGTH
        assert topic.endswith("… compiler-team#1234")
        assert topic.startswith("Stabilize a very long")

    def test_title_that_just_fits(self):
        ref = "compiler-team#42"
        title = "a" * (MAX_TOPIC_LENGTH - len(ref) - 1)
        topic = zulip_topic_from_issue(title, 42, "rust-lang/compiler-team")
        assert topic == f"{title} {ref}"
        assert len(topic) == MAX_TOPIC_LENGTH


class TestZulipClient:
    """Tests for ZulipClient.send_message."""

    @pytest.fixture
    def client(self):
        return ZulipClient("https://zulip.example.com/", "bot@example.com", "secret")

    @pytest.mark.asyncio
    async def test_send_message(self, client):
        response = MagicMock()
        response.json.return_value = {"result": "success", "id": 99}
        with patch("triagebot.zulip.client.requests.post", return_value=response) as post:
            message_id = await client.send_message(233931, "topic", "hello")

        assert message_id == 99
        url = post.call_args.args[0]
        kwargs = post.call_args.kwargs
        assert url == "https://zulip.example.com/api/v1/messages"
        assert kwargs["data"] == {
            "type": "stream",
            "to": "233931",
            "topic": "topic",
            "content": "hello",
        }
        assert kwargs["auth"] == ("bot@example.com", "secret")

    @pytest.mark.asyncio
    async def test_error_result(self, client):
        response = MagicMock()
        response.json.return_value = {"result": "error", "msg": "Stream does not exist"}
        with patch("triagebot.zulip.client.requests.post", return_value=response):
            with pytest.raises(ZulipError, match="Stream does not exist"):
                await client.send_message(1, "topic", "hello")

    @pytest.mark.asyncio
    async def test_request_failure(self, client):
        with patch(
            "triagebot.zulip.client.requests.post",
            side_effect=requests.ConnectionError("refused"),
        ):
            with pytest.raises(ZulipError, match="refused"):
                await client.send_message(1, "topic", "hello")
