"""Minimal Zulip REST client."""

from __future__ import annotations

import asyncio
import logging
from typing import Optional

import requests

from ..core.errors import ZulipError

LOGGER = logging.getLogger(__name__)

# Zulip rejects longer topic names.
MAX_TOPIC_LENGTH = 60


def zulip_topic_reference(repo: str, number: int) -> str:
    return f"{repo.rsplit('/', 1)[-1]}#{number}"


def zulip_topic_from_issue(title: str, number: int, repo: str) -> str:
    """Build a topic name from an issue title, truncating to fit Zulip's limit."""
    topic_ref = zulip_topic_reference(repo, number)
    # Room for the title once the reference, a space and the ellipsis are in.
    keep = MAX_TOPIC_LENGTH - len(topic_ref) - 2
    if len(title) > keep + 1:
        return f"{title[:keep]}… {topic_ref}"
    return f"{title} {topic_ref}"


class ZulipClient:
    """Posts stream messages with the bot's API credentials."""

    def __init__(self, url: str, bot_email: str, api_token: str, *, timeout: float = 30) -> None:
        self._url = url.rstrip("/")
        self._auth = (bot_email, api_token)
        self._timeout = timeout

    async def send_message(self, stream_id: int, topic: str, content: str) -> int:
        return await asyncio.to_thread(self._send_message_sync, stream_id, topic, content)

    def _send_message_sync(self, stream_id: int, topic: str, content: str) -> int:
        data = {
            "type": "stream",
            "to": str(stream_id),
            "topic": topic,
            "content": content,
        }
        try:
            response = requests.post(
                f"{self._url}/api/v1/messages",
                data=data,
                auth=self._auth,
                timeout=self._timeout,
            )
            response.raise_for_status()
            payload = response.json()
        except requests.RequestException as exc:
            raise ZulipError(f"Zulip post failed: {exc}") from exc
        except ValueError as exc:
            raise ZulipError("Zulip returned invalid JSON") from exc

        if payload.get("result") != "success":
            raise ZulipError(f"Zulip post failed: {payload.get('msg', 'unknown error')}")
        message_id: Optional[int] = payload.get("id")
        LOGGER.info("Posted Zulip message %s to stream %s topic %r", message_id, stream_id, topic)
        return int(message_id or 0)
