"""Zulip integration."""

from .client import ZulipClient, zulip_topic_from_issue

__all__ = ["ZulipClient", "zulip_topic_from_issue"]
