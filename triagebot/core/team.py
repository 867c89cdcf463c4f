"""Team roster lookup."""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Optional, Set

import requests

from .errors import TeamError
from .models import MembershipStatus

LOGGER = logging.getLogger(__name__)


def _logins_from_payload(data: Any) -> Set[str]:
    if isinstance(data, dict) and isinstance(data.get("people"), dict):
        return {str(login).lower() for login in data["people"]}
    if isinstance(data, dict) and isinstance(data.get("members"), list):
        return {str(login).lower() for login in data["members"]}
    raise TeamError("Unexpected team roster format")


class TeamClient:
    """Fetches the roster of team members from a JSON endpoint."""

    def __init__(self, url: Optional[str] = None, *, timeout: float = 10) -> None:
        self._url = url
        self._timeout = timeout

    def fetch_members(self) -> Set[str]:
        if not self._url:
            raise TeamError("TEAM_API_URL is not configured")
        try:
            response = requests.get(self._url, timeout=self._timeout)
            response.raise_for_status()
            data = response.json()
        except requests.RequestException as exc:
            raise TeamError(f"Failed to fetch team roster from {self._url}: {exc}") from exc
        except ValueError as exc:
            raise TeamError(f"Team roster at {self._url} is not valid JSON") from exc
        return _logins_from_payload(data)

    async def is_member(self, login: str) -> bool:
        members = await asyncio.to_thread(self.fetch_members)
        return login.lower() in members

    async def membership(self, login: str) -> MembershipStatus:
        """Return the tri-state membership of ``login``.

        Lookup failures are logged and reported as ``UNKNOWN``, not as a
        negative answer.
        """
        try:
            member = await self.is_member(login)
        except TeamError as exc:
            LOGGER.warning("Failed to check team membership for %s: %s", login, exc)
            return MembershipStatus.UNKNOWN
        return MembershipStatus.MEMBER if member else MembershipStatus.OUTSIDER
