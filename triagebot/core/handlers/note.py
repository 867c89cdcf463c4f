"""Handler for the `note` command.

Notes live in a single bot comment on the issue, between two HTML markers.
The comment body is the only storage: it is parsed, updated and rewritten on
every command.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import List, Union

from ..models import NoteRemove, NoteSummary
from .base import BaseCommandHandler
from .context import CommandContext

LOGGER = logging.getLogger(__name__)

SUMMARY_START = "<!-- TRIAGEBOT_SUMMARY_START -->"
SUMMARY_END = "<!-- TRIAGEBOT_SUMMARY_END -->"
ENTRY_RE = re.compile(
    r"^- \[(?P<title>(?:\\.|[^\]\\])*)\]\((?P<url>[^)]*)\) by \[@(?P<author>[^\]]+)\]"
)


@dataclass(frozen=True)
class NoteEntry:
    title: str
    url: str
    author: str

    def render(self) -> str:
        title = self.title.replace("\\", "\\\\").replace("]", "\\]")
        return (
            f"- [{title}]({self.url}) by [@{self.author}](https://github.com/{self.author})"
        )


def render_summary(entries: List[NoteEntry]) -> str:
    lines = [SUMMARY_START, "", "### Summary Notes", ""]
    if entries:
        lines.extend(entry.render() for entry in entries)
    else:
        lines.append("*No notes yet.*")
    lines.extend(["", "Generated by triagebot.", SUMMARY_END])
    return "\n".join(lines)


def parse_summary(body: str) -> List[NoteEntry]:
    start = body.find(SUMMARY_START)
    end = body.find(SUMMARY_END)
    if start == -1 or end == -1 or end < start:
        return []
    entries = []
    for line in body[start + len(SUMMARY_START) : end].splitlines():
        match = ENTRY_RE.match(line.strip())
        if not match:
            continue
        title = re.sub(r"\\(.)", r"\1", match.group("title"))
        entries.append(NoteEntry(title=title, url=match.group("url"), author=match.group("author")))
    return entries


class NoteHandler(BaseCommandHandler):
    """Maintains the summary comment of an issue."""

    async def handle(self, command: Union[NoteSummary, NoteRemove], context: CommandContext) -> None:
        config = context.repo.note
        if config is None or not config.enabled:
            LOGGER.debug("Notes are not enabled for %s", context.repo.name)
            return

        event = context.event
        existing = await self._github_manager.find_comment(event.repo, event.issue_number, SUMMARY_START)
        entries = parse_summary(existing.body) if existing else []
        remaining = [entry for entry in entries if entry.title != command.title]

        if isinstance(command, NoteRemove):
            if len(remaining) == len(entries):
                await self._reply_error(context, f"There is no note titled `{command.title}`.")
                return
            entries = remaining
        else:
            entries = remaining + [
                NoteEntry(title=command.title, url=event.html_url, author=event.author)
            ]

        body = render_summary(entries)
        if existing:
            await self._github_manager.edit_comment(event.repo, event.issue_number, existing.id, body)
        else:
            await self._github_manager.post_comment(event.repo, event.issue_number, body)
        LOGGER.info(
            "Updated summary notes on %s#%s (%s entries)", event.repo, event.issue_number, len(entries)
        )
