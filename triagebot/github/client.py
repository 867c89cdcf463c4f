"""Lightweight GitHub client helpers."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Iterable, List, Optional

from github import Github, GithubException, UnknownObjectException
from github.Issue import Issue as GithubIssue
from github.Repository import Repository

from ..core.errors import GitHubError, UnknownLabels
from ..core.models import Issue, Label

LOGGER = logging.getLogger(__name__)


@dataclass
class IssueComment:
    id: int
    body: str


class GitHubManager:
    """Wrapper around PyGithub that exposes async helpers."""

    def __init__(self, token: Optional[str]) -> None:
        self._client = Github(token) if token else None

    def is_configured(self) -> bool:
        return self._client is not None

    async def get_issue(self, repo: str, number: int) -> Issue:
        return await asyncio.to_thread(self._get_issue_sync, repo, number)

    async def add_labels(self, repo: str, number: int, labels: List[Label]) -> None:
        await asyncio.to_thread(self._add_labels_sync, repo, number, labels)

    async def remove_label(self, repo: str, number: int, label: Label) -> None:
        await asyncio.to_thread(self._remove_label_sync, repo, number, label)

    async def post_comment(self, repo: str, number: int, body: str) -> int:
        return await asyncio.to_thread(self._post_comment_sync, repo, number, body)

    async def edit_comment(self, repo: str, number: int, comment_id: int, body: str) -> None:
        await asyncio.to_thread(self._edit_comment_sync, repo, number, comment_id, body)

    async def find_comment(self, repo: str, number: int, marker: str) -> Optional[IssueComment]:
        """Return the first comment on the issue whose body contains ``marker``."""
        return await asyncio.to_thread(self._find_comment_sync, repo, number, marker)

    def _get_issue_sync(self, repo: str, number: int) -> Issue:
        issue = self._load_issue(repo, number)
        return Issue(
            repo=repo,
            number=issue.number,
            title=issue.title,
            html_url=issue.html_url,
            labels=[Label(label.name) for label in issue.labels],
        )

    def _add_labels_sync(self, repo: str, number: int, labels: List[Label]) -> None:
        if not labels:
            return
        repository = self._get_repo(repo)
        try:
            known = {label.name for label in repository.get_labels()}
        except GithubException as exc:
            raise GitHubError(f"Failed to list labels of {repo}: {exc}") from exc
        unknown = [label.name for label in labels if label.name not in known]
        if unknown:
            raise UnknownLabels(unknown)

        issue = self._load_issue(repo, number, repository)
        try:
            issue.add_to_labels(*(label.name for label in labels))
        except GithubException as exc:
            raise GitHubError(f"Failed to add labels to {repo}#{number}: {exc}") from exc
        LOGGER.info("Added labels %s to %s#%s", _names(labels), repo, number)

    def _remove_label_sync(self, repo: str, number: int, label: Label) -> None:
        issue = self._load_issue(repo, number)
        try:
            issue.remove_from_labels(label.name)
        except UnknownObjectException:
            LOGGER.debug("Label %s was not set on %s#%s", label.name, repo, number)
            return
        except GithubException as exc:
            raise GitHubError(
                f"Failed to remove label {label.name} from {repo}#{number}: {exc}"
            ) from exc
        LOGGER.info("Removed label %s from %s#%s", label.name, repo, number)

    def _post_comment_sync(self, repo: str, number: int, body: str) -> int:
        issue = self._load_issue(repo, number)
        try:
            comment = issue.create_comment(body)
        except GithubException as exc:
            raise GitHubError(f"Failed to comment on {repo}#{number}: {exc}") from exc
        return comment.id

    def _edit_comment_sync(self, repo: str, number: int, comment_id: int, body: str) -> None:
        issue = self._load_issue(repo, number)
        try:
            issue.get_comment(comment_id).edit(body)
        except GithubException as exc:
            raise GitHubError(f"Failed to edit comment {comment_id} on {repo}#{number}: {exc}") from exc

    def _find_comment_sync(self, repo: str, number: int, marker: str) -> Optional[IssueComment]:
        issue = self._load_issue(repo, number)
        try:
            for comment in issue.get_comments():
                if marker in (comment.body or ""):
                    return IssueComment(id=comment.id, body=comment.body or "")
        except GithubException as exc:
            raise GitHubError(f"Failed to list comments on {repo}#{number}: {exc}") from exc
        return None

    def _get_repo(self, repo: str) -> Repository:
        if not self._client:
            raise GitHubError("GitHub token is not configured.")
        try:
            return self._client.get_repo(repo)
        except GithubException as exc:
            raise GitHubError(f"Failed to load repository {repo}: {exc}") from exc

    def _load_issue(
        self, repo: str, number: int, repository: Optional[Repository] = None
    ) -> GithubIssue:
        repository = repository or self._get_repo(repo)
        try:
            return repository.get_issue(number)
        except GithubException as exc:
            raise GitHubError(f"Failed to load issue {repo}#{number}: {exc}") from exc


def _names(labels: Iterable[Label]) -> str:
    return ", ".join(label.name for label in labels)
