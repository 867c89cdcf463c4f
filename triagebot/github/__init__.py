"""GitHub integration."""

from .client import GitHubManager, IssueComment

__all__ = ["GitHubManager", "IssueComment"]
