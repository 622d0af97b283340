"""Ports: GitHub repository fetching."""

from __future__ import annotations

from typing import Protocol

from repo_detective.models import RepositoryFacts


class GitHubFetcherPort(Protocol):
    """Port for fetching repository facts from the GitHub API."""

    async def fetch_repository(self, owner_repo: str) -> RepositoryFacts:
        """Fetch facts for a single ``owner/repo``."""
        ...

    async def fetch_user_repositories(self, username: str) -> list[RepositoryFacts]:
        """Fetch facts for a user's most recently updated repositories."""
        ...

    async def fetch_issue_titles(self, owner_repo: str, limit: int = 5) -> list[str]:
        """Best-effort list of open issue titles. Never raises."""
        ...
