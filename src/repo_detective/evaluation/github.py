"""Fetch repository facts from the GitHub REST API."""

from __future__ import annotations

import asyncio
import logging
import os
import subprocess
from typing import Any
from urllib.parse import quote as urlquote

import httpx

from repo_detective.errors import (
    ConfigurationError,
    NotFoundError,
    RepoDetectiveError,
    TransportError,
    UpstreamError,
    ValidationError,
)
from repo_detective.models import RepositoryFacts
from repo_detective.resolver import is_valid_name

logger = logging.getLogger(__name__)

_DEFAULT_API_URL = "https://api.github.com"
_API_VERSION = "2022-11-28"

DEFAULT_TIMEOUT = 10.0  # seconds, per call

_ISSUES_PAGE_SIZE = 100
_CONTRIBUTORS_PAGE_SIZE = 100
_USER_REPOSITORY_LIMIT = 10


def github_api_url() -> str:
    """Base URL of the GitHub API, overridable via REPO_DETECTIVE_GITHUB_API."""
    return os.environ.get("REPO_DETECTIVE_GITHUB_API", _DEFAULT_API_URL).rstrip("/")


# ─── Auth resolution ───────────────────────────────────────


def resolve_github_token() -> tuple[str | None, str]:
    """Resolve auth token: env first, then `gh auth token` fallback.

    Returns (token, source) where source is one of env | gh_cli | none.
    """
    env_token = os.environ.get("GITHUB_TOKEN", "").strip()
    if env_token:
        return env_token, "env"

    gh_token = _resolve_gh_cli_token()
    if gh_token:
        logger.info("Using GitHub token from `gh auth token` fallback.")
        return gh_token, "gh_cli"

    logger.info(
        "No GitHub auth token found (checked GITHUB_TOKEN and `gh auth token`). "
        "Requests are unauthenticated and subject to a lower rate limit."
    )
    return None, "none"


def require_github_token() -> str:
    """Return GITHUB_TOKEN from the environment or raise ConfigurationError."""
    token = os.environ.get("GITHUB_TOKEN", "").strip()
    if not token:
        raise ConfigurationError("Server is missing GITHUB_TOKEN configuration.")
    return token


def _resolve_gh_cli_token() -> str | None:
    """Try to read a token from local GitHub CLI auth context."""
    try:
        completed = subprocess.run(
            ["gh", "auth", "token"],
            capture_output=True,
            text=True,
            timeout=2,
            check=False,
        )
    except (OSError, subprocess.SubprocessError):
        return None

    if completed.returncode != 0:
        return None
    token = completed.stdout.strip()
    return token or None


# ─── Payload mapping ──────────────────────────────────────


def _count_open_issues(items: list[dict[str, Any]]) -> int:
    # The issues listing also returns pull requests.
    return sum(1 for item in items if "pull_request" not in item)


def _ordered_languages(data: dict[str, int] | None) -> tuple[str, ...]:
    if not isinstance(data, dict) or not data:
        return ()
    return tuple(sorted(data, key=lambda name: data[name], reverse=True))


def _build_facts(
    repo: dict[str, Any],
    issues: list[dict[str, Any]] | None,
    languages: dict[str, int] | None,
    contributors: list[dict[str, Any]] | None,
) -> RepositoryFacts:
    owner = (repo.get("owner") or {}).get("login") or repo.get("full_name", "/").split("/")[0]
    return RepositoryFacts(
        owner=owner,
        name=repo.get("name", ""),
        description=repo.get("description") or None,
        stars=repo.get("stargazers_count") or 0,
        forks=repo.get("forks_count") or 0,
        open_issues=_count_open_issues(issues or []),
        languages=_ordered_languages(languages),
        contributors=len(contributors or []),
        has_wiki=bool(repo.get("has_wiki")),
        has_pages=bool(repo.get("has_pages")),
        has_downloads=bool(repo.get("has_downloads")),
        license=(repo.get("license") or {}).get("spdx_id"),
        updated_at=repo.get("updated_at") or "",
        html_url=repo.get("html_url") or "",
    )


def split_owner_repo(owner_repo: str) -> tuple[str, str]:
    """Split ``owner/repo``; exactly one slash and two valid GitHub names."""
    parts = owner_repo.split("/")
    if len(parts) != 2 or not all(is_valid_name(p) for p in parts):
        raise ValidationError(f"'{owner_repo}' is not a valid owner/repo identifier.")
    return parts[0], parts[1]


def _repo_path(owner: str, repo: str) -> str:
    return f"/repos/{urlquote(owner, safe='')}/{urlquote(repo, safe='')}"


# ─── Client ───────────────────────────────────────────────


class GitHubClient:
    """Adapter for GitHubFetcherPort. Holds the httpx client and credentials."""

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        *,
        token: str | None = None,
        base_url: str | None = None,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        self._http = http_client
        self._token = token
        self._base_url = (base_url or github_api_url()).rstrip("/")
        self._timeout = timeout
        self._logged_rate_limit_hint = False

    @property
    def has_token(self) -> bool:
        return self._token is not None

    def _headers(self) -> dict[str, str]:
        headers = {
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": _API_VERSION,
        }
        if self._token:
            headers["Authorization"] = f"Bearer {self._token}"
        return headers

    def _check_rate_limit(self, resp: httpx.Response) -> None:
        """Emit a single warning once the rate limit is exhausted."""
        if self._logged_rate_limit_hint:
            return
        if resp.headers.get("X-RateLimit-Remaining") != "0":
            return
        logger.warning(
            "GitHub API rate limit exhausted (%s). Further requests fail until reset at %s.",
            "authenticated" if self._token else "no auth token",
            resp.headers.get("X-RateLimit-Reset", "unknown"),
        )
        self._logged_rate_limit_hint = True

    async def _get_json(
        self,
        path: str,
        *,
        not_found: str,
        params: dict[str, object] | None = None,
    ) -> Any:
        """GET a GitHub API path and decode JSON, mapping failures to domain errors."""
        url = f"{self._base_url}{path}"
        try:
            resp = await self._http.get(url, params=params, headers=self._headers(), timeout=self._timeout)
        except httpx.HTTPError as exc:
            raise TransportError(f"GitHub API request failed ({type(exc).__name__}): {exc}") from exc

        self._check_rate_limit(resp)

        if resp.status_code == 404:
            raise NotFoundError(not_found)
        if not resp.is_success:
            raise UpstreamError(_describe_failure(resp), status_code=resp.status_code)
        # 204 is returned e.g. for contributors of an empty repository.
        if resp.status_code == 204 or not resp.content:
            return None
        try:
            return resp.json()
        except ValueError as exc:
            raise UpstreamError(f"GitHub API returned invalid JSON for {path}", status_code=resp.status_code) from exc

    async def fetch_repository(self, owner_repo: str) -> RepositoryFacts:
        """Fetch facts for one repository.

        Repository, open issues, languages and contributors are requested
        concurrently. Any single failure fails the whole fetch.
        """
        owner, repo = split_owner_repo(owner_repo)
        base = _repo_path(owner, repo)
        not_found = f"Repository '{owner}/{repo}' not found"

        repo_data, issues, languages, contributors = await asyncio.gather(
            self._get_json(base, not_found=not_found),
            self._get_json(
                f"{base}/issues",
                not_found=not_found,
                params={"state": "open", "per_page": _ISSUES_PAGE_SIZE},
            ),
            self._get_json(f"{base}/languages", not_found=not_found),
            self._get_json(
                f"{base}/contributors",
                not_found=not_found,
                params={"per_page": _CONTRIBUTORS_PAGE_SIZE},
            ),
        )
        logger.debug("Fetched %s: %d open issues, %d contributors", owner_repo, len(issues or []), len(contributors or []))
        return _build_facts(repo_data or {}, issues, languages, contributors)

    async def fetch_user_repositories(self, username: str) -> list[RepositoryFacts]:
        """Fetch facts for up to 10 of a user's most recently updated repositories."""
        if not is_valid_name(username):
            raise ValidationError(f"'{username}' is not a valid GitHub username.")
        user_path = f"/users/{urlquote(username, safe='')}"
        await self._get_json(user_path, not_found=f"GitHub user '{username}' not found")
        listing = await self._get_json(
            f"{user_path}/repos",
            not_found=f"GitHub user '{username}' not found",
            params={"sort": "updated", "per_page": _USER_REPOSITORY_LIMIT},
        )
        if not isinstance(listing, list) or not listing:
            raise NotFoundError(f"GitHub user '{username}' has no public repositories")

        names = [item["full_name"] for item in listing[:_USER_REPOSITORY_LIMIT]]
        return list(await asyncio.gather(*(self.fetch_repository(name) for name in names)))

    async def fetch_issue_titles(self, owner_repo: str, limit: int = 5) -> list[str]:
        """Best-effort list of open issue titles; returns [] on any failure."""
        try:
            owner, repo = split_owner_repo(owner_repo)
            items = await self._get_json(
                f"{_repo_path(owner, repo)}/issues",
                not_found=f"Repository '{owner_repo}' not found",
                params={"state": "open", "per_page": limit},
            )
        except RepoDetectiveError as exc:
            logger.debug("Issue titles unavailable for %s: %s", owner_repo, exc)
            return []
        if not isinstance(items, list):
            return []
        titles = [
            item.get("title")
            for item in items
            if isinstance(item, dict) and "pull_request" not in item
        ]
        return [t for t in titles if isinstance(t, str) and t][:limit]


def _describe_failure(resp: httpx.Response) -> str:
    """Status text for an upstream failure, with GitHub's message when present."""
    text = f"GitHub API error: {resp.status_code} {resp.reason_phrase}".rstrip()
    try:
        body = resp.json()
    except ValueError:
        return text
    if isinstance(body, dict) and body.get("message"):
        return f"{text} ({body['message']})"
    return text
