"""Shared test fixtures and fake GitHub API helpers."""

from __future__ import annotations

from collections.abc import Callable

import httpx
import pytest

from repo_detective.evaluation.github import GitHubClient
from repo_detective.models import RepositoryFacts

API_URL = "https://api.github.com"

# path -> (status, json payload) or an exception to raise from the transport
Route = tuple[int, object] | Exception


def repo_payload(**overrides: object) -> dict[str, object]:
    """A GitHub ``GET /repos/{owner}/{repo}`` payload."""
    data: dict[str, object] = {
        "name": "Hello-World",
        "full_name": "octocat/Hello-World",
        "owner": {"login": "octocat"},
        "description": "My first repository on GitHub!",
        "stargazers_count": 120,
        "forks_count": 40,
        "has_wiki": True,
        "has_pages": False,
        "has_downloads": True,
        "license": {"spdx_id": "MIT"},
        "updated_at": "2026-10-10T12:00:00Z",
        "html_url": "https://github.com/octocat/Hello-World",
    }
    data.update(overrides)
    return data


def repo_routes(owner_repo: str = "octocat/Hello-World", **repo_overrides: object) -> dict[str, Route]:
    """Successful routes for the four metadata calls of one repository."""
    owner, name = owner_repo.split("/")
    base = f"/repos/{owner_repo}"
    return {
        base: (200, repo_payload(name=name, full_name=owner_repo, owner={"login": owner}, **repo_overrides)),
        f"{base}/issues": (
            200,
            [
                {"title": "Crash on startup"},
                {"title": "Docs typo"},
                {"title": "Bump dependency", "pull_request": {"url": "x"}},
            ],
        ),
        f"{base}/languages": (200, {"Python": 500, "Shell": 20, "Go": 900}),
        f"{base}/contributors": (200, [{"login": "a"}, {"login": "b"}]),
    }


class FakeGitHub:
    """httpx.MockTransport handler serving canned responses by URL path."""

    def __init__(self, routes: dict[str, Route]) -> None:
        self.routes = routes
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        outcome = self.routes.get(request.url.path)
        if outcome is None:
            return httpx.Response(404, json={"message": "Not Found"})
        if isinstance(outcome, Exception):
            raise outcome
        status, payload = outcome
        return httpx.Response(status, json=payload)

    @property
    def paths(self) -> list[str]:
        return [r.url.path for r in self.requests]


@pytest.fixture
def fake_github() -> Callable[[dict[str, Route]], tuple[GitHubClient, FakeGitHub]]:
    """Factory building a GitHubClient backed by a FakeGitHub transport."""
    def _make(routes: dict[str, Route], token: str | None = None) -> tuple[GitHubClient, FakeGitHub]:
        fake = FakeGitHub(routes)
        http = httpx.AsyncClient(transport=httpx.MockTransport(fake))
        return GitHubClient(http, token=token, base_url=API_URL), fake

    return _make


def make_facts(**overrides: object) -> RepositoryFacts:
    """RepositoryFacts with neutral defaults for scoring tests."""
    values: dict[str, object] = {"owner": "octocat", "name": "Hello-World"}
    values.update(overrides)
    return RepositoryFacts(**values)  # type: ignore[arg-type]


@pytest.fixture(autouse=True)
def _isolate_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep tests independent of the developer's GitHub credentials."""
    monkeypatch.delenv("GITHUB_TOKEN", raising=False)
    monkeypatch.delenv("REPO_DETECTIVE_GITHUB_API", raising=False)
    monkeypatch.setattr(
        "repo_detective.evaluation.github._resolve_gh_cli_token",
        lambda: None,
    )
