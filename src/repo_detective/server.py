"""MCP server and HTTP endpoint that score GitHub repositories."""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from dataclasses import dataclass

import httpx
from mcp.server.fastmcp import FastMCP
from mcp.types import ToolAnnotations

from repo_detective.api.endpoint import ANALYZE_PATH, ROUTE_METHODS, analyze_endpoint
from repo_detective.evaluation.base import GitHubFetcherPort
from repo_detective.evaluation.github import DEFAULT_TIMEOUT, GitHubClient, resolve_github_token
from repo_detective.tools.analyze import analyze_repository


@dataclass(frozen=True, slots=True)
class AppContext:
    """Shared state across all tool invocations."""

    http_client: httpx.AsyncClient
    github: GitHubFetcherPort


@asynccontextmanager
async def app_lifespan(server: FastMCP) -> AsyncIterator[AppContext]:
    """Manage shared adapter lifecycle (composition root)."""
    async with httpx.AsyncClient(
        timeout=httpx.Timeout(DEFAULT_TIMEOUT),
        follow_redirects=True,
        limits=httpx.Limits(max_connections=10, max_keepalive_connections=5),
    ) as http_client:
        token, _ = resolve_github_token()
        yield AppContext(
            http_client=http_client,
            github=GitHubClient(http_client, token=token),
        )


mcp = FastMCP(
    "repo-detective",
    instructions=(
        "repo-detective scores public GitHub repositories.\n\n"
        "Call analyze_repository with 'owner/repo', a GitHub URL or a username. "
        "Each result carries three scores in 0-100 (securityScore, codeQuality, "
        "documentation), a list of suggested improvements and up to five open "
        "issue titles. Scores are heuristics derived from stars, forks, open "
        "issues, contributors and documentation flags; present them as such."
    ),
    lifespan=app_lifespan,
)

mcp.tool(annotations=ToolAnnotations(readOnlyHint=True))(analyze_repository)
mcp.custom_route(ANALYZE_PATH, methods=ROUTE_METHODS)(analyze_endpoint)
