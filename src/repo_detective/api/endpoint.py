"""HTTP endpoint: ``POST /api/analyze``.

Request body ``{"target": "owner/repo" | "https://github.com/owner/repo" | "username"}``.
Error bodies are always ``{"error": "<message>"}``.
"""

from __future__ import annotations

import logging

import httpx
from starlette.requests import Request
from starlette.responses import JSONResponse

from repo_detective.errors import (
    ConfigurationError,
    NotFoundError,
    RepoDetectiveError,
    ValidationError,
)
from repo_detective.evaluation.analyzer import Analyzer
from repo_detective.evaluation.github import DEFAULT_TIMEOUT, GitHubClient, require_github_token
from repo_detective.models import AnalysisResult
from repo_detective.resolver import resolve_target

logger = logging.getLogger(__name__)

ANALYZE_PATH = "/api/analyze"
# Every method is routed here so non-POST requests get a JSON 405.
ROUTE_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE"]

_MISSING_TARGET = 'Missing "target" (owner/repo, full URL or username)'


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse({"error": message}, status_code=status_code)


async def run_analysis(target: str, token: str) -> list[AnalysisResult]:
    """Analyze a target with a request-scoped HTTP client."""
    async with httpx.AsyncClient(
        timeout=httpx.Timeout(DEFAULT_TIMEOUT),
        follow_redirects=True,
    ) as http_client:
        return await Analyzer(GitHubClient(http_client, token=token)).analyze(target)


def render_results(results: list[AnalysisResult], is_user: bool) -> dict[str, object]:
    """First result is the response body; user targets also list every repository."""
    payload = results[0].to_dict()
    if is_user:
        payload["repositories"] = [r.to_dict() for r in results]
    return payload


async def analyze_endpoint(request: Request) -> JSONResponse:
    """Analyze a GitHub repository or the recent repositories of a user."""
    if request.method != "POST":
        return _error(405, "Method not allowed")

    try:
        body = await request.json()
    except ValueError:
        return _error(400, "Request body must be a JSON object")

    target = body.get("target") if isinstance(body, dict) else None
    if not isinstance(target, str) or not target.strip():
        return _error(400, _MISSING_TARGET)

    try:
        resolved = resolve_target(target)
        token = require_github_token()
        results = await run_analysis(target, token)
    except ValidationError as exc:
        return _error(400, str(exc))
    except NotFoundError as exc:
        return _error(404, str(exc))
    except ConfigurationError as exc:
        logger.error("Analyze request rejected: %s", exc)
        return _error(500, str(exc))
    except RepoDetectiveError as exc:
        logger.warning("Analysis of '%s' failed: %s", target, exc)
        return _error(500, str(exc))
    except Exception as exc:
        logger.exception("Unexpected error analyzing '%s'", target)
        return _error(500, f"Internal error: {type(exc).__name__}")

    return JSONResponse(render_results(results, is_user=not resolved.is_repository))
