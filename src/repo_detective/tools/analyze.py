"""analyze_repository tool -- score a GitHub repository or a user's repositories."""

from __future__ import annotations

from mcp.server.fastmcp import Context

from repo_detective.errors import RepoDetectiveError
from repo_detective.evaluation.analyzer import Analyzer
from repo_detective.tools._helpers import get_context


async def analyze_repository(
    target: str,
    ctx: Context,
) -> dict[str, object]:
    """Analyze a GitHub repository, or the recent repositories of a user.

    Args:
        target: "owner/repo", a GitHub URL
            (e.g. "https://github.com/octocat/Hello-World"), or a username.

    Returns:
        Dict with: success, and either results (one entry per analyzed
        repository with scores, improvements and open issue titles) or
        error (human-readable message).
    """
    try:
        app_ctx = get_context(ctx)
        results = await Analyzer(app_ctx.github).analyze(target)
        return {
            "success": True,
            "target": target,
            "results": [r.to_dict() for r in results],
        }

    except RepoDetectiveError as exc:
        return {"success": False, "error": str(exc)}
    except Exception as exc:
        await ctx.error(f"Unexpected error in analyze_repository: {exc}")
        return {"success": False, "error": f"Internal error: {type(exc).__name__}"}
