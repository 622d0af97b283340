"""Tests for the analyze_repository MCP tool."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock

import pytest
from conftest import make_facts

from repo_detective.errors import NotFoundError
from repo_detective.server import AppContext
from repo_detective.tools._helpers import get_context
from repo_detective.tools.analyze import analyze_repository


def _make_ctx() -> MagicMock:
    """Build a mock Context with AppContext-shaped lifespan_context."""
    ctx = MagicMock()
    ctx.info = AsyncMock()
    ctx.error = AsyncMock()
    app = MagicMock(spec=AppContext)
    app.github = MagicMock()
    app.github.fetch_repository = AsyncMock(return_value=make_facts(stars=42))
    app.github.fetch_user_repositories = AsyncMock(return_value=[make_facts()])
    app.github.fetch_issue_titles = AsyncMock(return_value=[])
    ctx.request_context.lifespan_context = app
    return ctx


class TestAnalyzeRepositoryTool:
    async def test_success(self) -> None:
        ctx = _make_ctx()
        result = await analyze_repository("octocat/Hello-World", ctx)

        assert result["success"] is True
        assert result["target"] == "octocat/Hello-World"
        (entry,) = result["results"]
        assert entry["stars"] == 42
        assert "securityScore" in entry["scores"]

    async def test_validation_error_message(self) -> None:
        ctx = _make_ctx()
        result = await analyze_repository("a@b", ctx)
        assert result["success"] is False
        assert "a@b" in result["error"]
        ctx.request_context.lifespan_context.github.fetch_repository.assert_not_awaited()

    async def test_not_found_message(self) -> None:
        ctx = _make_ctx()
        ctx.request_context.lifespan_context.github.fetch_user_repositories = AsyncMock(
            side_effect=NotFoundError("GitHub user 'ghost' not found"),
        )
        result = await analyze_repository("ghost", ctx)
        assert result == {"success": False, "error": "GitHub user 'ghost' not found"}

    async def test_unexpected_error_reported(self) -> None:
        ctx = _make_ctx()
        ctx.request_context.lifespan_context.github.fetch_repository = AsyncMock(side_effect=RuntimeError("x"))
        result = await analyze_repository("octocat/Hello-World", ctx)
        assert result == {"success": False, "error": "Internal error: RuntimeError"}
        ctx.error.assert_awaited_once()


class TestGetContext:
    def test_wrong_lifespan_type(self) -> None:
        ctx = MagicMock()
        ctx.request_context.lifespan_context = object()
        with pytest.raises(TypeError, match="AppContext"):
            get_context(ctx)
