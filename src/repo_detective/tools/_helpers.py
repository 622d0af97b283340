"""Lifespan access for repo-detective tools."""

from __future__ import annotations

from typing import TYPE_CHECKING

from mcp.server.fastmcp import Context

if TYPE_CHECKING:
    from repo_detective.server import AppContext


def get_context(ctx: Context) -> AppContext:
    """Return the shared GitHub client and HTTP pool built by ``app_lifespan``."""
    from repo_detective.server import AppContext

    app = ctx.request_context.lifespan_context
    if isinstance(app, AppContext):
        return app
    raise TypeError(f"Tool called without app_lifespan: lifespan context is {type(app).__name__}, not AppContext")
