"""repo-detective: heuristic health scores for GitHub repositories."""

from __future__ import annotations

import argparse
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _distribution_version

_LOCAL_VERSION_FALLBACK = "0.0.0+local"

_TRANSPORTS = ("streamable-http", "sse", "stdio")


def _resolve_version() -> str:
    """Resolve package version from installed metadata with deterministic fallback."""
    try:
        return _distribution_version("repo-detective")
    except PackageNotFoundError:
        return _LOCAL_VERSION_FALLBACK


__version__ = _resolve_version()


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="repo-detective",
        description="Serve POST /api/analyze and the analyze_repository MCP tool.",
    )
    parser.add_argument(
        "--transport",
        choices=_TRANSPORTS,
        default="streamable-http",
        help="MCP transport. The HTTP endpoint is only served on HTTP transports.",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> None:
    """Entry point for `repo-detective` CLI."""
    from repo_detective.server import mcp

    args = _parse_args(argv)
    mcp.run(transport=args.transport)
