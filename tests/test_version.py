"""Tests for runtime package version resolution and CLI parsing."""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as distribution_version
from unittest.mock import patch

import pytest

import repo_detective


class TestRuntimeVersion:
    """Version resolution should reflect installed package metadata."""

    def test_module_version_matches_installed_distribution(self):
        assert repo_detective.__version__ == distribution_version("repo-detective")

    def test_resolve_version_uses_deterministic_fallback_when_metadata_missing(self, monkeypatch):
        def _raise_package_not_found(_: str) -> str:
            raise PackageNotFoundError

        monkeypatch.setattr(repo_detective, "_distribution_version", _raise_package_not_found)

        assert repo_detective._resolve_version() == repo_detective._LOCAL_VERSION_FALLBACK


class TestMain:
    def test_default_transport_serves_http(self):
        with patch("repo_detective.server.mcp") as mcp:
            repo_detective.main([])
        mcp.run.assert_called_once_with(transport="streamable-http")

    def test_stdio_transport(self):
        with patch("repo_detective.server.mcp") as mcp:
            repo_detective.main(["--transport", "stdio"])
        mcp.run.assert_called_once_with(transport="stdio")

    def test_unknown_transport_rejected(self):
        with pytest.raises(SystemExit):
            repo_detective.main(["--transport", "carrier-pigeon"])
