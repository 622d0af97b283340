"""Exception hierarchy for repo-detective.

All exceptions inherit from RepoDetectiveError (single catch point).
Messages are written for end users -- short, human-readable, no stack traces.
"""

from __future__ import annotations


class RepoDetectiveError(Exception):
    """Base exception for all repo-detective errors."""


class ValidationError(RepoDetectiveError):
    """User-supplied target is malformed. Raised before any network call."""


class NotFoundError(RepoDetectiveError):
    """Resolved repository or user does not exist on GitHub."""


class UpstreamError(RepoDetectiveError):
    """GitHub API answered with a non-404, non-2xx status."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class TransportError(RepoDetectiveError):
    """No response from the remote side (network failure or timeout)."""


class ConfigurationError(RepoDetectiveError):
    """Required server-side configuration is missing."""
