"""Parse free-text user input into a repository or username target."""

from __future__ import annotations

import re

from repo_detective.errors import ValidationError
from repo_detective.models import RepoTarget

# Path after the host marker, stopping at a query string or fragment.
_HOST_PATTERN = re.compile(r"github\.com/([^?#]+)", re.IGNORECASE)

# Characters GitHub allows in user, organization and repository names.
_NAME_PATTERN = re.compile(r"^[A-Za-z0-9._-]+$")


def is_valid_name(segment: str) -> bool:
    """True for a single GitHub name segment; rejects `.` and `..`."""
    return bool(_NAME_PATTERN.match(segment)) and segment not in (".", "..")


def _strip_vcs_suffix(name: str) -> str:
    if name.lower().endswith(".git"):
        return name[: -len(".git")]
    return name


def _split_owner_repo(path: str, original: str) -> RepoTarget:
    segments = path.strip("/").split("/")
    if len(segments) != 2 or not all(segments):
        raise ValidationError(f"'{original}' is not a valid owner/repo identifier. Use format owner/repo.")
    owner, repo = segments[0], _strip_vcs_suffix(segments[1])
    if not repo or not is_valid_name(owner) or not is_valid_name(repo):
        raise ValidationError(f"'{original}' is not a valid owner/repo identifier. Use format owner/repo.")
    return RepoTarget(owner=owner, repo=repo)


def resolve_target(text: str) -> RepoTarget:
    """Resolve a target string into ``owner/repo`` or a bare username.

    Accepted forms:
    - ``https://github.com/owner/repo(.git)`` (extra path after the repo is ignored)
    - ``owner/repo``
    - ``username``

    Raises ValidationError for empty input, input containing ``@`` and
    ``owner/repo`` forms without exactly two non-empty segments, and any
    name segment outside GitHub's `[A-Za-z0-9._-]` charset.
    """
    value = (text or "").strip()
    if not value:
        raise ValidationError("Missing target. Provide owner/repo, a GitHub URL or a username.")
    if "@" in value:
        raise ValidationError(f"'{value}' is not a valid GitHub identifier.")

    match = _HOST_PATTERN.search(value)
    if match:
        segments = [s for s in match.group(1).split("/") if s]
        if len(segments) < 2:
            raise ValidationError(f"'{value}' does not point to a repository. Use format owner/repo.")
        return _split_owner_repo("/".join(segments[:2]), value)

    if "/" in value:
        return _split_owner_repo(value, value)

    if not is_valid_name(value):
        raise ValidationError(f"'{value}' is not a valid GitHub username.")
    return RepoTarget(username=value)
