"""Compute security, quality and documentation scores from repository facts."""

from __future__ import annotations

from repo_detective.models import RepositoryFacts, Scores

_MIN_SCORE = 0
_MAX_SCORE = 100

# Caps keep a single huge signal from dominating a score.
_STAR_CAP = 200
_FORK_CAP = 200
_CONTRIBUTOR_CAP = 30
_ISSUE_ALLOWANCE = 20


def _clamp(value: float) -> int:
    return round(max(_MIN_SCORE, min(_MAX_SCORE, value)))


def security_score(facts: RepositoryFacts) -> int:
    """30 base, up to +20 for few open issues, up to +30 for stars."""
    return _clamp(30 + max(0, _ISSUE_ALLOWANCE - facts.open_issues) + min(facts.stars, _STAR_CAP) * 0.15)


def quality_score(facts: RepositoryFacts) -> int:
    """40 base, up to +30 for contributors, up to +30 for forks."""
    return _clamp(40 + min(facts.contributors, _CONTRIBUTOR_CAP) + min(facts.forks, _FORK_CAP) * 0.15)


def documentation_score(facts: RepositoryFacts) -> int:
    """30 base, +10 each for wiki, description and GitHub Pages."""
    score = 30
    if facts.has_wiki:
        score += 10
    if facts.description:
        score += 10
    if facts.has_pages:
        score += 10
    return _clamp(score)


def score_repository(facts: RepositoryFacts) -> Scores:
    """Compute all three scores. Deterministic, no I/O.

    Scoring components:
    - security: 30 + max(0, 20 - open_issues) + min(stars, 200) * 0.15
    - quality: 40 + min(contributors, 30) + min(forks, 200) * 0.15
    - documentation: 30 + 10 per present {wiki, description, pages}

    Each score is clamped to [0, 100] and rounded to an integer.
    """
    return Scores(
        security=security_score(facts),
        quality=quality_score(facts),
        documentation=documentation_score(facts),
    )
