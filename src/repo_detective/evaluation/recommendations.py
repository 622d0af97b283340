"""Rule-based improvement suggestions derived from repository facts."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass

from repo_detective.models import RepositoryFacts

_ISSUE_TRIAGE_THRESHOLD = 25
_MIN_CONTRIBUTORS = 3


@dataclass(frozen=True, slots=True)
class ImprovementRule:
    """A suggestion emitted when its condition holds for a repository."""

    suggestion: str
    applies: Callable[[RepositoryFacts], bool]


# Evaluation order is the output order.
IMPROVEMENT_RULES: tuple[ImprovementRule, ...] = (
    ImprovementRule("Add/expand Wiki", lambda f: not f.has_wiki),
    ImprovementRule("Enable Releases/Downloads", lambda f: not f.has_downloads),
    ImprovementRule("Triage and label open issues", lambda f: f.open_issues > _ISSUE_TRIAGE_THRESHOLD),
    ImprovementRule("Add CONTRIBUTING.md", lambda f: f.contributors < _MIN_CONTRIBUTORS),
    ImprovementRule("Add a LICENSE file", lambda f: not f.license),
)


def recommend_improvements(facts: RepositoryFacts) -> list[str]:
    """Return the suggestions whose conditions hold, in rule order. May be empty."""
    return [rule.suggestion for rule in IMPROVEMENT_RULES if rule.applies(facts)]


def dedupe(items: Iterable[str]) -> list[str]:
    """Drop repeated entries, keeping the first occurrence."""
    return list(dict.fromkeys(items))
