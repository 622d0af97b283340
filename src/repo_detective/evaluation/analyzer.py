"""Resolve a target, fetch its repositories and turn facts into analysis results."""

from __future__ import annotations

import asyncio
import logging
from datetime import UTC, datetime

from repo_detective.evaluation.base import GitHubFetcherPort
from repo_detective.evaluation.recommendations import dedupe, recommend_improvements
from repo_detective.evaluation.scorer import score_repository
from repo_detective.models import AnalysisResult, Pricing, RepositoryFacts, Scores
from repo_detective.resolver import resolve_target

logger = logging.getLogger(__name__)

_ISSUE_TITLE_LIMIT = 5
_UNKNOWN_LANGUAGE = "Unknown"


def humanize_age(iso_date: str, now: datetime | None = None) -> str:
    """Render an ISO 8601 timestamp as relative text ("3 days ago").

    Returns the input unchanged when it cannot be parsed.
    """
    if not iso_date:
        return ""
    try:
        dt = datetime.fromisoformat(iso_date.replace("Z", "+00:00"))
    except (ValueError, TypeError):
        return iso_date
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=UTC)

    days = max(0, ((now or datetime.now(tz=UTC)) - dt).days)
    if days == 0:
        return "today"
    if days < 30:
        unit, count = "day", days
    elif days < 365:
        unit, count = "month", days // 30
    else:
        unit, count = "year", days // 365
    return f"{count} {unit}{'' if count == 1 else 's'} ago"


def derive_pricing(scores: Scores) -> Pricing:
    """Flat tier pricing keyed off the mean score. Non-authoritative."""
    avg = scores.average
    if avg < 50:
        base = 150
    elif avg < 70:
        base = 100
    else:
        base = 75
    return Pricing(basic=base, premium=base * 2, enterprise=base * 4)


def build_result(
    facts: RepositoryFacts,
    issue_titles: list[str] | None = None,
    now: datetime | None = None,
) -> AnalysisResult:
    """Map fetched facts into an AnalysisResult. Pure; no I/O."""
    scores = score_repository(facts)
    return AnalysisResult(
        id=facts.full_name,
        name=facts.name,
        description=facts.description or "",
        language=facts.languages[0] if facts.languages else _UNKNOWN_LANGUAGE,
        stars=facts.stars,
        forks=facts.forks,
        open_issues=facts.open_issues,
        last_updated=humanize_age(facts.updated_at, now),
        scores=scores,
        pricing=derive_pricing(scores),
        issues=list(issue_titles or []),
        improvements=dedupe(recommend_improvements(facts)),
        languages=list(facts.languages),
    )


class Analyzer:
    """Runs resolve -> fetch -> score -> recommend for one user request."""

    def __init__(self, fetcher: GitHubFetcherPort) -> None:
        self._fetcher = fetcher

    async def analyze(self, target: str) -> list[AnalysisResult]:
        """Analyze a repository target or every recent repository of a user.

        Raises ValidationError before any network call for malformed input.
        Fetch failures propagate; no partial results are returned.
        """
        resolved = resolve_target(target)
        if resolved.is_repository:
            facts_list = [await self._fetcher.fetch_repository(resolved.full_name)]
        else:
            facts_list = await self._fetcher.fetch_user_repositories(resolved.full_name)

        # Issue titles are best-effort: fetch_issue_titles never raises.
        titles = await asyncio.gather(
            *(self._fetcher.fetch_issue_titles(f.full_name, _ISSUE_TITLE_LIMIT) for f in facts_list)
        )
        logger.info("Analyzed %d repositories for '%s'", len(facts_list), resolved.full_name)
        return [build_result(f, t) for f, t in zip(facts_list, titles, strict=True)]
