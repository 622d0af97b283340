"""Client adapter for the ``POST /api/analyze`` endpoint."""

from __future__ import annotations

from dataclasses import dataclass

import httpx

from repo_detective.errors import TransportError, UpstreamError
from repo_detective.models import AnalysisResult, Pricing, Scores

_FALLBACK_ERROR = "Failed to analyze repository"


def _int(value: object) -> int:
    try:
        return int(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return 0


def _dict(value: object) -> dict:
    return value if isinstance(value, dict) else {}


def _strings(value: object) -> list[str]:
    return [str(item) for item in value] if isinstance(value, list) else []


def parse_analysis(data: dict[str, object]) -> AnalysisResult:
    """Map the endpoint's JSON payload into an AnalysisResult."""
    scores = _dict(data.get("scores"))
    pricing = _dict(data.get("pricing"))
    name = str(data.get("name") or "")
    return AnalysisResult(
        id=str(data.get("id") or name),
        name=name,
        description=str(data.get("description") or ""),
        category=str(data.get("category") or "repository"),
        language=str(data.get("language") or "Unknown"),
        stars=_int(data.get("stars")),
        forks=_int(data.get("forks")),
        open_issues=_int(data.get("openIssues")),
        last_updated=str(data.get("lastUpdated") or ""),
        issues=_strings(data.get("issues")),
        improvements=_strings(data.get("improvements")),
        languages=_strings(data.get("languages")),
        pricing=Pricing(
            basic=_int(pricing.get("basic")),
            premium=_int(pricing.get("premium")),
            enterprise=_int(pricing.get("enterprise")),
        ),
        scores=Scores(
            security=_int(scores.get("securityScore")),
            quality=_int(scores.get("codeQuality")),
            documentation=_int(scores.get("documentation")),
        ),
    )


@dataclass
class AnalyzeApiClient:
    """Async client for a running repo-detective HTTP endpoint."""

    http: httpx.AsyncClient
    base_url: str = ""

    async def analyze(self, target: str) -> AnalysisResult:
        """Analyze a target through the HTTP endpoint.

        Raises UpstreamError with the server's error text verbatim on a
        non-2xx response and TransportError when the server is unreachable.
        """
        try:
            response = await self.http.post(
                f"{self.base_url.rstrip('/')}/api/analyze",
                json={"target": target},
            )
        except httpx.TransportError as exc:
            raise TransportError(f"Could not reach analysis service: {exc}") from exc

        if not response.is_success:
            try:
                body = response.json()
            except ValueError:
                body = {}
            message = body.get("error") if isinstance(body, dict) else None
            raise UpstreamError(message or _FALLBACK_ERROR, status_code=response.status_code)

        return parse_analysis(response.json())
