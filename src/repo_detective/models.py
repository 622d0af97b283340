"""Domain models for repo-detective. All frozen dataclasses -- no mutation after creation."""

from __future__ import annotations

from dataclasses import dataclass, field

# ─── Targets ──────────────────────────────────────────────────


@dataclass(frozen=True, slots=True)
class RepoTarget:
    """A resolved user input: either a single repository or an account."""

    owner: str | None = None
    repo: str | None = None
    username: str | None = None

    @property
    def is_repository(self) -> bool:
        return self.owner is not None and self.repo is not None

    @property
    def full_name(self) -> str:
        if self.is_repository:
            return f"{self.owner}/{self.repo}"
        return self.username or ""


# ─── Fetched facts ────────────────────────────────────────────


@dataclass(frozen=True, slots=True)
class RepositoryFacts:
    """Raw metadata fetched from the GitHub API for one repository."""

    owner: str
    name: str
    description: str | None = None
    stars: int = 0
    forks: int = 0
    open_issues: int = 0
    languages: tuple[str, ...] = ()
    contributors: int = 0
    has_wiki: bool = False
    has_pages: bool = False
    has_downloads: bool = False
    license: str | None = None
    updated_at: str = ""
    html_url: str = ""

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.name}"


# ─── Analysis output ──────────────────────────────────────────


@dataclass(frozen=True, slots=True)
class Scores:
    """Three bounded integer scores in [0, 100]."""

    security: int
    quality: int
    documentation: int

    @property
    def average(self) -> float:
        return (self.security + self.quality + self.documentation) / 3


@dataclass(frozen=True, slots=True)
class Pricing:
    """Static per-tier price hints. Not a pricing engine."""

    basic: int
    premium: int
    enterprise: int


@dataclass(frozen=True, slots=True)
class AnalysisResult:
    """Analysis of a single repository as presented to callers."""

    id: str
    name: str
    description: str
    language: str
    stars: int
    forks: int
    open_issues: int
    last_updated: str
    scores: Scores
    pricing: Pricing
    category: str = "repository"
    issues: list[str] = field(default_factory=list)
    improvements: list[str] = field(default_factory=list)
    languages: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, object]:
        """Render the JSON shape served by ``POST /api/analyze``."""
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "category": self.category,
            "language": self.language,
            "languages": list(self.languages),
            "stars": self.stars,
            "forks": self.forks,
            "openIssues": self.open_issues,
            "lastUpdated": self.last_updated,
            "issues": list(self.issues),
            "improvements": list(self.improvements),
            "pricing": {
                "basic": self.pricing.basic,
                "premium": self.pricing.premium,
                "enterprise": self.pricing.enterprise,
            },
            "scores": {
                "securityScore": self.scores.security,
                "codeQuality": self.scores.quality,
                "documentation": self.scores.documentation,
            },
        }
