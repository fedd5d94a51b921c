# Data models for the web search layer:
# decision scoring, provider options and normalized provider results.

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Dict, FrozenSet, List, Optional, Pattern

MAX_RESULTS_CAP = 10
SEARCH_DEPTHS = ("basic", "advanced")


@dataclass(frozen=True)
class ScoringCategory:
    """One row of the scoring table: a pattern and the weight it adds when it matches."""
    name: str
    pattern: Pattern[str]
    weight: float


@dataclass(frozen=True)
class ScoringResult:
    category_scores: Dict[str, float]
    total: float
    threshold: float

    @property
    def decision(self) -> bool:
        return self.total >= self.threshold


@dataclass(frozen=True)
class SearchOptions:
    max_results: int = 5
    depth: str = "basic"
    exclude_domains: FrozenSet[str] = frozenset()

    def __post_init__(self):
        if self.depth not in SEARCH_DEPTHS:
            raise ValueError(f"Unknown search depth: {self.depth}")
        if not 1 <= self.max_results <= MAX_RESULTS_CAP:
            raise ValueError(f"max_results must be within 1..{MAX_RESULTS_CAP}")


@dataclass
class SearchResult:
    """A single source returned by the provider."""
    title: str
    url: str
    content: str
    score: float = 0.0
    favicon: Optional[str] = None


@dataclass
class SearchResponse:
    query: str
    answer: Optional[str] = None
    results: List[SearchResult] = field(default_factory=list)
    response_time: Optional[float] = None

    @property
    def result_count(self) -> int:
        return len(self.results)
