# Test doubles for the outbound clients.

from pathlib import Path
from typing import List, Optional

from concierge.errors import SearchUnavailable
from concierge.search import SearchOptions, SearchResponse, SearchResult

ROOT = Path(__file__).resolve().parent.parent
CONFIG_DIR = ROOT / "config"


class FakeSearchClient:
    """Records queries; returns canned results or raises SearchUnavailable."""

    def __init__(self, results: Optional[List[SearchResult]] = None, fail: bool = False, configured: bool = True):
        self.results = results if results is not None else [
            SearchResult(title="Meteo Roma", url="https://meteo.example.com/roma", content="Sole, 24°C", score=0.9),
        ]
        self.fail = fail
        self.configured = configured
        self.calls = []

    def is_configured(self) -> bool:
        return self.configured

    def search(self, query: str, options: Optional[SearchOptions] = None) -> SearchResponse:
        self.calls.append((query, options))
        if self.fail:
            raise SearchUnavailable("Timeout ricerca web")
        return SearchResponse(query=query, answer="Soleggiato", results=list(self.results))
