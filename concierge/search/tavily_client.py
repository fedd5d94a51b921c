# Client for the Tavily search API.
# Same shape as the completion clients: small class, requests.post, explicit timeout.

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import requests

from concierge.errors import SearchUnavailable
from .types import MAX_RESULTS_CAP, SearchOptions, SearchResponse, SearchResult

logger = logging.getLogger(__name__)

TAVILY_BASE_URL = "https://api.tavily.com"
DEFAULT_TIMEOUT_MS = 5000
MISSING_TITLE = "Titolo non disponibile"


def _score(value: Any) -> float:
    try:
        return float(value or 0)
    except (TypeError, ValueError):
        return 0.0


def format_results(raw: Dict[str, Any], query: Optional[str] = None) -> SearchResponse:
    """Normalize a provider payload; missing fields get neutral defaults."""
    raw = raw if isinstance(raw, dict) else {}
    items = raw.get("results")
    results = []
    if isinstance(items, list):
        for item in items:
            if not isinstance(item, dict):
                continue
            results.append(
                SearchResult(
                    title=item.get("title") or MISSING_TITLE,
                    url=item.get("url") or "",
                    content=item.get("content") or "",
                    score=_score(item.get("score")),
                    favicon=item.get("favicon") or None,
                )
            )
    response_time = raw.get("response_time")
    return SearchResponse(
        query=raw.get("query") or query or "",
        answer=raw.get("answer") or None,
        results=results,
        response_time=_score(response_time) if response_time is not None else None,
    )


class TavilyClient:
    def __init__(self, api_key: Optional[str], base_url: str = TAVILY_BASE_URL, timeout_ms: int = DEFAULT_TIMEOUT_MS):
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.timeout_ms = timeout_ms

    def is_configured(self) -> bool:
        return bool(self.api_key)

    def build_payload(self, query: str, options: SearchOptions) -> Dict[str, Any]:
        return {
            "query": query.strip(),
            "search_depth": options.depth,
            "include_answer": True,
            "max_results": min(options.max_results, MAX_RESULTS_CAP),
            "include_domains": [],
            "exclude_domains": sorted(options.exclude_domains),
            "include_raw_content": False,
            "include_images": False,
        }

    def search(self, query: str, options: Optional[SearchOptions] = None) -> SearchResponse:
        if not self.api_key:
            raise SearchUnavailable("Tavily API key not configured")
        if not query or not query.strip():
            raise ValueError("Search query must not be empty")

        payload = self.build_payload(query, options or SearchOptions())
        logger.info("Tavily search for %r (depth=%s, max=%d)", query, payload["search_depth"], payload["max_results"])
        try:
            resp = requests.post(
                f"{self.base_url}/search",
                json=payload,
                headers={"Authorization": f"Bearer {self.api_key}"},
                timeout=self.timeout_ms / 1000,
            )
        except requests.Timeout as e:
            logger.error("Tavily search timed out after %d ms", self.timeout_ms)
            raise SearchUnavailable("Timeout ricerca web") from e
        except requests.RequestException as e:
            logger.error("Tavily search failed: %s", e)
            raise SearchUnavailable(str(e)) from e

        if not resp.ok:
            logger.error("Tavily API error %s: %s", resp.status_code, resp.text)
            raise SearchUnavailable(f"Tavily API error: {resp.status_code} - {resp.text}")

        try:
            data = resp.json()
        except ValueError as e:
            raise SearchUnavailable("Tavily returned a non-JSON body") from e

        out = format_results(data, query=query)
        logger.info("Tavily search done: %d results", out.result_count)
        return out
