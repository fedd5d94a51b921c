# Makes the folder importable as a package.
# Exports the search decision functions and the Tavily client for convenience.

from .decision import (
    exclusion_reason,
    extract_search_query,
    get_search_options,
    get_search_priority,
    score_message,
    should_search,
)
from .prompts import build_search_context
from .tavily_client import TavilyClient, format_results
from .types import ScoringResult, SearchOptions, SearchResponse, SearchResult

__all__ = [
    "TavilyClient",
    "ScoringResult",
    "SearchOptions",
    "SearchResponse",
    "SearchResult",
    "build_search_context",
    "exclusion_reason",
    "extract_search_query",
    "format_results",
    "get_search_options",
    "get_search_priority",
    "score_message",
    "should_search",
]
