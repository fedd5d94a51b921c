# ============================================================
# Web search decision
# ------------------------------------------------------------
# should_search(): exclusions first (booking intent, greeting-only,
# configured keywords), then a weighted score over the category
# table compared with the configured threshold.
# All functions are pure over (message, config).
# ============================================================

from __future__ import annotations

import logging
import re
from typing import Any, Dict, Mapping, Optional, Sequence, Union

from concierge.knowledge.types import WebSearchConfig
from .patterns import (
    DEFAULT_CATEGORIES,
    FILLER_WORDS,
    FUNCTION_WORDS,
    GREETING_ONLY,
    GREETING_WORDS,
    INFORMATION_REQUEST,
    NEWS_KEYWORDS,
    POLITENESS_WORDS,
    RESTAURANT_EXCLUSION,
    SOCIAL_MEDIA_DOMAINS,
    TEMPORAL_KEYWORDS,
    word_list_pattern,
)
from .types import MAX_RESULTS_CAP, ScoringCategory, ScoringResult, SearchOptions

logger = logging.getLogger(__name__)

MAX_QUERY_LENGTH = 100
MIN_QUERY_LENGTH = 3

_GREETING_RE = word_list_pattern(GREETING_WORDS)
_STRIP_RES = (
    _GREETING_RE,
    word_list_pattern(POLITENESS_WORDS),
    word_list_pattern(FILLER_WORDS),
    word_list_pattern(FUNCTION_WORDS),
)
_WHITESPACE = re.compile(r"\s+")
_EDGE_PUNCTUATION = " \t\n,.;:!?¿¡-"

ConfigLike = Union[WebSearchConfig, Mapping[str, Any], None]


def _web_search_config(config: ConfigLike) -> WebSearchConfig:
    """Accept a WebSearchConfig, a full config dict with `webSearch`, or None."""
    if isinstance(config, WebSearchConfig):
        return config
    if isinstance(config, Mapping):
        return WebSearchConfig.from_dict(config.get("webSearch"))
    return WebSearchConfig()


def _normalize(message: str) -> str:
    return (message or "").replace("’", "'").lower()


# -------------------------
# Exclusion pass
# -------------------------
def exclusion_reason(message: str, config: ConfigLike = None) -> Optional[str]:
    """Name of the first exclusion that matches, or None."""
    cfg = _web_search_config(config)
    msg = _normalize(message)
    for keyword in cfg.exclude_patterns:
        if keyword and keyword.lower() in msg:
            return "configured"
    if RESTAURANT_EXCLUSION.search(msg):
        return "restaurant"
    if GREETING_ONLY.match(msg):
        return "greeting"
    return None


# -------------------------
# Scoring
# -------------------------
def scoring_table(config: ConfigLike = None) -> Sequence[ScoringCategory]:
    """Default categories with weights overridden by `categoryWeights`."""
    overrides: Dict[str, float] = _web_search_config(config).weight_overrides()
    if not overrides:
        return DEFAULT_CATEGORIES
    return tuple(
        ScoringCategory(c.name, c.pattern, overrides.get(c.name, c.weight)) for c in DEFAULT_CATEGORIES
    )


def score_message(message: str, config: ConfigLike = None) -> ScoringResult:
    cfg = _web_search_config(config)
    msg = _normalize(message)
    scores = {c.name: (c.weight if c.pattern.search(msg) else 0.0) for c in scoring_table(cfg)}
    return ScoringResult(category_scores=scores, total=sum(scores.values()), threshold=cfg.threshold)


def should_search(message: str, config: ConfigLike = None) -> bool:
    cfg = _web_search_config(config)
    if not cfg.enabled:
        return False

    reason = exclusion_reason(message, cfg)
    if reason:
        logger.info("Web search excluded (%s): %r", reason, (message or "")[:50])
        return False

    result = score_message(message, cfg)
    if result.total > 0:
        logger.info(
            "Search score for %r: %.1f (threshold %.1f) -> %s",
            (message or "")[:50], result.total, result.threshold, result.decision,
        )
    return result.decision


# -------------------------
# Signals used for depth and priority
# -------------------------
def has_information_request(message: str) -> bool:
    msg = _normalize(message)
    return any(p.search(msg) for p in INFORMATION_REQUEST)


def has_news_pattern(message: str) -> bool:
    return bool(NEWS_KEYWORDS.search(_normalize(message)))


def has_temporal_pattern(message: str) -> bool:
    return bool(TEMPORAL_KEYWORDS.search(_normalize(message)))


# -------------------------
# Query extraction
# -------------------------
def _clean(text: str) -> str:
    return _WHITESPACE.sub(" ", text).strip(_EDGE_PUNCTUATION)


def extract_search_query(message: str) -> str:
    """Drop greetings, courtesy and filler words; keep at most 100 characters."""
    query = message or ""
    for pattern in _STRIP_RES:
        query = pattern.sub(" ", query)
    query = _clean(query)

    if len(query) < MIN_QUERY_LENGTH:
        query = _clean(_GREETING_RE.sub(" ", message or ""))
        if len(query) < MIN_QUERY_LENGTH:
            query = (message or "").strip() or (message or "")

    if len(query) > MAX_QUERY_LENGTH:
        query = query[:MAX_QUERY_LENGTH].strip() or query[:MAX_QUERY_LENGTH]
    return query


# -------------------------
# Provider options
# -------------------------
def get_search_options(message: str, config: ConfigLike = None) -> SearchOptions:
    cfg = _web_search_config(config)
    advanced = has_information_request(message) or has_news_pattern(message)
    return SearchOptions(
        max_results=max(1, min(cfg.max_results, MAX_RESULTS_CAP)),
        depth="advanced" if advanced else "basic",
        exclude_domains=SOCIAL_MEDIA_DOMAINS,
    )


def get_search_priority(message: str, config: ConfigLike = None) -> float:
    """0 when no search is warranted, otherwise 0.5 plus signal bonuses, capped at 1."""
    if not should_search(message, config):
        return 0.0
    priority = 0.5
    if has_temporal_pattern(message):
        priority += 0.3
    if has_information_request(message):
        priority += 0.2
    if has_news_pattern(message):
        priority += 0.2
    return min(priority, 1.0)
