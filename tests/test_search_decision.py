# ===============================================
# tests/test_search_decision.py
# Exclusions, weighted scoring, query extraction, options
# ===============================================

import pytest

from concierge.knowledge import WebSearchConfig
from concierge.search import (
    exclusion_reason,
    extract_search_query,
    get_search_options,
    get_search_priority,
    score_message,
    should_search,
)

ENABLED = WebSearchConfig(enabled=True, threshold=2.5)

MESSAGES = [
    "Ciao, buongiorno",
    "What's the weather today in Rome",
    "Vorrei prenotare un tavolo per stasera",
    "ultime notizie",
    "Che tempo fa oggi a Napoli?",
    "Quanto costa oggi il bitcoin?",
    "Hello!",
    "Raccontami la storia del locale",
    "a",
    "?",
    "   x   ",
    "prezzo " * 60,
]


def test_disabled_never_searches():
    cfg = WebSearchConfig(enabled=False, threshold=0.0)
    for msg in MESSAGES:
        assert should_search(msg, cfg) is False


def test_dict_config_is_accepted():
    assert should_search("What's the weather today in Rome", {"webSearch": {"enabled": True}}) is True
    assert should_search("What's the weather today in Rome", {}) is False
    assert should_search("What's the weather today in Rome", None) is False


def test_greeting_only_is_excluded():
    assert exclusion_reason("Ciao, buongiorno") == "greeting"
    assert exclusion_reason("Good morning!") == "greeting"
    assert exclusion_reason("Hola, buenos días") == "greeting"
    assert should_search("Ciao, buongiorno", ENABLED) is False


def test_weather_question_searches_with_advanced_depth():
    result = score_message("What's the weather today in Rome", ENABLED)
    assert result.category_scores["temporal_composite"] >= 3
    assert result.total == 3.0
    assert result.decision is True
    assert should_search("What's the weather today in Rome", ENABLED) is True
    assert get_search_options("What's the weather today in Rome", ENABLED).depth == "advanced"


def test_booking_intent_beats_temporal_keywords():
    assert exclusion_reason("Vorrei prenotare un tavolo per stasera") == "restaurant"
    assert should_search("Vorrei prenotare un tavolo per stasera", ENABLED) is False


def test_exclusion_overrides_a_high_score():
    msg = "Che tempo fa oggi? Vorrei prenotare un tavolo"
    assert score_message(msg, ENABLED).total >= 3
    assert should_search(msg, ENABLED) is False


def test_configured_exclusions():
    cfg = WebSearchConfig(enabled=True, exclude_patterns=("chi sei",))
    assert exclusion_reason("Ultime notizie, ma chi sei?", cfg) == "configured"
    assert should_search("Ultime notizie, ma chi sei?", cfg) is False


def test_category_counts_once():
    result = score_message("latest news and breaking news, latest news again", ENABLED)
    assert result.category_scores["news"] == 2.5
    assert result.total == 2.5


def test_threshold_is_configurable():
    assert should_search("ultime notizie", WebSearchConfig(enabled=True, threshold=2.5)) is True
    assert should_search("ultime notizie", WebSearchConfig(enabled=True, threshold=3.0)) is False
    assert should_search("ultime notizie", WebSearchConfig(enabled=True, threshold=1.5)) is True


def test_weights_are_configurable():
    cfg = WebSearchConfig(enabled=True, category_weights=(("news", 1.0),))
    result = score_message("ultime notizie", cfg)
    assert result.category_scores["news"] == 1.0
    assert should_search("ultime notizie", cfg) is False


def test_decision_matches_total_and_threshold():
    for msg in MESSAGES:
        result = score_message(msg, ENABLED)
        assert result.decision == (result.total >= result.threshold)
        assert result.total == sum(result.category_scores.values())


def test_unrelated_message_scores_zero():
    assert score_message("Raccontami la storia del locale", ENABLED).total == 0


@pytest.mark.parametrize(
    "message, expected",
    [
        ("What's the weather today in Rome", "weather today in Rome"),
        ("Ciao, dimmi il meteo di Roma per favore", "meteo Roma"),
        ("Please tell me the latest news about Naples", "latest news about Naples"),
        ("Ciao!", "Ciao!"),
        ("il la", "il la"),
    ],
)
def test_extract_search_query(message, expected):
    assert extract_search_query(message) == expected


def test_extracted_query_length_bounds():
    for msg in MESSAGES:
        query = extract_search_query(msg)
        assert 1 <= len(query) <= 100


def test_long_query_is_truncated():
    query = extract_search_query("prezzo " * 60)
    assert len(query) <= 100
    assert query.startswith("prezzo prezzo")


def test_search_options():
    opts = get_search_options("Raccontami la storia del locale", ENABLED)
    assert opts.max_results == 5
    assert opts.depth == "basic"
    assert opts.exclude_domains == {"facebook.com", "instagram.com", "twitter.com", "tiktok.com", "reddit.com"}

    assert get_search_options("ultime notizie sul calcio", ENABLED).depth == "advanced"
    assert get_search_options("Dove si trova il porto?", ENABLED).depth == "advanced"
    assert get_search_options("x", WebSearchConfig(enabled=True, max_results=50)).max_results == 10


def test_exclude_domains_ignore_config():
    cfg = {"webSearch": {"enabled": True, "excludeDomains": []}}
    assert "tiktok.com" in get_search_options("news", cfg).exclude_domains


def test_search_priority():
    assert get_search_priority("What's the weather today in Rome", WebSearchConfig(enabled=False)) == 0.0
    assert get_search_priority("Ciao", ENABLED) == 0.0
    assert get_search_priority("What's the weather today in Rome", ENABLED) == pytest.approx(1.0)
