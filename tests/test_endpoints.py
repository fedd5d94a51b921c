# ===============================================
# tests/test_endpoints.py
# HTTP surface: validation, chat routes, config, health
# ===============================================

import pytest
from fastapi.testclient import TestClient

from concierge.app import app, get_config_store, get_model_client, get_search_client
from concierge.errors import CompletionError
from concierge.generate import EchoDevClient
from concierge.knowledge import ConfigStore

from tests.fakes import CONFIG_DIR, FakeSearchClient

client = TestClient(app)

HISTORY = [
    {"role": "user", "content": "Ciao"},
    {"role": "assistant", "content": "Ciao! Come posso aiutarti?"},
]


class FailingModelClient:
    def generate(self, model, messages):
        raise CompletionError(429, "Rate limit exceeded")


@pytest.fixture
def echo():
    return EchoDevClient()


@pytest.fixture
def search():
    return FakeSearchClient()


@pytest.fixture(autouse=True)
def overrides(echo, search):
    store = ConfigStore(CONFIG_DIR.as_posix(), "main-config.yaml", "specific-config.yaml")
    app.dependency_overrides[get_config_store] = lambda: store
    app.dependency_overrides[get_model_client] = lambda: echo
    app.dependency_overrides[get_search_client] = lambda: search
    yield
    app.dependency_overrides.clear()


def _body(text, history=HISTORY, **extra):
    return {"model": "openai/gpt-4o-mini", "messages": [*history, {"role": "user", "content": text}], **extra}


def test_root_ok():
    r = client.get("/")
    assert r.status_code == 200
    assert "message" in r.json()


def test_health_reports_services():
    r = client.get("/api/health")
    assert r.status_code == 200
    data = r.json()
    assert data["status"] == "OK"
    assert data["services"] == {"openRouter": True, "tavily": True}


def test_missing_model_is_rejected(echo):
    r = client.post("/api/chat", json={"messages": [{"role": "user", "content": "Ciao"}]})
    assert r.status_code == 400
    assert echo.calls == []


def test_messages_must_be_a_list(echo):
    r = client.post("/api/chat", json={"model": "m", "messages": "Ciao"})
    assert r.status_code == 400
    assert "messages array" in r.json()["detail"]
    assert echo.calls == []


def test_last_message_must_be_from_user(echo):
    r = client.post("/api/chat", json={"model": "m", "messages": HISTORY})
    assert r.status_code == 400
    assert r.json()["detail"] == "Last message must be from user"
    assert echo.calls == []


def test_unknown_role_is_rejected():
    r = client.post("/api/chat", json={"model": "m", "messages": [{"role": "tool", "content": "x"}, {"role": "user", "content": "y"}]})
    assert r.status_code == 400


def test_missing_credentials_answer_not_configured(search):
    app.dependency_overrides[get_model_client] = lambda: None
    r = client.post("/api/chat-with-search", json=_body("What's the weather today in Rome"))
    assert r.status_code == 500
    assert "not configured" in r.json()["detail"]
    assert search.calls == []


def test_chat_adds_prompts_history_and_temporal_context(echo, search):
    r = client.post("/api/chat", json=_body("Quali piatti avete?"))
    assert r.status_code == 200
    data = r.json()
    assert data["choices"][0]["message"]["content"].endswith("Quali piatti avete?")
    assert data["searchMetadata"] == {"searchPerformed": False}
    assert search.calls == []

    sent = echo.calls[-1]["messages"]
    assert [m.role for m in sent] == ["system", "system", "user", "assistant", "system", "user"]
    assert "Marios Brazil" in sent[0].content
    assert "# Restaurant" in sent[1].content
    assert "CONTESTO TEMPORALE" in sent[4].content


def test_chat_with_search_injects_results_before_user_turn(echo, search):
    r = client.post("/api/chat-with-search", json=_body("What's the weather today in Rome"))
    assert r.status_code == 200
    meta = r.json()["searchMetadata"]
    assert meta["searchPerformed"] is True
    assert meta["query"] == "weather today in Rome"
    assert meta["resultsCount"] == 1
    assert meta["sources"] == [{"title": "Meteo Roma", "url": "https://meteo.example.com/roma"}]

    query, options = search.calls[0]
    assert options.depth == "advanced"
    assert "reddit.com" in options.exclude_domains

    sent = echo.calls[-1]["messages"]
    assert sent[-1].role == "user"
    assert sent[-2].role == "system" and sent[-2].content.startswith('Informazioni aggiornate dal web per "weather today in Rome"')
    assert "CONTESTO TEMPORALE" in sent[-3].content


def test_booking_request_skips_search(search):
    r = client.post("/api/chat-with-search", json=_body("Vorrei prenotare un tavolo per stasera"))
    assert r.status_code == 200
    assert r.json()["searchMetadata"]["searchPerformed"] is False
    assert search.calls == []


def test_request_config_can_disable_search(search):
    r = client.post(
        "/api/chat-with-search",
        json=_body("What's the weather today in Rome", config={"webSearch": {"enabled": False}}),
    )
    assert r.status_code == 200
    assert search.calls == []


def test_search_failure_is_not_an_error(echo):
    app.dependency_overrides[get_search_client] = lambda: FakeSearchClient(fail=True)
    r = client.post("/api/chat-with-search", json=_body("What's the weather today in Rome"))
    assert r.status_code == 200
    assert r.json()["searchMetadata"] == {"searchPerformed": False}
    assert not any(m.content.startswith("Informazioni aggiornate") for m in echo.calls[-1]["messages"])


def test_completion_error_keeps_provider_status():
    app.dependency_overrides[get_model_client] = lambda: FailingModelClient()
    r = client.post("/api/chat", json=_body("Ciao"))
    assert r.status_code == 429
    assert "Rate limit exceeded" in r.json()["detail"]


def test_config_endpoint_exposes_model_and_web_search():
    r = client.get("/api/config")
    assert r.status_code == 200
    data = r.json()
    assert data["modelId"] == "openai/gpt-4o-mini"
    assert data["webSearch"]["enabled"] is True
    assert data["webSearch"]["intelligentThreshold"] == 2.5
    assert data["fallback"] is False


def test_missing_config_falls_back(tmp_path):
    store = ConfigStore(tmp_path.as_posix(), "main-config.yaml", "specific-config.yaml")
    app.dependency_overrides[get_config_store] = lambda: store
    r = client.post("/api/config/reload")
    assert r.status_code == 200
    data = r.json()
    assert data["fallback"] is True
    assert data["modelId"] == ""
    assert data["webSearch"]["enabled"] is False


@pytest.mark.parametrize(
    "block",
    [
        {"enabled": True, "maxResults": "dieci"},
        {"enabled": "false"},
        {"enabled": True, "excludePatterns": "abc"},
        "off",
    ],
)
def test_malformed_request_web_search_is_rejected(block, echo, search):
    r = client.post("/api/chat-with-search", json=_body("What's the weather today in Rome", config={"webSearch": block}))
    assert r.status_code == 400
    assert "config.webSearch" in r.json()["detail"]
    assert echo.calls == []
    assert search.calls == []


def test_completion_error_detail_carries_provider_body():
    class RejectingModelClient:
        def generate(self, model, messages):
            raise CompletionError(401, "Unauthorized", body='{"error":{"message":"No auth credentials found"}}')

    app.dependency_overrides[get_model_client] = lambda: RejectingModelClient()
    r = client.post("/api/chat", json=_body("Ciao"))
    assert r.status_code == 401
    assert r.json()["detail"] == 'OpenRouter API error: 401 - {"error":{"message":"No auth credentials found"}}'
