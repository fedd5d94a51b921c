# ============================================================
# Concierge FastAPI App
# ------------------------------------------------------------
# This app wires everything together:
#   - Knowledge config snapshot (config/*.yaml) -> system prompts
#   - Temporal context for the restaurant calendar
#   - Optional Tavily web search
#   - OpenRouter (or Echo) completion client
# ============================================================

from datetime import datetime, timezone
from functools import lru_cache
from typing import Any, Dict, List, Optional
import logging

from fastapi import Depends, FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel

# --- Local imports ---
from concierge.settings import settings
from concierge.logs import configure_logging
from concierge.errors import ChatRequestError, CompletionError, ConfigFormatError, NotConfiguredError
from concierge.knowledge import ConfigStore, WebSearchConfig
from concierge.search import TavilyClient
from concierge.generate import ChatGenerator, ChatResponse, EchoDevClient

configure_logging(settings.LOG_LEVEL)
logger = logging.getLogger("concierge.app")

INVALID_BODY = "Invalid request body. Must include model and messages array."

# ------------------------------------------------------------
# 🧠 Dependencies: config snapshot and clients
# ------------------------------------------------------------
@lru_cache(maxsize=1)
def get_config_store() -> ConfigStore:
    return ConfigStore(settings.CONFIG_DIR, settings.MAIN_CONFIG, settings.SPECIFIC_CONFIG)


@lru_cache(maxsize=1)
def get_model_client():
    if settings.USE_ECHO:
        return EchoDevClient()
    if settings.OPENROUTER_API_KEY:
        from concierge.generate.clients.openrouter_client import OpenRouterClient
        return OpenRouterClient(api_key=settings.OPENROUTER_API_KEY, base_url=settings.OPENROUTER_BASE_URL)
    logger.warning("OPENROUTER_API_KEY not set - chat endpoints will answer 'not configured'")
    return None


@lru_cache(maxsize=1)
def get_search_client() -> TavilyClient:
    client = TavilyClient(
        api_key=settings.TAVILY_API_KEY,
        base_url=settings.TAVILY_BASE_URL,
        timeout_ms=settings.SEARCH_TIMEOUT_MS,
    )
    if not client.is_configured():
        logger.warning("TAVILY_API_KEY not set - web search will be disabled")
    return client


def get_generator(
    model_client=Depends(get_model_client),
    search_client: TavilyClient = Depends(get_search_client),
) -> ChatGenerator:
    return ChatGenerator(
        model_client=model_client,
        search_client=search_client,
        temporal_context=settings.TEMPORAL_CONTEXT,
        tz_name=settings.TIMEZONE,
    )

# ------------------------------------------------------------
# 🚀 FastAPI init
# ------------------------------------------------------------
app = FastAPI(title="Marios Brazil Concierge API", version="0.3")


@app.exception_handler(RequestValidationError)
def invalid_body(request: Request, exc: RequestValidationError):
    logger.info("Rejected request body: %s", exc.errors())
    return JSONResponse(status_code=400, content={"detail": INVALID_BODY})

# ------------------------------------------------------------
# 📦 Pydantic models
# ------------------------------------------------------------
class ChatTurn(BaseModel):
    role: str
    content: str

class ChatRequest(BaseModel):
    model: Optional[str] = None
    messages: List[ChatTurn]
    config: Optional[Dict[str, Any]] = None

class ConfigPayload(BaseModel):
    modelId: str
    webSearch: Dict[str, Any]
    fallback: bool

# ------------------------------------------------------------
# 💬 Chat routes
# ------------------------------------------------------------
def _web_search_override(req: ChatRequest) -> Optional[WebSearchConfig]:
    block = (req.config or {}).get("webSearch")
    if block is None:
        return None
    try:
        return WebSearchConfig.from_dict(block)
    except ConfigFormatError as e:
        raise ChatRequestError(f"Invalid config.webSearch: {e}") from e


def _run_chat(req: ChatRequest, gen: ChatGenerator, store: ConfigStore, use_search: bool) -> Dict[str, Any]:
    try:
        web_search = _web_search_override(req) if use_search else None
        out: ChatResponse = gen.chat(
            model=req.model,
            messages=[t.model_dump() for t in req.messages],
            snapshot=store.snapshot,
            web_search=web_search,
            use_search=use_search,
        )
    except ChatRequestError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except NotConfiguredError as e:
        raise HTTPException(status_code=500, detail=str(e))
    except CompletionError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e))
    except Exception:
        logger.exception("Unexpected error while handling chat request")
        raise HTTPException(status_code=500, detail="Internal server error")
    return out.to_payload()


@app.post("/api/chat")
def chat(req: ChatRequest, gen: ChatGenerator = Depends(get_generator), store: ConfigStore = Depends(get_config_store)):
    return _run_chat(req, gen, store, use_search=False)


@app.post("/api/chat-with-search")
def chat_with_search(req: ChatRequest, gen: ChatGenerator = Depends(get_generator), store: ConfigStore = Depends(get_config_store)):
    return _run_chat(req, gen, store, use_search=True)

# ------------------------------------------------------------
# ⚙️ Knowledge config
# ------------------------------------------------------------
def _config_payload(store: ConfigStore) -> ConfigPayload:
    snap = store.snapshot
    return ConfigPayload(modelId=snap.model_id, webSearch=snap.web_search.to_dict(), fallback=snap.fallback)


@app.get("/api/config", response_model=ConfigPayload)
def get_config(store: ConfigStore = Depends(get_config_store)):
    return _config_payload(store)


@app.post("/api/config/reload", response_model=ConfigPayload)
def reload_config(store: ConfigStore = Depends(get_config_store)):
    store.reload()
    return _config_payload(store)

# ------------------------------------------------------------
# 🧭 Health checks
# ------------------------------------------------------------
@app.get("/api/health")
def health(model_client=Depends(get_model_client), search_client: TavilyClient = Depends(get_search_client)):
    return {
        "status": "OK",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "env": settings.ENV,
        "services": {
            "openRouter": model_client is not None,
            "tavily": search_client.is_configured(),
        },
    }

@app.get("/")
def hello():
    return {"message": f"{settings.APP_NAME} service running."}
