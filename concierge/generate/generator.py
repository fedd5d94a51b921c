# ============================================================
# ChatGenerator
# ------------------------------------------------------------
# One request, start to finish:
#   1) validate the inbound turns
#   2) system prompts from the knowledge snapshot
#   3) temporal context
#   4) optional web search (failures only drop the augmentation)
#   5) assemble + single call to the completion client
# ============================================================

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Dict, List, Optional, Sequence, Tuple

from concierge import temporal
from concierge.errors import ChatRequestError, NotConfiguredError, SearchUnavailable
from concierge.knowledge.types import ConfigSnapshot, WebSearchConfig
from concierge.search import (
    TavilyClient,
    build_search_context,
    extract_search_query,
    get_search_options,
    get_search_priority,
    should_search,
)
from .pipeline import assemble
from .types import ROLES, ChatResponse, Message

logger = logging.getLogger(__name__)


def parse_turns(raw_messages: Any) -> Tuple[List[Message], str]:
    """Split inbound turns into (history, current user message)."""
    if not isinstance(raw_messages, (list, tuple)) or not raw_messages:
        raise ChatRequestError("Invalid request body. Must include model and messages array.")

    turns: List[Message] = []
    for i, raw in enumerate(raw_messages):
        if isinstance(raw, Message):
            turns.append(raw)
            continue
        if not isinstance(raw, dict) or raw.get("role") not in ROLES:
            raise ChatRequestError(f"Message {i} must have a role among {', '.join(ROLES)}")
        content = raw.get("content")
        if not isinstance(content, str):
            raise ChatRequestError(f"Message {i} content must be a string")
        turns.append(Message(role=raw["role"], content=content))

    if turns[-1].role != "user":
        raise ChatRequestError("Last message must be from user")
    return turns[:-1], turns[-1].content


def _response_text(raw: Dict[str, Any]) -> str:
    try:
        return (raw["choices"][0]["message"]["content"] or "").strip()
    except (KeyError, IndexError, TypeError):
        return ""


class ChatGenerator:
    def __init__(
        self,
        model_client,
        search_client: Optional[TavilyClient] = None,
        temporal_context: bool = True,
        tz_name: str = temporal.DEFAULT_TIMEZONE,
    ):
        self.model_client = model_client
        self.search_client = search_client
        self.temporal_context = temporal_context
        self.tz_name = tz_name

    def _search_context(self, user_message: str, cfg: WebSearchConfig) -> Tuple[Optional[str], Dict[str, Any]]:
        meta: Dict[str, Any] = {"searchPerformed": False}
        if self.search_client is None or not self.search_client.is_configured():
            return None, meta
        if not should_search(user_message, cfg):
            return None, meta

        query = extract_search_query(user_message)
        options = get_search_options(user_message, cfg)
        try:
            response = self.search_client.search(query, options)
        except SearchUnavailable as e:
            logger.warning("Web search failed, continuing without it: %s", e)
            return None, meta

        meta = {
            "searchPerformed": True,
            "query": query,
            "resultsCount": response.result_count,
            "sources": [{"title": r.title, "url": r.url} for r in response.results],
            "priority": get_search_priority(user_message, cfg),
        }
        if not response.results:
            return None, meta
        return build_search_context(query, response), meta

    def build_messages(
        self,
        messages: Sequence[Any],
        snapshot: ConfigSnapshot,
        web_search: Optional[WebSearchConfig] = None,
        use_search: bool = True,
        now: Optional[datetime] = None,
    ) -> Tuple[List[Message], Dict[str, Any]]:
        history, user_message = parse_turns(messages)

        temporal_text = None
        if self.temporal_context:
            temporal_text = temporal.compute(now, self.tz_name).text

        search_text, meta = None, {"searchPerformed": False}
        if use_search:
            search_text, meta = self._search_context(user_message, web_search or snapshot.web_search)

        assembled = assemble(snapshot.rendered.system_prompts(), history, temporal_text, search_text, user_message)
        return assembled, meta

    def chat(
        self,
        model: Optional[str],
        messages: Sequence[Any],
        snapshot: ConfigSnapshot,
        web_search: Optional[WebSearchConfig] = None,
        use_search: bool = True,
        now: Optional[datetime] = None,
    ) -> ChatResponse:
        """Main entry point for generation."""
        if not model:
            raise ChatRequestError("Invalid request body. Must include model and messages array.")
        parse_turns(messages)
        if self.model_client is None:
            raise NotConfiguredError("OpenRouter API key not configured")

        assembled, meta = self.build_messages(messages, snapshot, web_search, use_search, now)
        raw = self.model_client.generate(model, assembled)
        return ChatResponse(text=_response_text(raw), raw=raw, search_metadata=meta)
