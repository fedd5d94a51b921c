# Client for OpenRouter's OpenAI-compatible Chat Completions API.
# Single attempt: retries are disabled and failures surface as CompletionError.

import logging
from typing import Any, Dict, List

from openai import APIConnectionError, APIStatusError, OpenAI

from concierge.errors import CompletionError
from ..types import Message

logger = logging.getLogger(__name__)

OPENROUTER_BASE_URL = "https://openrouter.ai/api/v1"


class OpenRouterClient:
    def __init__(self, api_key: str, base_url: str = OPENROUTER_BASE_URL, timeout: float = 60.0):
        self.base_url = base_url
        self.client = OpenAI(api_key=api_key, base_url=base_url, max_retries=0, timeout=timeout)

    def generate(self, model: str, messages: List[Message]) -> Dict[str, Any]:
        formatted = [m.to_dict() for m in messages]
        logger.info("Forwarding %d messages to OpenRouter (model=%s)", len(formatted), model)
        try:
            resp = self.client.chat.completions.create(model=model, messages=formatted)
        except APIStatusError as e:
            body = e.response.text if e.response is not None else None
            logger.error("OpenRouter API error %s: %s", e.status_code, body or e.message)
            raise CompletionError(e.status_code, e.message, body=body) from e
        except APIConnectionError as e:
            logger.error("OpenRouter unreachable: %s", e)
            raise CompletionError(502, str(e)) from e
        return resp.model_dump()
