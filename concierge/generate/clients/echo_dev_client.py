# Dummy completion client for local dev and tests without API calls.
# Answers in the provider's payload shape, echoing the last user turn.

from typing import Any, Dict, List
from ..types import Message


class EchoDevClient:
    def __init__(self):
        self.calls: List[Dict[str, Any]] = []

    def generate(self, model: str, messages: List[Message]) -> Dict[str, Any]:
        self.calls.append({"model": model, "messages": list(messages)})
        user_inputs = [m.content for m in messages if m.role == "user"]
        text = f"[ECHO RESPONSE]\n{user_inputs[-1] if user_inputs else '(no user input)'}"
        return {
            "id": "echo-dev",
            "model": model,
            "choices": [{"index": 0, "message": {"role": "assistant", "content": text}, "finish_reason": "stop"}],
        }
