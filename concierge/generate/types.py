# Simple, typed dataclasses shared across generator modules.

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict

ROLES = ("system", "user", "assistant")


@dataclass(frozen=True)
class Message:
    """Single chat turn: system, user, or assistant."""
    role: str
    content: str

    def to_dict(self) -> Dict[str, str]:
        return {"role": self.role, "content": self.content}


@dataclass
class ChatResponse:
    """Final response: assistant text, raw provider payload, search metadata."""
    text: str
    raw: Dict[str, Any]
    search_metadata: Dict[str, Any] = field(default_factory=lambda: {"searchPerformed": False})

    def to_payload(self) -> Dict[str, Any]:
        return {**self.raw, "searchMetadata": self.search_metadata}
