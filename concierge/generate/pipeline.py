# Message assembly.
# Order is fixed: system prompts, history, temporal context, search context, user turn.

from __future__ import annotations
from typing import List, Optional, Sequence

from .types import Message


def assemble(
    system_prompts: Sequence[str],
    history: Sequence[Message],
    temporal_context: Optional[str],
    search_context: Optional[str],
    user_message: str,
) -> List[Message]:
    """Return a new message list; inputs are never modified."""
    messages = [Message(role="system", content=p) for p in system_prompts]
    messages.extend(history)
    if temporal_context:
        messages.append(Message(role="system", content=temporal_context))
    if search_context:
        messages.append(Message(role="system", content=search_context))
    messages.append(Message(role="user", content=user_message))
    return messages
