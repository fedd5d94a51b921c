# ============================================================
# Knowledge config -> system prompt renderer
# ------------------------------------------------------------
# Walks a KnowledgeValue tree and emits markdown:
#   - mapping            -> heading (level follows depth)
#   - list of texts      -> bullet list
#   - list of mappings   -> bold item title + bullets per item
#   - text               -> paragraph
# Output order is the document order, so rendering is stable.
# ============================================================

from __future__ import annotations

import logging
import re
from typing import Any, List, Optional

from concierge.errors import ConfigFormatError
from .prompts import FALLBACK_SYSTEM_PROMPT, OPERATIONAL_KEYS, PREAMBLE_KEY
from .types import KnowledgeValue, MappingNode, RenderedPrompt, SequenceNode, TextNode, to_knowledge

logger = logging.getLogger(__name__)

MAX_DEPTH = 12
MAX_HEADING_LEVEL = 6
ITEM_LABEL_KEYS = ("name", "title", "type")

_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])")
_SEPARATORS = re.compile(r"[_\-.]+")
_SPACES = re.compile(r"\s+")


def humanize_key(key: str) -> str:
    """`openingHours` / `opening_hours` -> `Opening hours`."""
    text = _CAMEL_BOUNDARY.sub(" ", key)
    text = _SEPARATORS.sub(" ", text)
    text = _SPACES.sub(" ", text).strip()
    if not text:
        return key
    return text[0].upper() + text[1:]


def _heading(title: str, depth: int) -> str:
    return f"{'#' * min(max(depth, 1), MAX_HEADING_LEVEL)} {title}"


def _is_flat(items) -> bool:
    return all(isinstance(i, TextNode) for i in items)


def _item_label(item: MappingNode) -> tuple[Optional[str], Optional[str]]:
    for key in ITEM_LABEL_KEYS:
        value = item.get(key)
        if isinstance(value, TextNode) and value.value.strip():
            return key, value.value.strip()
    return None, None


# -------------------------
# Bullets (inside list items)
# -------------------------
def _render_bullets(item: MappingNode, skip_key: Optional[str], indent: int, depth: int) -> List[str]:
    pad = "  " * indent
    lines: List[str] = []
    if depth > MAX_DEPTH:
        return lines
    for key, value in item.entries:
        if key == skip_key:
            continue
        label = humanize_key(key)
        match value:
            case TextNode(value=text):
                lines.append(f"{pad}- **{label}**: {text.strip()}")
            case SequenceNode(items=items) if _is_flat(items):
                lines.append(f"{pad}- **{label}**: " + ", ".join(i.value.strip() for i in items))
            case SequenceNode(items=items):
                lines.append(f"{pad}- **{label}**:")
                lines.extend(_render_nested_items(items, indent + 1, depth + 1))
            case MappingNode():
                lines.append(f"{pad}- **{label}**:")
                lines.extend(_render_bullets(value, None, indent + 1, depth + 1))
    return lines


def _render_nested_items(items, indent: int, depth: int) -> List[str]:
    pad = "  " * indent
    lines: List[str] = []
    if depth > MAX_DEPTH:
        return lines
    for item in items:
        match item:
            case TextNode(value=text):
                lines.append(f"{pad}- {text.strip()}")
            case MappingNode():
                label_key, label = _item_label(item)
                if label:
                    lines.append(f"{pad}- **{label}**")
                    lines.extend(_render_bullets(item, label_key, indent + 1, depth + 1))
                else:
                    lines.extend(_render_bullets(item, None, indent, depth + 1))
            case SequenceNode(items=inner):
                lines.extend(_render_nested_items(inner, indent + 1, depth + 1))
    return lines


# -------------------------
# Blocks (headings, lists, paragraphs)
# -------------------------
def _render_sequence(items, depth: int) -> List[str]:
    """One block per bullet run or per mapping item."""
    if _is_flat(items):
        return ["\n".join(f"- {i.value.strip()}" for i in items)] if items else []

    blocks: List[str] = []
    run: List[str] = []
    for item in items:
        match item:
            case TextNode(value=text):
                run.append(f"- {text.strip()}")
            case MappingNode():
                if run:
                    blocks.append("\n".join(run))
                    run = []
                label_key, label = _item_label(item)
                lines = [f"**{label}**"] if label else []
                lines.extend(_render_bullets(item, label_key, 0, depth + 1))
                if lines:
                    blocks.append("\n".join(lines))
            case SequenceNode(items=inner):
                run.extend(_render_nested_items(inner, 1, depth + 1))
    if run:
        blocks.append("\n".join(run))
    return blocks


def _render_value(key: Optional[str], value: KnowledgeValue, depth: int) -> List[str]:
    if depth > MAX_DEPTH:
        return []
    blocks: List[str] = []
    if key is not None:
        blocks.append(_heading(humanize_key(key), depth))
    match value:
        case MappingNode(entries=entries):
            for child_key, child in entries:
                blocks.extend(_render_value(child_key, child, depth + 1))
        case SequenceNode(items=items):
            blocks.extend(_render_sequence(items, depth))
        case TextNode(value=text):
            if text.strip():
                blocks.append(text.strip())
    return blocks


def render_document(document: KnowledgeValue) -> str:
    """Render a whole document; root keys become top-level headings."""
    blocks: List[str] = []
    match document:
        case MappingNode(entries=entries):
            preamble = document.get(PREAMBLE_KEY)
            if isinstance(preamble, TextNode) and preamble.value.strip():
                blocks.append(preamble.value.strip())
            for key, value in entries:
                if key in OPERATIONAL_KEYS:
                    continue
                if key == PREAMBLE_KEY and isinstance(value, TextNode):
                    continue
                blocks.extend(_render_value(key, value, 1))
        case SequenceNode(items=items):
            blocks.extend(_render_sequence(items, 0))
        case TextNode(value=text):
            if text.strip():
                blocks.append(text.strip())
    return "\n\n".join(b for b in blocks if b).strip()


def render(primary: Optional[KnowledgeValue], secondary: Optional[KnowledgeValue] = None) -> RenderedPrompt:
    """Render the primary and optional secondary documents; never raises."""
    if primary is None:
        logger.warning("Primary knowledge config missing, using built-in prompt")
        return RenderedPrompt(primary=FALLBACK_SYSTEM_PROMPT, secondary=None)

    primary_text = render_document(primary)
    if not primary_text:
        logger.warning("Primary knowledge config rendered empty, using built-in prompt")
        primary_text = FALLBACK_SYSTEM_PROMPT

    secondary_text = render_document(secondary) if secondary is not None else None
    return RenderedPrompt(primary=primary_text, secondary=secondary_text or None)


def render_raw(primary_raw: Any, secondary_raw: Any = None) -> RenderedPrompt:
    """Same as render() but from parsed JSON/YAML; malformed input yields the fallback."""
    try:
        primary = to_knowledge(primary_raw) if primary_raw is not None else None
        secondary = to_knowledge(secondary_raw) if secondary_raw is not None else None
    except ConfigFormatError as e:
        logger.error("Knowledge config is malformed, using built-in prompt: %s", e)
        return RenderedPrompt(primary=FALLBACK_SYSTEM_PROMPT, secondary=None)
    return render(primary, secondary)
