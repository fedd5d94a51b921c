# Data models for the knowledge configuration layer.
# A knowledge document is a closed tagged value: text, sequence or mapping.

from __future__ import annotations
from dataclasses import dataclass
from datetime import date
from typing import Any, Dict, List, Optional, Tuple, Union

from concierge.errors import ConfigFormatError

# Parsed YAML can contain aliases pointing back at themselves.
MAX_CONVERT_DEPTH = 64


@dataclass(frozen=True)
class TextNode:
    value: str


@dataclass(frozen=True)
class SequenceNode:
    items: Tuple["KnowledgeValue", ...]


@dataclass(frozen=True)
class MappingNode:
    """Ordered key/value pairs; order is the document order."""
    entries: Tuple[Tuple[str, "KnowledgeValue"], ...]

    def get(self, key: str) -> Optional["KnowledgeValue"]:
        for k, v in self.entries:
            if k == key:
                return v
        return None


KnowledgeValue = Union[TextNode, SequenceNode, MappingNode]


def to_knowledge(raw: Any, _depth: int = 0) -> KnowledgeValue:
    """Convert a parsed JSON/YAML value into a KnowledgeValue tree."""
    if _depth > MAX_CONVERT_DEPTH:
        raise ConfigFormatError(f"Configuration nested deeper than {MAX_CONVERT_DEPTH} levels")
    if raw is None:
        return TextNode("")
    if isinstance(raw, bool):
        return TextNode("true" if raw else "false")
    if isinstance(raw, (str, int, float)):
        return TextNode(str(raw))
    if isinstance(raw, date):
        # YAML reads unquoted dates and timestamps as date objects
        return TextNode(raw.isoformat())
    if isinstance(raw, (list, tuple)):
        return SequenceNode(tuple(to_knowledge(item, _depth + 1) for item in raw))
    if isinstance(raw, dict):
        return MappingNode(tuple((str(k), to_knowledge(v, _depth + 1)) for k, v in raw.items()))
    raise ConfigFormatError(f"Unsupported configuration value of type {type(raw).__name__}")


@dataclass(frozen=True)
class RenderedPrompt:
    """Primary behavioral prompt plus optional knowledge-base prompt."""
    primary: str
    secondary: Optional[str] = None

    def system_prompts(self) -> List[str]:
        return [p for p in (self.primary, self.secondary) if p]


@dataclass(frozen=True)
class WebSearchConfig:
    """Tuning knobs for the web search decision (`webSearch` block)."""
    enabled: bool = False
    threshold: float = 2.5
    max_results: int = 5
    exclude_patterns: Tuple[str, ...] = ()
    # (category, weight) pairs; kept as a tuple so the snapshot stays immutable
    category_weights: Tuple[Tuple[str, float], ...] = ()

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "WebSearchConfig":
        """Build from the camelCase block; wrongly typed values raise ConfigFormatError."""
        if data is None:
            return cls()
        if not isinstance(data, dict):
            raise ConfigFormatError(f"webSearch must be a mapping, got {type(data).__name__}")

        enabled = data.get("enabled", False)
        if not isinstance(enabled, bool):
            raise ConfigFormatError(f"webSearch.enabled must be true or false, got {enabled!r}")

        patterns = data.get("excludePatterns") or []
        if not isinstance(patterns, (list, tuple)) or not all(isinstance(p, str) for p in patterns):
            raise ConfigFormatError("webSearch.excludePatterns must be a list of strings")

        weights = data.get("categoryWeights") or {}
        if not isinstance(weights, dict):
            raise ConfigFormatError("webSearch.categoryWeights must be a mapping of category to weight")

        return cls(
            enabled=enabled,
            threshold=float(_number(data.get("intelligentThreshold"), "intelligentThreshold", 2.5)),
            max_results=int(_number(data.get("maxResults"), "maxResults", 5, integer=True)),
            exclude_patterns=tuple(patterns),
            category_weights=tuple(
                (str(k), float(_number(v, f"categoryWeights.{k}", 0.0))) for k, v in weights.items()
            ),
        )

    def weight_overrides(self) -> Dict[str, float]:
        return dict(self.category_weights)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "enabled": self.enabled,
            "intelligentThreshold": self.threshold,
            "maxResults": self.max_results,
            "excludePatterns": list(self.exclude_patterns),
            "categoryWeights": self.weight_overrides(),
        }


def _number(value: Any, name: str, default: float, integer: bool = False):
    if value is None:
        return default
    kinds = (int,) if integer else (int, float)
    if isinstance(value, bool) or not isinstance(value, kinds):
        expected = "an integer" if integer else "a number"
        raise ConfigFormatError(f"webSearch.{name} must be {expected}, got {value!r}")
    return value


@dataclass(frozen=True)
class ConfigSnapshot:
    """Immutable view of the loaded knowledge configuration."""
    model_id: str
    rendered: RenderedPrompt
    web_search: WebSearchConfig
    primary: Optional[KnowledgeValue] = None
    secondary: Optional[KnowledgeValue] = None
    sources: Tuple[str, ...] = ()
    fallback: bool = False
