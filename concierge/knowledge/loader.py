# ============================================================
# Knowledge config loading
# ------------------------------------------------------------
# Two documents under CONFIG_DIR:
#   - main config (required): modelId, webSearch, behaviour rules
#   - specific config (optional): domain knowledge base
# Both are read with yaml.safe_load, which also accepts JSON.
# The loaded snapshot is immutable; reload() swaps it whole.
# ============================================================

from __future__ import annotations

import logging
import threading
from pathlib import Path
from typing import Any, Optional

import yaml

from concierge.errors import ConfigFormatError, ConfigLoadError
from .prompt_builder import render
from .prompts import FALLBACK_SYSTEM_PROMPT
from .types import ConfigSnapshot, RenderedPrompt, WebSearchConfig, to_knowledge

logger = logging.getLogger(__name__)


def load_document(path: Path) -> Any:
    """Read one YAML/JSON document; raises ConfigLoadError when missing or unparseable."""
    if not path.exists():
        raise ConfigLoadError(f"Config not found: {path}")
    try:
        with open(path, "r", encoding="utf-8") as f:
            return yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        raise ConfigLoadError(f"Cannot parse {path}: {e}") from e


def fallback_snapshot(reason: str = "") -> ConfigSnapshot:
    """Built-in prompt, no model id, web search disabled."""
    if reason:
        logger.error("Using fallback knowledge config: %s", reason)
    return ConfigSnapshot(
        model_id="",
        rendered=RenderedPrompt(primary=FALLBACK_SYSTEM_PROMPT, secondary=None),
        web_search=WebSearchConfig(enabled=False),
        fallback=True,
    )


def build_snapshot(main_raw: Any, specific_raw: Any = None, sources: tuple = ()) -> ConfigSnapshot:
    if not isinstance(main_raw, dict):
        raise ConfigLoadError("Main config must be a mapping at the top level")
    try:
        primary = to_knowledge(main_raw)
        secondary = to_knowledge(specific_raw) if specific_raw is not None else None
        web_search = WebSearchConfig.from_dict(main_raw.get("webSearch"))
    except ConfigFormatError as e:
        raise ConfigLoadError(str(e)) from e

    return ConfigSnapshot(
        model_id=str(main_raw.get("modelId") or ""),
        rendered=render(primary, secondary),
        web_search=web_search,
        primary=primary,
        secondary=secondary,
        sources=sources,
    )


def load_snapshot(config_dir: str, main_name: str, specific_name: Optional[str] = None) -> ConfigSnapshot:
    base = Path(config_dir)
    main_path = base / main_name
    main_raw = load_document(main_path)
    sources = [main_path.as_posix()]

    specific_raw = None
    if specific_name:
        specific_path = base / specific_name
        if specific_path.exists():
            specific_raw = load_document(specific_path)
            sources.append(specific_path.as_posix())
        else:
            logger.warning("Specific config not found at %s, using main config only", specific_path)

    snapshot = build_snapshot(main_raw, specific_raw, tuple(sources))
    logger.info(
        "Loaded knowledge config (model=%s, web_search=%s, primary=%d chars, secondary=%s)",
        snapshot.model_id or "-",
        snapshot.web_search.enabled,
        len(snapshot.rendered.primary),
        len(snapshot.rendered.secondary) if snapshot.rendered.secondary else "none",
    )
    return snapshot


class ConfigStore:
    """Holds the current ConfigSnapshot for the process."""

    def __init__(self, config_dir: str, main_name: str, specific_name: Optional[str] = None):
        self.config_dir = config_dir
        self.main_name = main_name
        self.specific_name = specific_name
        self._snapshot: Optional[ConfigSnapshot] = None
        self._lock = threading.Lock()

    @property
    def snapshot(self) -> ConfigSnapshot:
        current = self._snapshot
        if current is None:
            return self.reload()
        return current

    def reload(self) -> ConfigSnapshot:
        with self._lock:
            try:
                snapshot = load_snapshot(self.config_dir, self.main_name, self.specific_name)
            except ConfigLoadError as e:
                snapshot = fallback_snapshot(str(e))
            self._snapshot = snapshot
            return snapshot

