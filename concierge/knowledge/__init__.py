# Knowledge configuration: typed documents, loader and prompt renderer.

from .loader import ConfigStore, build_snapshot, fallback_snapshot, load_snapshot
from .prompt_builder import render, render_document, render_raw
from .types import ConfigSnapshot, RenderedPrompt, WebSearchConfig

__all__ = [
    "ConfigStore",
    "ConfigSnapshot",
    "RenderedPrompt",
    "WebSearchConfig",
    "build_snapshot",
    "fallback_snapshot",
    "load_snapshot",
    "render",
    "render_document",
    "render_raw",
]
