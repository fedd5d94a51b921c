# Concierge chat service package.
# Request-time prompt pipeline: knowledge config -> prompts, web search decision, temporal status.

__version__ = "0.3.0"
