# Built-in prompt fragments used when the knowledge configuration cannot be loaded.

FALLBACK_SYSTEM_PROMPT = """\
Sei un assistente virtuale di nome Marios Brazil, utile, cortese e competente. \
Il tuo scopo è aiutare gli utenti fornendo informazioni accurate, assistenza con compiti \
specifici e mantenendo una conversazione amichevole e professionale."""

# Root keys that configure the service rather than the assistant's behaviour.
OPERATIONAL_KEYS = ("modelId", "webSearch")

# Root key holding a flat legacy prompt, emitted before the structured sections.
PREAMBLE_KEY = "systemPrompt"
