# Completion clients. Each exposes generate(model, messages) -> provider payload dict.
