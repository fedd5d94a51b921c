# Prompt fragment that carries web search results into the conversation.

from __future__ import annotations

from .types import SearchResponse

SEARCH_GUIDANCE = (
    "Utilizza queste informazioni aggiornate per rispondere alla domanda dell'utente, "
    "citando le fonti quando appropriato."
)


def build_search_context(query: str, response: SearchResponse) -> str:
    sources = "\n\n".join(
        f"{i}. {r.title}\n   {r.content}\n   Fonte: {r.url}" for i, r in enumerate(response.results, start=1)
    )
    answer = f"Risposta diretta: {response.answer}\n\n" if response.answer else ""
    return f"""Informazioni aggiornate dal web per "{query}":

{answer}Fonti trovate:
{sources}

{SEARCH_GUIDANCE}"""
