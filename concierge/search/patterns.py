# Multilingual pattern tables for the web search decision.
# Languages: Italian, English, Spanish, French, German.
# Every pattern is matched against the lower-cased message with ’ folded to '.

from __future__ import annotations

import re
from typing import Iterable

from .types import ScoringCategory

_I = re.IGNORECASE


# -------------------------
# Exclusions (checked before scoring)
# -------------------------
RESTAURANT_EXCLUSION = re.compile(
    r"\b(prenotare|prenotazione|tavolo|ristorante|cena|pranzo|menu|carta|piatti|cucina|sala|posto|posti"
    r"|disponibilità|orari?\s+(del\s+)?ristorante|come\s+(posso\s+)?prenotare|vorrei\s+prenotare"
    r"|voglio\s+prenotare|posso\s+prenotare|prenotare\s+un\s+tavolo|riservare"
    r"|reservation|reserve|book|booking|table|restaurant|dinner|lunch"
    r"|reserva|reservar|mesa|réserver|réservation|reservieren|reservierung|tisch)\b",
    _I,
)

_GREETINGS = (
    r"ciao|salve|buongiorno|buonasera|buonanotte|hello|hi|hey|good\s+morning|good\s+afternoon"
    r"|good\s+evening|good\s+night|hola|buenos\s+días|buenas\s+tardes|buenas\s+noches|salut|bonjour"
    r"|bonsoir|hallo|guten\s+morgen|guten\s+tag|guten\s+abend"
)
GREETING_ONLY = re.compile(rf"^\s*(?:(?:{_GREETINGS})[\s.,;!?]*)+$", _I)


# -------------------------
# Scoring table
# -------------------------
DEFAULT_CATEGORIES = (
    ScoringCategory(
        "temporal",
        re.compile(
            r"\b(oggi|today|hoy|aujourd'?hui|heute)\s+(il\s+)?(meteo|weather|tiempo|météo|wetter|prezzo|price"
            r"|precio|prix|preis|notizie|news|noticias|nouvelles|nachrichten)\b",
            _I,
        ),
        2.0,
    ),
    ScoringCategory(
        "real_time",
        re.compile(
            r"\b(prezzo\s+(attuale|corrente|di\s+oggi)|current\s+price|meteo\s+(di\s+oggi|attuale)"
            r"|today'?s\s+weather|notizie\s+(di\s+oggi|attuali)|today'?s\s+news|borsa\s+(oggi|attuale)"
            r"|stock\s+market\s+today|bitcoin\s+(prezzo|price))\b",
            _I,
        ),
        2.5,
    ),
    ScoringCategory(
        "temporal_composite",
        re.compile(
            r"\b(che\s+tempo\s+fa\s+(oggi|adesso)|what'?s\s+the\s+weather\s+(today|now)"
            r"|qué\s+tiempo\s+hace\s+hoy|quel\s+temps\s+fait[\s-]+il\s+aujourd'?hui|quel\s+temps\s+fait\s+aujourd'?hui"
            r"|wie\s+ist\s+das\s+wetter\s+heute)\b",
            _I,
        ),
        3.0,
    ),
    ScoringCategory(
        "pricing",
        re.compile(
            r"\b(quanto\s+costa\s+(oggi|adesso|attualmente)|how\s+much\s+(costs?|is)\s+.+\s+(today|now)"
            r"|prezzo\s+(attuale|corrente|di\s+oggi))\b",
            _I,
        ),
        2.5,
    ),
    ScoringCategory(
        "news",
        re.compile(
            r"\b(ultime\s+notizie|latest\s+news|notizie\s+(di\s+oggi|attuali)|breaking\s+news|news\s+today"
            r"|últimas\s+noticias|dernières\s+nouvelles|neueste\s+nachrichten)\b",
            _I,
        ),
        2.5,
    ),
)


# -------------------------
# Search depth / priority signals
# -------------------------
INFORMATION_REQUEST = (
    re.compile(r"prezzo\s+(di|del|della)?\s*\w+", _I),
    re.compile(r"quanto\s+costa", _I),
    re.compile(r"che\s+tempo\s+fa", _I),
    re.compile(r"meteo\s+(di|a)?\s*\w+", _I),
    re.compile(r"temperatura\s+(di|a)?\s*\w+", _I),
    re.compile(r"orari?\s+(di|del|della)?\s*\w+", _I),
    re.compile(r"indirizzo\s+(di|del|della)?\s*\w+", _I),
    re.compile(r"telefono\s+(di|del|della)?\s*\w+", _I),
    re.compile(r"dove\s+(si\s+trova|è|sono)", _I),
    re.compile(r"quando\s+(apre|chiude|inizia|finisce)", _I),
    re.compile(r"\b(price\s+of|how\s+much\s+(does|do|is|are)|weather|temperature\s+(in|at|of)"
               r"|opening\s+hours|hours\s+of|address\s+of|phone\s+number|where\s+is|where\s+are"
               r"|when\s+does\s+.+\s+(open|close))\b", _I),
    re.compile(r"\b(cuánto\s+cuesta|precio\s+de|qué\s+tiempo\s+hace|dónde\s+está|horario\s+de)\b", _I),
    re.compile(r"\b(combien\s+coûte|prix\s+d|quel\s+temps\s+fait|où\s+se\s+trouve|horaires?\s+d)", _I),
    re.compile(r"\b(was\s+kostet|preis\s+(von|für)|wie\s+ist\s+das\s+wetter|wo\s+ist|öffnungszeiten)\b", _I),
)


def _keywords(words: Iterable[str]) -> re.Pattern:
    ordered = sorted(words, key=len, reverse=True)
    return re.compile(r"\b(?:" + "|".join(re.escape(w).replace(r"\ ", r"\s+") for w in ordered) + r")\b", _I)


NEWS_KEYWORDS = _keywords((
    "notizie", "news", "cronaca", "attualità",
    "eventi", "evento", "manifestazione",
    "politica", "elezioni", "governo",
    "economia", "borsa", "mercato", "bitcoin", "criptovalute",
    "sport", "calcio", "partita", "campionato",
    "meteo", "terremoto", "alluvione", "emergenza",
    "covid", "pandemia", "vaccino",
    "guerra", "conflitto",
    "breaking news", "election", "elections", "stock market", "earthquake",
    "noticias", "elecciones", "nouvelles", "actualités", "nachrichten", "wahlen",
))

TEMPORAL_KEYWORDS = _keywords((
    "oggi", "adesso", "ora", "attualmente", "al momento",
    "questa settimana", "questo mese", "quest'anno",
    "recente", "ultimo", "ultima", "ultimi", "ultime",
    "ieri", "domani", "stamattina", "stasera",
    "in tempo reale", "aggiornato", "aggiornamenti",
    "today", "now", "currently", "tonight", "this week", "latest",
    "hoy", "ahora", "aujourd'hui", "maintenant", "heute", "jetzt",
))

SOCIAL_MEDIA_DOMAINS = frozenset({
    "facebook.com",
    "instagram.com",
    "twitter.com",
    "tiktok.com",
    "reddit.com",
})


# -------------------------
# Query extraction word lists
# -------------------------
GREETING_WORDS = (
    "ciao", "salve", "buongiorno", "buonasera", "buonanotte",
    "hello", "hi", "hey", "good morning", "good evening",
    "hola", "buenos días", "buenas tardes", "bonjour", "bonsoir", "salut",
    "hallo", "guten tag", "guten morgen", "guten abend",
)

POLITENESS_WORDS = (
    "per favore", "per piacere", "grazie", "gentilmente",
    "please", "thanks", "thank you", "kindly",
    "por favor", "gracias", "s'il vous plaît", "merci", "bitte", "danke",
)

FILLER_WORDS = (
    "dimmi", "parlami", "racconta", "raccontami", "spiegami", "cosa", "come", "puoi", "potresti",
    "vorrei sapere", "sai",
    "tell me", "can you", "could you", "do you know", "i want to know", "what's", "what is", "what", "how",
    "dime", "puedes", "qué", "dis-moi", "peux-tu", "sag mir", "kannst du",
)

FUNCTION_WORDS = (
    "di", "del", "dello", "della", "dei", "degli", "delle", "il", "lo", "la", "i", "gli", "le",
    "un", "uno", "una",
    "the", "a", "an", "of",
    "el", "los", "las", "de",
    "les", "des", "du",
    "der", "die", "das", "den", "dem",
)


def word_list_pattern(words: Iterable[str]) -> re.Pattern:
    """Whole-word alternation; apostrophes count as part of a word."""
    ordered = sorted(set(words), key=len, reverse=True)
    body = "|".join(re.escape(w).replace(r"\ ", r"\s+") for w in ordered)
    return re.compile(rf"(?<![\w'])(?:{body})(?![\w'])", _I)
