# ============================================================
# Temporal context for the restaurant
# ------------------------------------------------------------
# Pure function of the current timestamp and a fixed calendar:
#   - operating season: May 15 -> Sep 15
#   - daily service: lunch 12:30-15:00, dinner 19:30-22:00
# Produces the system message that tells the model what "now" is.
# ============================================================

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time
from enum import Enum
from typing import Optional
from zoneinfo import ZoneInfo

DEFAULT_TIMEZONE = "Europe/Rome"

SEASON_OPEN = (5, 15)
SEASON_CLOSE = (9, 15)
LUNCH = (time(12, 30), time(15, 0))
DINNER = (time(19, 30), time(22, 0))

_WEEKDAYS = ("lunedì", "martedì", "mercoledì", "giovedì", "venerdì", "sabato", "domenica")
_MONTHS = (
    "gennaio", "febbraio", "marzo", "aprile", "maggio", "giugno",
    "luglio", "agosto", "settembre", "ottobre", "novembre", "dicembre",
)


class Season(str, Enum):
    HIGH_SEASON = "high_season"
    OPENING_WINDOW = "opening_window"
    WINTER_CLOSED = "winter_closed"
    PRE_SEASON = "pre_season"


class ServiceStatus(str, Enum):
    IN_SERVICE = "in_service"
    BETWEEN_SERVICES = "between_services"
    CLOSED_FOR_SEASON = "closed_for_season"


SEASON_LABELS = {
    Season.HIGH_SEASON: "Stagione estiva - Alta stagione turistica",
    Season.OPENING_WINDOW: "Periodo di apertura ristorante - Stagione ideale per visite",
    Season.WINTER_CLOSED: "Periodo invernale - Ristorante chiuso ma zona visitabile",
    Season.PRE_SEASON: "Periodo di pre-stagione - Preparativi apertura",
}

BOOKING_GUIDANCE = """\
IMPORTANTE per prenotazioni future:
- Il ristorante è aperto SOLO dal 15 Maggio al 15 Settembre
- Per richieste di prenotazione, calcola sempre se la data richiesta rientra nel periodo di apertura
- Se la data è oltre il 15 settembre dell'anno corrente, informa che il ristorante sarà chiuso
- Se la data è prima del 15 maggio dell'anno successivo, informa della data di riapertura

IMPORTANTE: Usa sempre queste informazioni per fornire risposte contestualizzate al momento attuale \
e calcolare correttamente le date future."""


@dataclass(frozen=True)
class TemporalContext:
    season: Season
    service_status: ServiceStatus
    text: str


def is_operating_day(day: date) -> bool:
    return SEASON_OPEN <= (day.month, day.day) <= SEASON_CLOSE


def season_for(day: date) -> Season:
    month = day.month
    if 6 <= month <= 8:
        return Season.HIGH_SEASON
    if is_operating_day(day):
        return Season.OPENING_WINDOW
    if (3, 1) <= (month, day.day) < SEASON_OPEN:
        return Season.PRE_SEASON
    return Season.WINTER_CLOSED


def _in_window(t: time, window: tuple) -> bool:
    start, end = window
    return start <= t < end


def service_status_for(moment: datetime) -> ServiceStatus:
    if not is_operating_day(moment.date()):
        return ServiceStatus.CLOSED_FOR_SEASON
    t = moment.time().replace(second=0, microsecond=0)
    if _in_window(t, LUNCH) or _in_window(t, DINNER):
        return ServiceStatus.IN_SERVICE
    return ServiceStatus.BETWEEN_SERVICES


def service_label(status: ServiceStatus, moment: datetime) -> str:
    if status is ServiceStatus.IN_SERVICE:
        return "✅ Ristorante attualmente in orario di servizio"
    if status is ServiceStatus.CLOSED_FOR_SEASON:
        return "❄️ Ristorante chiuso per stagione (riapre 15 Maggio)"
    t = moment.time()
    if LUNCH[1] <= t < DINNER[0]:
        return "⏰ Ristorante chiuso tra pranzo e cena (riapre alle 19:30)"
    if t < LUNCH[0]:
        return "🕐 Ristorante attualmente chiuso - riapre per pranzo alle 12:30"
    if (moment.month, moment.day) == SEASON_CLOSE:
        return "❄️ Ristorante chiuso - ultimo servizio della stagione concluso (riapre 15 Maggio)"
    return "🕐 Ristorante attualmente chiuso - riapre domani per pranzo (12:30)"


def format_italian_datetime(moment: datetime) -> str:
    """`sabato 18 ottobre 2026, 14:05`."""
    return (
        f"{_WEEKDAYS[moment.weekday()]} {moment.day} {_MONTHS[moment.month - 1]} {moment.year}, "
        f"{moment.hour:02d}:{moment.minute:02d}"
    )


def localize(now: datetime, tz_name: str = DEFAULT_TIMEZONE) -> datetime:
    """Aware datetimes are converted; naive ones are taken as already local."""
    tz = ZoneInfo(tz_name)
    if now.tzinfo is None:
        return now.replace(tzinfo=tz)
    return now.astimezone(tz)


def compute(now: Optional[datetime] = None, tz_name: str = DEFAULT_TIMEZONE) -> TemporalContext:
    local = localize(now if now is not None else datetime.now(ZoneInfo(tz_name)), tz_name)
    season = season_for(local.date())
    status = service_status_for(local)
    text = f"""
=== CONTESTO TEMPORALE AGGIORNATO ===
Data e ora attuali: {format_italian_datetime(local)} (fuso orario italiano)
Stagione: {SEASON_LABELS[season]}
Stato servizio: {service_label(status, local)}

{BOOKING_GUIDANCE}
"""
    return TemporalContext(season=season, service_status=status, text=text)
