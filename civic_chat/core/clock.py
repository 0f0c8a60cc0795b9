"""
Date formatting shared by chat replies, prompts and real-time bundles.

Display strings are in Brazilian Portuguese, e.g.
"18 de outubro de 2026 às 14:05".
"""
from datetime import datetime

MONTHS_PT = (
    "janeiro", "fevereiro", "março", "abril", "maio", "junho",
    "julho", "agosto", "setembro", "outubro", "novembro", "dezembro",
)


def local_now() -> datetime:
    """Current local time with its UTC offset attached."""
    return datetime.now().astimezone()


def format_display_date(moment: datetime) -> str:
    return f"{moment.day:02d} de {MONTHS_PT[moment.month - 1]} de {moment.year}"


def format_display_time(moment: datetime) -> str:
    return f"{format_display_date(moment)} às {moment:%H:%M}"


def format_rfc3339(moment: datetime) -> str:
    """Second-precision RFC 3339 timestamp."""
    if moment.tzinfo is None:
        moment = moment.astimezone()
    return moment.isoformat(timespec="seconds")
