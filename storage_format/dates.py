"""
storage_format/dates.py — parsowanie dat wygaśnięcia i sortowanie rekordów.

Kolejność prób (pierwsza udana wygrywa):
  a) ogólne parsowanie kalendarzowe (ISO-8601 + jednoznaczne formy tekstowe)
  b) MM/DD/YYYY
  c) DD-MM-YYYY
  d) DD/MM/YYYY, tylko gdy pierwszy składnik > 12 (inaczej to reguła b)
  e) YYYY/MM/DD

Nieparsowalna data nie jest błędem: rekord trafia na koniec sortowania.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date, datetime, timezone
from typing import Sequence

from data_model.diagnostics import Diagnostic, DiagnosticCode, note
from data_model.records import Record

# Jednoznaczne formy tekstowe (w tym format OpenSSL: "Jan 10 12:00:00 2026 GMT")
_TEXT_FORMATS: tuple[str, ...] = (
    "%B %d, %Y",
    "%b %d, %Y",
    "%d %B %Y",
    "%d %b %Y",
    "%b %d %Y",
    "%b %d %H:%M:%S %Y %Z",
    "%a %b %d %H:%M:%S %Y",
)

MONTH_PAGES: tuple[str, ...] = (
    "01-January",
    "02-February",
    "03-March",
    "04-April",
    "05-May",
    "06-June",
    "07-July",
    "08-August",
    "09-September",
    "10-October",
    "11-November",
    "12-December",
)


@dataclass(frozen=True, slots=True)
class DatePattern:
    """Numeryczny format daty; order mówi, co oznacza kolejna grupa regex."""
    name: str
    regex: re.Pattern[str]
    order: tuple[str, str, str]
    first_over_12: bool = False   # akceptuj tylko gdy pierwszy składnik > 12


PATTERNS: list[DatePattern] = [
    DatePattern("MM/DD/YYYY", re.compile(r"^(\d{1,2})/(\d{1,2})/(\d{4})$"), ("month", "day", "year")),
    DatePattern("DD-MM-YYYY", re.compile(r"^(\d{1,2})-(\d{1,2})-(\d{4})$"), ("day", "month", "year")),
    DatePattern("DD/MM/YYYY", re.compile(r"^(\d{1,2})/(\d{1,2})/(\d{4})$"), ("day", "month", "year"),
                first_over_12=True),
    DatePattern("YYYY/MM/DD", re.compile(r"^(\d{4})/(\d{1,2})/(\d{1,2})$"), ("year", "month", "day")),
]


# ---------------------------------------------------------------------------
# Publiczne API
# ---------------------------------------------------------------------------

def parse_date(text: str, diagnostics: list[Diagnostic] | None = None) -> datetime | None:
    """
    Zamienia tekst daty na porównywalny datetime (naiwny, UTC) albo None.

    Diagnostyki:
      AMBIGUOUS_DATE_FORMAT: MM/DD/YYYY z oboma składnikami ≤ 12
      UNPARSEABLE_DATE:      żadna reguła nie pasuje
    """
    trimmed = " ".join((text or "").split())
    if trimmed:
        parsed = _parse_calendar(trimmed)
        if parsed is not None:
            return parsed

        for pat in PATTERNS:
            m = pat.regex.match(trimmed)
            if not m:
                continue
            parts = dict(zip(pat.order, (int(g) for g in m.groups())))
            if pat.first_over_12 and int(m.group(1)) <= 12:
                continue
            try:
                value = datetime(parts["year"], parts["month"], parts["day"])
            except ValueError:
                continue
            if pat.name == "MM/DD/YYYY" and parts["day"] <= 12 and parts["day"] != parts["month"]:
                note(
                    diagnostics, DiagnosticCode.AMBIGUOUS_DATE_FORMAT,
                    f"Niejednoznaczna data '{trimmed}' odczytana jako MM/DD/YYYY "
                    f"({value.date().isoformat()}).",
                    text=trimmed, parsed=value.date().isoformat(),
                )
            return value

    note(
        diagnostics, DiagnosticCode.UNPARSEABLE_DATE,
        f"Nie udało się odczytać daty '{trimmed}'; rekord trafi na koniec listy.",
        text=trimmed,
    )
    return None


def sort_records(
    records: Sequence[Record],
    diagnostics: list[Diagnostic] | None = None,
) -> list[Record]:
    """
    Stabilne sortowanie po dacie sort_key (najwcześniejsze pierwsze).

    Rekordy z nieparsowalną datą lądują za wszystkimi poprawnymi,
    w kolejności wejściowej.
    """
    keyed = [(parse_date(r.sort_key, diagnostics), r) for r in records]
    keyed.sort(key=lambda pair: (pair[0] is None, pair[0] or datetime.min))
    return [r for _, r in keyed]


def format_sort_key(value: date) -> str:
    """Formatuje datę tak, jak zapisują ją nowe wiersze (MM/DD/YYYY)."""
    return f"{value.month:02d}/{value.day:02d}/{value.year}"


def month_page_for_date(value: date) -> str:
    """Tytuł strony miesięcznej, np. "03-March"."""
    return MONTH_PAGES[value.month - 1]


# ---------------------------------------------------------------------------
# Pomocnicze
# ---------------------------------------------------------------------------

def _parse_calendar(text: str) -> datetime | None:
    try:
        return _naive_utc(datetime.fromisoformat(text))
    except ValueError:
        pass
    for fmt in _TEXT_FORMATS:
        try:
            return _naive_utc(datetime.strptime(text, fmt))
        except ValueError:
            continue
    return None


def _naive_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)
