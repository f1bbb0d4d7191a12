"""
data_model/documents.py — struktury wyprowadzane z tekstu strony.

Region odpowiada jednemu obszarowi ograniczonemu markerami NAZWA-START /
NAZWA-END; Section to para nagłówek + tabela. Edit to pojedyncza zamiana
zakresu tekstu liczona względem ORYGINALNYCH offsetów dokumentu.

Wszystkie offsety są indeksami w str (0-based, koniec wyłączny).
Obiekty żyją tylko przez czas jednego wywołania merge.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum

from .records import Record


class MarkerStyle(StrEnum):
    """Dialekt markerów regionu."""
    STRUCTURED_MACRO = "structured-macro"
    HTML_COMMENT     = "html-comment"


@dataclass(frozen=True, slots=True)
class Region:
    """
    Obszar strony przypisany do jednego kubełka klasyfikatora.

    start_offset ≤ content_start ≤ content_end ≤ end_offset
    """
    name: str
    start_offset: int     # początek markera START
    end_offset: int       # koniec markera END
    content_start: int    # pierwszy znak po markerze START
    content_end: int      # początek markera END
    dialect: MarkerStyle


@dataclass(slots=True)
class Section:
    label: str                 # tekst nagłówka (bez znaczników)
    heading: str               # oryginalny markup nagłówka, np. "<h2>Sectigo</h2>"
    heading_level: int | None  # 1..6; None = tabela bez nagłówka na początku regionu
    start: int                 # początek nagłówka (lub tabeli, gdy brak nagłówka)
    end: int                   # koniec </table>
    table_start: int
    table_end: int
    table_tag: str             # otwierający znacznik <table ...>
    insert_at: int             # pozycja ostatniego </tbody> (lub </table>)
    has_tbody: bool
    rows: list[Record] = field(default_factory=list)
    skipped_rows: int = 0      # wiersze danych, których nie udało się zdekodować


@dataclass(frozen=True, slots=True)
class Edit:
    """Zamiana [start, end) oryginalnego tekstu na replacement."""
    start: int
    end: int
    replacement: str
