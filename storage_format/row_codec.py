"""
storage_format/row_codec.py — kodowanie rekordów do wierszy tabeli XHTML.

Układ kolumn (stały, zgodny z istniejącymi stronami):
  Expiration | CN | SANs | Issuing CA | Requestor | Location |
  Distribution Group | Notes

Publiczne API:
  encode_row(record)            -> str   (<tr>…</tr>)
  decode_row(fragment)          -> Record | None
  build_table(records, tag)     -> str   (<table> z nagłówkiem i wierszami)
  build_section(label, records) -> str   (<hN> + tabela)
  build_empty_table()           -> str
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Literal, Sequence

from bs4 import BeautifulSoup, Tag

from data_model.diagnostics import Diagnostic
from data_model.records import (
    DISTRIBUTION_GROUP,
    LOCATION,
    NOTES,
    REQUESTOR,
    SANS,
    Record,
)
from storage_format.dates import sort_records

_Source = Literal["sort_key", "primary_key", "category", "attribute"]


@dataclass(frozen=True, slots=True)
class Column:
    title: str
    source: _Source
    header_style: str
    cell_style: str
    multi: bool = False


def _wrap(width: str) -> str:
    return f"{width} word-wrap: break-word;"


COLUMNS: tuple[Column, ...] = (
    Column("Expiration", "sort_key", "min-width: 90px;", "min-width: 90px;"),
    Column("CN", "primary_key",
           "min-width: 200px; max-width: 300px;", _wrap("min-width: 200px; max-width: 300px;")),
    Column(SANS, "attribute",
           "min-width: 250px; max-width: 350px;", _wrap("min-width: 250px; max-width: 350px;"),
           multi=True),
    Column("Issuing CA", "category",
           "min-width: 150px; max-width: 200px;", _wrap("min-width: 150px; max-width: 200px;")),
    Column(REQUESTOR, "attribute",
           "min-width: 120px; max-width: 180px;", _wrap("min-width: 120px; max-width: 180px;")),
    Column(LOCATION, "attribute",
           "min-width: 120px; max-width: 180px;", _wrap("min-width: 120px; max-width: 180px;")),
    Column(DISTRIBUTION_GROUP, "attribute",
           "min-width: 150px; max-width: 200px;", _wrap("min-width: 150px; max-width: 200px;")),
    Column(NOTES, "attribute",
           "min-width: 200px; max-width: 300px;", _wrap("min-width: 200px; max-width: 300px;")),
)

# Wiersz z mniejszą liczbą komórek <td> nie jest wierszem danych
MIN_COLUMNS = len(COLUMNS)

DEFAULT_TABLE_TAG = '<table style="width: 100%; table-layout: auto;">'

_ESCAPES = (
    ("&", "&amp;"),   # musi być pierwsze
    ("<", "&lt;"),
    (">", "&gt;"),
    ('"', "&quot;"),
    ("'", "&apos;"),
)

_SAN_SPLIT_RE = re.compile(r"[,\n]")


def escape_markup(text: str) -> str:
    """Escapuje pięć metaznaków XML (& < > " ')."""
    if not text:
        return ""
    for raw, entity in _ESCAPES:
        text = text.replace(raw, entity)
    return text


# ---------------------------------------------------------------------------
# Kodowanie
# ---------------------------------------------------------------------------

def _cell_value(record: Record, column: Column) -> str | tuple[str, ...]:
    if column.source == "attribute":
        return record.get(column.title, () if column.multi else "")
    return getattr(record, column.source)


def _render_cell(column: Column, value: str | tuple[str, ...]) -> str:
    if column.multi:
        items = (value,) if isinstance(value, str) else value
        inner = (
            "<ul>" + "".join(f"<li>{escape_markup(v)}</li>" for v in items) + "</ul>"
            if items else ""
        )
    else:
        inner = escape_markup(value if isinstance(value, str) else ", ".join(value))
    return f'<td style="{column.cell_style}">{inner}</td>'


def encode_row(record: Record) -> str:
    """Zwraca wiersz <tr> z komórkami w stałej kolejności kolumn."""
    cells = "\n".join(_render_cell(c, _cell_value(record, c)) for c in COLUMNS)
    return f"<tr>\n{cells}\n</tr>"


# ---------------------------------------------------------------------------
# Dekodowanie
# ---------------------------------------------------------------------------

def _cell_list(cell: Tag) -> tuple[str, ...]:
    items = [li.get_text().strip() for li in cell.find_all("li")]
    if not items:
        # ręcznie edytowana komórka: lista po przecinkach / w liniach
        items = [s.strip() for s in _SAN_SPLIT_RE.split(cell.get_text())]
    return tuple(s for s in items if s)


def decode_row(fragment: str, strict: bool = False) -> Record | None:
    """
    Odczytuje rekord z fragmentu <tr>.

    Zwraca None (nie błąd), gdy wiersz ma mniej niż MIN_COLUMNS komórek
    <td>, np. wiersz nagłówka z <th>. Przy strict=True None oznacza też
    wiersz z dodatkowymi komórkami, których rekord nie przeniesie.
    """
    soup = BeautifulSoup(fragment, "html.parser")
    row: Tag = soup.find("tr") or soup  # type: ignore[assignment]
    cells = row.find_all("td", recursive=False)
    if len(cells) < MIN_COLUMNS or (strict and len(cells) != MIN_COLUMNS):
        return None

    values: dict[str, str | tuple[str, ...]] = {}
    for column, cell in zip(COLUMNS, cells):
        values[column.title] = _cell_list(cell) if column.multi else cell.get_text().strip()

    return Record.certificate(
        expiration=values["Expiration"],          # type: ignore[arg-type]
        cn=values["CN"],                          # type: ignore[arg-type]
        sans=values[SANS],                        # type: ignore[arg-type]
        issuing_ca=values["Issuing CA"],          # type: ignore[arg-type]
        requestor=values[REQUESTOR],              # type: ignore[arg-type]
        location=values[LOCATION],                # type: ignore[arg-type]
        distribution_group=values[DISTRIBUTION_GROUP],  # type: ignore[arg-type]
        notes=values[NOTES],                      # type: ignore[arg-type]
    )


# ---------------------------------------------------------------------------
# Budowanie tabel
# ---------------------------------------------------------------------------

def _header_row() -> str:
    cells = "\n".join(f'<th style="{c.header_style}">{c.title}</th>' for c in COLUMNS)
    return f"<tr>\n{cells}\n</tr>"


def build_table(records: Sequence[Record], table_tag: str | None = None) -> str:
    """Tabela z wierszem nagłówka i wierszami w podanej kolejności."""
    parts = [table_tag or DEFAULT_TABLE_TAG, "<tbody>", _header_row()]
    parts.extend(encode_row(r) for r in records)
    parts += ["</tbody>", "</table>"]
    return "\n".join(parts)


def build_empty_table() -> str:
    return build_table(())


def build_section(
    label: str,
    records: Sequence[Record],
    heading_level: int = 3,
    diagnostics: list[Diagnostic] | None = None,
) -> str:
    """Nagłówek <hN> z etykietą + tabela z rekordami posortowanymi po dacie."""
    level = min(max(heading_level, 1), 6)
    heading = f"<h{level}>{escape_markup(label)}</h{level}>"
    return heading + "\n" + build_table(sort_records(records, diagnostics))
