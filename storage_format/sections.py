"""
storage_format/sections.py — wyszukiwanie par nagłówek + tabela w markupie.

Architektura (bez pełnego DOM, offsety liczone na surowym tekście):
  text → nagłówki <h1>–<h6> (regex) → dla każdego: pierwsza <table> przed
  następnym nagłówkiem → wiersze <tr> → decode_row() → Section

BeautifulSoup służy tylko do wyciągania tekstu nagłówków i komórek;
granice elementów zawsze pochodzą z dopasowań na oryginalnym tekście,
dzięki czemu edycje nie naruszają reszty dokumentu.

Kluczowe funkcje publiczne:
  parse_sections(text, search_whole_document, base_offset) -> list[Section]
  find_last_table(text) -> Section | None
  has_any_table(text) -> bool
  contains_primary_key(text, key) -> bool
"""

from __future__ import annotations

import re

from bs4 import BeautifulSoup

from data_model.diagnostics import MalformedDocumentError
from data_model.documents import Section
from storage_format.row_codec import decode_row, escape_markup

_HEADING_RE = re.compile(r"<h([1-6])\b[^>]*>([\s\S]*?)</h\1\s*>", re.IGNORECASE)
_TABLE_OPEN_RE = re.compile(r"<table\b[^>]*>", re.IGNORECASE)
_TABLE_TAG_RE = re.compile(r"<(/?)table\b[^>]*>", re.IGNORECASE)
_TBODY_CLOSE_RE = re.compile(r"</tbody\s*>", re.IGNORECASE)
_ROW_RE = re.compile(r"<tr\b[^>]*>[\s\S]*?</tr\s*>", re.IGNORECASE)
_HEADER_CELL_RE = re.compile(r"<th\b", re.IGNORECASE)
_ANY_TABLE_RE = re.compile(r"<table[\s>]", re.IGNORECASE)


# ---------------------------------------------------------------------------
# Publiczne API
# ---------------------------------------------------------------------------

def parse_sections(
    text: str,
    search_whole_document: bool,
    base_offset: int = 0,
) -> list[Section]:
    """
    Zwraca sekcje (nagłówek + tabela) w kolejności dokumentu.

    Args:
        text:                  cały dokument albo zawartość regionu
        search_whole_document: True → liczą się tylko tabele pod nagłówkami;
                               False (tryb regionu) → tabela przed pierwszym
                               nagłówkiem też jest sekcją (bez nagłówka)
        base_offset:           przesunięcie dodawane do wszystkich offsetów

    Raises:
        MalformedDocumentError: <table> bez zamykającego </table>
    """
    headings = list(_HEADING_RE.finditer(text))
    sections: list[Section] = []

    if not search_whole_document:
        first = headings[0].start() if headings else len(text)
        headless = _table_section(text, 0, first, base_offset, None)
        if headless is not None:
            sections.append(headless)

    for i, heading in enumerate(headings):
        segment_end = headings[i + 1].start() if i + 1 < len(headings) else len(text)
        section = _table_section(text, heading.end(), segment_end, base_offset, heading)
        if section is not None:
            sections.append(section)

    return sections


def find_last_table(text: str) -> Section | None:
    """
    Ostatnia tabela najwyższego poziomu w dokumencie, niezależnie od nagłówków.

    Raises:
        MalformedDocumentError: <table> bez zamykającego </table>
    """
    last_start: int | None = None
    open_m = _TABLE_OPEN_RE.search(text)
    while open_m is not None:
        last_start = open_m.start()
        _, close_end = _find_table_close(text, open_m.end())
        open_m = _TABLE_OPEN_RE.search(text, close_end)
    if last_start is None:
        return None
    return _table_section(text, last_start, len(text), 0, None)


def has_any_table(text: str) -> bool:
    """Szybka próba: czy dokument zawiera jakąkolwiek tabelę."""
    return bool(_ANY_TABLE_RE.search(text or ""))


def contains_primary_key(text: str, key: str) -> bool:
    """Czy któraś komórka <td> zawiera dokładnie podany klucz (np. CN)."""
    if not key or not text:
        return False
    pattern = re.compile(
        r"<td[^>]*>\s*" + re.escape(escape_markup(key)) + r"\s*</td>",
        re.IGNORECASE,
    )
    return bool(pattern.search(text))


# ---------------------------------------------------------------------------
# Wewnętrzna implementacja
# ---------------------------------------------------------------------------

def _table_section(
    text: str,
    lo: int,
    hi: int,
    base: int,
    heading: re.Match[str] | None,
) -> Section | None:
    open_m = _TABLE_OPEN_RE.search(text, lo, hi)
    if open_m is None:
        return None

    close_start, close_end = _find_table_close(text, open_m.end())
    inner_start = open_m.end()

    insert_at = close_start
    has_tbody = False
    for m in _TBODY_CLOSE_RE.finditer(text, inner_start, close_start):
        insert_at = m.start()
        has_tbody = True

    section = Section(
        label=_heading_text(heading.group(2)) if heading else "",
        heading=heading.group(0) if heading else "",
        heading_level=int(heading.group(1)) if heading else None,
        start=base + (heading.start() if heading else open_m.start()),
        end=base + close_end,
        table_start=base + open_m.start(),
        table_end=base + close_end,
        table_tag=open_m.group(0),
        insert_at=base + insert_at,
        has_tbody=has_tbody,
    )

    for row in _ROW_RE.finditer(text, inner_start, close_start):
        row_html = row.group(0)
        if _HEADER_CELL_RE.search(row_html):
            continue
        record = decode_row(row_html, strict=True)
        if record is None:
            section.skipped_rows += 1
        else:
            section.rows.append(record)

    return section


def _find_table_close(text: str, pos: int) -> tuple[int, int]:
    """Zwraca (start, end) zamknięcia tabeli z uwzględnieniem zagnieżdżeń."""
    depth = 1
    for m in _TABLE_TAG_RE.finditer(text, pos):
        depth += -1 if m.group(1) else 1
        if depth == 0:
            return m.start(), m.end()
    raise MalformedDocumentError(
        f"Niedomknięta tabela zaczynająca się przed pozycją {pos}: brak </table>."
    )


def _heading_text(inner: str) -> str:
    return BeautifulSoup(inner, "html.parser").get_text(" ", strip=True)
