"""
merge/fallback.py — dopisywanie sekcji na końcu strony bez markerów.

Ścieżka wyłącznie dopisująca: nigdy nie czyta ani nie przepisuje
istniejących fragmentów dokumentu. Nowe rekordy są grupowane po kubełku
klasyfikatora i kategorii; każda grupa to nowy nagłówek + tabela.
"""

from __future__ import annotations

from typing import Sequence

from data_model.diagnostics import Diagnostic, DiagnosticCode, note
from data_model.records import Record
from storage_format.classifier import classify
from storage_format.row_codec import build_section

from .types import DEFAULT_HEADING_LEVEL

SEPARATOR = "\n\n"


def render_groups(
    records: Sequence[Record],
    heading_level: int = DEFAULT_HEADING_LEVEL,
    diagnostics: list[Diagnostic] | None = None,
) -> str:
    """Sekcje nagłówek + tabela, po jednej na kategorię, w kolejności (kubełek, kategoria)."""
    groups: dict[tuple[str, str], list[Record]] = {}
    for record in records:
        groups.setdefault((classify(record.category), record.category), []).append(record)
    return SEPARATOR.join(
        build_section(category, rows, heading_level, diagnostics)
        for (_, category), rows in sorted(groups.items(), key=lambda kv: kv[0])
    )


def append_fallback(
    document: str,
    records: Sequence[Record],
    diagnostics: list[Diagnostic] | None = None,
) -> str:
    """trim(document) + pusta linia + nowe sekcje (same sekcje dla pustej strony)."""
    note(
        diagnostics, DiagnosticCode.FALLBACK_APPEND,
        "Nie znaleziono markerów regionów; nowe sekcje dopisano na końcu strony. "
        "Dodaj markery, np. <!-- SECTIGO-START --> … <!-- SECTIGO-END -->.",
        records=len(records),
    )
    sections = render_groups(records, DEFAULT_HEADING_LEVEL, diagnostics)
    body = document.strip()
    return body + SEPARATOR + sections if body else sections
