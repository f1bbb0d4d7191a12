"""
merge/engine.py — główna operacja: scal N nowych rekordów z dokumentem.

Przepływ:
  tekst → find_regions() → (brak regionów) append_fallback()
                         → (są regiony)    plan_merge() → apply_edits()

Silnik jest czystą funkcją: nie trzyma stanu między wywołaniami i nie
wykonuje I/O. Pobranie strony i zapis z kontrolą wersji należą do
wywołującego. Wszystkie edycje są planowane przed przepisaniem tekstu, więc
MalformedDocumentError nigdy nie zostawia częściowo zmienionego wyniku.
"""

from __future__ import annotations

from typing import Sequence

from data_model.diagnostics import Diagnostic, DiagnosticCode, MalformedDocumentError, note
from data_model.records import Record
from storage_format.markers import find_regions
from storage_format.row_codec import encode_row
from storage_format.sections import find_last_table

from .fallback import append_fallback
from .planner import plan_merge
from .rewriter import apply_edits
from .types import DEFAULT_STRATEGY, MergeReport, MergeStrategy


def merge_with_report(
    document: str,
    records: Sequence[Record],
    strategy: MergeStrategy | str = DEFAULT_STRATEGY,
) -> MergeReport:
    """
    Scala rekordy z dokumentem i zwraca MergeReport.

    Args:
        document: surowy markup strony (może być pusty)
        records:  nowe rekordy (kolejność wejściowa ma znaczenie tylko
                  dla rekordów z nieparsowalną datą)
        strategy: "append" (domyślnie) albo "rebuild"

    Raises:
        MalformedDocumentError: docelowa tabela jest niedomknięta
        ValueError:             nieznana strategia
    """
    strategy = MergeStrategy(strategy)
    diagnostics: list[Diagnostic] = []

    if not records:
        return MergeReport(text=document, strategy=strategy)

    if not document.strip():
        note(
            diagnostics, DiagnosticCode.EMPTY_DOCUMENT,
            "Strona jest pusta; tworzone są nowe sekcje.",
        )

    regions = find_regions(document, diagnostics)
    if not regions:
        text = append_fallback(document, records, diagnostics)
        return MergeReport(
            text=text,
            strategy=strategy,
            used_fallback=True,
            diagnostics=diagnostics,
        )

    edits = plan_merge(document, regions, records, strategy, diagnostics)
    return MergeReport(
        text=apply_edits(document, edits),
        strategy=strategy,
        edits=edits,
        regions=regions,
        diagnostics=diagnostics,
    )


def merge(
    document: str,
    records: Sequence[Record],
    strategy: MergeStrategy | str = DEFAULT_STRATEGY,
) -> str:
    """Jak merge_with_report, ale zwraca sam tekst."""
    return merge_with_report(document, records, strategy).text


def append_row_to_table(document: str, record: Record) -> str:
    """
    Dopisuje jeden wiersz do ostatniej tabeli strony (przed </tbody>).

    Liczy się ostatnia tabela w dokumencie, także gdy dzieli nagłówek
    z wcześniejszą tabelą.

    Tabela bez <tbody> dostaje nowy <tbody> przed </table>.

    Raises:
        MalformedDocumentError: strona nie zawiera żadnej tabeli
    """
    last = find_last_table(document)
    if last is None:
        raise MalformedDocumentError("Brak tabeli w treści strony.")

    row = encode_row(record)
    fragment = row + "\n" if last.has_tbody else f"<tbody>\n{row}\n</tbody>\n"
    return document[:last.insert_at] + fragment + document[last.insert_at:]
