"""
merge/types.py — strategia scalania i raport wyniku.

MergeStrategy: sposób dopisywania do istniejącej tabeli:
    APPEND_ONLY  wstawia nowe wiersze przed </tbody>, istniejące bajty
                 pozostają nietknięte (tabela może przestać być posortowana)
    REBUILD_SORT odczytuje wszystkie wiersze, sortuje razem z nowymi i
                 emituje tabelę od nowa (globalny porządek dat)
MergeReport: wynik scalania: nowy tekst, zastosowane edycje, regiony,
    diagnostyki.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum

from data_model.diagnostics import Diagnostic
from data_model.documents import Edit, Region


class MergeStrategy(StrEnum):
    APPEND_ONLY  = "append"
    REBUILD_SORT = "rebuild"


DEFAULT_STRATEGY = MergeStrategy.APPEND_ONLY

# Poziom nagłówka dla nowo tworzonych sekcji
DEFAULT_HEADING_LEVEL = 3


@dataclass(slots=True)
class MergeReport:
    """
    Wynik jednego wywołania merge.

    - text:          nowy tekst dokumentu (do zapisania przez wywołującego)
    - strategy:      użyta strategia
    - used_fallback: True gdy brak regionów i dopisano sekcje na końcu
    - edits:         edycje względem oryginalnych offsetów (puste przy fallbacku)
    - regions:       znalezione regiony
    - diagnostics:   ostrzeżenia (nie przerywają scalania)
    """

    text: str
    strategy: MergeStrategy
    used_fallback: bool = False
    edits: list[Edit] = field(default_factory=list)
    regions: list[Region] = field(default_factory=list)
    diagnostics: list[Diagnostic] = field(default_factory=list)
