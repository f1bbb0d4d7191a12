"""
data_model/diagnostics.py — kody diagnostyk i błędy scalania.

Diagnostic: pojedyncze ostrzeżenie zwracane razem z wynikiem (silnik nie
    wypisuje niczego sam; o prezentacji decyduje wywołujący).
MalformedDocumentError: jedyny błąd przerywający scalanie: wymagana
    tabela nie istnieje albo jest niedomknięta.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Any


class DiagnosticCode(StrEnum):
    """Stałe kody ostrzeżeń (nie przerywają scalania)."""

    # Markery regionów
    MISSING_END_MARKER     = "W_MISSING_END_MARKER"
    OVERLAPPING_REGION     = "W_OVERLAPPING_REGION"
    DUPLICATE_REGION       = "W_DUPLICATE_REGION"

    # Daty
    AMBIGUOUS_DATE_FORMAT  = "W_AMBIGUOUS_DATE_FORMAT"
    UNPARSEABLE_DATE       = "W_UNPARSEABLE_DATE"

    # Dokument / plan
    EMPTY_DOCUMENT         = "W_EMPTY_DOCUMENT"
    FALLBACK_APPEND        = "W_FALLBACK_APPEND"
    NO_REGION_FOR_BUCKET   = "W_NO_REGION_FOR_BUCKET"
    REBUILD_DOWNGRADED     = "W_REBUILD_DOWNGRADED"


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """
    Pojedyncza diagnostyka.

    - code:    stały identyfikator (DiagnosticCode)
    - message: czytelny opis
    - details: opcjonalny słownik z danymi (nazwa markera, tekst daty itp.)
    """

    code: DiagnosticCode
    message: str
    details: dict[str, Any] | None = None


def note(
    diagnostics: list[Diagnostic] | None,
    code: DiagnosticCode,
    message: str,
    **details: Any,
) -> None:
    """Dopisuje diagnostykę, jeśli wywołujący przekazał listę."""
    if diagnostics is not None:
        diagnostics.append(Diagnostic(code, message, details or None))


class MergeError(Exception):
    """Bazowy błąd silnika scalania."""


class MalformedDocumentError(MergeError):
    """Struktura dokumentu uniemożliwia wykonanie edycji (brak/niedomknięta tabela)."""
