"""
merge/rewriter.py — nakładanie listy edycji na oryginalny tekst.

Edycje są liczone względem ORYGINALNYCH offsetów. Po posortowaniu
(start, end) nakładamy je po kolei, a jedyny akumulator `drift` koryguje
pozycję każdej kolejnej edycji o zmianę długości wniesioną przez poprzednie.
Tekst poza edytowanymi zakresami zostaje bez zmian i w tej samej kolejności.
"""

from __future__ import annotations

from typing import Iterable

from data_model.documents import Edit


def apply_edits(text: str, edits: Iterable[Edit]) -> str:
    """
    Zwraca tekst po zastosowaniu edycji.

    Raises:
        ValueError: edycja poza tekstem albo nachodzące na siebie zakresy
    """
    ordered = sorted(edits, key=lambda e: (e.start, e.end))
    _check_edits(ordered, len(text))

    result = text
    drift = 0
    for edit in ordered:
        start = edit.start + drift
        end = edit.end + drift
        result = result[:start] + edit.replacement + result[end:]
        drift += len(edit.replacement) - (edit.end - edit.start)
    return result


def _check_edits(ordered: list[Edit], length: int) -> None:
    prev_end = 0
    for edit in ordered:
        if not 0 <= edit.start <= edit.end <= length:
            raise ValueError(
                f"Edycja [{edit.start}, {edit.end}) wykracza poza dokument (len={length})."
            )
        if edit.start < prev_end:
            raise ValueError(
                f"Edycja [{edit.start}, {edit.end}) nachodzi na poprzednią (koniec {prev_end})."
            )
        prev_end = edit.end
