"""Testy nakładania edycji liczonych względem oryginalnych offsetów."""

from __future__ import annotations

import pytest

from data_model.documents import Edit
from merge.rewriter import apply_edits


def test_no_edits_returns_text_unchanged() -> None:
    assert apply_edits("abcdef", []) == "abcdef"


def test_edits_use_original_offsets() -> None:
    # druga edycja podana pierwsza; usunięcie na pozycji 0 nie może jej przesunąć
    edits = [Edit(4, 4, "XY"), Edit(0, 1, "")]
    assert apply_edits("abcdef", edits) == "bcdXYef"


def test_replacement_and_insertions() -> None:
    edits = [Edit(1, 3, "ZZZ"), Edit(6, 6, "!"), Edit(4, 5, "")]
    assert apply_edits("abcdef", edits) == "aZZZdf!"


def test_touching_ranges_are_allowed() -> None:
    assert apply_edits("abcd", [Edit(0, 2, "x"), Edit(2, 4, "y")]) == "xy"


@pytest.mark.parametrize(
    "edits",
    [
        [Edit(0, 3, "x"), Edit(2, 4, "y")],
        [Edit(5, 10, "")],
        [Edit(3, 2, "")],
    ],
)
def test_invalid_edits_raise(edits: list[Edit]) -> None:
    with pytest.raises(ValueError):
        apply_edits("abcdef"[:4], edits)
