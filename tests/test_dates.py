"""Testy parsowania dat wygaśnięcia i sortowania po dacie."""

from __future__ import annotations

from datetime import date, datetime

import pytest

from data_model.diagnostics import Diagnostic, DiagnosticCode
from data_model.records import Record
from storage_format.dates import (
    format_sort_key,
    month_page_for_date,
    parse_date,
    sort_records,
)


def _record(cn: str, expiration: str) -> Record:
    return Record.certificate(expiration=expiration, cn=cn, issuing_ca="Sectigo")


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("2026-01-10", datetime(2026, 1, 10)),
        ("2026-01-10T12:00:00Z", datetime(2026, 1, 10, 12, 0)),
        ("Mar 14, 2026", datetime(2026, 3, 14)),
        ("March 14, 2026", datetime(2026, 3, 14)),
        ("Jan 10 12:00:00 2026 GMT", datetime(2026, 1, 10, 12, 0)),
        ("03/14/2026", datetime(2026, 3, 14)),
        ("14-03-2026", datetime(2026, 3, 14)),
        ("2026/03/14", datetime(2026, 3, 14)),
        ("  03/14/2026  ", datetime(2026, 3, 14)),
    ],
)
def test_parse_supported_formats(text: str, expected: datetime) -> None:
    assert parse_date(text) == expected


def test_day_over_twelve_forces_day_first() -> None:
    assert parse_date("13/02/2026") == datetime(2026, 2, 13)


def test_ambiguous_month_day_is_reported() -> None:
    diagnostics: list[Diagnostic] = []

    assert parse_date("03/04/2026", diagnostics) == datetime(2026, 3, 4)
    assert [d.code for d in diagnostics] == [DiagnosticCode.AMBIGUOUS_DATE_FORMAT]


def test_same_day_and_month_is_not_ambiguous() -> None:
    diagnostics: list[Diagnostic] = []
    parse_date("03/03/2026", diagnostics)
    assert diagnostics == []


@pytest.mark.parametrize("text", ["not-a-date", "", "32/13/2026", "2026-02-30"])
def test_unparseable_returns_none(text: str) -> None:
    diagnostics: list[Diagnostic] = []

    assert parse_date(text, diagnostics) is None
    assert diagnostics[-1].code == DiagnosticCode.UNPARSEABLE_DATE


def test_unparseable_dates_sort_last() -> None:
    bad = _record("bad.example.com", "not-a-date")
    good = _record("good.example.com", "2026-01-10")

    assert sort_records([bad, good]) == [good, bad]


def test_sort_is_ascending_and_stable_for_invalid_dates() -> None:
    records = [
        _record("c", "12/31/2026"),
        _record("x1", "unknown"),
        _record("a", "2026-01-10"),
        _record("x2", "TBD"),
        _record("b", "15/06/2026"),
    ]

    ordered = [r.primary_key for r in sort_records(records)]

    assert ordered == ["a", "b", "c", "x1", "x2"]


def test_sort_does_not_mutate_input() -> None:
    records = [_record("b", "2026-06-01"), _record("a", "2026-01-01")]
    sort_records(records)
    assert [r.primary_key for r in records] == ["b", "a"]


def test_format_sort_key_is_month_first() -> None:
    assert format_sort_key(date(2026, 3, 4)) == "03/04/2026"


def test_month_page_for_date() -> None:
    assert month_page_for_date(date(2026, 3, 4)) == "03-March"
    assert month_page_for_date(date(2026, 12, 1)) == "12-December"
