"""Testy kodowania rekordów certyfikatów do wierszy tabeli i ich odczytu."""

from __future__ import annotations

import pytest

from data_model.records import SANS, Record
from storage_format.row_codec import (
    COLUMNS,
    build_empty_table,
    build_section,
    build_table,
    decode_row,
    encode_row,
    escape_markup,
)


def _record(**overrides: object) -> Record:
    values: dict = dict(
        expiration="03/14/2026",
        cn="a.example.com",
        issuing_ca="Sectigo RSA Domain Validation Secure Server CA",
        sans=("a.example.com", "www.a.example.com"),
        requestor="Jan Kowalski",
        location="Warszawa",
        distribution_group="pki-team@example.com",
        notes="renewed",
    )
    values.update(overrides)
    return Record.certificate(**values)


def test_encode_row_has_eight_cells_in_column_order() -> None:
    row = encode_row(_record())

    assert row.startswith("<tr>\n")
    assert row.endswith("\n</tr>")
    assert row.count("<td ") == len(COLUMNS) == 8
    assert row.index("03/14/2026") < row.index("a.example.com") < row.index("Sectigo")
    assert "<ul><li>a.example.com</li><li>www.a.example.com</li></ul>" in row


def test_round_trip_preserves_record() -> None:
    record = _record()
    assert decode_row(encode_row(record)) == record


def test_round_trip_with_markup_metacharacters() -> None:
    record = _record(
        cn="a&b.example.com",
        issuing_ca='Sectigo "RSA" <Test> CA',
        sans=("x<y>.example.com", "o'neil.example.com"),
        notes="5 > 3 & 2 < 4",
    )
    row = encode_row(record)

    assert "a&amp;b.example.com" in row
    assert "&lt;Test&gt;" in row
    assert "&quot;RSA&quot;" in row
    assert "o&apos;neil" in row
    assert decode_row(row) == record


def test_empty_san_list_renders_empty_cell() -> None:
    record = _record(sans=())
    row = encode_row(record)

    assert "<ul>" not in row
    decoded = decode_row(row)
    assert decoded is not None
    assert decoded.get(SANS) == ()


def test_san_cell_without_list_items_is_split() -> None:
    cells = ["06/01/2026", "b.example.com", "b.example.com, c.example.com", "DigiCert", "", "", "", ""]
    row = "<tr>" + "".join(f"<td>{c}</td>" for c in cells) + "</tr>"

    decoded = decode_row(row)
    assert decoded is not None
    assert decoded.get(SANS) == ("b.example.com", "c.example.com")
    assert decoded.category == "DigiCert"


@pytest.mark.parametrize(
    "fragment",
    [
        "<tr><th>Expiration</th><th>CN</th><th>SANs</th><th>Issuing CA</th>"
        "<th>Requestor</th><th>Location</th><th>Distribution Group</th><th>Notes</th></tr>",
        "<tr><td>01/01/2026</td><td>a</td><td></td></tr>",
        "",
    ],
)
def test_non_data_rows_decode_to_none(fragment: str) -> None:
    assert decode_row(fragment) is None


def test_escape_markup_handles_ampersand_first() -> None:
    assert escape_markup("&lt;") == "&amp;lt;"
    assert escape_markup("") == ""


def test_build_table_wraps_header_and_rows() -> None:
    table = build_table([_record()])

    assert table.startswith("<table")
    assert table.endswith("</tbody>\n</table>")
    assert table.count("<th ") == 8
    assert table.count("<td ") == 8


def test_build_empty_table_has_header_only() -> None:
    table = build_empty_table()
    assert "<th " in table
    assert "<td " not in table


def test_build_section_sorts_rows_and_clamps_level() -> None:
    late = _record(cn="late.example.com", expiration="12/01/2026")
    early = _record(cn="early.example.com", expiration="02/01/2026")

    section = build_section("Sectigo", [late, early], heading_level=9)

    assert section.startswith("<h6>Sectigo</h6>\n<table")
    assert section.index("early.example.com") < section.index("late.example.com")


def test_row_with_extra_cells_decodes_only_when_lenient() -> None:
    wide = encode_row(_record()).replace("\n</tr>", "\n<td>Ticket CHG-4711</td>\n</tr>")

    assert decode_row(wide) == _record()
    assert decode_row(wide, strict=True) is None
    assert decode_row(encode_row(_record()), strict=True) == _record()


def test_blank_san_items_are_dropped_on_both_sides() -> None:
    record = _record(sans=("", "a.example.com", "  "))

    assert record.get(SANS) == ("a.example.com",)
    assert decode_row(encode_row(record)) == record
    assert decode_row(encode_row(_record(sans=("",)))) == _record(sans=())
