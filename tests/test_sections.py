"""Testy wyszukiwania par nagłówek + tabela w surowym markupie strony."""

from __future__ import annotations

import pytest

from data_model.diagnostics import MalformedDocumentError
from data_model.records import Record
from storage_format.row_codec import build_table, encode_row
from storage_format.sections import contains_primary_key, find_last_table, has_any_table, parse_sections


def _record(cn: str = "a.example.com", expiration: str = "01/15/2026") -> Record:
    return Record.certificate(expiration=expiration, cn=cn, issuing_ca="Sectigo")


def test_heading_and_table_form_a_section() -> None:
    record = _record()
    doc = "<p>intro</p>\n<h2>Sectigo</h2>\n" + build_table([record]) + "\n<p>end</p>"

    sections = parse_sections(doc, search_whole_document=True)

    assert len(sections) == 1
    s = sections[0]
    assert s.label == "Sectigo"
    assert s.heading == "<h2>Sectigo</h2>"
    assert s.heading_level == 2
    assert s.rows == [record]
    assert s.skipped_rows == 0
    assert s.has_tbody
    assert doc[s.start:].startswith("<h2>")
    assert doc[s.table_start:s.table_end] == build_table([record])
    assert doc[s.insert_at:].startswith("</tbody>")


def test_heading_label_is_plain_text() -> None:
    doc = "<h3 id='x'><strong>Internal</strong> CA &amp; Co</h3><table><tr><td>x</td></tr></table>"
    assert parse_sections(doc, True)[0].label == "Internal CA & Co"


def test_heading_without_table_is_ignored() -> None:
    doc = "<h2>Empty</h2><p>nothing</p><h2>Sectigo</h2>" + build_table([_record()])

    sections = parse_sections(doc, True)

    assert [s.label for s in sections] == ["Sectigo"]


def test_table_before_first_heading_only_in_region_mode() -> None:
    doc = build_table([_record()]) + "\n<h3>Other</h3><p>x</p>"

    assert parse_sections(doc, search_whole_document=True) == []
    region_sections = parse_sections(doc, search_whole_document=False)
    assert len(region_sections) == 1
    assert region_sections[0].heading_level is None
    assert region_sections[0].label == ""


def test_undecodable_rows_are_counted() -> None:
    doc = (
        "<h2>S</h2><table><tbody>"
        + encode_row(_record())
        + "<tr><td>only</td><td>three</td><td>cells</td></tr>"
        + "</tbody></table>"
    )

    s = parse_sections(doc, True)[0]

    assert len(s.rows) == 1
    assert s.skipped_rows == 1


def test_table_without_tbody_inserts_before_close() -> None:
    doc = "<h2>S</h2><table><tr><th>Expiration</th></tr></table>"

    s = parse_sections(doc, True)[0]

    assert not s.has_tbody
    assert doc[s.insert_at:].startswith("</table>")
    assert s.rows == []
    assert s.skipped_rows == 0


def test_nested_table_closes_outer() -> None:
    doc = (
        "<h2>S</h2><table><tbody><tr><td><table><tr><td>i</td></tr></table></td></tr>"
        "</tbody></table><p>after</p>"
    )

    s = parse_sections(doc, True)[0]

    assert s.table_end == doc.index("<p>after</p>")
    assert doc[s.insert_at:].startswith("</tbody></table><p>after")


def test_offsets_are_shifted_by_base() -> None:
    content = "<h3>S</h3>" + build_table([_record()])

    s = parse_sections(content, False, base_offset=100)

    assert s[0].start == 100
    assert s[0].table_start == 100 + len("<h3>S</h3>")


def test_unclosed_table_raises() -> None:
    doc = "<h2>S</h2><table><tbody><tr><td>x</td></tr></tbody>"
    with pytest.raises(MalformedDocumentError):
        parse_sections(doc, True)


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("<table>", True),
        ('<p>a</p><table class="wrapped">', True),
        ("<TABLE\n>", True),
        ("<tablet>", False),
        ("<p>no tables</p>", False),
        ("", False),
    ],
)
def test_has_any_table(text: str, expected: bool) -> None:
    assert has_any_table(text) is expected


def test_contains_primary_key() -> None:
    doc = build_table([_record(cn="a&b.example.com")])

    assert contains_primary_key(doc, "a&b.example.com")
    assert contains_primary_key(doc, "A&B.EXAMPLE.COM")
    assert not contains_primary_key(doc, "b.example.com")
    assert not contains_primary_key(doc, "")


def test_row_with_extra_cells_is_skipped() -> None:
    wide = encode_row(_record()).replace("\n</tr>", "\n<td>Ticket CHG-4711</td>\n</tr>")
    doc = "<h2>S</h2><table><tbody>" + wide + encode_row(_record(cn="b.example.com")) + "</tbody></table>"

    s = parse_sections(doc, True)[0]

    assert [r.primary_key for r in s.rows] == ["b.example.com"]
    assert s.skipped_rows == 1


def test_find_last_table_ignores_headings() -> None:
    doc = (
        "<h2>A</h2>" + build_table([_record(cn="a.example.com")])
        + "<p>x</p>" + build_table([_record(cn="b.example.com")]) + "<p>end</p>"
    )

    last = find_last_table(doc)

    assert last is not None
    assert [r.primary_key for r in last.rows] == ["b.example.com"]
    assert last.insert_at == doc.rindex("</tbody>")
    assert last.heading_level is None


def test_find_last_table_skips_nested_tables() -> None:
    doc = "<table><tbody><tr><td><table><tr><td>i</td></tr></table></td></tr></tbody></table><p>end</p>"

    last = find_last_table(doc)

    assert last is not None
    assert last.table_start == 0
    assert last.table_end == doc.index("<p>end</p>")


def test_find_last_table_without_tables() -> None:
    assert find_last_table("<p>no tables</p>") is None
