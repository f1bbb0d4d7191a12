"""Testy wyszukiwania regionów NAZWA-START / NAZWA-END w obu dialektach markerów."""

from __future__ import annotations

from data_model.diagnostics import Diagnostic, DiagnosticCode
from data_model.documents import MarkerStyle
from storage_format.markers import find_regions


def _macro(text: str) -> str:
    return (
        '<ac:structured-macro ac:name="htmlcomment" ac:schema-version="1" '
        'ac:macro-id="0f3c"><ac:rich-text-body><p>'
        + text
        + "</p></ac:rich-text-body></ac:structured-macro>"
    )


def test_html_comment_region_offsets() -> None:
    doc = "<p>a</p><!-- SECTIGO-START --><h3>S</h3><!-- SECTIGO-END --><p>z</p>"

    regions = find_regions(doc)

    assert len(regions) == 1
    r = regions[0]
    assert r.name == "SECTIGO"
    assert r.dialect is MarkerStyle.HTML_COMMENT
    assert doc[r.content_start:r.content_end] == "<h3>S</h3>"
    assert doc[r.start_offset:r.content_start] == "<!-- SECTIGO-START -->"
    assert doc[r.content_end:r.end_offset] == "<!-- SECTIGO-END -->"


def test_structured_macro_region() -> None:
    doc = "<p>intro</p>" + _macro("PKI-TIVO-COM-START") + "<h2>TiVo</h2>" + _macro("PKI-TIVO-COM-END")

    regions = find_regions(doc)

    assert [r.name for r in regions] == ["PKI-TIVO-COM"]
    r = regions[0]
    assert r.dialect is MarkerStyle.STRUCTURED_MACRO
    assert r.start_offset == len("<p>intro</p>")
    assert r.end_offset == len(doc)
    assert doc[r.content_start:r.content_end] == "<h2>TiVo</h2>"


def test_regions_in_document_order() -> None:
    doc = (
        "<!-- SECTIGO-START -->a<!-- SECTIGO-END -->"
        "<!-- THIRD-PARTY-START -->b<!-- THIRD-PARTY-END -->"
        "<!-- LEGACY-START -->c<!-- LEGACY-END -->"
    )
    assert [r.name for r in find_regions(doc)] == ["SECTIGO", "THIRD-PARTY", "LEGACY"]


def test_marker_names_are_case_insensitive() -> None:
    doc = "<!-- sdv-start -->x<!-- SDV-END -->"
    assert [r.name for r in find_regions(doc)] == ["SDV"]


def test_start_without_end_is_skipped_with_warning() -> None:
    diagnostics: list[Diagnostic] = []
    doc = "<!-- SDV-START --><h3>SDV</h3><!-- SECTIGO-START -->x<!-- SECTIGO-END -->"

    regions = find_regions(doc, diagnostics)

    assert [r.name for r in regions] == ["SECTIGO"]
    assert [d.code for d in diagnostics] == [DiagnosticCode.MISSING_END_MARKER]


def test_overlapping_region_is_skipped() -> None:
    diagnostics: list[Diagnostic] = []
    doc = "<!-- A-START --><!-- B-START -->x<!-- B-END --><!-- A-END -->"

    regions = find_regions(doc, diagnostics)

    assert [r.name for r in regions] == ["A"]
    assert DiagnosticCode.OVERLAPPING_REGION in [d.code for d in diagnostics]


def test_structured_macro_dialect_has_priority() -> None:
    doc = (
        "<!-- LEGACY-START -->old<!-- LEGACY-END -->"
        + _macro("SECTIGO-START") + "new" + _macro("SECTIGO-END")
    )

    regions = find_regions(doc)

    assert [r.name for r in regions] == ["SECTIGO"]
    assert regions[0].dialect is MarkerStyle.STRUCTURED_MACRO


def test_no_markers() -> None:
    assert find_regions("<h3>Sectigo</h3><table></table>") == []
    assert find_regions("") == []
