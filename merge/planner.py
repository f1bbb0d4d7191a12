"""
merge/planner.py — wyznaczanie edycji dla nowych rekordów.

plan_merge(document, regions, records, strategy, diagnostics) -> list[Edit]

Dla każdego regionu, którego nazwa odpowiada kubełkowi nowych rekordów:
  1. brak sekcji       → nowa sekcja (nagłówek + tabela) przed markerem END
  2. jedna sekcja      → strategia (append / rebuild) na jej tabeli
  3. wiele sekcji      → grupowanie po kategorii = tekst nagłówka; grupy bez
                         pasującej sekcji trafiają za ostatnią tabelę regionu
Kubełki bez regionu są dopisywane na końcu dokumentu (żaden rekord nie ginie).

Edycje są liczone względem oryginalnych offsetów; nakłada je merge.rewriter.
"""

from __future__ import annotations

from typing import Sequence

from data_model.diagnostics import Diagnostic, DiagnosticCode, note
from data_model.documents import Edit, Region, Section
from data_model.records import Record
from storage_format.classifier import classify
from storage_format.dates import sort_records
from storage_format.row_codec import build_table, encode_row
from storage_format.sections import parse_sections

from .fallback import SEPARATOR, render_groups
from .types import DEFAULT_HEADING_LEVEL, DEFAULT_STRATEGY, MergeStrategy


def plan_merge(
    document: str,
    regions: Sequence[Region],
    records: Sequence[Record],
    strategy: MergeStrategy = DEFAULT_STRATEGY,
    diagnostics: list[Diagnostic] | None = None,
) -> list[Edit]:
    buckets: dict[str, list[Record]] = {}
    for record in records:
        buckets.setdefault(classify(record.category), []).append(record)

    edits: list[Edit] = []
    seen: set[str] = set()
    for region in regions:
        if region.name in seen:
            note(
                diagnostics, DiagnosticCode.DUPLICATE_REGION,
                f"Region {region.name} występuje więcej niż raz; używany jest pierwszy.",
                name=region.name, offset=region.start_offset,
            )
            continue
        seen.add(region.name)
        rows = buckets.pop(region.name, None)
        if rows:
            edits.extend(_plan_region(document, region, rows, strategy, diagnostics))

    if buckets:
        for bucket, rows in buckets.items():
            note(
                diagnostics, DiagnosticCode.NO_REGION_FOR_BUCKET,
                f"Brak regionu {bucket}; {len(rows)} rekord(ów) dopisano na końcu strony.",
                bucket=bucket, records=len(rows),
            )
        leftovers = [r for rows in buckets.values() for r in rows]
        end = len(document)
        edits.append(Edit(end, end, SEPARATOR + render_groups(leftovers, DEFAULT_HEADING_LEVEL, diagnostics)))

    return edits


# ---------------------------------------------------------------------------
# Region
# ---------------------------------------------------------------------------

def _plan_region(
    document: str,
    region: Region,
    rows: list[Record],
    strategy: MergeStrategy,
    diagnostics: list[Diagnostic] | None,
) -> list[Edit]:
    content = document[region.content_start:region.content_end]
    sections = parse_sections(content, search_whole_document=False, base_offset=region.content_start)

    if not sections:
        fragment = render_groups(rows, DEFAULT_HEADING_LEVEL, diagnostics)
        return [Edit(region.content_end, region.content_end, "\n" + fragment + "\n")]

    if len(sections) == 1:
        return [_plan_section(sections[0], rows, strategy, diagnostics)]

    # Układ historyczny: kilka nagłówków (po jednym na wystawcę) w jednym regionie
    by_label: dict[str, Section] = {}
    for section in sections:
        by_label.setdefault(section.label.strip().casefold(), section)

    groups: dict[str, list[Record]] = {}
    for record in rows:
        groups.setdefault(record.category.strip().casefold(), []).append(record)

    edits: list[Edit] = []
    unmatched: list[Record] = []
    for key, group in groups.items():
        section = by_label.get(key)
        if section is None:
            unmatched.extend(group)
        else:
            edits.append(_plan_section(section, group, strategy, diagnostics))

    if unmatched:
        level = next((s.heading_level for s in sections if s.heading_level), DEFAULT_HEADING_LEVEL)
        at = sections[-1].end
        edits.append(Edit(at, at, "\n" + render_groups(unmatched, level, diagnostics)))

    return edits


# ---------------------------------------------------------------------------
# Sekcja (jedna tabela)
# ---------------------------------------------------------------------------

def _plan_section(
    section: Section,
    rows: list[Record],
    strategy: MergeStrategy,
    diagnostics: list[Diagnostic] | None,
) -> Edit:
    if strategy == MergeStrategy.REBUILD_SORT:
        if section.skipped_rows == 0:
            combined = sort_records([*section.rows, *rows], diagnostics)
            return Edit(section.table_start, section.table_end, build_table(combined, section.table_tag))
        note(
            diagnostics, DiagnosticCode.REBUILD_DOWNGRADED,
            f"Sekcja '{section.label}' ma {section.skipped_rows} nieodczytanych wierszy; "
            "zamiast przebudowy nowe wiersze dopisano na końcu tabeli.",
            label=section.label, skipped_rows=section.skipped_rows,
        )

    rows_html = "\n".join(encode_row(r) for r in sort_records(rows, diagnostics))
    if section.has_tbody:
        return Edit(section.insert_at, section.insert_at, rows_html + "\n")
    return Edit(section.insert_at, section.insert_at, f"<tbody>\n{rows_html}\n</tbody>\n")
