"""
merge — scalanie nowych rekordów certyfikatów z treścią strony.

Interfejs publiczny:
    merge(document, records, strategy)             → nowy tekst
    merge_with_report(document, records, strategy) → MergeReport
    append_row_to_table(document, record)          → nowy tekst
    encode_row / decode_row                        podgląd pojedynczego wiersza
    has_any_table(document)                        szybka próba struktury
    classify(category)                             kubełek dla wystawcy
    find_regions, parse_sections                   podgląd struktury strony
    parse_date, sort_records                       daty wygaśnięcia
    MergeStrategy, MergeReport                     typy

Typowe użycie:
    from merge import merge_with_report, MergeStrategy
    from data_model import Record

    record = Record.certificate(expiration="03/14/2026", cn="a.example.com",
                                issuing_ca="Sectigo RSA Domain Validation Secure Server CA")
    report = merge_with_report(page_body, [record], MergeStrategy.APPEND_ONLY)
    for d in report.diagnostics:
        print(d.code, d.message)
    save(report.text)   # zapis z kontrolą wersji robi wywołujący
"""

from storage_format.classifier import classify
from storage_format.dates import parse_date, sort_records
from storage_format.markers import find_regions
from storage_format.row_codec import decode_row, encode_row
from storage_format.sections import has_any_table, parse_sections

from .engine import append_row_to_table, merge, merge_with_report
from .fallback import append_fallback
from .planner import plan_merge
from .rewriter import apply_edits
from .types import DEFAULT_STRATEGY, MergeReport, MergeStrategy

__all__ = [
    "merge",
    "merge_with_report",
    "append_row_to_table",
    "encode_row",
    "decode_row",
    "has_any_table",
    "classify",
    "find_regions",
    "parse_sections",
    "parse_date",
    "sort_records",
    "plan_merge",
    "apply_edits",
    "append_fallback",
    "MergeStrategy",
    "MergeReport",
    "DEFAULT_STRATEGY",
]
