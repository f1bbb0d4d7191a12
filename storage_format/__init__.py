"""
storage_format — odczyt i zapis fragmentów strony w formacie storage (XHTML).

Moduły:
  row_codec  — encode_row, decode_row, build_table, build_section
  dates      — parse_date, sort_records, format_sort_key, month_page_for_date
  classifier — classify (Issuing CA → kubełek / nazwa regionu)
  markers    — find_regions, DIALECTS (makro htmlcomment, komentarz HTML)
  sections   — parse_sections, find_last_table, has_any_table, contains_primary_key
"""

from .row_codec import (
    COLUMNS,
    escape_markup,
    encode_row,
    decode_row,
    build_table,
    build_empty_table,
    build_section,
)
from .dates import (
    MONTH_PAGES,
    parse_date,
    sort_records,
    format_sort_key,
    month_page_for_date,
)
from .classifier import DEFAULT_BUCKET, RULES, classify
from .markers import DIALECTS, MarkerDialect, find_regions
from .sections import parse_sections, find_last_table, has_any_table, contains_primary_key

__all__ = [
    # row_codec
    "COLUMNS",
    "escape_markup",
    "encode_row",
    "decode_row",
    "build_table",
    "build_empty_table",
    "build_section",
    # dates
    "MONTH_PAGES",
    "parse_date",
    "sort_records",
    "format_sort_key",
    "month_page_for_date",
    # classifier
    "DEFAULT_BUCKET",
    "RULES",
    "classify",
    # markers
    "DIALECTS",
    "MarkerDialect",
    "find_regions",
    # sections
    "parse_sections",
    "find_last_table",
    "has_any_table",
    "contains_primary_key",
]
