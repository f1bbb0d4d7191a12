"""Komenda: cpm sections — sekcje nagłówek + tabela wykryte na stronie."""

from __future__ import annotations

import argparse

from rich.table import Table
from rich import box

from cpm.commands.merge import _read_page, console
from data_model.diagnostics import MalformedDocumentError
from data_model.documents import Section
from storage_format.markers import find_regions
from storage_format.sections import parse_sections


def _collect(document: str, whole: bool) -> list[tuple[str, Section]]:
    regions = [] if whole else find_regions(document)
    if not regions:
        return [("-", s) for s in parse_sections(document, search_whole_document=True)]

    found: list[tuple[str, Section]] = []
    for region in regions:
        content = document[region.content_start:region.content_end]
        for s in parse_sections(content, search_whole_document=False, base_offset=region.content_start):
            found.append((region.name, s))
    return found


def run(args: argparse.Namespace) -> None:
    document = _read_page(args.page)

    try:
        found = _collect(document, args.whole)
    except MalformedDocumentError as e:
        console.print(f"[red]Niepoprawna struktura strony:[/red] {e}")
        raise SystemExit(1)

    if not found:
        console.print("[yellow]Nie znaleziono sekcji z tabelą.[/yellow]")
        return

    table = Table(
        box=box.SIMPLE_HEAD,
        show_header=True,
        header_style="bold white",
        row_styles=["", "dim"],
        expand=False,
    )
    table.add_column("REGION",    style="cyan", no_wrap=True)
    table.add_column("LVL",       justify="right")
    table.add_column("NAGŁÓWEK",  no_wrap=False, max_width=60)
    table.add_column("WIERSZE",   justify="right")
    table.add_column("POMINIĘTE", justify="right")
    table.add_column("TBODY",     justify="center")

    for region_name, s in found:
        table.add_row(
            region_name,
            str(s.heading_level) if s.heading_level else "[dim]-[/dim]",
            s.label or "[dim](bez nagłówka)[/dim]",
            str(len(s.rows)),
            f"[yellow]{s.skipped_rows}[/yellow]" if s.skipped_rows else "0",
            "tak" if s.has_tbody else "[dim]nie[/dim]",
        )

    console.print()
    console.print(table)
    console.print(f"  [dim]{len(found)} sekcji[/dim]\n")


def add_parser(subparsers: argparse._SubParsersAction) -> None:  # type: ignore[type-arg]
    p = subparsers.add_parser(
        "sections",
        help="Listuje sekcje nagłówek + tabela (w regionach lub w całej stronie).",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        description="""
Pokazuje sekcje, które widzi silnik scalania: nagłówek <h1>–<h6>
i pierwszą tabelę pod nim, liczbę odczytanych wierszy danych oraz
wierszy, których nie udało się zdekodować.

Bez --whole sekcje są szukane w każdym regionie osobno (jeśli strona
ma markery), w przeciwnym razie w całym dokumencie.

Przykłady:
  cpm sections strona.html
  cpm sections strona.html --whole
        """,
    )
    p.add_argument(
        "page",
        metavar="STRONA",
        help="Plik z treścią strony ('-' = stdin).",
    )
    p.add_argument(
        "--whole",
        action="store_true",
        help="Ignoruj markery regionów i przeszukaj cały dokument.",
    )
    p.set_defaults(func=run)
