"""Komenda: cpm regions — listowanie regionów oznaczonych markerami."""

from __future__ import annotations

import argparse

from rich.table import Table
from rich import box

from cpm.commands.merge import _read_page, _show_diagnostics, console
from data_model.diagnostics import Diagnostic
from storage_format.markers import find_regions


def run(args: argparse.Namespace) -> None:
    document = _read_page(args.page)
    diagnostics: list[Diagnostic] = []
    regions = find_regions(document, diagnostics)

    if not regions:
        console.print("[yellow]Brak regionów na stronie.[/yellow]")
    else:
        table = Table(
            box=box.SIMPLE_HEAD,
            show_header=True,
            header_style="bold white",
            row_styles=["", "dim"],
            expand=False,
        )
        table.add_column("REGION",  style="cyan", no_wrap=True)
        table.add_column("DIALEKT", no_wrap=True)
        table.add_column("START",   justify="right")
        table.add_column("KONIEC",  justify="right")
        table.add_column("TREŚĆ",   justify="right")

        for r in regions:
            table.add_row(
                r.name,
                str(r.dialect),
                str(r.start_offset),
                str(r.end_offset),
                str(r.content_end - r.content_start),
            )

        console.print()
        console.print(table)
        console.print(f"  [dim]{len(regions)} regionów[/dim]\n")

    if diagnostics:
        _show_diagnostics(diagnostics)


def add_parser(subparsers: argparse._SubParsersAction) -> None:  # type: ignore[type-arg]
    p = subparsers.add_parser(
        "regions",
        help="Listuje regiony NAZWA-START … NAZWA-END na stronie.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        description="""
Wyszukuje regiony oznaczone markerami. Obsługiwane dialekty (w tej
kolejności): makro htmlcomment Confluence, zwykły komentarz HTML.
Marker START bez END oraz regiony nakładające się są pomijane
i zgłaszane jako ostrzeżenia.

Przykłady:
  cpm regions strona.html
  cat strona.html | cpm regions -
        """,
    )
    p.add_argument(
        "page",
        metavar="STRONA",
        help="Plik z treścią strony ('-' = stdin).",
    )
    p.set_defaults(func=run)
