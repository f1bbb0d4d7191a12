"""Komenda: cpm probe — szybka diagnoza struktury strony."""

from __future__ import annotations

import argparse

from cpm.commands.merge import _read_page, _show_diagnostics, console
from data_model.diagnostics import Diagnostic
from storage_format.markers import find_regions
from storage_format.sections import has_any_table


def run(args: argparse.Namespace) -> None:
    document = _read_page(args.page)
    diagnostics: list[Diagnostic] = []
    regions = find_regions(document, diagnostics)

    tables = has_any_table(document)
    console.print(f"Znaki:    [bold]{len(document)}[/bold]")
    console.print(f"Tabela:   {'[green]tak[/green]' if tables else '[yellow]nie[/yellow]'}")
    if regions:
        names = ", ".join(r.name for r in regions)
        console.print(f"Regiony:  [bold]{len(regions)}[/bold] ({names})")
        console.print(f"Dialekt:  [cyan]{regions[0].dialect}[/cyan]")
    else:
        console.print("Regiony:  [yellow]brak[/yellow] (scalanie dopisze sekcje na końcu strony)")

    if diagnostics:
        _show_diagnostics(diagnostics)


def add_parser(subparsers: argparse._SubParsersAction) -> None:  # type: ignore[type-arg]
    p = subparsers.add_parser(
        "probe",
        help="Sprawdza, czy strona ma tabelę i regiony z markerami.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        description="""
Krótkie podsumowanie strony przed scalaniem: czy zawiera tabelę,
jakie regiony wykryto i w którym dialekcie markerów.

Przykłady:
  cpm probe strona.html
        """,
    )
    p.add_argument(
        "page",
        metavar="STRONA",
        help="Plik z treścią strony ('-' = stdin).",
    )
    p.set_defaults(func=run)
