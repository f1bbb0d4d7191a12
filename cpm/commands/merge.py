"""Komenda: cpm merge — scalanie rekordów z JSON z treścią strony."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

from rich.console import Console
from rich.table import Table
from rich import box
from rich.text import Text

from cpm._config import file_encoding, merge_strategy
from data_model.diagnostics import Diagnostic, DiagnosticCode, MalformedDocumentError
from data_model.records import Record
from merge.engine import merge_with_report

# stdout niesie dokument, komunikaty idą na stderr
console = Console(stderr=True)

CODE_STYLE: dict[DiagnosticCode, str] = {
    DiagnosticCode.MISSING_END_MARKER:    "red",
    DiagnosticCode.OVERLAPPING_REGION:    "red",
    DiagnosticCode.DUPLICATE_REGION:      "yellow",
    DiagnosticCode.NO_REGION_FOR_BUCKET:  "yellow",
    DiagnosticCode.FALLBACK_APPEND:       "yellow",
    DiagnosticCode.REBUILD_DOWNGRADED:    "yellow",
    DiagnosticCode.AMBIGUOUS_DATE_FORMAT: "cyan",
    DiagnosticCode.UNPARSEABLE_DATE:      "cyan",
    DiagnosticCode.EMPTY_DOCUMENT:        "dim",
}


# ---------------------------------------------------------------------------
# Wczytywanie plików
# ---------------------------------------------------------------------------

def _read_page(path_str: str) -> str:
    if path_str == "-":
        return sys.stdin.read()
    path = Path(path_str)
    if not path.exists():
        console.print(f"[red]Plik nie istnieje:[/red] {path}")
        raise SystemExit(1)
    return path.read_text(encoding=file_encoding())


def _load_records(path_str: str) -> list[Record]:
    """Lista obiektów JSON albo {"records": [...]} → lista Record."""
    path = Path(path_str)
    if not path.exists():
        console.print(f"[red]Plik nie istnieje:[/red] {path}")
        raise SystemExit(1)
    try:
        data = json.loads(path.read_text(encoding=file_encoding()))
    except json.JSONDecodeError as e:
        console.print(f"[red]Niepoprawny JSON w {path}:[/red] {e}")
        raise SystemExit(1)

    if isinstance(data, dict):
        data = data.get("records", [data])
    if not isinstance(data, list) or not all(isinstance(d, dict) for d in data):
        console.print(f"[red]Oczekiwano listy obiektów rekordów w {path}.[/red]")
        raise SystemExit(1)
    return [Record.from_dict(d) for d in data]


# ---------------------------------------------------------------------------
# Wyświetlanie w terminalu
# ---------------------------------------------------------------------------

def _show_diagnostics(diagnostics: list[Diagnostic]) -> None:
    if not diagnostics:
        console.print("[green]Brak ostrzeżeń.[/green]")
        return

    table = Table(
        box=box.SIMPLE_HEAD,
        show_header=True,
        header_style="bold white",
        row_styles=["", "dim"],
        expand=False,
    )
    table.add_column("KOD",       no_wrap=True)
    table.add_column("KOMUNIKAT", no_wrap=False, max_width=90)

    for d in diagnostics:
        table.add_row(Text(str(d.code), style=CODE_STYLE.get(d.code, "")), d.message)

    console.print()
    console.print(table)
    console.print(f"  [dim]{len(diagnostics)} ostrzeżeń[/dim]\n")


# ---------------------------------------------------------------------------
# Główna logika komendy
# ---------------------------------------------------------------------------

def run(args: argparse.Namespace) -> None:
    if args.in_place and args.page == "-":
        console.print("[red]--in-place wymaga pliku strony, nie stdin.[/red]")
        raise SystemExit(1)

    try:
        strategy = merge_strategy(args.strategy)
    except ValueError as e:
        console.print(f"[red]Nieznana strategia scalania:[/red] {e}")
        raise SystemExit(1)

    document = _read_page(args.page)
    records = _load_records(args.records)

    console.print(
        f"Scalanie [bold]{len(records)}[/bold] rekordów "
        f"(strategia=[cyan]{strategy}[/cyan]) …"
    )

    try:
        report = merge_with_report(document, records, strategy)
    except MalformedDocumentError as e:
        console.print(f"[red]Niepoprawna struktura strony:[/red] {e}")
        raise SystemExit(1)

    if report.used_fallback:
        console.print("[yellow]Brak markerów regionów; dopisano sekcje na końcu strony.[/yellow]")
    else:
        console.print(
            f"Regiony: [bold]{len(report.regions)}[/bold], edycje: [bold]{len(report.edits)}[/bold]"
        )

    target = Path(args.page) if args.in_place else (Path(args.out) if args.out else None)
    if target is not None:
        target.write_text(report.text, encoding=file_encoding())
        console.print(f"[green]Zapisano:[/green] {target}  ({len(report.text)} znaków)")
    else:
        sys.stdout.write(report.text)
        if not report.text.endswith("\n"):
            sys.stdout.write("\n")

    if args.show:
        _show_diagnostics(report.diagnostics)


# ---------------------------------------------------------------------------
# Rejestracja parsera
# ---------------------------------------------------------------------------

def add_parser(subparsers: argparse._SubParsersAction) -> None:  # type: ignore[type-arg]
    p = subparsers.add_parser(
        "merge",
        help="Scala rekordy certyfikatów (JSON) z treścią strony.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        description="""
Scala nowe rekordy certyfikatów z treścią strony (format storage XHTML).

Rekordy trafiają do regionów NAZWA-START … NAZWA-END wg wystawcy; bez
markerów nowe sekcje są dopisywane na końcu strony.

Strategia (domyślnie z CPM_MERGE_STRATEGY, inaczej "append"):
  append   wstawia wiersze przed </tbody>, nie rusza istniejących
  rebuild  sortuje całą tabelę po dacie i emituje ją od nowa

Przykłady:
  cpm merge strona.html nowe.json > wynik.html
  cpm merge strona.html nowe.json --out wynik.html --show
  cpm merge strona.html nowe.json --in-place --strategy rebuild
        """,
    )
    p.add_argument(
        "page",
        metavar="STRONA",
        help="Plik z treścią strony ('-' = stdin).",
    )
    p.add_argument(
        "records",
        metavar="REKORDY.json",
        help="Plik JSON z listą rekordów.",
    )
    p.add_argument(
        "--strategy",
        choices=["append", "rebuild"],
        default=None,
        help="Strategia scalania istniejącej tabeli.",
    )
    dest = p.add_mutually_exclusive_group()
    dest.add_argument(
        "--out",
        metavar="PLIK",
        default=None,
        help="Zapisz wynik do pliku (domyślnie: stdout).",
    )
    dest.add_argument(
        "--in-place",
        action="store_true",
        help="Nadpisz plik strony wynikiem.",
    )
    p.add_argument(
        "--show",
        action="store_true",
        help="Wyświetl tabelę ostrzeżeń po scaleniu.",
    )
    p.set_defaults(func=run)
