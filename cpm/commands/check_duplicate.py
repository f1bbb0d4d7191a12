"""Komenda: cpm check-duplicate — czy CN jest już na stronie."""

from __future__ import annotations

import argparse

from cpm.commands.merge import _read_page, console
from storage_format.sections import contains_primary_key


def run(args: argparse.Namespace) -> None:
    document = _read_page(args.page)
    if contains_primary_key(document, args.cn):
        console.print(f"[yellow]CN już istnieje na stronie:[/yellow] {args.cn}")
        raise SystemExit(1)
    console.print(f"[green]CN nie występuje na stronie:[/green] {args.cn}")


def add_parser(subparsers: argparse._SubParsersAction) -> None:  # type: ignore[type-arg]
    p = subparsers.add_parser(
        "check-duplicate",
        help="Sprawdza, czy komórka tabeli zawiera już podany CN.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        description="""
Szuka komórki <td>, której cała treść to podany CN (bez rozróżniania
wielkości liter). Kod wyjścia 1 oznacza, że CN już jest na stronie.

Przykłady:
  cpm check-duplicate strona.html a.example.com
        """,
    )
    p.add_argument(
        "page",
        metavar="STRONA",
        help="Plik z treścią strony ('-' = stdin).",
    )
    p.add_argument(
        "cn",
        metavar="CN",
        help="Common Name certyfikatu.",
    )
    p.set_defaults(func=run)
