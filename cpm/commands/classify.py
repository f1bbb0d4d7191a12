"""Komenda: cpm classify — kubełek (nazwa regionu) dla nazw wystawców."""

from __future__ import annotations

import argparse

from rich.console import Console
from rich.table import Table
from rich import box
from rich.text import Text

from storage_format.classifier import DEFAULT_BUCKET, classify

console = Console()


def run(args: argparse.Namespace) -> None:
    table = Table(
        box=box.SIMPLE_HEAD,
        show_header=True,
        header_style="bold white",
        row_styles=["", "dim"],
        expand=False,
    )
    table.add_column("WYSTAWCA", no_wrap=False, max_width=70)
    table.add_column("KUBEŁEK",  no_wrap=True)

    for category in args.text:
        bucket = classify(category)
        style = "dim" if bucket == DEFAULT_BUCKET else "cyan"
        table.add_row(category, Text(bucket, style=style))

    console.print()
    console.print(table)


def add_parser(subparsers: argparse._SubParsersAction) -> None:  # type: ignore[type-arg]
    p = subparsers.add_parser(
        "classify",
        help="Pokazuje kubełek (region) dla nazwy wystawcy certyfikatu.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        description="""
Przypisuje nazwę wystawcy (Issuing CA) do kubełka, czyli nazwy regionu
NAZWA-START … NAZWA-END na stronie. Reguły sprawdzane są po kolei,
pierwsza pasująca wygrywa; bez dopasowania kubełek to LEGACY.

Przykłady:
  cpm classify "Sectigo RSA Domain Validation Secure Server CA"
  cpm classify "DigiCert Global G2" "Internal Root CA"
        """,
    )
    p.add_argument(
        "text",
        nargs="+",
        metavar="WYSTAWCA",
        help="Nazwa wystawcy (można podać kilka).",
    )
    p.set_defaults(func=run)
