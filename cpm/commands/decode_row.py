"""Komenda: cpm decode-row — odczyt rekordu z fragmentu <tr>."""

from __future__ import annotations

import argparse
import json
import sys

from cpm.commands.merge import _read_page, console
from storage_format.row_codec import decode_row


def run(args: argparse.Namespace) -> None:
    fragment = _read_page(args.file)
    record = decode_row(fragment)
    if record is None:
        console.print("[yellow]Fragment nie jest wierszem danych (mniej niż 8 komórek <td>).[/yellow]")
        raise SystemExit(1)
    sys.stdout.write(json.dumps(record.to_dict(), ensure_ascii=False, indent=2) + "\n")


def add_parser(subparsers: argparse._SubParsersAction) -> None:  # type: ignore[type-arg]
    p = subparsers.add_parser(
        "decode-row",
        help="Dekoduje wiersz <tr> do rekordu (JSON).",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        description="""
Dekoduje fragment z jednym wierszem tabeli i wypisuje rekord jako JSON.
Wiersz nagłówka (<th>) lub wiersz z mniej niż 8 komórkami nie jest
rekordem; wtedy komenda kończy się kodem 1.

Przykłady:
  cpm decode-row wiersz.html
  echo '<tr><td>…</td>…</tr>' | cpm decode-row -
        """,
    )
    p.add_argument(
        "file",
        metavar="PLIK",
        help="Plik z fragmentem <tr> ('-' = stdin).",
    )
    p.set_defaults(func=run)
