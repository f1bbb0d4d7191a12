"""Komenda: cpm encode-row — wiersze <tr> dla rekordów z pliku JSON."""

from __future__ import annotations

import argparse
import sys

from cpm.commands.merge import _load_records
from storage_format.row_codec import encode_row


def run(args: argparse.Namespace) -> None:
    records = _load_records(args.records)
    for record in records:
        sys.stdout.write(encode_row(record) + "\n")


def add_parser(subparsers: argparse._SubParsersAction) -> None:  # type: ignore[type-arg]
    p = subparsers.add_parser(
        "encode-row",
        help="Wypisuje wiersze tabeli (<tr>) dla rekordów z pliku JSON.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        description="""
Koduje każdy rekord jako jeden wiersz <tr> z ośmioma komórkami
(Expiration, CN, SANs, Issuing CA, Requestor, Location,
Distribution Group, Notes). Wynik trafia na stdout.

Przykłady:
  cpm encode-row nowe.json
  cpm encode-row nowe.json > wiersze.html
        """,
    )
    p.add_argument(
        "records",
        metavar="REKORDY.json",
        help="Plik JSON z listą rekordów.",
    )
    p.set_defaults(func=run)
