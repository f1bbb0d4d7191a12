"""
cpm — narzędzie CLI do scalania rekordów certyfikatów ze stroną.

Użycie:
  cpm <komenda> [opcje]

Komendy:
  merge            Scala rekordy z JSON z treścią strony.
  classify         Pokazuje kubełek (region) dla nazwy wystawcy.
  regions          Listuje regiony NAZWA-START … NAZWA-END.
  sections         Listuje sekcje nagłówek + tabela.
  encode-row       Wypisuje wiersze <tr> dla rekordów z JSON.
  decode-row       Dekoduje wiersz <tr> do rekordu (JSON).
  probe            Szybka diagnoza struktury strony.
  check-duplicate  Sprawdza, czy CN jest już na stronie.
"""

from __future__ import annotations

import argparse
import sys

# Windows: terminal może używać cp1252; wymuszamy UTF-8, żeby polskie znaki
# w tekstach pomocy argparse były wypisywane poprawnie.
if hasattr(sys.stdout, "reconfigure"):
    sys.stdout.reconfigure(encoding="utf-8", errors="replace")
if hasattr(sys.stderr, "reconfigure"):
    sys.stderr.reconfigure(encoding="utf-8", errors="replace")

from cpm.commands import merge as cmd_merge
from cpm.commands import classify as cmd_classify
from cpm.commands import regions as cmd_regions
from cpm.commands import sections as cmd_sections
from cpm.commands import encode_row as cmd_encode_row
from cpm.commands import decode_row as cmd_decode_row
from cpm.commands import probe as cmd_probe
from cpm.commands import check_duplicate as cmd_check_duplicate


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="cpm",
        description="cert-page-merge: scalanie rekordów certyfikatów ze stroną.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--version", action="version", version="cpm 0.1.0"
    )

    subparsers = parser.add_subparsers(
        title="komendy",
        metavar="<komenda>",
        dest="command",
    )
    subparsers.required = True

    cmd_merge.add_parser(subparsers)
    cmd_classify.add_parser(subparsers)
    cmd_regions.add_parser(subparsers)
    cmd_sections.add_parser(subparsers)
    cmd_encode_row.add_parser(subparsers)
    cmd_decode_row.add_parser(subparsers)
    cmd_probe.add_parser(subparsers)
    cmd_check_duplicate.add_parser(subparsers)

    return parser


def main() -> None:
    parser = build_parser()
    args = parser.parse_args()
    args.func(args)


if __name__ == "__main__":
    main()
