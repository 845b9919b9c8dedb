"""
sdl — narzędzie CLI silnika zapytań SPARQL-DL.

Użycie:
  sdl <komenda> [opcje]

Komendy:
  query      Wykonuje zapytanie (plik JSON lub atomy z linii poleceń) nad ontologią.
  check      Statyczna walidacja zapytania względem sygnatury ontologii.
  entities   Listuje encje sygnatury ontologii (klasy, osobniki, właściwości, ...).

Konfiguracja silnika ze zmiennych środowiskowych (także z pliku .env):
  SDL_STRICT, SDL_CHECK_ARGS, SDL_STATIC_ONTOLOGY, SDL_TIMEOUT
"""

from __future__ import annotations

import argparse
import sys

# Windows: terminal może używać cp1252, więc wymuszamy UTF-8, żeby polskie znaki
# w tekstach pomocy argparse były wypisywane poprawnie.
if hasattr(sys.stdout, "reconfigure"):
    sys.stdout.reconfigure(encoding="utf-8", errors="replace")
if hasattr(sys.stderr, "reconfigure"):
    sys.stderr.reconfigure(encoding="utf-8", errors="replace")

from dotenv import find_dotenv, load_dotenv

from sdl.commands import check as cmd_check
from sdl.commands import entities as cmd_entities
from sdl.commands import query as cmd_query


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sdl",
        description="Silnik zapytań SPARQL-DL — narzędzie CLI.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--version", action="version", version="sdl 0.1.0"
    )

    subparsers = parser.add_subparsers(
        title="komendy",
        metavar="<komenda>",
        dest="command",
    )
    subparsers.required = True

    cmd_query.add_parser(subparsers)
    cmd_check.add_parser(subparsers)
    cmd_entities.add_parser(subparsers)

    return parser


def main(argv: list[str] | None = None) -> None:
    load_dotenv(find_dotenv(usecwd=True))
    parser = build_parser()
    args = parser.parse_args(argv)
    args.func(args)


if __name__ == "__main__":
    main()
