"""Komenda: sdl check — statyczna walidacja zapytania względem sygnatury ontologii."""

from __future__ import annotations

import argparse
import json
import pathlib

from rich import box
from rich.console import Console
from rich.table import Table

from sdl._ontology import open_reasoner

console = Console()


def run(args: argparse.Namespace) -> None:
    # --- Wczytaj zapytanie ------------------------------------------------
    query_path = pathlib.Path(args.query)
    if not query_path.exists():
        console.print(f"[red]Brak pliku zapytania:[/red] {query_path}")
        raise SystemExit(1)

    try:
        query_json = json.loads(query_path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        console.print(f"[red]Błąd parsowania JSON:[/red] {exc}")
        raise SystemExit(1)

    # --- Wczytaj ontologię ------------------------------------------------
    try:
        reasoner, _ = open_reasoner(args.ontology)
    except (FileNotFoundError, ValueError) as exc:
        console.print(f"[red]Błąd wczytywania ontologii:[/red] {exc}")
        raise SystemExit(1)

    # --- Walidacja -------------------------------------------------------
    from reasoner import Signature
    from validator import QueryValidator

    validator = QueryValidator(Signature(reasoner))
    report    = validator.validate(query_json)

    if args.json_output:
        print(json.dumps(report.to_dict(), ensure_ascii=False, indent=2))
        if not report.is_valid:
            raise SystemExit(1)
        return

    # --- Wynik na konsoli ------------------------------------------------
    if report.is_valid:
        console.print(
            f"[green]OK[/green]  Zapytanie [bold]{query_path.name}[/bold] jest poprawne."
        )
    else:
        console.print(
            f"[red]BŁĄD[/red]  Zapytanie [bold]{query_path.name}[/bold] — "
            f"{len(report.errors)} błąd(ów)."
        )

        table = Table(box=box.SIMPLE, show_header=True, header_style="bold")
        table.add_column("Kod",      style="yellow", no_wrap=True)
        table.add_column("Ścieżka", style="cyan",   no_wrap=True)
        table.add_column("Komunikat")
        table.add_column("Poprawka", style="dim")

        for e in report.errors:
            table.add_row(str(e.code), e.path, e.message, e.expected_fix)

        console.print(table)

    if report.warnings:
        console.print("[yellow]Ostrzeżenia:[/yellow]")
        for w in report.warnings:
            console.print(f"  [yellow]·[/yellow] {w}")

    if not report.is_valid:
        raise SystemExit(1)


def add_parser(subparsers: argparse._SubParsersAction) -> None:  # type: ignore[type-arg]
    p = subparsers.add_parser(
        "check",
        help="Waliduje zapytanie (JSON) względem sygnatury ontologii.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        description="""\
Waliduje plik JSON z zapytaniem SPARQL-DL (etapy A–D):

  A  JSON Schema           (Draft 2020-12, wymaga jsonschema>=4.0)
  B  Typy atomów i arność  (nazwa typu znana, liczba argumentów)
  C  Argumenty             (rodzaj argumentu, deklaracja encji w ontologii)
  D  Zmienne wynikowe      (ostrzeżenie dla zmiennych SELECT spoza grup)

Przykłady:
  sdl check --ontology rodzina.ttl --query zapytanie.json
  sdl check --ontology rodzina.json --query zapytanie.json --json-output
        """,
    )
    p.add_argument(
        "--ontology", "-o",
        metavar="PLIK",
        required=True,
        help="Plik ontologii (.json, .ttl, .owl, .rdf, ...).",
    )
    p.add_argument(
        "--query", "-q",
        metavar="PLIK",
        required=True,
        help="Plik JSON z zapytaniem.",
    )
    p.add_argument(
        "--json-output",
        action="store_true",
        help="Wypisz raport walidacji jako JSON na stdout.",
    )
    p.set_defaults(func=run)
