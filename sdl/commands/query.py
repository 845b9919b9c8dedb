"""Komenda: sdl query — wykonuje zapytanie SPARQL-DL nad ontologią."""

from __future__ import annotations

import argparse
import dataclasses
import json
import pathlib

from rich import box
from rich.console import Console
from rich.table import Table

from sdl._ontology import open_reasoner

console = Console(width=200)


# ---------------------------------------------------------------------------
# Budowa zapytania
# ---------------------------------------------------------------------------

def _prefixes(items: list[str]) -> dict[str, str]:
    prefixes: dict[str, str] = {}
    for item in items:
        name, sep, iri = item.partition("=")
        if not sep or not name or not iri:
            raise ValueError(f"Niepoprawny prefiks '{item}' (oczekiwano NAZWA=IRI).")
        prefixes[name] = iri
    return prefixes


def _timeout_seconds(raw: str) -> float:
    """Typ argparse dla --timeout: dodatnia liczba sekund (jak SDL_TIMEOUT)."""
    try:
        value = float(raw)
    except ValueError:
        raise argparse.ArgumentTypeError(f"oczekiwano liczby sekund, podano '{raw}'")
    if value <= 0:
        raise argparse.ArgumentTypeError(f"limit czasu musi być dodatni, podano '{raw}'")
    return value


def _query_from_args(args: argparse.Namespace):
    from query_model import Argument, AtomGroup, Query, QueryMode
    from solver import load_query_json, parse_atom

    if args.query:
        query_path = pathlib.Path(args.query)
        if not query_path.exists():
            console.print(f"[red]Brak pliku zapytania:[/red] {query_path}")
            raise SystemExit(1)
        query = load_query_json(query_path)
        if args.mode:
            query = dataclasses.replace(query, mode=QueryMode(args.mode))
        if args.select:
            query = dataclasses.replace(
                query, result_vars=frozenset(Argument.var(v) for v in args.select)
            )
        return query

    prefixes = _prefixes(args.prefix or [])
    atoms = [parse_atom(text, prefixes) for text in args.atom]
    if args.mode:
        mode = QueryMode(args.mode)
    else:
        mode = QueryMode.SELECT if args.select else QueryMode.ASK
    result_vars = frozenset(Argument.var(v) for v in (args.select or []))
    return Query(mode, result_vars, (AtomGroup(tuple(atoms)),))


# ---------------------------------------------------------------------------
# Wyświetlanie wyników
# ---------------------------------------------------------------------------

def _show_result(query, result) -> None:
    if not result.ask:
        console.print("  [red]FAŁSZ[/red] — brak rozwiązań")
        return

    if query.is_ask:
        console.print("  [green]PRAWDA[/green]")
        return

    console.print(f"  [green]PRAWDA[/green] — {result.size()} podstawień:")
    variables = sorted(query.result_vars, key=lambda v: v.value)
    if not variables:
        return

    table = Table(box=box.SIMPLE_HEAD, header_style="bold white", show_header=True)
    for var in variables:
        table.add_column(f"?{var.value}", style="cyan", no_wrap=True)
    for binding in result:
        table.add_row(*[str(binding.get(v, "—")) for v in variables])
    console.print(table)


# ---------------------------------------------------------------------------
# Główna logika
# ---------------------------------------------------------------------------

def run(args: argparse.Namespace) -> None:
    from solver import EngineConfig, QueryEngine
    from validator import QueryEngineError

    # 1. Ontologia
    try:
        reasoner, load_time = open_reasoner(args.ontology)
    except (FileNotFoundError, ValueError) as e:
        console.print(f"[red]Błąd wczytywania ontologii:[/red] {e}")
        raise SystemExit(1)

    # 2. Zapytanie
    try:
        query = _query_from_args(args)
    except ValueError as e:
        console.print(f"[red]Błąd parsowania zapytania:[/red] {e}")
        raise SystemExit(1)

    # 3. Konfiguracja: środowisko, potem flagi
    try:
        config = EngineConfig.from_env()
    except ValueError as e:
        console.print(f"[red]Błąd konfiguracji:[/red] {e}")
        raise SystemExit(1)
    config = config.with_overrides(
        strict          = True if args.strict else None,
        check_arguments = False if args.no_check else None,
        timeout         = args.timeout,
    )

    # 4. Ewaluacja
    engine = QueryEngine(reasoner, config)
    try:
        result = engine.execute(query)
    except QueryEngineError as e:
        console.print(f"[red]{e.code}:[/red] {e.message}")
        raise SystemExit(1)

    if args.json_output:
        print(json.dumps(result.to_dict(), ensure_ascii=False, indent=2))
        return

    onto  = reasoner.ontology
    stats = engine.stats
    console.print(
        f"Ontologia: [bold]{pathlib.Path(args.ontology).name}[/bold]  "
        f"{onto.entity_count()} encji, {onto.axiom_count()} aksjomatów  "
        f"[dim]({load_time * 1000:.1f} ms)[/dim]"
    )
    console.print(f"\nZapytanie: [bold cyan]{query}[/bold cyan]")
    _show_result(query, result)
    console.print(
        f"  [dim]grupy={stats.groups}  składowe={stats.components}  "
        f"kandydaci={stats.candidates}  sprawdzenia={stats.ground_checks}  "
        f"czas={stats.elapsed * 1000:.1f} ms[/dim]"
    )


# ---------------------------------------------------------------------------
# Rejestracja parsera
# ---------------------------------------------------------------------------

def add_parser(subparsers: argparse._SubParsersAction) -> None:  # type: ignore[type-arg]
    p = subparsers.add_parser(
        "query",
        help="Wykonuje zapytanie SPARQL-DL nad ontologią (JSON / Turtle / RDF/XML).",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        description="""
Wczytuje ontologię, buduje reasoner strukturalny i wykonuje zapytanie
koniunkcyjne SPARQL-DL (ASK / SELECT / SELECT DISTINCT).

Format pliku zapytania JSON:
  {
    "mode":     "select",
    "select":   ["?x"],
    "prefixes": {"ex": "http://example.org/"},
    "groups": [
      {"atoms": ["Type(?x, ex:Person)", "PropertyValue(?x, ex:age, ?a)"]}
    ]
  }

Przykłady:
  sdl query --ontology rodzina.ttl --atom "Type(?x, ex:Person)" --select x
  sdl query --ontology rodzina.json --query zapytanie.json
  sdl query --ontology rodzina.ttl --atom "SubClassOf(ex:Mother, ex:Person)"
  sdl query --ontology rodzina.ttl --query zapytanie.json --strict --json-output
        """,
    )
    p.add_argument(
        "--ontology", "-o",
        metavar="PLIK",
        required=True,
        help="Plik ontologii (.json, .ttl, .owl, .rdf, ...).",
    )
    source = p.add_mutually_exclusive_group(required=True)
    source.add_argument(
        "--query", "-q",
        metavar="PLIK",
        help="Plik JSON z zapytaniem.",
    )
    source.add_argument(
        "--atom", "-a",
        metavar="ATOM",
        action="append",
        help="Atom zapytania, np. 'Type(?x, ex:Person)'. Można podać wielokrotnie (jedna grupa).",
    )
    p.add_argument(
        "--prefix", "-p",
        metavar="NAZWA=IRI",
        action="append",
        help="Prefiks dla atomów z --atom, np. ex=http://example.org/. Można podać wielokrotnie.",
    )
    p.add_argument(
        "--mode", "-m",
        choices=["ask", "select", "distinct"],
        help="Tryb zapytania (domyślnie: select gdy podano --select, inaczej ask).",
    )
    p.add_argument(
        "--select", "-s",
        metavar="VAR",
        nargs="+",
        help="Zmienne wynikowe, np. --select x y.",
    )
    p.add_argument(
        "--strict",
        action="store_true",
        help="Tryb ścisły: błędny rodzaj argumentu przerywa ewaluację.",
    )
    p.add_argument(
        "--no-check",
        action="store_true",
        dest="no_check",
        help="Wyłącz kontrolę argumentów atomów.",
    )
    p.add_argument(
        "--timeout",
        type=_timeout_seconds,
        metavar="SEKUNDY",
        help="Limit czasu ewaluacji w sekundach.",
    )
    p.add_argument(
        "--json-output",
        action="store_true",
        help="Wypisz wynik jako JSON na stdout.",
    )
    p.set_defaults(func=run)
