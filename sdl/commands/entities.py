"""Komenda: sdl entities — listowanie sygnatury ontologii."""

from __future__ import annotations

import argparse

from rich import box
from rich.console import Console
from rich.table import Table

from sdl._ontology import open_reasoner

console = Console(width=220)

# Kolory per rodzaj encji
KIND_STYLE: dict[str, str] = {
    "class":               "cyan",
    "individual":          "green",
    "object_property":     "yellow",
    "data_property":       "magenta",
    "annotation_property": "blue",
    "datatype":            "dim white",
}


def _listing(signature, kind) -> list[str]:
    from reasoner import EntityKind

    r = signature.reasoner
    match kind:
        case EntityKind.CLASS:
            entities = signature.classes
        case EntityKind.INDIVIDUAL:
            entities = r.individuals()
        case EntityKind.OBJECT_PROPERTY:
            entities = r.object_properties()
        case EntityKind.DATA_PROPERTY:
            entities = r.data_properties()
        case EntityKind.ANNOTATION_PROPERTY:
            entities = signature.annotation_properties
        case _:
            entities = r.datatypes()
    return sorted(entities)


def run(args: argparse.Namespace) -> None:
    from reasoner import EntityKind, Signature

    try:
        reasoner, _ = open_reasoner(args.ontology)
    except (FileNotFoundError, ValueError) as e:
        console.print(f"[red]Błąd wczytywania ontologii:[/red] {e}")
        raise SystemExit(1)

    signature = Signature(reasoner)
    kinds = [EntityKind(k) for k in args.kind] if args.kind else list(EntityKind)

    table = Table(box=box.SIMPLE_HEAD, header_style="bold white", show_header=True)
    table.add_column("RODZAJ", no_wrap=True)
    table.add_column("IRI",    no_wrap=False)

    total = 0
    for kind in kinds:
        style = KIND_STYLE.get(kind.value, "white")
        for iri in _listing(signature, kind):
            table.add_row(f"[{style}]{kind.value}[/{style}]", iri)
            total += 1

    if total == 0:
        console.print("[yellow]Brak encji wybranego rodzaju.[/yellow]")
        return

    console.print(table)
    console.print(f"  [dim]{total} encji[/dim]")


def add_parser(subparsers: argparse._SubParsersAction) -> None:  # type: ignore[type-arg]
    p = subparsers.add_parser(
        "entities",
        help="Listuje encje sygnatury ontologii.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        description="""
Listuje klasy (z owl:Thing i owl:Nothing), osobniki, właściwości obiektowe,
właściwości danych, właściwości adnotacyjne i typy danych ontologii.

Przykłady:
  sdl entities --ontology rodzina.ttl
  sdl entities --ontology rodzina.json --kind class --kind individual
        """,
    )
    p.add_argument(
        "--ontology", "-o",
        metavar="PLIK",
        required=True,
        help="Plik ontologii (.json, .ttl, .owl, .rdf, ...).",
    )
    p.add_argument(
        "--kind", "-k",
        action="append",
        choices=list(KIND_STYLE),
        help="Filtruj po rodzaju encji. Można podać wielokrotnie.",
    )
    p.set_defaults(func=run)
