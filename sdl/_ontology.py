"""Wczytanie ontologii i budowa reasonera dla komend CLI."""

from __future__ import annotations

import pathlib
import time

from reasoner import StructuralReasoner, load_ontology


def open_reasoner(path: str | pathlib.Path) -> tuple[StructuralReasoner, float]:
    """
    Wczytuje ontologię (JSON lub RDF wg rozszerzenia) i zwraca
    (reasoner, czas wczytania w sekundach).

    Raises:
        FileNotFoundError — brak pliku
        ValueError        — plik niepoprawny składniowo / semantycznie
    """
    path = pathlib.Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Brak pliku ontologii: {path}")

    started  = time.perf_counter()
    ontology = load_ontology(path)
    reasoner = StructuralReasoner(ontology)
    return reasoner, time.perf_counter() - started
