"""
solver/scheduler.py — kolejność ewaluacji atomów w składowej.

Koszt atomu = liczba argumentów-zmiennych; atomy bez strategii generowania
kandydatów (InverseOf) mają koszt nieskończony i trafiają na koniec,
gdzie zwykle są już uziemione. Sortowanie jest stabilne.
"""

from __future__ import annotations

import math

from query_model import Atom, AtomGroup, AtomType

# Typy atomów, dla których ewaluator nie generuje kandydatów
NO_GENERATOR: frozenset[AtomType] = frozenset({AtomType.INVERSE_OF})


def estimate_cost(atom: Atom) -> float:
    if atom.type in NO_GENERATOR:
        return math.inf
    return float(sum(1 for a in atom.args if a.is_var))


def preorder(group: AtomGroup) -> AtomGroup:
    """Stabilne sortowanie rosnąco po estimate_cost."""
    return AtomGroup(tuple(sorted(group.atoms, key=estimate_cost)))
