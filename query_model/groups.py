"""
query_model/groups.py — grupa atomów (koniunkcja).
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from typing import TYPE_CHECKING

from .atoms import Atom

if TYPE_CHECKING:
    from .binding import Binding


@dataclass(frozen=True, slots=True)
class AtomGroup:
    """
    Uporządkowana krotka atomów, które muszą zachodzić jednocześnie.

    Kolejność ma znaczenie: ewaluator zawsze bierze pierwszy atom (next_atom),
    a po jego spełnieniu przechodzi do reszty (pop).
    """
    atoms: tuple[Atom, ...] = ()

    def __post_init__(self) -> None:
        if not isinstance(self.atoms, tuple):
            object.__setattr__(self, "atoms", tuple(self.atoms))

    @classmethod
    def of(cls, *atoms: Atom) -> "AtomGroup":
        return cls(tuple(atoms))

    def next_atom(self) -> Atom:
        """Pierwszy atom grupy; IndexError dla grupy pustej."""
        if not self.atoms:
            raise IndexError("Pusta grupa atomów nie ma następnego atomu.")
        return self.atoms[0]

    def pop(self) -> "AtomGroup":
        """Grupa bez pierwszego atomu."""
        return AtomGroup(self.atoms[1:])

    def substitute(self, binding: "Binding") -> "AtomGroup":
        return AtomGroup(tuple(a.substitute(binding) for a in self.atoms))

    def is_empty(self) -> bool:
        return not self.atoms

    def variables(self) -> frozenset:
        return frozenset(v for a in self.atoms for v in a.variables)

    def __len__(self) -> int:
        return len(self.atoms)

    def __iter__(self) -> Iterator[Atom]:
        return iter(self.atoms)

    def __str__(self) -> str:
        return ", ".join(str(a) for a in self.atoms)
