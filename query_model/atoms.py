"""
query_model/atoms.py — typy atomów SPARQL-DL i sam atom.

AtomType — zamknięty zbiór predykatów zapytania (wartość = składnia SPARQL-DL)
ATOM_ARITY — stała arność każdego typu
Atom — typ + uporządkowana krotka argumentów
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING

from .arguments import Argument

if TYPE_CHECKING:
    from .binding import Binding


class AtomType(StrEnum):
    """Typ atomu; wartość to nazwa w składni SPARQL-DL."""

    # deklaracje
    CLASS                  = "Class"
    INDIVIDUAL             = "Individual"
    PROPERTY               = "Property"
    OBJECT_PROPERTY        = "ObjectProperty"
    DATA_PROPERTY          = "DataProperty"
    ANNOTATION_PROPERTY    = "AnnotationProperty"

    # osobniki
    TYPE                   = "Type"
    DIRECT_TYPE            = "DirectType"
    PROPERTY_VALUE         = "PropertyValue"
    SAME_AS                = "SameAs"
    DIFFERENT_FROM         = "DifferentFrom"

    # hierarchia klas
    SUB_CLASS_OF           = "SubClassOf"
    STRICT_SUB_CLASS_OF    = "StrictSubClassOf"
    DIRECT_SUB_CLASS_OF    = "DirectSubClassOf"
    EQUIVALENT_CLASS       = "EquivalentClass"
    DISJOINT_WITH          = "DisjointWith"
    COMPLEMENT_OF          = "ComplementOf"

    # hierarchia właściwości
    SUB_PROPERTY_OF        = "SubPropertyOf"
    STRICT_SUB_PROPERTY_OF = "StrictSubPropertyOf"
    DIRECT_SUB_PROPERTY_OF = "DirectSubPropertyOf"
    EQUIVALENT_PROPERTY    = "EquivalentProperty"
    INVERSE_OF             = "InverseOf"
    DOMAIN                 = "Domain"
    RANGE                  = "Range"

    # charakterystyki właściwości
    FUNCTIONAL             = "Functional"
    INVERSE_FUNCTIONAL     = "InverseFunctional"
    TRANSITIVE             = "Transitive"
    SYMMETRIC              = "Symmetric"
    REFLEXIVE              = "Reflexive"
    IRREFLEXIVE            = "Irreflexive"

    # adnotacje
    ANNOTATION             = "Annotation"

    @classmethod
    def from_syntax(cls, name: str) -> "AtomType":
        """
        Zwraca typ atomu dla nazwy ze składni (bez rozróżniania wielkości liter).

        Raises:
            ValueError gdy nazwa nie jest znanym typem atomu.
        """
        key = name.strip().lower()
        for value in cls:
            if value.value.lower() == key:
                return value
        raise ValueError(f"Nieznany typ atomu: '{name}'")

    @property
    def arity(self) -> int:
        return ATOM_ARITY[self]


_UNARY: frozenset[AtomType] = frozenset({
    AtomType.CLASS,
    AtomType.INDIVIDUAL,
    AtomType.PROPERTY,
    AtomType.OBJECT_PROPERTY,
    AtomType.DATA_PROPERTY,
    AtomType.ANNOTATION_PROPERTY,
    AtomType.FUNCTIONAL,
    AtomType.INVERSE_FUNCTIONAL,
    AtomType.TRANSITIVE,
    AtomType.SYMMETRIC,
    AtomType.REFLEXIVE,
    AtomType.IRREFLEXIVE,
})

_TERNARY: frozenset[AtomType] = frozenset({
    AtomType.PROPERTY_VALUE,
    AtomType.ANNOTATION,
})

ATOM_ARITY: dict[AtomType, int] = {
    t: 1 if t in _UNARY else 3 if t in _TERNARY else 2
    for t in AtomType
}


class AtomArityError(ValueError):
    """Liczba argumentów atomu nie zgadza się z arnością typu."""


@dataclass(frozen=True, slots=True)
class Atom:
    """
    Atom zapytania: Typ(arg1, ..., argN).

    - type: typ atomu (AtomType)
    - args: krotka argumentów; długość musi równać się arności typu

    Atom jest niemutowalny — substitute() zwraca nowy obiekt.
    """
    type: AtomType
    args: tuple[Argument, ...]

    def __post_init__(self) -> None:
        if not isinstance(self.args, tuple):
            object.__setattr__(self, "args", tuple(self.args))
        if len(self.args) != self.type.arity:
            raise AtomArityError(
                f"Atom {self.type}() wymaga {self.type.arity} arg(s), "
                f"podano {len(self.args)}."
            )

    @classmethod
    def of(cls, atom_type: AtomType, *args: Argument) -> "Atom":
        return cls(atom_type, tuple(args))

    @property
    def is_bound(self) -> bool:
        """True gdy żaden argument nie jest zmienną ani węzłem pustym."""
        return not any(a.is_var or a.is_bnode for a in self.args)

    @property
    def variables(self) -> tuple[Argument, ...]:
        """Argumenty-zmienne w kolejności wystąpienia (z powtórzeniami)."""
        return tuple(a for a in self.args if a.is_var)

    def has_variables(self) -> bool:
        return any(a.is_var for a in self.args)

    def substitute(self, binding: "Binding") -> "Atom":
        """Zwraca kopię atomu ze zmiennymi zastąpionymi wartościami z binding."""
        new_args = tuple(
            binding.get(a) if binding.is_bound(a) else a
            for a in self.args
        )
        if new_args == self.args:
            return self
        return Atom(self.type, new_args)

    def __str__(self) -> str:
        return f"{self.type}({', '.join(str(a) for a in self.args)})"
