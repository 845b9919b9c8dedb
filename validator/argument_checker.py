"""
validator/argument_checker.py — kontrola rodzajów argumentów atomu.

Dla każdego typu atomu tabela _SLOTS określa, jakie encje mogą stać na
kolejnych pozycjach. Argument URI musi być zadeklarowaną encją jednego
z dozwolonych rodzajów; zmienna jest zawsze dopuszczalna.

PropertyValue(s, p, v) ma regułę zależną: rodzaj v wynika z zadeklarowanego
rodzaju p (literał dla właściwości danych, osobnik dla obiektowej).
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass

from query_model import Argument, Atom, AtomType
from reasoner.signature import EntityKind, Signature

from .types import ArgumentKindError, QueryEngineError, UndeclaredEntityError

K = EntityKind


@dataclass(frozen=True, slots=True)
class Slot:
    """Dozwolona zawartość pozycji: rodzaje encji (pusty = bez kontroli)."""
    kinds: frozenset[EntityKind] = frozenset()

    @property
    def unchecked(self) -> bool:
        return not self.kinds


def _slot(*kinds: EntityKind) -> Slot:
    return Slot(frozenset(kinds))


CLASS       = _slot(K.CLASS)
INDIVIDUAL  = _slot(K.INDIVIDUAL)
OBJECT      = _slot(K.OBJECT_PROPERTY)
DATA        = _slot(K.DATA_PROPERTY)
ANNOTATION  = _slot(K.ANNOTATION_PROPERTY)
PROPERTY    = _slot(K.OBJECT_PROPERTY, K.DATA_PROPERTY)
ANY_PROP    = _slot(K.OBJECT_PROPERTY, K.DATA_PROPERTY, K.ANNOTATION_PROPERTY)
CLASS_OR_DT = _slot(K.CLASS, K.DATATYPE)
SUBJECT     = _slot(K.INDIVIDUAL, K.CLASS, K.OBJECT_PROPERTY, K.DATA_PROPERTY, K.ANNOTATION_PROPERTY)
UNCHECKED   = Slot()

_SLOTS: dict[AtomType, tuple[Slot, ...]] = {
    AtomType.CLASS:                  (CLASS,),
    AtomType.INDIVIDUAL:             (INDIVIDUAL,),
    AtomType.PROPERTY:               (PROPERTY,),
    AtomType.OBJECT_PROPERTY:        (OBJECT,),
    AtomType.DATA_PROPERTY:          (DATA,),
    AtomType.ANNOTATION_PROPERTY:    (ANNOTATION,),

    AtomType.TYPE:                   (INDIVIDUAL, CLASS),
    AtomType.DIRECT_TYPE:            (INDIVIDUAL, CLASS),
    AtomType.PROPERTY_VALUE:         (INDIVIDUAL, PROPERTY, UNCHECKED),
    AtomType.SAME_AS:                (INDIVIDUAL, INDIVIDUAL),
    AtomType.DIFFERENT_FROM:         (INDIVIDUAL, INDIVIDUAL),

    AtomType.SUB_CLASS_OF:           (CLASS, CLASS),
    AtomType.STRICT_SUB_CLASS_OF:    (CLASS, CLASS),
    AtomType.DIRECT_SUB_CLASS_OF:    (CLASS, CLASS),
    AtomType.EQUIVALENT_CLASS:       (CLASS, CLASS),
    AtomType.DISJOINT_WITH:          (CLASS, CLASS),
    AtomType.COMPLEMENT_OF:          (CLASS, CLASS),

    AtomType.SUB_PROPERTY_OF:        (PROPERTY, PROPERTY),
    AtomType.STRICT_SUB_PROPERTY_OF: (PROPERTY, PROPERTY),
    AtomType.DIRECT_SUB_PROPERTY_OF: (PROPERTY, PROPERTY),
    AtomType.EQUIVALENT_PROPERTY:    (PROPERTY, PROPERTY),
    AtomType.INVERSE_OF:             (PROPERTY, PROPERTY),
    AtomType.DOMAIN:                 (ANY_PROP, CLASS),
    AtomType.RANGE:                  (ANY_PROP, CLASS_OR_DT),

    AtomType.FUNCTIONAL:             (PROPERTY,),
    AtomType.INVERSE_FUNCTIONAL:     (OBJECT,),
    AtomType.TRANSITIVE:             (OBJECT,),
    AtomType.SYMMETRIC:              (OBJECT,),
    AtomType.REFLEXIVE:              (OBJECT,),
    AtomType.IRREFLEXIVE:            (OBJECT,),

    AtomType.ANNOTATION:             (SUBJECT, ANNOTATION, UNCHECKED),
}

_KIND_LABELS: dict[EntityKind, str] = {
    K.CLASS:               "klasą",
    K.INDIVIDUAL:          "osobnikiem",
    K.OBJECT_PROPERTY:     "właściwością obiektową",
    K.DATA_PROPERTY:       "właściwością danych",
    K.ANNOTATION_PROPERTY: "właściwością adnotacyjną",
    K.DATATYPE:            "typem danych",
}

_LABEL_ORDER = list(EntityKind)


def describe_kinds(kinds: frozenset[EntityKind]) -> str:
    return " ani ".join(_KIND_LABELS[k] for k in _LABEL_ORDER if k in kinds)


# ---------------------------------------------------------------------------
# ArgumentChecker
# ---------------------------------------------------------------------------

class ArgumentChecker:
    """
    Sprawdza argumenty atomu względem sygnatury.

    check(atom)           — rzuca ArgumentKindError / UndeclaredEntityError
    iter_violations(atom) — wszystkie naruszenia jako (indeks argumentu, wyjątek)
    """

    def __init__(self, signature: Signature) -> None:
        self.signature = signature

    def check(self, atom: Atom) -> None:
        for _, error in self.iter_violations(atom):
            raise error

    def is_valid(self, atom: Atom) -> bool:
        return next(iter(self.iter_violations(atom)), None) is None

    def iter_violations(self, atom: Atom) -> Iterator[tuple[int, QueryEngineError]]:
        slots = _SLOTS[atom.type]
        for index, (arg, slot) in enumerate(zip(atom.args, slots)):
            if slot.unchecked:
                continue
            error = self._check_slot(atom, index, arg, slot.kinds)
            if error is not None:
                yield index, error
        if atom.type is AtomType.PROPERTY_VALUE:
            error = self._check_property_value(atom)
            if error is not None:
                yield 2, error

    # ------------------------------------------------------------------

    def _check_slot(
        self,
        atom:  Atom,
        index: int,
        arg:   Argument,
        kinds: frozenset[EntityKind],
    ) -> QueryEngineError | None:
        if arg.is_var:
            return None
        if not arg.is_uri:
            return ArgumentKindError(
                f"Oczekiwano URI lub zmiennej w argumencie {index + 1} atomu {atom.type}(), "
                f"podano {arg}.",
                details={"atom": str(atom), "index": index, "kind": str(arg.kind)},
            )
        if not any(self.signature.is_declared(arg.value, k) for k in kinds):
            return UndeclaredEntityError(
                f"Encja {arg} w argumencie {index + 1} atomu {atom.type}() "
                f"nie jest {describe_kinds(kinds)}.",
                details={
                    "atom": str(atom),
                    "index": index,
                    "iri": arg.value,
                    "expected": sorted(str(k) for k in kinds),
                },
            )
        return None

    def _check_property_value(self, atom: Atom) -> QueryEngineError | None:
        prop, value = atom.args[1], atom.args[2]
        if not prop.is_uri or value.is_var:
            return None
        sig = self.signature
        if sig.is_data_property(prop.value):
            if not value.is_literal:
                return ArgumentKindError(
                    f"Oczekiwano literału lub zmiennej w argumencie 3 atomu PropertyValue() "
                    f"(właściwość danych {prop}), podano {value}.",
                    details={"atom": str(atom), "index": 2, "kind": str(value.kind)},
                )
            return None
        if sig.is_object_property(prop.value):
            return self._check_slot(atom, 2, value, INDIVIDUAL.kinds)
        return None
