"""
reasoner/signature.py — migawka sygnatury reasonera używana przez silnik.

Signature trzyma:
  - indeks klas (zadeklarowane + owl:Thing + owl:Nothing),
  - zbiór właściwości adnotacyjnych (leniwie; zadeklarowane + użyte w asercjach),
  - asercje adnotacyjne zaindeksowane po podmiocie (leniwie).

Pozostałe deklaracje są delegowane do reasonera; encje wbudowane
(owl:topObjectProperty, rdfs:label, typy XSD, ...) liczą się jako zadeklarowane.
"""

from __future__ import annotations

from collections.abc import Iterable
from enum import StrEnum

from .protocol import Reasoner
from .types import AnnotationAssertion
from .vocabulary import (
    BUILTIN_ANNOTATION_PROPERTIES,
    BUILTIN_DATA_PROPERTIES,
    BUILTIN_OBJECT_PROPERTIES,
    OWL_NOTHING,
    OWL_THING,
    is_builtin_datatype,
)


class EntityKind(StrEnum):
    CLASS               = "class"
    INDIVIDUAL          = "individual"
    OBJECT_PROPERTY     = "object_property"
    DATA_PROPERTY       = "data_property"
    ANNOTATION_PROPERTY = "annotation_property"
    DATATYPE            = "datatype"


class Signature:
    """Migawka sygnatury; engine tworzy nową przy każdym execute() (chyba że ontologia jest statyczna)."""

    def __init__(self, reasoner: Reasoner) -> None:
        self.reasoner = reasoner
        self.classes: frozenset[str] = frozenset(reasoner.classes()) | {OWL_THING, OWL_NOTHING}
        self._annotation_properties: frozenset[str] | None = None
        self._annotations: dict[str, tuple[AnnotationAssertion, ...]] | None = None

    # ------------------------------------------------------------------
    # Deklaracje
    # ------------------------------------------------------------------

    def is_class(self, iri: str) -> bool:
        return iri in self.classes

    def is_individual(self, iri: str) -> bool:
        return self.reasoner.is_declared_individual(iri)

    def is_object_property(self, iri: str) -> bool:
        return iri in BUILTIN_OBJECT_PROPERTIES or self.reasoner.is_declared_object_property(iri)

    def is_data_property(self, iri: str) -> bool:
        return iri in BUILTIN_DATA_PROPERTIES or self.reasoner.is_declared_data_property(iri)

    def is_annotation_property(self, iri: str) -> bool:
        return (
            iri in BUILTIN_ANNOTATION_PROPERTIES
            or iri in self.annotation_properties
        )

    def is_datatype(self, iri: str) -> bool:
        return is_builtin_datatype(iri) or self.reasoner.is_declared_datatype(iri)

    def is_declared(self, iri: str, kind: EntityKind) -> bool:
        match kind:
            case EntityKind.CLASS:
                return self.is_class(iri)
            case EntityKind.INDIVIDUAL:
                return self.is_individual(iri)
            case EntityKind.OBJECT_PROPERTY:
                return self.is_object_property(iri)
            case EntityKind.DATA_PROPERTY:
                return self.is_data_property(iri)
            case EntityKind.ANNOTATION_PROPERTY:
                return self.is_annotation_property(iri)
            case EntityKind.DATATYPE:
                return self.is_datatype(iri)

    def declared_kinds(self, iri: str) -> frozenset[EntityKind]:
        return frozenset(k for k in EntityKind if self.is_declared(iri, k))

    # ------------------------------------------------------------------
    # Adnotacje
    # ------------------------------------------------------------------

    @property
    def annotation_properties(self) -> frozenset[str]:
        if self._annotation_properties is None:
            used = {a.property for group in self._index().values() for a in group}
            self._annotation_properties = frozenset(self.reasoner.annotation_properties()) | used
        return self._annotation_properties

    def _index(self) -> dict[str, tuple[AnnotationAssertion, ...]]:
        if self._annotations is None:
            grouped: dict[str, list[AnnotationAssertion]] = {}
            for assertion in self.reasoner.annotation_assertions():
                grouped.setdefault(assertion.subject, []).append(assertion)
            self._annotations = {s: tuple(v) for s, v in grouped.items()}
        return self._annotations

    def annotations_of(self, subject: str) -> tuple[AnnotationAssertion, ...]:
        return self._index().get(subject, ())

    def all_annotations(self) -> Iterable[AnnotationAssertion]:
        for assertions in self._index().values():
            yield from assertions
