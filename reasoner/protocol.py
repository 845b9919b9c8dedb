"""
reasoner/protocol.py — interfejs reasonera DL widziany przez silnik zapytań.

Silnik nie zna implementacji reasonera: korzysta wyłącznie z operacji
poniżej (sygnatura, deklaracje, wyszukiwanie, wynikanie, fakty ontologii).
Wszystkie operacje są wolne od efektów ubocznych; wyjątki reasonera
przechodzą przez silnik bez zmian.

Konwencje wyników (jak w węzłach hierarchii OWL API):
  - sub_classes / super_classes nie zawierają klas równoważnych c,
    equivalent_classes(c) zawiera samo c;
  - sub_classes zawiera owl:Nothing, super_classes zawiera owl:Thing
    (o ile c nie jest im równoważna);
  - types(i) zawiera owl:Thing, same_individuals(i) zawiera i;
  - equivalent_*_properties(p) zawiera p.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Protocol, runtime_checkable

from .types import AnnotationAssertion, AxiomKind, LiteralValue


@runtime_checkable
class Reasoner(Protocol):

    # -- sygnatura ------------------------------------------------------

    def classes(self) -> frozenset[str]: ...
    def individuals(self) -> frozenset[str]: ...
    def object_properties(self) -> frozenset[str]: ...
    def data_properties(self) -> frozenset[str]: ...
    def annotation_properties(self) -> frozenset[str]: ...
    def datatypes(self) -> frozenset[str]: ...

    # -- deklaracje -----------------------------------------------------

    def is_declared_class(self, iri: str) -> bool: ...
    def is_declared_individual(self, iri: str) -> bool: ...
    def is_declared_object_property(self, iri: str) -> bool: ...
    def is_declared_data_property(self, iri: str) -> bool: ...
    def is_declared_annotation_property(self, iri: str) -> bool: ...
    def is_declared_datatype(self, iri: str) -> bool: ...

    # -- klasy i osobniki -----------------------------------------------

    def sub_classes(self, cls: str, direct: bool = False) -> frozenset[str]: ...
    def super_classes(self, cls: str, direct: bool = False) -> frozenset[str]: ...
    def equivalent_classes(self, cls: str) -> frozenset[str]: ...
    def disjoint_classes(self, cls: str) -> frozenset[str]: ...
    def complement_classes(self, cls: str) -> frozenset[str]: ...
    def instances(self, cls: str, direct: bool = False) -> frozenset[str]: ...
    def types(self, individual: str, direct: bool = False) -> frozenset[str]: ...
    def same_individuals(self, individual: str) -> frozenset[str]: ...
    def different_individuals(self, individual: str) -> frozenset[str]: ...
    def object_property_values(self, individual: str, prop: str) -> frozenset[str]: ...
    def data_property_values(self, individual: str, prop: str) -> frozenset[LiteralValue]: ...

    # -- właściwości ----------------------------------------------------

    def sub_object_properties(self, prop: str, direct: bool = False) -> frozenset[str]: ...
    def super_object_properties(self, prop: str, direct: bool = False) -> frozenset[str]: ...
    def equivalent_object_properties(self, prop: str) -> frozenset[str]: ...
    def inverse_object_properties(self, prop: str) -> frozenset[str]: ...
    def sub_data_properties(self, prop: str, direct: bool = False) -> frozenset[str]: ...
    def super_data_properties(self, prop: str, direct: bool = False) -> frozenset[str]: ...
    def equivalent_data_properties(self, prop: str) -> frozenset[str]: ...
    def object_property_domains(self, prop: str, direct: bool = False) -> frozenset[str]: ...
    def object_property_ranges(self, prop: str, direct: bool = False) -> frozenset[str]: ...
    def data_property_domains(self, prop: str, direct: bool = False) -> frozenset[str]: ...

    # -- wynikanie ------------------------------------------------------

    def is_entailed(self, kind: AxiomKind, *terms: str | LiteralValue) -> bool: ...

    # -- fakty ontologii (nie wynikanie) --------------------------------

    def annotation_assertions(self) -> Iterable[AnnotationAssertion]: ...
    def annotation_property_domains(self, prop: str) -> frozenset[str]: ...
    def annotation_property_ranges(self, prop: str) -> frozenset[str]: ...
