"""
reasoner/ontology.py — ontologia w pamięci: deklaracje i aksjomaty jawne.

Ontology nie wnioskuje — to robi StructuralReasoner (reasoner/structural.py).
Loadery (reasoner/loader.py) wypełniają ją z JSON lub z grafu RDF.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from .types import AnnotationAssertion, LiteralValue


type Pair = tuple[str, str]


@dataclass(slots=True)
class Ontology:
    """
    Deklaracje encji + aksjomaty jawne (told axioms).

    Pary są zapisywane w kolejności z aksjomatu, np. subclass_of: (sub, super),
    class_assertions: (individual, class), object_assertions: (s, p, o).
    Zbiory równoważności / rozłączności trzymane są jako frozenset członków.
    """
    iri: str | None = None

    # deklaracje
    classes:               set[str] = field(default_factory=set)
    individuals:           set[str] = field(default_factory=set)
    object_properties:     set[str] = field(default_factory=set)
    data_properties:       set[str] = field(default_factory=set)
    annotation_properties: set[str] = field(default_factory=set)
    datatypes:             set[str] = field(default_factory=set)

    # klasy
    subclass_of:        list[Pair]            = field(default_factory=list)
    equivalent_classes: list[frozenset[str]]  = field(default_factory=list)
    disjoint_classes:   list[frozenset[str]]  = field(default_factory=list)
    complement_of:      list[Pair]            = field(default_factory=list)

    # osobniki
    class_assertions:      list[Pair]                         = field(default_factory=list)
    object_assertions:     list[tuple[str, str, str]]          = field(default_factory=list)
    data_assertions:       list[tuple[str, str, LiteralValue]] = field(default_factory=list)
    same_individuals:      list[frozenset[str]]               = field(default_factory=list)
    different_individuals: list[frozenset[str]]               = field(default_factory=list)

    # właściwości
    sub_object_properties:        list[Pair]           = field(default_factory=list)
    sub_data_properties:          list[Pair]           = field(default_factory=list)
    equivalent_object_properties: list[frozenset[str]] = field(default_factory=list)
    equivalent_data_properties:   list[frozenset[str]] = field(default_factory=list)
    inverse_properties:           list[Pair]           = field(default_factory=list)
    object_property_domains:      list[Pair]           = field(default_factory=list)
    object_property_ranges:       list[Pair]           = field(default_factory=list)
    data_property_domains:        list[Pair]           = field(default_factory=list)
    data_property_ranges:         list[Pair]           = field(default_factory=list)
    annotation_property_domains:  list[Pair]           = field(default_factory=list)
    annotation_property_ranges:   list[Pair]           = field(default_factory=list)

    # charakterystyki właściwości
    functional_object_properties: set[str] = field(default_factory=set)
    functional_data_properties:   set[str] = field(default_factory=set)
    inverse_functional:           set[str] = field(default_factory=set)
    transitive:                   set[str] = field(default_factory=set)
    symmetric:                    set[str] = field(default_factory=set)
    reflexive:                    set[str] = field(default_factory=set)
    irreflexive:                  set[str] = field(default_factory=set)

    # adnotacje
    annotations: list[AnnotationAssertion] = field(default_factory=list)

    # ------------------------------------------------------------------

    def entity_count(self) -> int:
        return (
            len(self.classes) + len(self.individuals)
            + len(self.object_properties) + len(self.data_properties)
            + len(self.annotation_properties) + len(self.datatypes)
        )

    def axiom_count(self) -> int:
        lists = (
            self.subclass_of, self.equivalent_classes, self.disjoint_classes,
            self.complement_of, self.class_assertions, self.object_assertions,
            self.data_assertions, self.same_individuals,
            self.different_individuals, self.sub_object_properties,
            self.sub_data_properties, self.equivalent_object_properties,
            self.equivalent_data_properties, self.inverse_properties,
            self.object_property_domains, self.object_property_ranges,
            self.data_property_domains, self.data_property_ranges,
            self.annotation_property_domains, self.annotation_property_ranges,
            self.annotations,
        )
        chars = (
            self.functional_object_properties, self.functional_data_properties,
            self.inverse_functional, self.transitive, self.symmetric,
            self.reflexive, self.irreflexive,
        )
        return sum(len(x) for x in lists) + sum(len(x) for x in chars)
