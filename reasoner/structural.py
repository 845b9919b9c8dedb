"""
reasoner/structural.py — reasoner strukturalny nad Ontology.

Odpowiada na operacje protokołu Reasoner wyłącznie z aksjomatów jawnych
i ich domknięcia (zwrotnego i przechodniego): hierarchie klas i właściwości,
równoważności, sameAs, odwrotności, dziedziny/zakresy, wartości właściwości
(z podwłaściwościami, odwrotnościami, symetrią i przechodniością).

To NIE jest reasoner tableau: nie wykrywa niespełnialności ani nie
rozwija wyrażeń klasowych. Jest deterministyczny i służy jako domyślny
adapter CLI oraz dubler testowy.
"""

from __future__ import annotations

from collections import deque
from collections.abc import Callable, Iterable

from .ontology import Ontology
from .types import AnnotationAssertion, AxiomKind, LiteralValue
from .vocabulary import (
    OWL_NOTHING,
    OWL_THING,
    OWL_TOP_DATA_PROPERTY,
    OWL_TOP_OBJECT_PROPERTY,
    RDFS_LITERAL,
)


type Graph = dict[str, set[str]]


# ---------------------------------------------------------------------------
# Pomocnicze: graf krawędzi "w górę" i domknięcie
# ---------------------------------------------------------------------------

def _add_edge(graph: Graph, a: str, b: str) -> None:
    graph.setdefault(a, set()).add(b)


def _up_graph(pairs: Iterable[tuple[str, str]], eq_sets: Iterable[frozenset[str]]) -> Graph:
    graph: Graph = {}
    for sub, sup in pairs:
        _add_edge(graph, sub, sup)
    for members in eq_sets:
        for a in members:
            for b in members:
                if a != b:
                    _add_edge(graph, a, b)
    return graph


def _reachable(graph: Graph, start: str) -> frozenset[str]:
    """Wierzchołki osiągalne ze start (włącznie ze start)."""
    seen  = {start}
    queue = deque([start])
    while queue:
        node = queue.popleft()
        for nxt in graph.get(node, ()):
            if nxt not in seen:
                seen.add(nxt)
                queue.append(nxt)
    return frozenset(seen)


type Order = Callable[[str, str], bool]


def _minimal(items: Iterable[str], le: Order) -> frozenset[str]:
    """Elementy, poniżej których (ściśle) nie leży żaden inny element zbioru."""
    pool = list(items)
    return frozenset(
        d for d in pool
        if not any(le(e, d) and not le(d, e) for e in pool)
    )


def _maximal(items: Iterable[str], le: Order) -> frozenset[str]:
    pool = list(items)
    return frozenset(
        d for d in pool
        if not any(le(d, e) and not le(e, d) for e in pool)
    )


# ---------------------------------------------------------------------------
# Reasoner
# ---------------------------------------------------------------------------

class StructuralReasoner:
    """Implementacja protokołu Reasoner oparta na aksjomatach jawnych."""

    def __init__(self, ontology: Ontology) -> None:
        self.ontology = ontology
        self.refresh()

    def refresh(self) -> None:
        """Przebudowuje indeksy po zmianie ontologii."""
        onto = self.ontology
        self._class_up = _up_graph(onto.subclass_of, onto.equivalent_classes)
        self._op_up    = _up_graph(onto.sub_object_properties, onto.equivalent_object_properties)
        self._dp_up    = _up_graph(onto.sub_data_properties, onto.equivalent_data_properties)
        self._same_graph: Graph = _up_graph((), onto.same_individuals)

        self._all_classes: frozenset[str] = frozenset(onto.classes | {OWL_THING, OWL_NOTHING})

        self._disjoint_pairs: list[tuple[str, str]] = [(OWL_THING, OWL_NOTHING)]
        for members in onto.disjoint_classes:
            for a in members:
                for b in members:
                    if a != b:
                        self._disjoint_pairs.append((a, b))
        self._complement_pairs: list[tuple[str, str]] = [(OWL_THING, OWL_NOTHING)]
        self._complement_pairs.extend(onto.complement_of)
        self._disjoint_pairs.extend(onto.complement_of)

        self._class_anc: dict[str, frozenset[str]] = {}
        self._op_anc:    dict[str, frozenset[str]] = {}
        self._dp_anc:    dict[str, frozenset[str]] = {}
        self._same:      dict[str, frozenset[str]] = {}
        self._types:     dict[str, frozenset[str]] = {}

    # ------------------------------------------------------------------
    # Sygnatura
    # ------------------------------------------------------------------

    def classes(self) -> frozenset[str]:
        return frozenset(self.ontology.classes)

    def individuals(self) -> frozenset[str]:
        return frozenset(self.ontology.individuals)

    def object_properties(self) -> frozenset[str]:
        return frozenset(self.ontology.object_properties)

    def data_properties(self) -> frozenset[str]:
        return frozenset(self.ontology.data_properties)

    def annotation_properties(self) -> frozenset[str]:
        return frozenset(self.ontology.annotation_properties)

    def datatypes(self) -> frozenset[str]:
        return frozenset(self.ontology.datatypes)

    def is_declared_class(self, iri: str) -> bool:
        return iri in self.ontology.classes

    def is_declared_individual(self, iri: str) -> bool:
        return iri in self.ontology.individuals

    def is_declared_object_property(self, iri: str) -> bool:
        return iri in self.ontology.object_properties

    def is_declared_data_property(self, iri: str) -> bool:
        return iri in self.ontology.data_properties

    def is_declared_annotation_property(self, iri: str) -> bool:
        return iri in self.ontology.annotation_properties

    def is_declared_datatype(self, iri: str) -> bool:
        return iri in self.ontology.datatypes

    # ------------------------------------------------------------------
    # Hierarchia klas
    # ------------------------------------------------------------------

    def _ancestors(self, cls: str) -> frozenset[str]:
        anc = self._class_anc.get(cls)
        if anc is None:
            anc = _reachable(self._class_up, cls)
            self._class_anc[cls] = anc
        return anc

    def is_subclass(self, sub: str, sup: str) -> bool:
        """sub ⊑ sup wynikające z aksjomatów jawnych."""
        if sup == OWL_THING or sub == OWL_NOTHING:
            return True
        anc = self._ancestors(sub)
        return (
            sup in anc
            or OWL_NOTHING in anc
            or sup in self._ancestors(OWL_THING)
        )

    def _class_pool(self, *extra: str) -> frozenset[str]:
        return self._all_classes | frozenset(extra)

    def equivalent_classes(self, cls: str) -> frozenset[str]:
        return frozenset(
            d for d in self._class_pool(cls)
            if self.is_subclass(d, cls) and self.is_subclass(cls, d)
        )

    def sub_classes(self, cls: str, direct: bool = False) -> frozenset[str]:
        subs = [
            d for d in self._class_pool(cls)
            if self.is_subclass(d, cls) and not self.is_subclass(cls, d)
        ]
        return _maximal(subs, self.is_subclass) if direct else frozenset(subs)

    def super_classes(self, cls: str, direct: bool = False) -> frozenset[str]:
        sups = [
            d for d in self._class_pool(cls)
            if self.is_subclass(cls, d) and not self.is_subclass(d, cls)
        ]
        return _minimal(sups, self.is_subclass) if direct else frozenset(sups)

    def disjoint_classes(self, cls: str) -> frozenset[str]:
        if self.is_subclass(cls, OWL_NOTHING):
            return self._class_pool(cls)
        out: set[str] = set()
        for x, y in self._disjoint_pairs:
            for a, b in ((x, y), (y, x)):
                if self.is_subclass(cls, a):
                    out.update(d for d in self._all_classes if self.is_subclass(d, b))
        return frozenset(out)

    def complement_classes(self, cls: str) -> frozenset[str]:
        eq = self.equivalent_classes(cls)
        out: set[str] = set()
        for x, y in self._complement_pairs:
            if x in eq:
                out |= self.equivalent_classes(y)
            if y in eq:
                out |= self.equivalent_classes(x)
        return frozenset(out)

    # ------------------------------------------------------------------
    # Osobniki
    # ------------------------------------------------------------------

    def same_individuals(self, individual: str) -> frozenset[str]:
        same = self._same.get(individual)
        if same is None:
            same = _reachable(self._same_graph, individual)
            for member in same:
                self._same[member] = same
        return same

    def different_individuals(self, individual: str) -> frozenset[str]:
        same = self.same_individuals(individual)
        out: set[str] = set()
        for members in self.ontology.different_individuals:
            if same & members:
                for other in members:
                    if other not in same:
                        out |= self.same_individuals(other)
        return frozenset(out)

    def _told_types(self, individual: str) -> set[str]:
        onto = self.ontology
        same = self.same_individuals(individual)
        told = {c for i, c in onto.class_assertions if i in same}
        # dziedziny i zakresy właściwości użytych w asercjach
        for s, p, o in onto.object_assertions:
            if s in same:
                told |= {c for q, c in onto.object_property_domains if self.is_sub_object_property(p, q)}
            if o in same:
                told |= {c for q, c in onto.object_property_ranges if self.is_sub_object_property(p, q)}
        for s, p, _ in onto.data_assertions:
            if s in same:
                told |= {c for q, c in onto.data_property_domains if self.is_sub_data_property(p, q)}
        return told

    def types(self, individual: str, direct: bool = False) -> frozenset[str]:
        all_types = self._types.get(individual)
        if all_types is None:
            told = self._told_types(individual)
            all_types = frozenset(
                d for d in self._all_classes | told
                if d == OWL_THING or any(self.is_subclass(t, d) for t in told)
            )
            self._types[individual] = all_types
        return _minimal(all_types, self.is_subclass) if direct else all_types

    def instances(self, cls: str, direct: bool = False) -> frozenset[str]:
        eq = self.equivalent_classes(cls) if direct else frozenset({cls})
        return frozenset(
            i for i in self.ontology.individuals
            if eq & self.types(i, direct)
        )

    def object_property_values(self, individual: str, prop: str) -> frozenset[str]:
        onto  = self.ontology
        subs  = {q for q in onto.object_properties | {prop} if self.is_sub_object_property(q, prop)}
        edges: set[tuple[str, str]] = set()
        for s, q, o in onto.object_assertions:
            if q in subs:
                edges.add((s, o))
            for r in self._told_inverses(q):
                if r in subs:
                    edges.add((o, s))
        if self.is_entailed(AxiomKind.SYMMETRIC_OBJECT_PROPERTY, prop):
            edges |= {(o, s) for s, o in edges}

        start   = self.same_individuals(individual)
        targets = {o for s, o in edges if s in start}
        if self.is_entailed(AxiomKind.TRANSITIVE_OBJECT_PROPERTY, prop):
            frontier = set(targets)
            while frontier:
                reach = set()
                for node in frontier:
                    reach |= self.same_individuals(node)
                step = {o for s, o in edges if s in reach} - targets
                targets |= step
                frontier = step
        if self.is_entailed(AxiomKind.REFLEXIVE_OBJECT_PROPERTY, prop):
            targets.add(individual)

        out: set[str] = set()
        for o in targets:
            out |= self.same_individuals(o)
        return frozenset(out)

    def data_property_values(self, individual: str, prop: str) -> frozenset[LiteralValue]:
        same = self.same_individuals(individual)
        return frozenset(
            v for s, q, v in self.ontology.data_assertions
            if s in same and self.is_sub_data_property(q, prop)
        )

    # ------------------------------------------------------------------
    # Hierarchie właściwości
    # ------------------------------------------------------------------

    def is_sub_object_property(self, sub: str, sup: str) -> bool:
        if sup == OWL_TOP_OBJECT_PROPERTY:
            return True
        anc = self._op_anc.get(sub)
        if anc is None:
            anc = self._op_anc[sub] = _reachable(self._op_up, sub)
        return sup in anc

    def is_sub_data_property(self, sub: str, sup: str) -> bool:
        if sup == OWL_TOP_DATA_PROPERTY:
            return True
        anc = self._dp_anc.get(sub)
        if anc is None:
            anc = self._dp_anc[sub] = _reachable(self._dp_up, sub)
        return sup in anc

    # właściwości szczytowe leżą nad każdą właściwością swojego rodzaju
    def _object_pool(self) -> set[str]:
        return self.ontology.object_properties | {OWL_TOP_OBJECT_PROPERTY}

    def _data_pool(self) -> set[str]:
        return self.ontology.data_properties | {OWL_TOP_DATA_PROPERTY}

    def _prop_sub(self, pool: set[str], prop: str, le: Order, direct: bool) -> frozenset[str]:
        subs = [q for q in pool | {prop} if le(q, prop) and not le(prop, q)]
        return _maximal(subs, le) if direct else frozenset(subs)

    def _prop_super(self, pool: set[str], prop: str, le: Order, direct: bool) -> frozenset[str]:
        sups = [q for q in pool | {prop} if le(prop, q) and not le(q, prop)]
        return _minimal(sups, le) if direct else frozenset(sups)

    def _prop_equivalent(self, pool: set[str], prop: str, le: Order) -> frozenset[str]:
        return frozenset(q for q in pool | {prop} if le(q, prop) and le(prop, q))

    def sub_object_properties(self, prop: str, direct: bool = False) -> frozenset[str]:
        return self._prop_sub(self._object_pool(), prop, self.is_sub_object_property, direct)

    def super_object_properties(self, prop: str, direct: bool = False) -> frozenset[str]:
        return self._prop_super(self._object_pool(), prop, self.is_sub_object_property, direct)

    def equivalent_object_properties(self, prop: str) -> frozenset[str]:
        return self._prop_equivalent(self._object_pool(), prop, self.is_sub_object_property)

    def sub_data_properties(self, prop: str, direct: bool = False) -> frozenset[str]:
        return self._prop_sub(self._data_pool(), prop, self.is_sub_data_property, direct)

    def super_data_properties(self, prop: str, direct: bool = False) -> frozenset[str]:
        return self._prop_super(self._data_pool(), prop, self.is_sub_data_property, direct)

    def equivalent_data_properties(self, prop: str) -> frozenset[str]:
        return self._prop_equivalent(self._data_pool(), prop, self.is_sub_data_property)

    def _told_inverses(self, prop: str) -> set[str]:
        out: set[str] = set()
        for a, b in self.ontology.inverse_properties:
            if a == prop:
                out.add(b)
            if b == prop:
                out.add(a)
        return out

    def inverse_object_properties(self, prop: str) -> frozenset[str]:
        eq = self.equivalent_object_properties(prop)
        out: set[str] = set()
        for p in eq:
            for q in self._told_inverses(p):
                out |= self.equivalent_object_properties(q)
        if eq & self.ontology.symmetric:
            out |= eq
        return frozenset(out)

    # ------------------------------------------------------------------
    # Dziedziny i zakresy
    # ------------------------------------------------------------------

    def _closed_up(self, told: set[str], direct: bool) -> frozenset[str]:
        closed = frozenset(
            d for d in self._all_classes | told
            if d == OWL_THING or any(self.is_subclass(t, d) for t in told)
        )
        return _minimal(closed, self.is_subclass) if direct else closed

    def object_property_domains(self, prop: str, direct: bool = False) -> frozenset[str]:
        onto = self.ontology
        told = {c for q, c in onto.object_property_domains if self.is_sub_object_property(prop, q)}
        for inv in self.inverse_object_properties(prop):
            told |= {c for q, c in onto.object_property_ranges if self.is_sub_object_property(inv, q)}
        return self._closed_up(told, direct)

    def object_property_ranges(self, prop: str, direct: bool = False) -> frozenset[str]:
        onto = self.ontology
        told = {c for q, c in onto.object_property_ranges if self.is_sub_object_property(prop, q)}
        for inv in self.inverse_object_properties(prop):
            told |= {c for q, c in onto.object_property_domains if self.is_sub_object_property(inv, q)}
        return self._closed_up(told, direct)

    def data_property_domains(self, prop: str, direct: bool = False) -> frozenset[str]:
        told = {
            c for q, c in self.ontology.data_property_domains
            if self.is_sub_data_property(prop, q)
        }
        return self._closed_up(told, direct)

    def _data_property_ranges(self, prop: str) -> frozenset[str]:
        told = {
            dt for q, dt in self.ontology.data_property_ranges
            if self.is_sub_data_property(prop, q)
        }
        return frozenset(told | {RDFS_LITERAL})

    # ------------------------------------------------------------------
    # Wynikanie
    # ------------------------------------------------------------------

    def _any_super(self, prop: str, marked: set[str]) -> bool:
        return any(self.is_sub_object_property(prop, q) for q in marked)

    def is_entailed(self, kind: AxiomKind, *terms: str | LiteralValue) -> bool:
        onto = self.ontology
        match kind:
            case AxiomKind.CLASS_ASSERTION:
                i, c = terms
                return c in self.types(i)
            case AxiomKind.OBJECT_PROPERTY_ASSERTION:
                s, p, o = terms
                return o in self.object_property_values(s, p)
            case AxiomKind.DATA_PROPERTY_ASSERTION:
                s, p, v = terms
                return v in self.data_property_values(s, p)
            case AxiomKind.SUB_CLASS_OF:
                a, b = terms
                return self.is_subclass(a, b)
            case AxiomKind.EQUIVALENT_CLASSES:
                a, b = terms
                return self.is_subclass(a, b) and self.is_subclass(b, a)
            case AxiomKind.DISJOINT_CLASSES:
                a, b = terms
                return b in self.disjoint_classes(a)
            case AxiomKind.SAME_INDIVIDUAL:
                a, b = terms
                return b in self.same_individuals(a)
            case AxiomKind.DIFFERENT_INDIVIDUALS:
                a, b = terms
                return b in self.different_individuals(a)
            case AxiomKind.SUB_OBJECT_PROPERTY_OF:
                a, b = terms
                return self.is_sub_object_property(a, b)
            case AxiomKind.SUB_DATA_PROPERTY_OF:
                a, b = terms
                return self.is_sub_data_property(a, b)
            case AxiomKind.EQUIVALENT_OBJECT_PROPERTIES:
                a, b = terms
                return b in self.equivalent_object_properties(a)
            case AxiomKind.EQUIVALENT_DATA_PROPERTIES:
                a, b = terms
                return b in self.equivalent_data_properties(a)
            case AxiomKind.INVERSE_OBJECT_PROPERTIES:
                a, b = terms
                return b in self.inverse_object_properties(a)
            case AxiomKind.OBJECT_PROPERTY_DOMAIN:
                p, c = terms
                return c in self.object_property_domains(p)
            case AxiomKind.OBJECT_PROPERTY_RANGE:
                p, c = terms
                return c in self.object_property_ranges(p)
            case AxiomKind.DATA_PROPERTY_DOMAIN:
                p, c = terms
                return c in self.data_property_domains(p)
            case AxiomKind.DATA_PROPERTY_RANGE:
                p, dt = terms
                return dt in self._data_property_ranges(p)
            case AxiomKind.FUNCTIONAL_OBJECT_PROPERTY:
                (p,) = terms
                return self._any_super(p, onto.functional_object_properties)
            case AxiomKind.FUNCTIONAL_DATA_PROPERTY:
                (p,) = terms
                return any(self.is_sub_data_property(p, q) for q in onto.functional_data_properties)
            case AxiomKind.INVERSE_FUNCTIONAL_OBJECT_PROPERTY:
                (p,) = terms
                if self._any_super(p, onto.inverse_functional):
                    return True
                return any(
                    self._any_super(inv, onto.functional_object_properties)
                    for inv in self.inverse_object_properties(p)
                )
            case AxiomKind.TRANSITIVE_OBJECT_PROPERTY:
                (p,) = terms
                return bool(self.equivalent_object_properties(p) & onto.transitive)
            case AxiomKind.SYMMETRIC_OBJECT_PROPERTY:
                (p,) = terms
                eq = self.equivalent_object_properties(p)
                if eq & onto.symmetric:
                    return True
                return any(a in eq and b in eq for a, b in onto.inverse_properties)
            case AxiomKind.REFLEXIVE_OBJECT_PROPERTY:
                (p,) = terms
                return any(self.is_sub_object_property(q, p) for q in onto.reflexive)
            case AxiomKind.IRREFLEXIVE_OBJECT_PROPERTY:
                (p,) = terms
                return self._any_super(p, onto.irreflexive)
            case _:
                raise ValueError(f"Nieobsługiwany rodzaj aksjomatu: {kind}")

    # ------------------------------------------------------------------
    # Fakty ontologii
    # ------------------------------------------------------------------

    def annotation_assertions(self) -> tuple[AnnotationAssertion, ...]:
        return tuple(self.ontology.annotations)

    def annotation_property_domains(self, prop: str) -> frozenset[str]:
        return frozenset(c for p, c in self.ontology.annotation_property_domains if p == prop)

    def annotation_property_ranges(self, prop: str) -> frozenset[str]:
        return frozenset(c for p, c in self.ontology.annotation_property_ranges if p == prop)
