"""
solver/handlers.py — generatory kandydatów dla atomów ze zmiennymi.

Handler dostaje atom (po podstawieniu bieżącego wiązania) i zwraca
kandydatów (przypisanie, BoundCheck). Przypisanie wiąże jedną zmienną;
gdy atom ma dwie wolne pozycje, silnik po podstawieniu ponownie
rozdziela ten sam atom, już z jedną pozycją związaną.

BoundCheck mówi, czy atom uziemiony przez przypisanie trzeba jeszcze
sprawdzić (CHECK) czy kandydat jest poprawny z konstrukcji (DO_NOT_CHECK).
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator
from enum import StrEnum

from query_model import Argument, Atom, AtomType
from reasoner.signature import Signature
from reasoner.types import AxiomKind, LiteralValue
from reasoner.vocabulary import OWL_THING, RDFS_LITERAL


class BoundCheck(StrEnum):
    CHECK        = "check"
    DO_NOT_CHECK = "do_not_check"


type Assignment = dict[Argument, Argument]
type Candidate  = tuple[Assignment, BoundCheck]
type Handler    = Callable[[Signature, Atom], Iterator[Candidate]]


# ---------------------------------------------------------------------------
# Pomocnicze
# ---------------------------------------------------------------------------

def _free(arg: Argument) -> bool:
    return arg.is_var


def _bind(var: Argument, iris: Iterable[str], flag: BoundCheck = BoundCheck.CHECK) -> Iterator[Candidate]:
    """Kandydaci var → IRI w porządku leksykograficznym (deterministyczny wynik)."""
    for iri in sorted(set(iris)):
        yield {var: Argument.uri(iri)}, flag


def _bind_literals(var: Argument, values: Iterable[LiteralValue]) -> Iterator[Candidate]:
    ordered = sorted(set(values), key=lambda v: (v.lexical, v.datatype or "", v.lang or ""))
    for v in ordered:
        yield {var: Argument.literal(v.lexical, v.datatype, v.lang)}, BoundCheck.CHECK


def _properties(sig: Signature) -> frozenset[str]:
    r = sig.reasoner
    return r.object_properties() | r.data_properties()


# ---------------------------------------------------------------------------
# Deklaracje
# ---------------------------------------------------------------------------

def _class(sig: Signature, atom: Atom) -> Iterator[Candidate]:
    (x,) = atom.args
    if _free(x):
        yield from _bind(x, sig.classes, BoundCheck.DO_NOT_CHECK)


def _enumerate(listing: Callable[[Signature], Iterable[str]]) -> Handler:
    def handler(sig: Signature, atom: Atom) -> Iterator[Candidate]:
        (x,) = atom.args
        if _free(x):
            yield from _bind(x, listing(sig))
    return handler


# ---------------------------------------------------------------------------
# Osobniki
# ---------------------------------------------------------------------------

def _type(sig: Signature, atom: Atom) -> Iterator[Candidate]:
    i, c = atom.args
    r = sig.reasoner
    direct = atom.type is AtomType.DIRECT_TYPE
    if _free(i) and _free(c):
        yield from _bind(i, r.individuals())
    elif _free(i):
        yield from _bind(i, r.instances(c.value, direct))
    elif _free(c):
        yield from _bind(c, r.types(i.value, direct))


def _individual_pair(lookup: Callable[[Signature, str], Iterable[str]]) -> Handler:
    def handler(sig: Signature, atom: Atom) -> Iterator[Candidate]:
        a, b = atom.args
        if _free(a) and _free(b):
            yield from _bind(a, sig.reasoner.individuals())
        elif _free(a):
            yield from _bind(a, lookup(sig, b.value))
        elif _free(b):
            yield from _bind(b, lookup(sig, a.value))
    return handler


def _property_value(sig: Signature, atom: Atom) -> Iterator[Candidate]:
    s, p, v = atom.args
    r = sig.reasoner
    if _free(s):
        yield from _bind(s, r.individuals())
    elif _free(p):
        candidates: set[str] = set()
        if not v.is_literal:
            candidates |= r.object_properties()
        if not v.is_uri:
            candidates |= r.data_properties()
        yield from _bind(p, candidates)
    elif _free(v):
        if sig.is_object_property(p.value):
            yield from _bind(v, r.object_property_values(s.value, p.value))
        elif sig.is_data_property(p.value):
            yield from _bind_literals(v, r.data_property_values(s.value, p.value))


# ---------------------------------------------------------------------------
# Hierarchia klas
# ---------------------------------------------------------------------------

def _sub_class_of(sig: Signature, atom: Atom) -> Iterator[Candidate]:
    a, b = atom.args
    r = sig.reasoner
    strict = atom.type is AtomType.STRICT_SUB_CLASS_OF
    if _free(a) and _free(b):
        yield from _bind(a, sig.classes)
    elif _free(a):
        if b.value == OWL_THING:
            subs = set(sig.classes)
            if strict:
                subs -= r.equivalent_classes(OWL_THING) | {OWL_THING}
        else:
            subs = set(r.sub_classes(b.value, False))
            if not strict:
                subs |= r.equivalent_classes(b.value)
        yield from _bind(a, subs, BoundCheck.DO_NOT_CHECK)
    elif _free(b):
        sups = set(r.super_classes(a.value, False))
        if not strict:
            sups |= r.equivalent_classes(a.value)
        yield from _bind(b, sups)


def _direct_sub_class_of(sig: Signature, atom: Atom) -> Iterator[Candidate]:
    a, b = atom.args
    r = sig.reasoner
    if _free(a) and _free(b):
        yield from _bind(a, sig.classes)
    elif _free(a):
        yield from _bind(a, r.sub_classes(b.value, True))
    elif _free(b):
        yield from _bind(b, r.super_classes(a.value, True))


def _equivalent_class(sig: Signature, atom: Atom) -> Iterator[Candidate]:
    a, b = atom.args
    r = sig.reasoner
    if _free(a) and _free(b):
        yield from _bind(a, sig.classes)
    elif _free(a):
        yield from _bind(a, r.equivalent_classes(b.value), BoundCheck.DO_NOT_CHECK)
    elif _free(b):
        yield from _bind(b, r.equivalent_classes(a.value), BoundCheck.DO_NOT_CHECK)


def _class_pair(lookup: Callable[[Signature, str], Iterable[str]]) -> Handler:
    def handler(sig: Signature, atom: Atom) -> Iterator[Candidate]:
        a, b = atom.args
        if _free(a) and _free(b):
            yield from _bind(a, sig.classes)
        elif _free(a):
            yield from _bind(a, lookup(sig, b.value))
        elif _free(b):
            yield from _bind(b, lookup(sig, a.value))
    return handler


# ---------------------------------------------------------------------------
# Hierarchia właściwości
# ---------------------------------------------------------------------------

def _related_properties(sig: Signature, prop: str, kind: AtomType, upward: bool) -> frozenset[str]:
    """
    Właściwości powiązane z prop wg rodzaju prop (obiektowa / danych):
    pod- lub nad-właściwości (upward), z równoważnymi dla SubPropertyOf,
    tylko bezpośrednie dla DirectSubPropertyOf, tylko równoważne dla
    EquivalentProperty.
    """
    r = sig.reasoner
    if sig.is_object_property(prop):
        sub, sup, eq = r.sub_object_properties, r.super_object_properties, r.equivalent_object_properties
    elif sig.is_data_property(prop):
        sub, sup, eq = r.sub_data_properties, r.super_data_properties, r.equivalent_data_properties
    else:
        return frozenset()

    walk = sup if upward else sub
    match kind:
        case AtomType.EQUIVALENT_PROPERTY:
            return eq(prop)
        case AtomType.DIRECT_SUB_PROPERTY_OF:
            return walk(prop, True)
        case AtomType.STRICT_SUB_PROPERTY_OF:
            return walk(prop, False)
        case _:
            return walk(prop, False) | eq(prop)


def _sub_property_of(sig: Signature, atom: Atom) -> Iterator[Candidate]:
    a, b = atom.args
    if _free(a) and _free(b):
        yield from _bind(a, _properties(sig))
    elif _free(a):
        yield from _bind(a, _related_properties(sig, b.value, atom.type, upward=False))
    elif _free(b):
        yield from _bind(b, _related_properties(sig, a.value, atom.type, upward=True))


# ---------------------------------------------------------------------------
# Charakterystyki
# ---------------------------------------------------------------------------

def _functional(sig: Signature, atom: Atom) -> Iterator[Candidate]:
    (p,) = atom.args
    if not _free(p):
        return
    r = sig.reasoner
    functional = [q for q in r.data_properties() if r.is_entailed(AxiomKind.FUNCTIONAL_DATA_PROPERTY, q)]
    functional += [q for q in r.object_properties() if r.is_entailed(AxiomKind.FUNCTIONAL_OBJECT_PROPERTY, q)]
    yield from _bind(p, functional)


def _object_characteristic(kind: AxiomKind) -> Handler:
    def handler(sig: Signature, atom: Atom) -> Iterator[Candidate]:
        (p,) = atom.args
        if _free(p):
            r = sig.reasoner
            yield from _bind(p, (q for q in r.object_properties() if r.is_entailed(kind, q)))
    return handler


# ---------------------------------------------------------------------------
# Dziedzina / zakres
# ---------------------------------------------------------------------------

def _all_properties(sig: Signature) -> frozenset[str]:
    return _properties(sig) | sig.annotation_properties


def _domains(sig: Signature, prop: str) -> set[str]:
    r = sig.reasoner
    out: set[str] = set()
    if sig.is_object_property(prop):
        out |= r.object_property_domains(prop)
    if sig.is_data_property(prop):
        out |= r.data_property_domains(prop)
    if sig.is_annotation_property(prop):
        out |= r.annotation_property_domains(prop)
    return out


def _ranges(sig: Signature, prop: str) -> set[str]:
    r = sig.reasoner
    out: set[str] = set()
    if sig.is_object_property(prop):
        out |= r.object_property_ranges(prop)
    if sig.is_data_property(prop):
        # kandydaci weryfikowani później przez wynikanie DataPropertyRange
        out |= r.datatypes() | {RDFS_LITERAL}
    if sig.is_annotation_property(prop):
        out |= r.annotation_property_ranges(prop)
    return out


def _domain_or_range(lookup: Callable[[Signature, str], set[str]]) -> Handler:
    def handler(sig: Signature, atom: Atom) -> Iterator[Candidate]:
        p, c = atom.args
        if _free(p):
            yield from _bind(p, _all_properties(sig))
        elif _free(c):
            yield from _bind(c, lookup(sig, p.value))
    return handler


# ---------------------------------------------------------------------------
# Adnotacje
# ---------------------------------------------------------------------------

def _annotation(sig: Signature, atom: Atom) -> Iterator[Candidate]:
    """
    Rozdział wg związanych pozycji {s, p, v} po asercjach adnotacyjnych
    indeksowanych podmiotem. Wiązane są wszystkie wolne pozycje naraz.
    """
    s, p, v = atom.args
    source = sig.all_annotations() if _free(s) else sig.annotations_of(s.value)

    for assertion in source:
        if not _free(p) and assertion.property != p.value:
            continue
        value = _value_argument(assertion.value)
        if not _free(v) and value != v:
            continue
        assignment: Assignment = {}
        if _free(s) and not _put(assignment, s, Argument.uri(assertion.subject)):
            continue
        if _free(p) and not _put(assignment, p, Argument.uri(assertion.property)):
            continue
        if _free(v) and not _put(assignment, v, value):
            continue
        yield assignment, BoundCheck.DO_NOT_CHECK


def _put(assignment: Assignment, var: Argument, value: Argument) -> bool:
    """Wiąże var; powtórzona zmienna musi dostać tę samą wartość."""
    if var in assignment:
        return assignment[var] == value
    assignment[var] = value
    return True


def _value_argument(value: str | LiteralValue) -> Argument:
    if isinstance(value, LiteralValue):
        return Argument.literal(value.lexical, value.datatype, value.lang)
    return Argument.uri(value)


# ---------------------------------------------------------------------------
# Rejestr
# ---------------------------------------------------------------------------

HANDLERS: dict[AtomType, Handler] = {
    AtomType.CLASS:                  _class,
    AtomType.INDIVIDUAL:             _enumerate(lambda sig: sig.reasoner.individuals()),
    AtomType.PROPERTY:               _enumerate(_properties),
    AtomType.OBJECT_PROPERTY:        _enumerate(lambda sig: sig.reasoner.object_properties()),
    AtomType.DATA_PROPERTY:          _enumerate(lambda sig: sig.reasoner.data_properties()),
    AtomType.ANNOTATION_PROPERTY:    _enumerate(lambda sig: sig.annotation_properties),
    AtomType.TYPE:                   _type,
    AtomType.DIRECT_TYPE:            _type,
    AtomType.PROPERTY_VALUE:         _property_value,
    AtomType.SAME_AS:                _individual_pair(lambda sig, i: sig.reasoner.same_individuals(i)),
    AtomType.DIFFERENT_FROM:         _individual_pair(lambda sig, i: sig.reasoner.different_individuals(i)),
    AtomType.SUB_CLASS_OF:           _sub_class_of,
    AtomType.STRICT_SUB_CLASS_OF:    _sub_class_of,
    AtomType.DIRECT_SUB_CLASS_OF:    _direct_sub_class_of,
    AtomType.EQUIVALENT_CLASS:       _equivalent_class,
    AtomType.DISJOINT_WITH:          _class_pair(lambda sig, c: sig.reasoner.disjoint_classes(c)),
    AtomType.COMPLEMENT_OF:          _class_pair(lambda sig, c: sig.reasoner.complement_classes(c)),
    AtomType.SUB_PROPERTY_OF:        _sub_property_of,
    AtomType.STRICT_SUB_PROPERTY_OF: _sub_property_of,
    AtomType.DIRECT_SUB_PROPERTY_OF: _sub_property_of,
    AtomType.EQUIVALENT_PROPERTY:    _sub_property_of,
    AtomType.DOMAIN:                 _domain_or_range(_domains),
    AtomType.RANGE:                  _domain_or_range(_ranges),
    AtomType.FUNCTIONAL:             _functional,
    AtomType.INVERSE_FUNCTIONAL:     _object_characteristic(AxiomKind.INVERSE_FUNCTIONAL_OBJECT_PROPERTY),
    AtomType.TRANSITIVE:             _object_characteristic(AxiomKind.TRANSITIVE_OBJECT_PROPERTY),
    AtomType.SYMMETRIC:              _object_characteristic(AxiomKind.SYMMETRIC_OBJECT_PROPERTY),
    AtomType.REFLEXIVE:              _object_characteristic(AxiomKind.REFLEXIVE_OBJECT_PROPERTY),
    AtomType.IRREFLEXIVE:            _object_characteristic(AxiomKind.IRREFLEXIVE_OBJECT_PROPERTY),
    AtomType.ANNOTATION:             _annotation,
}
