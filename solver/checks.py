"""
solver/checks.py — sprawdzanie atomów uziemionych.

check_bound(atom, signature) odpowiada True/False dla atomu bez zmiennych,
pytając reasoner (wynikanie / wyszukiwanie) albo sygnaturę (deklaracje,
asercje adnotacyjne).
"""

from __future__ import annotations

from collections.abc import Callable

from query_model import Argument, Atom, AtomType
from reasoner.signature import Signature
from reasoner.types import AnnotationAssertion, AxiomKind, LiteralValue
from reasoner.vocabulary import OWL_NOTHING, OWL_THING
from validator.types import EngineTypeError

type Term  = str | LiteralValue
type Check = Callable[[Signature, tuple[Term, ...]], bool]


def to_term(arg: Argument) -> Term:
    """Argument → wartość przekazywana do reasonera (IRI lub LiteralValue)."""
    if arg.is_literal:
        return LiteralValue(arg.value, arg.datatype, arg.lang)
    return arg.value


def literal_matches(query: LiteralValue, value: LiteralValue) -> bool:
    """Literał zapytania pasuje do wartości: równość albo ta sama forma leksykalna
    przy niepodanym typie danych / języku."""
    if query == value:
        return True
    return (
        query.lexical == value.lexical
        and (query.datatype is None or query.datatype == value.datatype)
        and (query.lang is None or query.lang == value.lang)
    )


# ---------------------------------------------------------------------------
# Deklaracje
# ---------------------------------------------------------------------------

def _class(sig: Signature, t: tuple[Term, ...]) -> bool:
    return isinstance(t[0], str) and sig.is_class(t[0])


def _individual(sig: Signature, t: tuple[Term, ...]) -> bool:
    return isinstance(t[0], str) and sig.is_individual(t[0])


def _property(sig: Signature, t: tuple[Term, ...]) -> bool:
    return isinstance(t[0], str) and (sig.is_object_property(t[0]) or sig.is_data_property(t[0]))


def _object_property(sig: Signature, t: tuple[Term, ...]) -> bool:
    return isinstance(t[0], str) and sig.is_object_property(t[0])


def _data_property(sig: Signature, t: tuple[Term, ...]) -> bool:
    return isinstance(t[0], str) and sig.is_data_property(t[0])


def _annotation_property(sig: Signature, t: tuple[Term, ...]) -> bool:
    return isinstance(t[0], str) and sig.is_annotation_property(t[0])


# ---------------------------------------------------------------------------
# Osobniki
# ---------------------------------------------------------------------------

def _type(sig: Signature, t: tuple[Term, ...]) -> bool:
    return sig.reasoner.is_entailed(AxiomKind.CLASS_ASSERTION, t[0], t[1])


def _direct_type(sig: Signature, t: tuple[Term, ...]) -> bool:
    return t[1] in sig.reasoner.types(t[0], True)


def _property_value(sig: Signature, t: tuple[Term, ...]) -> bool:
    subject, prop, value = t
    if isinstance(value, LiteralValue):
        if not sig.is_data_property(prop):
            return False
        return any(literal_matches(value, v) for v in sig.reasoner.data_property_values(subject, prop))
    if not sig.is_object_property(prop):
        return False
    return value in sig.reasoner.object_property_values(subject, prop)


def _same_as(sig: Signature, t: tuple[Term, ...]) -> bool:
    return t[1] in sig.reasoner.same_individuals(t[0])


def _different_from(sig: Signature, t: tuple[Term, ...]) -> bool:
    return t[1] in sig.reasoner.different_individuals(t[0])


# ---------------------------------------------------------------------------
# Hierarchia klas
# ---------------------------------------------------------------------------

def _sub_class_of(sig: Signature, t: tuple[Term, ...]) -> bool:
    sub, sup = t
    if not (isinstance(sub, str) and isinstance(sup, str) and sig.is_class(sub) and sig.is_class(sup)):
        return False
    if sub == OWL_NOTHING or sup == OWL_THING:
        return True
    return sig.reasoner.is_entailed(AxiomKind.SUB_CLASS_OF, sub, sup)


def _strict_sub_class_of(sig: Signature, t: tuple[Term, ...]) -> bool:
    return t[0] in sig.reasoner.sub_classes(t[1], False)


def _direct_sub_class_of(sig: Signature, t: tuple[Term, ...]) -> bool:
    return t[0] in sig.reasoner.sub_classes(t[1], True)


def _equivalent_class(sig: Signature, t: tuple[Term, ...]) -> bool:
    return t[1] in sig.reasoner.equivalent_classes(t[0])


def _disjoint_with(sig: Signature, t: tuple[Term, ...]) -> bool:
    return t[1] in sig.reasoner.disjoint_classes(t[0])


def _complement_of(sig: Signature, t: tuple[Term, ...]) -> bool:
    return t[1] in sig.reasoner.complement_classes(t[0])


# ---------------------------------------------------------------------------
# Hierarchia właściwości (wg zadeklarowanego rodzaju)
# ---------------------------------------------------------------------------

def _both_object(sig: Signature, t: tuple[Term, ...]) -> bool:
    return all(isinstance(x, str) and sig.is_object_property(x) for x in t)


def _both_data(sig: Signature, t: tuple[Term, ...]) -> bool:
    return all(isinstance(x, str) and sig.is_data_property(x) for x in t)


def _sub_property_of(sig: Signature, t: tuple[Term, ...]) -> bool:
    r = sig.reasoner
    if _both_object(sig, t):
        return r.is_entailed(AxiomKind.SUB_OBJECT_PROPERTY_OF, t[0], t[1])
    if _both_data(sig, t):
        return r.is_entailed(AxiomKind.SUB_DATA_PROPERTY_OF, t[0], t[1])
    return False


def _strict_sub_property_of(sig: Signature, t: tuple[Term, ...]) -> bool:
    if _both_object(sig, t):
        return t[0] in sig.reasoner.sub_object_properties(t[1], False)
    if _both_data(sig, t):
        return t[0] in sig.reasoner.sub_data_properties(t[1], False)
    return False


def _direct_sub_property_of(sig: Signature, t: tuple[Term, ...]) -> bool:
    if _both_object(sig, t):
        return t[0] in sig.reasoner.sub_object_properties(t[1], True)
    if _both_data(sig, t):
        return t[0] in sig.reasoner.sub_data_properties(t[1], True)
    return False


def _equivalent_property(sig: Signature, t: tuple[Term, ...]) -> bool:
    if _both_object(sig, t):
        return t[1] in sig.reasoner.equivalent_object_properties(t[0])
    if _both_data(sig, t):
        return t[1] in sig.reasoner.equivalent_data_properties(t[0])
    return False


def _inverse_of(sig: Signature, t: tuple[Term, ...]) -> bool:
    return _both_object(sig, t) and t[1] in sig.reasoner.inverse_object_properties(t[0])


def _domain(sig: Signature, t: tuple[Term, ...]) -> bool:
    prop, cls = t
    r = sig.reasoner
    if sig.is_object_property(prop) and r.is_entailed(AxiomKind.OBJECT_PROPERTY_DOMAIN, prop, cls):
        return True
    if sig.is_data_property(prop) and r.is_entailed(AxiomKind.DATA_PROPERTY_DOMAIN, prop, cls):
        return True
    return sig.is_annotation_property(prop) and cls in r.annotation_property_domains(prop)


def _range(sig: Signature, t: tuple[Term, ...]) -> bool:
    prop, rng = t
    r = sig.reasoner
    if sig.is_object_property(prop) and r.is_entailed(AxiomKind.OBJECT_PROPERTY_RANGE, prop, rng):
        return True
    if sig.is_data_property(prop) and r.is_entailed(AxiomKind.DATA_PROPERTY_RANGE, prop, rng):
        return True
    return sig.is_annotation_property(prop) and rng in r.annotation_property_ranges(prop)


# ---------------------------------------------------------------------------
# Charakterystyki właściwości
# ---------------------------------------------------------------------------

def _functional(sig: Signature, t: tuple[Term, ...]) -> bool:
    prop = t[0]
    r = sig.reasoner
    if sig.is_object_property(prop):
        return r.is_entailed(AxiomKind.FUNCTIONAL_OBJECT_PROPERTY, prop)
    if sig.is_data_property(prop):
        return r.is_entailed(AxiomKind.FUNCTIONAL_DATA_PROPERTY, prop)
    return False


def _object_characteristic(kind: AxiomKind) -> Check:
    def check(sig: Signature, t: tuple[Term, ...]) -> bool:
        return sig.is_object_property(t[0]) and sig.reasoner.is_entailed(kind, t[0])
    return check


# ---------------------------------------------------------------------------
# Adnotacje
# ---------------------------------------------------------------------------

def _annotation(sig: Signature, t: tuple[Term, ...]) -> bool:
    subject, prop, value = t
    return AnnotationAssertion(subject, prop, value) in sig.annotations_of(subject)


# ---------------------------------------------------------------------------
# Tabela
# ---------------------------------------------------------------------------

CHECKS: dict[AtomType, Check] = {
    AtomType.CLASS:                  _class,
    AtomType.INDIVIDUAL:             _individual,
    AtomType.PROPERTY:               _property,
    AtomType.OBJECT_PROPERTY:        _object_property,
    AtomType.DATA_PROPERTY:          _data_property,
    AtomType.ANNOTATION_PROPERTY:    _annotation_property,
    AtomType.TYPE:                   _type,
    AtomType.DIRECT_TYPE:            _direct_type,
    AtomType.PROPERTY_VALUE:         _property_value,
    AtomType.SAME_AS:                _same_as,
    AtomType.DIFFERENT_FROM:         _different_from,
    AtomType.SUB_CLASS_OF:           _sub_class_of,
    AtomType.STRICT_SUB_CLASS_OF:    _strict_sub_class_of,
    AtomType.DIRECT_SUB_CLASS_OF:    _direct_sub_class_of,
    AtomType.EQUIVALENT_CLASS:       _equivalent_class,
    AtomType.DISJOINT_WITH:          _disjoint_with,
    AtomType.COMPLEMENT_OF:          _complement_of,
    AtomType.SUB_PROPERTY_OF:        _sub_property_of,
    AtomType.STRICT_SUB_PROPERTY_OF: _strict_sub_property_of,
    AtomType.DIRECT_SUB_PROPERTY_OF: _direct_sub_property_of,
    AtomType.EQUIVALENT_PROPERTY:    _equivalent_property,
    AtomType.INVERSE_OF:             _inverse_of,
    AtomType.DOMAIN:                 _domain,
    AtomType.RANGE:                  _range,
    AtomType.FUNCTIONAL:             _functional,
    AtomType.INVERSE_FUNCTIONAL:     _object_characteristic(AxiomKind.INVERSE_FUNCTIONAL_OBJECT_PROPERTY),
    AtomType.TRANSITIVE:             _object_characteristic(AxiomKind.TRANSITIVE_OBJECT_PROPERTY),
    AtomType.SYMMETRIC:              _object_characteristic(AxiomKind.SYMMETRIC_OBJECT_PROPERTY),
    AtomType.REFLEXIVE:              _object_characteristic(AxiomKind.REFLEXIVE_OBJECT_PROPERTY),
    AtomType.IRREFLEXIVE:            _object_characteristic(AxiomKind.IRREFLEXIVE_OBJECT_PROPERTY),
    AtomType.ANNOTATION:             _annotation,
}


def check_bound(atom: Atom, signature: Signature) -> bool:
    """
    Czy uziemiony atom zachodzi w bazie wiedzy.

    Raises:
        EngineTypeError gdy typ atomu nie ma zarejestrowanego sprawdzenia.
    """
    check = CHECKS.get(atom.type)
    if check is None:
        raise EngineTypeError(
            f"Brak sprawdzenia dla typu atomu {atom.type!r}.",
            details={"atom": str(atom)},
        )
    return check(signature, tuple(to_term(a) for a in atom.args))
