"""
reasoner/types.py — wartości przekazywane między silnikiem a reasonerem.

LiteralValue        — literał (forma leksykalna, typ danych, język)
AnnotationAssertion — fakt adnotacyjny ontologii: podmiot, właściwość, wartość
AxiomKind           — rodzaje aksjomatów, o których wynikanie pyta silnik
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum


@dataclass(frozen=True, slots=True)
class LiteralValue:
    lexical:  str
    datatype: str | None = None
    lang:     str | None = None


type AnnotationValue = str | LiteralValue


@dataclass(frozen=True, slots=True)
class AnnotationAssertion:
    """
    Asercja adnotacyjna: subject (IRI encji), property (IRI właściwości
    adnotacyjnej), value (IRI jako str albo LiteralValue).
    """
    subject:  str
    property: str
    value:    AnnotationValue


class AxiomKind(StrEnum):
    """
    Rodzaj aksjomatu dla Reasoner.is_entailed(kind, *terms).

    Kolejność terminów w nawiasach.
    """

    CLASS_ASSERTION                    = "ClassAssertion"                   # (individual, class)
    OBJECT_PROPERTY_ASSERTION          = "ObjectPropertyAssertion"          # (subject, property, object)
    DATA_PROPERTY_ASSERTION            = "DataPropertyAssertion"            # (subject, property, LiteralValue)
    SUB_CLASS_OF                       = "SubClassOf"                       # (sub, super)
    EQUIVALENT_CLASSES                 = "EquivalentClasses"                # (a, b)
    DISJOINT_CLASSES                   = "DisjointClasses"                  # (a, b)
    SAME_INDIVIDUAL                    = "SameIndividual"                   # (a, b)
    DIFFERENT_INDIVIDUALS              = "DifferentIndividuals"             # (a, b)
    SUB_OBJECT_PROPERTY_OF             = "SubObjectPropertyOf"              # (sub, super)
    SUB_DATA_PROPERTY_OF               = "SubDataPropertyOf"                # (sub, super)
    EQUIVALENT_OBJECT_PROPERTIES       = "EquivalentObjectProperties"       # (p, q)
    EQUIVALENT_DATA_PROPERTIES         = "EquivalentDataProperties"         # (p, q)
    INVERSE_OBJECT_PROPERTIES          = "InverseObjectProperties"          # (p, q)
    OBJECT_PROPERTY_DOMAIN             = "ObjectPropertyDomain"             # (property, class)
    OBJECT_PROPERTY_RANGE              = "ObjectPropertyRange"              # (property, class)
    DATA_PROPERTY_DOMAIN               = "DataPropertyDomain"               # (property, class)
    DATA_PROPERTY_RANGE                = "DataPropertyRange"                # (property, datatype)
    FUNCTIONAL_OBJECT_PROPERTY         = "FunctionalObjectProperty"         # (property,)
    FUNCTIONAL_DATA_PROPERTY           = "FunctionalDataProperty"           # (property,)
    INVERSE_FUNCTIONAL_OBJECT_PROPERTY = "InverseFunctionalObjectProperty"  # (property,)
    TRANSITIVE_OBJECT_PROPERTY         = "TransitiveObjectProperty"         # (property,)
    SYMMETRIC_OBJECT_PROPERTY          = "SymmetricObjectProperty"          # (property,)
    REFLEXIVE_OBJECT_PROPERTY          = "ReflexiveObjectProperty"          # (property,)
    IRREFLEXIVE_OBJECT_PROPERTY        = "IrreflexiveObjectProperty"        # (property,)
