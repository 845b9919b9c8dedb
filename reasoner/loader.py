"""
reasoner/loader.py — wczytywanie ontologii z JSON i z RDF (rdflib).

Publiczne API:
  load_ontology_json(path)                -> Ontology
  ontology_from_dict(data)                -> Ontology
  load_ontology_rdf(path, format=None)    -> Ontology
  load_ontology(path)                     -> Ontology  (po rozszerzeniu pliku)
"""

from __future__ import annotations

import json
import pathlib
from typing import Any

from rdflib import BNode, Graph, Literal, OWL, RDF, RDFS, URIRef
from rdflib.collection import Collection
from rdflib.util import guess_format

from .ontology import Ontology
from .types import AnnotationAssertion, LiteralValue
from .vocabulary import (
    BUILTIN_ANNOTATION_PROPERTIES,
    DEFAULT_PREFIXES,
    OWL_NOTHING,
    OWL_NS,
    OWL_THING,
    RDF_NS,
    RDFS_NS,
    XSD_NS,
    expand_iri,
)


# ---------------------------------------------------------------------------
# JSON
# ---------------------------------------------------------------------------

_DECLARATION_KEYS = (
    "classes",
    "individuals",
    "object_properties",
    "data_properties",
    "annotation_properties",
    "datatypes",
)

# typ aksjomatu JSON → (arność, None = lista dowolnej długości ≥ 2)
_AXIOM_ARITY: dict[str, int | None] = {
    "SubClassOf":                      2,
    "EquivalentClasses":               None,
    "DisjointClasses":                 None,
    "ComplementOf":                    2,
    "ClassAssertion":                  2,
    "ObjectPropertyAssertion":         3,
    "DataPropertyAssertion":           3,
    "SameIndividual":                  None,
    "DifferentIndividuals":            None,
    "SubObjectPropertyOf":             2,
    "SubDataPropertyOf":               2,
    "EquivalentObjectProperties":      None,
    "EquivalentDataProperties":        None,
    "InverseObjectProperties":         2,
    "ObjectPropertyDomain":            2,
    "ObjectPropertyRange":             2,
    "DataPropertyDomain":              2,
    "DataPropertyRange":               2,
    "AnnotationPropertyDomain":        2,
    "AnnotationPropertyRange":         2,
    "FunctionalObjectProperty":        1,
    "FunctionalDataProperty":          1,
    "InverseFunctionalObjectProperty": 1,
    "TransitiveObjectProperty":        1,
    "SymmetricObjectProperty":         1,
    "ReflexiveObjectProperty":         1,
    "IrreflexiveObjectProperty":       1,
    "AnnotationAssertion":             3,
}


def load_ontology_json(path: pathlib.Path) -> Ontology:
    """
    Wczytuje ontologię z pliku JSON.

    Oczekiwany format::

        {
            "iri": "urn:family",
            "prefixes": {"ex": "urn:family#"},
            "classes":           ["ex:Person", "ex:Parent"],
            "individuals":       ["ex:anna"],
            "object_properties": ["ex:hasChild"],
            "data_properties":   ["ex:age"],
            "axioms": [
                {"type": "SubClassOf",     "args": ["ex:Parent", "ex:Person"]},
                {"type": "ClassAssertion", "args": ["ex:anna", "ex:Parent"]},
                {"type": "DataPropertyAssertion",
                 "args": ["ex:anna", "ex:age", {"value": "42", "datatype": "xsd:integer"}]}
            ]
        }

    Raises:
        ValueError przy niepoprawnej strukturze pliku.
    """
    try:
        raw = json.loads(pathlib.Path(path).read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise ValueError(f"Niepoprawny JSON ontologii ({path}): {e}") from e
    return ontology_from_dict(raw)


def ontology_from_dict(data: dict[str, Any]) -> Ontology:
    if not isinstance(data, dict):
        raise ValueError("Ontologia JSON musi być obiektem.")

    prefixes = dict(DEFAULT_PREFIXES)
    prefixes.update(data.get("prefixes") or {})

    def iri(term: Any) -> str:
        return expand_iri(str(term), prefixes)

    onto = Ontology(iri=data.get("iri"))
    for key in _DECLARATION_KEYS:
        values = data.get(key) or []
        if not isinstance(values, list):
            raise ValueError(f"Pole '{key}' musi być listą IRI.")
        getattr(onto, key).update(iri(v) for v in values)

    for index, axiom in enumerate(data.get("axioms") or []):
        if not isinstance(axiom, dict) or "type" not in axiom:
            raise ValueError(f"axioms[{index}]: brak pola 'type'.")
        kind = str(axiom["type"])
        if kind not in _AXIOM_ARITY:
            raise ValueError(f"axioms[{index}]: nieznany typ aksjomatu '{kind}'.")
        args  = list(axiom.get("args") or [])
        arity = _AXIOM_ARITY[kind]
        if arity is None and len(args) < 2:
            raise ValueError(f"axioms[{index}]: {kind} wymaga co najmniej 2 argumentów.")
        if arity is not None and len(args) != arity:
            raise ValueError(
                f"axioms[{index}]: {kind} wymaga {arity} arg(s), podano {len(args)}."
            )
        _add_json_axiom(onto, kind, args, iri, prefixes)

    return onto


def _literal_from_json(value: Any, prefixes: dict[str, str]) -> LiteralValue:
    if isinstance(value, dict):
        if "value" not in value:
            raise ValueError(f"Literał bez pola 'value': {value}")
        datatype = value.get("datatype")
        return LiteralValue(
            lexical=str(value["value"]),
            datatype=expand_iri(datatype, prefixes) if datatype else None,
            lang=value.get("lang") or None,
        )
    if isinstance(value, bool):
        return LiteralValue("true" if value else "false", DEFAULT_PREFIXES["xsd"] + "boolean")
    if isinstance(value, int):
        return LiteralValue(str(value), DEFAULT_PREFIXES["xsd"] + "integer")
    if isinstance(value, float):
        return LiteralValue(str(value), DEFAULT_PREFIXES["xsd"] + "double")
    return LiteralValue(str(value))


def _add_json_axiom(onto: Ontology, kind: str, args: list, iri, prefixes: dict[str, str]) -> None:
    match kind:
        case "SubClassOf":
            onto.subclass_of.append((iri(args[0]), iri(args[1])))
        case "EquivalentClasses":
            onto.equivalent_classes.append(frozenset(iri(a) for a in args))
        case "DisjointClasses":
            onto.disjoint_classes.append(frozenset(iri(a) for a in args))
        case "ComplementOf":
            onto.complement_of.append((iri(args[0]), iri(args[1])))
        case "ClassAssertion":
            onto.class_assertions.append((iri(args[0]), iri(args[1])))
        case "ObjectPropertyAssertion":
            onto.object_assertions.append((iri(args[0]), iri(args[1]), iri(args[2])))
        case "DataPropertyAssertion":
            onto.data_assertions.append(
                (iri(args[0]), iri(args[1]), _literal_from_json(args[2], prefixes))
            )
        case "SameIndividual":
            onto.same_individuals.append(frozenset(iri(a) for a in args))
        case "DifferentIndividuals":
            onto.different_individuals.append(frozenset(iri(a) for a in args))
        case "SubObjectPropertyOf":
            onto.sub_object_properties.append((iri(args[0]), iri(args[1])))
        case "SubDataPropertyOf":
            onto.sub_data_properties.append((iri(args[0]), iri(args[1])))
        case "EquivalentObjectProperties":
            onto.equivalent_object_properties.append(frozenset(iri(a) for a in args))
        case "EquivalentDataProperties":
            onto.equivalent_data_properties.append(frozenset(iri(a) for a in args))
        case "InverseObjectProperties":
            onto.inverse_properties.append((iri(args[0]), iri(args[1])))
        case "ObjectPropertyDomain":
            onto.object_property_domains.append((iri(args[0]), iri(args[1])))
        case "ObjectPropertyRange":
            onto.object_property_ranges.append((iri(args[0]), iri(args[1])))
        case "DataPropertyDomain":
            onto.data_property_domains.append((iri(args[0]), iri(args[1])))
        case "DataPropertyRange":
            onto.data_property_ranges.append((iri(args[0]), iri(args[1])))
            onto.datatypes.add(iri(args[1]))
        case "AnnotationPropertyDomain":
            onto.annotation_property_domains.append((iri(args[0]), iri(args[1])))
        case "AnnotationPropertyRange":
            onto.annotation_property_ranges.append((iri(args[0]), iri(args[1])))
        case "FunctionalObjectProperty":
            onto.functional_object_properties.add(iri(args[0]))
        case "FunctionalDataProperty":
            onto.functional_data_properties.add(iri(args[0]))
        case "InverseFunctionalObjectProperty":
            onto.inverse_functional.add(iri(args[0]))
        case "TransitiveObjectProperty":
            onto.transitive.add(iri(args[0]))
        case "SymmetricObjectProperty":
            onto.symmetric.add(iri(args[0]))
        case "ReflexiveObjectProperty":
            onto.reflexive.add(iri(args[0]))
        case "IrreflexiveObjectProperty":
            onto.irreflexive.add(iri(args[0]))
        case "AnnotationAssertion":
            value = args[2]
            if isinstance(value, str) and not (value.startswith("<") or ":" in value):
                ann_value: str | LiteralValue = LiteralValue(value)
            elif isinstance(value, str):
                ann_value = iri(value)
            else:
                ann_value = _literal_from_json(value, prefixes)
            prop = iri(args[1])
            if prop in BUILTIN_ANNOTATION_PROPERTIES:
                onto.annotation_properties.add(prop)
            onto.annotations.append(AnnotationAssertion(iri(args[0]), prop, ann_value))


# ---------------------------------------------------------------------------
# RDF / OWL (rdflib)
# ---------------------------------------------------------------------------

_CHARACTERISTICS = {
    OWL.TransitiveProperty:         "transitive",
    OWL.SymmetricProperty:          "symmetric",
    OWL.ReflexiveProperty:          "reflexive",
    OWL.IrreflexiveProperty:        "irreflexive",
    OWL.InverseFunctionalProperty:  "inverse_functional",
}

_VOCABULARY_NAMESPACES = (OWL_NS, RDF_NS, RDFS_NS, XSD_NS)


def _literal_from_rdf(lit: Literal) -> LiteralValue:
    return LiteralValue(
        lexical=str(lit),
        datatype=str(lit.datatype) if lit.datatype else None,
        lang=lit.language or None,
    )


def _named_members(graph: Graph, head) -> list[str]:
    return [str(m) for m in Collection(graph, head) if isinstance(m, URIRef)]


def load_ontology_rdf(path: pathlib.Path, format: str | None = None) -> Ontology:
    """
    Wczytuje ontologię OWL 2 w serializacji RDF (Turtle, RDF/XML, N-Triples, ...).

    Mapowane są deklaracje encji oraz aksjomaty z nazwanymi klasami
    i właściwościami; wyrażenia anonimowe (restrykcje, unie) są pomijane.
    """
    graph = Graph()
    try:
        graph.parse(str(path), format=format or guess_format(str(path)) or "turtle")
    except Exception as e:
        raise ValueError(f"Nie można sparsować RDF ({path}): {e}") from e
    return ontology_from_graph(graph)


def ontology_from_graph(graph: Graph) -> Ontology:
    onto = Ontology()
    for s in graph.subjects(RDF.type, OWL.Ontology):
        if isinstance(s, URIRef):
            onto.iri = str(s)
            break

    def named(node) -> bool:
        return isinstance(node, URIRef)

    # -- deklaracje -----------------------------------------------------
    for cls_type in (OWL.Class, RDFS.Class):
        onto.classes.update(str(s) for s in graph.subjects(RDF.type, cls_type) if named(s))
    onto.individuals.update(str(s) for s in graph.subjects(RDF.type, OWL.NamedIndividual) if named(s))
    onto.object_properties.update(str(s) for s in graph.subjects(RDF.type, OWL.ObjectProperty) if named(s))
    onto.data_properties.update(str(s) for s in graph.subjects(RDF.type, OWL.DatatypeProperty) if named(s))
    onto.annotation_properties.update(str(s) for s in graph.subjects(RDF.type, OWL.AnnotationProperty) if named(s))
    onto.datatypes.update(str(s) for s in graph.subjects(RDF.type, RDFS.Datatype) if named(s))
    onto.classes.update(str(s) for s in graph.subjects(RDF.type, OWL.DeprecatedClass) if named(s))
    # charakterystyka bez odpowiednika w Ontology, ale deklaruje właściwość obiektową
    onto.object_properties.update(
        str(s) for s in graph.subjects(RDF.type, OWL.AsymmetricProperty) if named(s)
    )

    for char_type, attr in _CHARACTERISTICS.items():
        for s in graph.subjects(RDF.type, char_type):
            if named(s):
                onto.object_properties.add(str(s))
                getattr(onto, attr).add(str(s))
    for s in graph.subjects(RDF.type, OWL.FunctionalProperty):
        if not named(s):
            continue
        if str(s) in onto.data_properties:
            onto.functional_data_properties.add(str(s))
        else:
            onto.object_properties.add(str(s))
            onto.functional_object_properties.add(str(s))

    # -- aksjomaty klas -------------------------------------------------
    for s, o in graph.subject_objects(RDFS.subClassOf):
        if named(s) and named(o):
            onto.subclass_of.append((str(s), str(o)))
    for s, o in graph.subject_objects(OWL.equivalentClass):
        if named(s) and named(o):
            onto.equivalent_classes.append(frozenset({str(s), str(o)}))
    for s, o in graph.subject_objects(OWL.disjointWith):
        if named(s) and named(o):
            onto.disjoint_classes.append(frozenset({str(s), str(o)}))
    for s, o in graph.subject_objects(OWL.complementOf):
        if named(s) and named(o):
            onto.complement_of.append((str(s), str(o)))
    for node in graph.subjects(RDF.type, OWL.AllDisjointClasses):
        for head in graph.objects(node, OWL.members):
            onto.disjoint_classes.append(frozenset(_named_members(graph, head)))

    # -- osobniki -------------------------------------------------------
    # typy ze słowników OWL/RDF/RDFS (poza owl:Thing) nie są klasami użytkownika
    def vocabulary_type(node) -> bool:
        return str(node).startswith(_VOCABULARY_NAMESPACES) and str(node) != OWL_THING

    for s, o in graph.subject_objects(RDF.type):
        if named(s) and named(o) and not vocabulary_type(o):
            onto.individuals.add(str(s))
            if str(o) != OWL_THING:
                onto.classes.add(str(o))
            onto.class_assertions.append((str(s), str(o)))
    for s, o in graph.subject_objects(OWL.sameAs):
        if named(s) and named(o):
            onto.same_individuals.append(frozenset({str(s), str(o)}))
    for s, o in graph.subject_objects(OWL.differentFrom):
        if named(s) and named(o):
            onto.different_individuals.append(frozenset({str(s), str(o)}))
    for node in graph.subjects(RDF.type, OWL.AllDifferent):
        for list_prop in (OWL.members, OWL.distinctMembers):
            for head in graph.objects(node, list_prop):
                onto.different_individuals.append(frozenset(_named_members(graph, head)))

    # -- właściwości ----------------------------------------------------
    for s, o in graph.subject_objects(RDFS.subPropertyOf):
        if not (named(s) and named(o)):
            continue
        if str(s) in onto.data_properties:
            onto.sub_data_properties.append((str(s), str(o)))
        elif str(s) in onto.object_properties:
            onto.sub_object_properties.append((str(s), str(o)))
    for s, o in graph.subject_objects(OWL.equivalentProperty):
        if not (named(s) and named(o)):
            continue
        pair = frozenset({str(s), str(o)})
        if str(s) in onto.data_properties:
            onto.equivalent_data_properties.append(pair)
        else:
            onto.equivalent_object_properties.append(pair)
    for s, o in graph.subject_objects(OWL.inverseOf):
        if named(s) and named(o):
            onto.inverse_properties.append((str(s), str(o)))

    for s, o in graph.subject_objects(RDFS.domain):
        if not (named(s) and named(o)):
            continue
        p = str(s)
        if p in onto.object_properties:
            onto.object_property_domains.append((p, str(o)))
        elif p in onto.data_properties:
            onto.data_property_domains.append((p, str(o)))
        elif p in onto.annotation_properties:
            onto.annotation_property_domains.append((p, str(o)))
    for s, o in graph.subject_objects(RDFS.range):
        if not (named(s) and named(o)):
            continue
        p = str(s)
        if p in onto.object_properties:
            onto.object_property_ranges.append((p, str(o)))
        elif p in onto.data_properties:
            onto.data_property_ranges.append((p, str(o)))
            onto.datatypes.add(str(o))
        elif p in onto.annotation_properties:
            onto.annotation_property_ranges.append((p, str(o)))

    # -- asercje właściwości i adnotacje --------------------------------
    for s, p, o in graph:
        if not named(s) or not named(p):
            continue
        prop = str(p)
        if prop in onto.object_properties and named(o):
            onto.object_assertions.append((str(s), prop, str(o)))
        elif prop in onto.data_properties and isinstance(o, Literal):
            onto.data_assertions.append((str(s), prop, _literal_from_rdf(o)))
        elif prop in onto.annotation_properties or prop in BUILTIN_ANNOTATION_PROPERTIES:
            if isinstance(o, BNode):
                continue
            onto.annotation_properties.add(prop)
            value = _literal_from_rdf(o) if isinstance(o, Literal) else str(o)
            onto.annotations.append(AnnotationAssertion(str(s), prop, value))

    onto.classes.discard(OWL_THING)
    onto.classes.discard(OWL_NOTHING)
    return onto


def load_ontology(path: pathlib.Path) -> Ontology:
    """JSON dla *.json, w pozostałych przypadkach RDF (format zgadywany przez rdflib)."""
    path = pathlib.Path(path)
    if path.suffix.lower() == ".json":
        return load_ontology_json(path)
    return load_ontology_rdf(path)
