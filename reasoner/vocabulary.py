"""
reasoner/vocabulary.py — stałe IRI słowników OWL / RDFS / XSD.
"""

from __future__ import annotations

OWL_NS  = "http://www.w3.org/2002/07/owl#"
RDF_NS  = "http://www.w3.org/1999/02/22-rdf-syntax-ns#"
RDFS_NS = "http://www.w3.org/2000/01/rdf-schema#"
XSD_NS  = "http://www.w3.org/2001/XMLSchema#"

OWL_THING   = OWL_NS + "Thing"
OWL_NOTHING = OWL_NS + "Nothing"

RDFS_LITERAL = RDFS_NS + "Literal"

# Wbudowane właściwości adnotacyjne (wchodzą do sygnatury, gdy są użyte)
BUILTIN_ANNOTATION_PROPERTIES: frozenset[str] = frozenset({
    RDFS_NS + "label",
    RDFS_NS + "comment",
    RDFS_NS + "seeAlso",
    RDFS_NS + "isDefinedBy",
    OWL_NS + "versionInfo",
    OWL_NS + "deprecated",
    OWL_NS + "priorVersion",
    OWL_NS + "backwardCompatibleWith",
    OWL_NS + "incompatibleWith",
})

# Domyślne prefiksy rozwijane przez loader JSON
DEFAULT_PREFIXES: dict[str, str] = {
    "owl":  OWL_NS,
    "rdf":  RDF_NS,
    "rdfs": RDFS_NS,
    "xsd":  XSD_NS,
}

OWL_TOP_OBJECT_PROPERTY = OWL_NS + "topObjectProperty"
OWL_TOP_DATA_PROPERTY   = OWL_NS + "topDataProperty"

BUILTIN_OBJECT_PROPERTIES: frozenset[str] = frozenset({
    OWL_TOP_OBJECT_PROPERTY, OWL_NS + "bottomObjectProperty",
})
BUILTIN_DATA_PROPERTIES: frozenset[str] = frozenset({
    OWL_TOP_DATA_PROPERTY, OWL_NS + "bottomDataProperty",
})


def is_builtin_datatype(iri: str) -> bool:
    """Typy XSD, rdfs:Literal, rdf:PlainLiteral, rdf:langString."""
    return (
        iri.startswith(XSD_NS)
        or iri == RDFS_LITERAL
        or iri in (RDF_NS + "PlainLiteral", RDF_NS + "langString", RDF_NS + "XMLLiteral")
    )


def expand_iri(term: str, prefixes: dict[str, str]) -> str:
    """Rozwija 'ex:Foo' do pełnego IRI; '<...>' zdejmuje nawiasy, inne IRI bez zmian."""
    term = term.strip()
    if term.startswith("<") and term.endswith(">"):
        return term[1:-1]
    prefix, sep, local = term.partition(":")
    if sep and prefix in prefixes and not local.startswith("//"):
        return prefixes[prefix] + local
    return term
