"""
reasoner — interfejs reasonera DL, model ontologii i adapter strukturalny.

Publiczne API:
  Reasoner                    protokół (typing.Protocol) używany przez silnik
  Ontology                    deklaracje + aksjomaty jawne
  StructuralReasoner(onto)    reasoner oparty na domknięciu aksjomatów jawnych
  Signature(reasoner)         migawka sygnatury (klasy, adnotacje) dla silnika
  load_ontology(path)         → Ontology (JSON lub RDF po rozszerzeniu)
  load_ontology_json(path)    → Ontology
  load_ontology_rdf(path)     → Ontology (rdflib)
  ontology_from_dict(data)    → Ontology
  LiteralValue, AnnotationAssertion, AxiomKind
"""

from .loader     import load_ontology, load_ontology_json, load_ontology_rdf, ontology_from_dict
from .ontology   import Ontology
from .protocol   import Reasoner
from .signature  import EntityKind, Signature
from .structural import StructuralReasoner
from .types      import AnnotationAssertion, AxiomKind, LiteralValue

__all__ = [
    "Reasoner",
    "Ontology",
    "Signature",
    "EntityKind",
    "StructuralReasoner",
    "load_ontology",
    "load_ontology_json",
    "load_ontology_rdf",
    "ontology_from_dict",
    "AnnotationAssertion",
    "AxiomKind",
    "LiteralValue",
]
