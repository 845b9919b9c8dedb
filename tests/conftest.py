"""Shared test fixtures for the SPARQL-DL engine test suite."""

from pathlib import Path

import pytest

from query_model import Argument, AtomGroup, Query
from reasoner import AnnotationAssertion, LiteralValue, Ontology, Signature, StructuralReasoner
from reasoner.vocabulary import RDFS_NS, XSD_NS
from solver import EngineConfig, QueryEngine, parse_atom

EX = "http://example.org/family#"
PREFIXES = {"ex": EX}
DATA_DIR = Path(__file__).parent / "data"


def ex(name: str) -> str:
    return EX + name


# ============================================================================
# Ontology Fixtures
# ============================================================================

def build_family_ontology() -> Ontology:
    """Small family ontology covering every axiom family the engine queries."""
    onto = Ontology(iri="http://example.org/family")

    onto.classes |= {ex(c) for c in (
        "Person", "Human", "Parent", "Mother", "Father",
        "Woman", "Man", "Child", "Animal", "NonPerson",
    )}
    onto.individuals |= {ex(i) for i in ("anna", "bob", "robert", "carol", "dan", "eve", "rex")}
    onto.object_properties |= {ex(p) for p in (
        "hasChild", "hasSon", "hasParent", "hasAncestor", "hasSibling", "knows",
    )}
    onto.data_properties |= {ex(p) for p in ("age", "name", "firstName")}
    onto.annotation_properties |= {ex("note"), RDFS_NS + "label"}
    onto.datatypes.add(XSD_NS + "integer")

    # klasy
    onto.subclass_of += [
        (ex("Parent"), ex("Person")),
        (ex("Mother"), ex("Parent")),
        (ex("Mother"), ex("Woman")),
        (ex("Father"), ex("Parent")),
        (ex("Father"), ex("Man")),
        (ex("Woman"), ex("Person")),
        (ex("Man"), ex("Person")),
        (ex("Child"), ex("Person")),
    ]
    onto.equivalent_classes.append(frozenset({ex("Person"), ex("Human")}))
    onto.disjoint_classes.append(frozenset({ex("Person"), ex("Animal")}))
    onto.disjoint_classes.append(frozenset({ex("Man"), ex("Woman")}))
    onto.complement_of.append((ex("NonPerson"), ex("Person")))

    # osobniki
    onto.class_assertions += [
        (ex("anna"), ex("Mother")),
        (ex("bob"), ex("Father")),
        (ex("carol"), ex("Child")),
        (ex("dan"), ex("Child")),
        (ex("rex"), ex("Animal")),
    ]
    onto.object_assertions += [
        (ex("anna"), ex("hasChild"), ex("carol")),
        (ex("bob"), ex("hasChild"), ex("carol")),
        (ex("anna"), ex("hasSon"), ex("dan")),
        (ex("eve"), ex("hasChild"), ex("anna")),
        (ex("carol"), ex("hasSibling"), ex("dan")),
    ]
    onto.data_assertions += [
        (ex("anna"), ex("age"), LiteralValue("42", XSD_NS + "integer")),
        (ex("bob"), ex("age"), LiteralValue("45", XSD_NS + "integer")),
        (ex("carol"), ex("firstName"), LiteralValue("Carol")),
    ]
    onto.same_individuals.append(frozenset({ex("bob"), ex("robert")}))
    onto.different_individuals.append(frozenset({ex("anna"), ex("bob")}))

    # właściwości
    onto.sub_object_properties += [
        (ex("hasSon"), ex("hasChild")),
        (ex("hasParent"), ex("hasAncestor")),
    ]
    onto.sub_data_properties.append((ex("firstName"), ex("name")))
    onto.inverse_properties.append((ex("hasChild"), ex("hasParent")))
    onto.object_property_domains.append((ex("hasChild"), ex("Parent")))
    onto.object_property_ranges.append((ex("hasChild"), ex("Person")))
    onto.data_property_domains.append((ex("age"), ex("Person")))
    onto.data_property_ranges.append((ex("age"), XSD_NS + "integer"))
    onto.annotation_property_domains.append((ex("note"), ex("Person")))
    onto.annotation_property_ranges.append((ex("note"), XSD_NS + "string"))

    onto.functional_data_properties.add(ex("age"))
    onto.transitive.add(ex("hasAncestor"))
    onto.symmetric.add(ex("hasSibling"))
    onto.irreflexive.add(ex("hasChild"))

    # adnotacje
    onto.annotations += [
        AnnotationAssertion(ex("anna"), RDFS_NS + "label", LiteralValue("Anna", lang="pl")),
        AnnotationAssertion(ex("bob"), RDFS_NS + "label", LiteralValue("Bob", lang="en")),
        AnnotationAssertion(ex("Person"), ex("note"), LiteralValue("A human being")),
        AnnotationAssertion(ex("carol"), RDFS_NS + "seeAlso", ex("dan")),
    ]
    return onto


@pytest.fixture
def family_ontology():
    """Programmatically built family ontology."""
    return build_family_ontology()


@pytest.fixture
def reasoner(family_ontology):
    """Structural reasoner over the family ontology."""
    return StructuralReasoner(family_ontology)


@pytest.fixture
def signature(reasoner):
    """Signature snapshot of the family ontology."""
    return Signature(reasoner)


# ============================================================================
# Engine Fixtures
# ============================================================================

@pytest.fixture
def engine(reasoner):
    """Non-strict engine with argument checking on."""
    return QueryEngine(reasoner)


@pytest.fixture
def strict_engine(reasoner):
    """Strict engine: argument errors abort evaluation."""
    return QueryEngine(reasoner, EngineConfig(strict=True))


def make_query(*atoms: str, select: tuple[str, ...] = (), distinct: bool = False) -> Query:
    """ASK query when select is empty, SELECT over the given variables otherwise."""
    group = AtomGroup(tuple(parse_atom(a, PREFIXES) for a in atoms))
    if not select:
        return Query.ask(group)
    return Query.select([Argument.var(v) for v in select], group, distinct=distinct)


@pytest.fixture
def ask(engine):
    """Run an ASK query given as atom strings; returns the boolean answer."""
    def run(*atoms: str) -> bool:
        return engine.execute(make_query(*atoms)).ask
    return run


@pytest.fixture
def select(engine):
    """Run a SELECT query; returns the set of values bound to the single variable."""
    def run(var: str, *atoms: str) -> set[str]:
        result = engine.execute(make_query(*atoms, select=(var,)))
        return {b[Argument.var(var)].value for b in result}
    return run


# ============================================================================
# File Fixtures
# ============================================================================

@pytest.fixture
def family_json_path():
    return DATA_DIR / "family.json"


@pytest.fixture
def family_ttl_path():
    return DATA_DIR / "family.ttl"


@pytest.fixture
def query_json_path():
    return DATA_DIR / "query_mothers.json"
