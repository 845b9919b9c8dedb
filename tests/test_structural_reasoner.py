"""Tests for the structural reasoner over told axioms."""

import pytest

from conftest import ex
from reasoner import AxiomKind, LiteralValue, Ontology, Reasoner, StructuralReasoner
from reasoner.vocabulary import (
    OWL_NOTHING,
    OWL_THING,
    OWL_TOP_DATA_PROPERTY,
    OWL_TOP_OBJECT_PROPERTY,
    RDFS_LITERAL,
    XSD_NS,
)


def names(*local: str) -> frozenset[str]:
    return frozenset(ex(n) for n in local)


class TestProtocol:
    """Test protocol conformance."""

    def test_is_reasoner(self, reasoner):
        """StructuralReasoner satisfies the runtime-checkable protocol."""
        assert isinstance(reasoner, Reasoner)

    def test_signature_listings(self, reasoner):
        """Signature listings mirror the declarations."""
        assert len(reasoner.classes()) == 10
        assert len(reasoner.individuals()) == 7
        assert reasoner.is_declared_data_property(ex("age"))
        assert not reasoner.is_declared_object_property(ex("age"))
        assert reasoner.is_declared_datatype(XSD_NS + "integer")


class TestClassHierarchy:
    """Test class subsumption and related lookups."""

    def test_subsumption_closure(self, reasoner):
        """Subsumption is reflexive and transitive."""
        assert reasoner.is_subclass(ex("Mother"), ex("Mother"))
        assert reasoner.is_subclass(ex("Mother"), ex("Person"))
        assert reasoner.is_subclass(ex("Mother"), ex("Human"))
        assert not reasoner.is_subclass(ex("Person"), ex("Mother"))

    def test_top_and_bottom(self, reasoner):
        """Everything is under owl:Thing and over owl:Nothing."""
        assert reasoner.is_subclass(ex("Animal"), OWL_THING)
        assert reasoner.is_subclass(OWL_NOTHING, ex("Animal"))

    def test_sub_classes_exclude_equivalents(self, reasoner):
        """sub_classes omits the class and its equivalents."""
        subs = reasoner.sub_classes(ex("Person"))
        assert ex("Human") not in subs
        assert ex("Person") not in subs
        assert {ex("Mother"), OWL_NOTHING} <= subs

    def test_direct_sub_classes(self, reasoner):
        """Direct subclasses are the maximal strict subclasses."""
        assert reasoner.sub_classes(ex("Person"), direct=True) == names(
            "Parent", "Woman", "Man", "Child",
        )

    def test_direct_super_classes(self, reasoner):
        """Direct superclasses include both members of an equivalence."""
        assert reasoner.super_classes(ex("Parent"), direct=True) == names("Person", "Human")

    def test_equivalent_classes(self, reasoner):
        """Equivalence is symmetric and includes the class itself."""
        assert reasoner.equivalent_classes(ex("Human")) == names("Person", "Human")
        assert reasoner.equivalent_classes(ex("Mother")) == names("Mother")

    def test_unsatisfiable_class(self):
        """A class under owl:Nothing is equivalent to it and disjoint with everything."""
        onto = Ontology(classes={"urn:A", "urn:B"}, subclass_of=[("urn:A", OWL_NOTHING)])
        r = StructuralReasoner(onto)
        assert OWL_NOTHING in r.equivalent_classes("urn:A")
        assert "urn:B" in r.disjoint_classes("urn:A")


class TestIndividuals:
    """Test types, instances and property values."""

    def test_types_from_domain_and_range(self, reasoner):
        """Property domains and ranges contribute types."""
        assert ex("Parent") in reasoner.types(ex("eve"))
        assert ex("Person") in reasoner.types(ex("dan"))

    def test_types_shared_by_same_individuals(self, reasoner):
        """Same individuals share their types."""
        assert reasoner.types(ex("robert")) == reasoner.types(ex("bob"))

    def test_direct_instances(self, reasoner):
        """Direct instances exclude members of subclasses."""
        assert reasoner.instances(ex("Parent"), direct=True) == names("eve")
        assert ex("anna") in reasoner.instances(ex("Parent"))

    def test_object_values_with_inverse(self, reasoner):
        """Inverse assertions are followed."""
        assert reasoner.object_property_values(ex("anna"), ex("hasParent")) == names("eve")

    def test_data_values(self, reasoner):
        """Data values include sub-property values."""
        assert reasoner.data_property_values(ex("carol"), ex("name")) == {LiteralValue("Carol")}
        assert reasoner.data_property_values(ex("robert"), ex("age")) == {
            LiteralValue("45", XSD_NS + "integer"),
        }

    def test_reflexive_values(self):
        """A reflexive property relates an individual to itself."""
        onto = Ontology(
            individuals={"urn:a"},
            object_properties={"urn:knows"},
            reflexive={"urn:knows"},
        )
        r = StructuralReasoner(onto)
        assert r.object_property_values("urn:a", "urn:knows") == {"urn:a"}

    def test_refresh_rebuilds_indexes(self, family_ontology, reasoner):
        """refresh picks up new axioms."""
        assert not reasoner.is_subclass(ex("Child"), ex("Woman"))
        family_ontology.subclass_of.append((ex("Child"), ex("Woman")))
        reasoner.refresh()
        assert reasoner.is_subclass(ex("Child"), ex("Woman"))


class TestProperties:
    """Test property hierarchies, inverses and characteristics."""

    def test_sub_object_properties(self, reasoner):
        assert reasoner.sub_object_properties(ex("hasChild")) == names("hasSon")
        assert reasoner.super_object_properties(ex("hasSon")) == names("hasChild") | {OWL_TOP_OBJECT_PROPERTY}
        assert reasoner.super_object_properties(ex("hasSon"), direct=True) == names("hasChild")

    def test_top_properties(self, reasoner):
        """Every property lies under the top property of its kind."""
        assert reasoner.sub_object_properties(OWL_TOP_OBJECT_PROPERTY) == reasoner.object_properties()
        assert reasoner.sub_data_properties(OWL_TOP_DATA_PROPERTY, direct=True) == names("age", "name")
        assert not reasoner.is_sub_object_property(OWL_TOP_OBJECT_PROPERTY, ex("hasChild"))

    def test_inverse_of_symmetric(self, reasoner):
        """A symmetric property is its own inverse."""
        assert ex("hasSibling") in reasoner.inverse_object_properties(ex("hasSibling"))

    def test_domains_through_inverse(self, reasoner):
        """Range of the inverse becomes a domain."""
        assert ex("Person") in reasoner.object_property_domains(ex("hasParent"))
        assert reasoner.object_property_domains(ex("hasChild"), direct=True) == names("Parent")

    @pytest.mark.parametrize(("kind", "terms", "expected"), [
        (AxiomKind.CLASS_ASSERTION, (ex("anna"), ex("Woman")), True),
        (AxiomKind.OBJECT_PROPERTY_ASSERTION, (ex("carol"), ex("hasAncestor"), ex("eve")), True),
        (AxiomKind.DATA_PROPERTY_ASSERTION, (ex("anna"), ex("age"), LiteralValue("42", XSD_NS + "integer")), True),
        (AxiomKind.EQUIVALENT_CLASSES, (ex("Person"), ex("Human")), True),
        (AxiomKind.DISJOINT_CLASSES, (ex("Father"), ex("Mother")), True),
        (AxiomKind.SAME_INDIVIDUAL, (ex("robert"), ex("bob")), True),
        (AxiomKind.DIFFERENT_INDIVIDUALS, (ex("carol"), ex("dan")), False),
        (AxiomKind.SUB_DATA_PROPERTY_OF, (ex("firstName"), ex("name")), True),
        (AxiomKind.INVERSE_OBJECT_PROPERTIES, (ex("hasParent"), ex("hasChild")), True),
        (AxiomKind.DATA_PROPERTY_DOMAIN, (ex("age"), ex("Human")), True),
        (AxiomKind.DATA_PROPERTY_RANGE, (ex("age"), RDFS_LITERAL), True),
        (AxiomKind.DATA_PROPERTY_RANGE, (ex("age"), XSD_NS + "string"), False),
        (AxiomKind.FUNCTIONAL_OBJECT_PROPERTY, (ex("hasChild"),), False),
        (AxiomKind.SYMMETRIC_OBJECT_PROPERTY, (ex("hasSibling"),), True),
        (AxiomKind.TRANSITIVE_OBJECT_PROPERTY, (ex("hasParent"),), False),
        (AxiomKind.IRREFLEXIVE_OBJECT_PROPERTY, (ex("hasSon"),), True),
    ])
    def test_entailment(self, reasoner, kind, terms, expected):
        """is_entailed answers each axiom kind."""
        assert reasoner.is_entailed(kind, *terms) is expected

    def test_inverse_functional_from_functional_inverse(self):
        """Inverse of a functional property is inverse functional."""
        onto = Ontology(
            object_properties={"urn:p", "urn:q"},
            inverse_properties=[("urn:p", "urn:q")],
            functional_object_properties={"urn:q"},
        )
        r = StructuralReasoner(onto)
        assert r.is_entailed(AxiomKind.INVERSE_FUNCTIONAL_OBJECT_PROPERTY, "urn:p")


class TestAnnotations:
    """Test ontology-level annotation facts."""

    def test_annotation_assertions(self, reasoner):
        assert len(reasoner.annotation_assertions()) == 4

    def test_annotation_domain_and_range(self, reasoner):
        assert reasoner.annotation_property_domains(ex("note")) == names("Person")
        assert reasoner.annotation_property_ranges(ex("note")) == {XSD_NS + "string"}
        assert reasoner.annotation_property_domains(ex("other")) == frozenset()
