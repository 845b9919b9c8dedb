"""Tests for the query model.

Covers arguments, atoms, groups, bindings, queries and results.
"""

import pytest

from query_model import (
    Argument,
    ArgumentKind,
    Atom,
    AtomArityError,
    AtomGroup,
    AtomType,
    Binding,
    Query,
    QueryMode,
    QueryResult,
)

X = Argument.var("x")
Y = Argument.var("y")
PERSON = Argument.uri("urn:ex#Person")
ANNA = Argument.uri("urn:ex#anna")


class TestArgument:
    """Test the tagged argument union."""

    def test_var_strips_question_mark(self):
        """Leading '?' or '$' is not part of the variable name."""
        assert Argument.var("?x") == Argument.var("x") == Argument.var("$x")
        assert Argument.var("?x").value == "x"

    def test_bnode_strips_prefix(self):
        """'_:' prefix is dropped from blank node ids."""
        assert Argument.bnode("_:b0").value == "b0"
        assert Argument.bnode("_:b0").is_bnode

    def test_kind_predicates(self):
        """Exactly one kind predicate is true."""
        lit = Argument.literal("42", "urn:xsd#integer")
        assert lit.is_literal and not lit.is_uri and not lit.is_var
        assert PERSON.is_uri and not PERSON.is_literal
        assert X.kind is ArgumentKind.VAR

    def test_literal_equality_includes_datatype_and_lang(self):
        """Literals differing only in datatype or language are distinct."""
        assert Argument.literal("a") != Argument.literal("a", lang="en")
        assert Argument.literal("1", "urn:int") != Argument.literal("1", "urn:dec")
        assert Argument.literal("a", lang="en") == Argument.literal("a", lang="en")

    def test_empty_datatype_normalized(self):
        """Empty datatype and lang become None."""
        lit = Argument.literal("a", "", "")
        assert lit.datatype is None
        assert lit.lang is None

    def test_uri_and_literal_with_same_value_differ(self):
        """Kind takes part in equality."""
        assert Argument.uri("x") != Argument.literal("x")

    def test_str_rendering(self):
        """Arguments render in SPARQL-DL syntax."""
        assert str(X) == "?x"
        assert str(PERSON) == "<urn:ex#Person>"
        assert str(Argument.literal("Anna", lang="pl")) == '"Anna"@pl'
        assert str(Argument.literal("1", "urn:int")) == '"1"^^<urn:int>'
        assert str(Argument.literal('say "hi"')) == '"say \\"hi\\""'


class TestAtom:
    """Test atoms and atom types."""

    def test_arity_table(self):
        """Unary, binary and ternary atom types have fixed arity."""
        assert AtomType.CLASS.arity == 1
        assert AtomType.FUNCTIONAL.arity == 1
        assert AtomType.TYPE.arity == 2
        assert AtomType.INVERSE_OF.arity == 2
        assert AtomType.PROPERTY_VALUE.arity == 3
        assert AtomType.ANNOTATION.arity == 3

    def test_all_atom_types_present(self):
        """The closed set has 31 predicates."""
        assert len(AtomType) == 31

    def test_wrong_arity_rejected(self):
        """Constructing an atom with the wrong argument count fails."""
        with pytest.raises(AtomArityError):
            Atom.of(AtomType.TYPE, X)

    def test_from_syntax_case_insensitive(self):
        """Type names are matched ignoring case."""
        assert AtomType.from_syntax("subclassof") is AtomType.SUB_CLASS_OF
        assert AtomType.from_syntax(" PropertyValue ") is AtomType.PROPERTY_VALUE

    def test_from_syntax_unknown(self):
        """Unknown type name raises ValueError."""
        with pytest.raises(ValueError):
            AtomType.from_syntax("Subsumes")

    def test_is_bound(self):
        """Atoms without variables or blank nodes are bound."""
        assert Atom.of(AtomType.TYPE, ANNA, PERSON).is_bound
        assert not Atom.of(AtomType.TYPE, X, PERSON).is_bound
        assert not Atom.of(AtomType.TYPE, Argument.bnode("b"), PERSON).is_bound

    def test_variables_in_order_with_repeats(self):
        """variables keeps order of occurrence and repetitions."""
        atom = Atom.of(AtomType.PROPERTY_VALUE, X, Y, X)
        assert atom.variables == (X, Y, X)

    def test_substitute(self):
        """Substitution replaces bound variables and leaves others."""
        atom = Atom.of(AtomType.PROPERTY_VALUE, X, Y, Argument.var("z"))
        result = atom.substitute(Binding({X: ANNA}))
        assert result.args == (ANNA, Y, Argument.var("z"))

    def test_substitute_without_change_returns_same_atom(self):
        """Substitution with unrelated binding keeps the same object."""
        atom = Atom.of(AtomType.CLASS, X)
        assert atom.substitute(Binding({Y: PERSON})) is atom

    def test_str(self):
        """Atoms render as Type(arg, ...)."""
        assert str(Atom.of(AtomType.TYPE, X, PERSON)) == "Type(?x, <urn:ex#Person>)"


class TestAtomGroup:
    """Test atom groups."""

    def test_next_and_pop(self):
        """next_atom returns the head, pop the tail."""
        a = Atom.of(AtomType.CLASS, X)
        b = Atom.of(AtomType.INDIVIDUAL, Y)
        group = AtomGroup.of(a, b)
        assert group.next_atom() == a
        assert group.pop() == AtomGroup.of(b)
        assert group.pop().pop().is_empty()

    def test_next_atom_on_empty_group(self):
        """Empty group has no next atom."""
        with pytest.raises(IndexError):
            AtomGroup().next_atom()

    def test_substitute_applies_to_all_atoms(self):
        """Substitution reaches every atom in the group."""
        group = AtomGroup.of(
            Atom.of(AtomType.TYPE, X, PERSON),
            Atom.of(AtomType.SAME_AS, X, Y),
        )
        result = group.substitute(Binding({X: ANNA}))
        assert all(ANNA in atom.args for atom in result)

    def test_variables(self):
        """Group variables are the union over atoms."""
        group = AtomGroup.of(
            Atom.of(AtomType.TYPE, X, PERSON),
            Atom.of(AtomType.SAME_AS, X, Y),
        )
        assert group.variables() == {X, Y}

    def test_list_converted_to_tuple(self):
        """Groups accept any sequence of atoms."""
        group = AtomGroup([Atom.of(AtomType.CLASS, X)])
        assert isinstance(group.atoms, tuple)


class TestBinding:
    """Test immutable bindings."""

    def test_get_unbound_returns_none(self):
        """get on an unbound variable returns None."""
        assert Binding().get(X) is None
        assert Binding({X: ANNA}).get(Y) is None

    def test_is_bound_matches_membership(self):
        """is_bound is exactly key membership."""
        b = Binding({X: ANNA})
        assert b.is_bound(X)
        assert not b.is_bound(Y)
        assert b.bound_args() == {X}

    def test_extend_is_copy_on_write(self):
        """extend returns a new binding and leaves the original untouched."""
        base = Binding({X: ANNA})
        extended = base.extend(Y, PERSON)
        assert base.size() == 1
        assert extended.size() == 2
        assert extended[Y] == PERSON

    def test_extend_overrides(self):
        """extend replaces an existing value."""
        b = Binding({X: ANNA}).extend(X, PERSON)
        assert b[X] == PERSON

    def test_non_variable_key_rejected(self):
        """Only variables can be keys."""
        with pytest.raises(TypeError):
            Binding({PERSON: ANNA})
        with pytest.raises(TypeError):
            Binding().extend(PERSON, ANNA)

    def test_merge(self):
        """merge unions two bindings; right side wins on collision."""
        left = Binding({X: ANNA})
        right = Binding({Y: PERSON})
        assert left.merge(right) == Binding({X: ANNA, Y: PERSON})
        assert left.merge(Binding({X: PERSON}))[X] == PERSON
        assert left.merge(Binding()) is left

    def test_project(self):
        """project keeps only the listed variables."""
        b = Binding({X: ANNA, Y: PERSON})
        assert b.project([X]) == Binding({X: ANNA})
        assert b.project([]).is_empty()

    def test_structural_equality_and_hash(self):
        """Equal maps give equal bindings with equal hashes."""
        a = Binding({X: ANNA, Y: PERSON})
        b = Binding({Y: PERSON}).extend(X, ANNA)
        assert a == b
        assert hash(a) == hash(b)
        assert len({a, b}) == 1

    def test_mapping_interface(self):
        """Binding behaves like a read-only mapping."""
        b = Binding({X: ANNA})
        assert dict(b) == {X: ANNA}
        assert len(b) == 1
        assert X in b


class TestQuery:
    """Test queries."""

    def test_ask(self):
        """ASK query has no result variables."""
        q = Query.ask(AtomGroup())
        assert q.is_ask
        assert not q.is_select
        assert q.result_vars == frozenset()

    def test_select_distinct(self):
        """distinct flag selects SELECT_DISTINCT mode."""
        q = Query.select([X], AtomGroup(), distinct=True)
        assert q.mode is QueryMode.SELECT_DISTINCT
        assert q.is_select and q.is_distinct

    def test_non_variable_result_args_dropped(self):
        """Result variables keep only VAR arguments."""
        q = Query(QueryMode.SELECT, frozenset({X, PERSON}), ())
        assert q.result_vars == {X}

    def test_str(self):
        """Query renders with head and groups."""
        q = Query.select([X], AtomGroup.of(Atom.of(AtomType.CLASS, X)))
        assert str(q) == "SELECT ?x WHERE { Class(?x) }"


class TestQueryResult:
    """Test query results."""

    def test_defaults(self):
        """New result is true and empty."""
        r = QueryResult()
        assert r.ask is True
        assert r.is_empty()
        assert r.size() == 0

    def test_add_sets_ask(self):
        """Adding a binding makes ask true."""
        r = QueryResult(ask=False)
        r.add(Binding({X: ANNA}))
        assert r.ask is True
        assert r.get(0) == Binding({X: ANNA})
        assert list(r) == [Binding({X: ANNA})]

    def test_to_dict(self):
        """JSON form maps variable names to rendered values."""
        r = QueryResult(bindings=[Binding({X: ANNA})])
        assert r.to_dict() == {"ask": True, "bindings": [{"x": "<urn:ex#anna>"}]}
