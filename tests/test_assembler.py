"""Tests for result assembly: products, unions and DISTINCT."""

from query_model import Argument, Binding, QueryResult
from solver import combine_results, eliminate_duplicates, union_results

X = Argument.var("x")
Y = Argument.var("y")
Z = Argument.var("z")


def uri(name: str) -> Argument:
    return Argument.uri(f"urn:ex#{name}")


def result(var: Argument, *names: str) -> QueryResult:
    return QueryResult(bindings=[Binding({var: uri(n)}) for n in names])


class TestEliminateDuplicates:
    """Test DISTINCT deduplication."""

    def test_keeps_first_occurrence_order(self):
        """Duplicates are removed, first occurrences keep their order."""
        r = result(X, "b", "a", "b", "c", "a")
        unique = eliminate_duplicates(r)
        assert [b[X].value for b in unique] == ["urn:ex#b", "urn:ex#a", "urn:ex#c"]

    def test_preserves_ask(self):
        """ask flag is carried over."""
        assert eliminate_duplicates(QueryResult(ask=False)).ask is False


class TestCombineResults:
    """Test cartesian combination of component results."""

    def test_product_size(self):
        """Disjoint components give |A| x |B| bindings."""
        combined = combine_results([result(X, "a", "b", "c"), result(Y, "d", "e")])
        assert combined.size() == 6
        assert combined.ask is True
        assert Binding({X: uri("a"), Y: uri("e")}) in combined.bindings

    def test_three_components(self):
        """Product over k components multiplies sizes."""
        combined = combine_results([
            result(X, "a", "b"),
            result(Y, "c", "d", "e"),
            result(Z, "f", "g"),
        ])
        assert combined.size() == 12
        assert all(b.size() == 3 for b in combined)

    def test_failed_component_fails_group(self):
        """Any failed component gives ask=false and no bindings."""
        combined = combine_results([result(X, "a"), QueryResult(ask=False)])
        assert combined.ask is False
        assert combined.is_empty()

    def test_successful_empty_component_is_neutral_for_ask(self):
        """A true component without bindings (ASK) keeps the group true."""
        combined = combine_results([QueryResult(), QueryResult()])
        assert combined.ask is True

    def test_single_component_passthrough(self):
        """A single component is returned as is."""
        r = result(X, "a")
        assert combine_results([r]) is r

    def test_no_components(self):
        """No components is a trivially true result."""
        assert combine_results([]).ask is True

    def test_distinct_after_merge(self):
        """Duplicates produced by a product are removed with distinct."""
        left = QueryResult(bindings=[Binding(), Binding()])
        right = result(Y, "a", "a")
        assert combine_results([left, right]).size() == 4
        assert combine_results([left, right], distinct=True).size() == 1


class TestUnionResults:
    """Test disjunction of group results."""

    def test_concatenates_in_group_order(self):
        """Bindings are concatenated group by group."""
        union = union_results([result(X, "a"), result(X, "b")])
        assert [b[X].value for b in union] == ["urn:ex#a", "urn:ex#b"]

    def test_ask_is_or(self):
        """ask is the OR of all groups."""
        assert union_results([QueryResult(ask=False), QueryResult()]).ask is True
        assert union_results([QueryResult(ask=False), QueryResult(ask=False)]).ask is False

    def test_distinct_across_groups(self):
        """DISTINCT deduplicates across the concatenation."""
        union = union_results([result(X, "a", "b"), result(X, "b", "c")], distinct=True)
        assert union.size() == 3

    def test_empty_union(self):
        """No groups gives false."""
        assert union_results([]).ask is False
