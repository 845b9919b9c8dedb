"""
query_model/query.py — zapytanie SPARQL-DL.

Query = tryb + zmienne wynikowe + grupy atomów (alternatywa grup,
koniunkcja atomów wewnątrz grupy).
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import StrEnum

from .arguments import Argument
from .groups import AtomGroup


class QueryMode(StrEnum):
    ASK             = "ask"
    SELECT          = "select"
    SELECT_DISTINCT = "distinct"


@dataclass(frozen=True, slots=True)
class Query:
    """
    Niemutowalne zapytanie.

    - mode:        ASK | SELECT | SELECT_DISTINCT
    - result_vars: zbiór zmiennych wynikowych; argumenty inne niż VAR
                   są pomijane przy konstrukcji
    - groups:      krotka grup atomów (WHERE {..} OR WHERE {..})
    """
    mode:        QueryMode
    result_vars: frozenset[Argument] = field(default_factory=frozenset)
    groups:      tuple[AtomGroup, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "result_vars",
            frozenset(a for a in self.result_vars if a.is_var),
        )
        if not isinstance(self.groups, tuple):
            object.__setattr__(self, "groups", tuple(self.groups))

    @classmethod
    def ask(cls, *groups: AtomGroup) -> "Query":
        return cls(QueryMode.ASK, frozenset(), tuple(groups))

    @classmethod
    def select(
        cls,
        result_vars: Iterable[Argument],
        *groups:     AtomGroup,
        distinct:    bool = False,
    ) -> "Query":
        mode = QueryMode.SELECT_DISTINCT if distinct else QueryMode.SELECT
        return cls(mode, frozenset(result_vars), tuple(groups))

    @property
    def is_ask(self) -> bool:
        return self.mode is QueryMode.ASK

    @property
    def is_select(self) -> bool:
        return self.mode is not QueryMode.ASK

    @property
    def is_distinct(self) -> bool:
        return self.mode is QueryMode.SELECT_DISTINCT

    def __str__(self) -> str:
        head = {
            QueryMode.ASK:             "ASK",
            QueryMode.SELECT:          "SELECT",
            QueryMode.SELECT_DISTINCT: "SELECT DISTINCT",
        }[self.mode]
        if self.result_vars:
            head += " " + " ".join(sorted(str(v) for v in self.result_vars))
        body = " OR WHERE ".join(f"{{ {g} }}" for g in self.groups)
        return f"{head} WHERE {body}" if body else head
