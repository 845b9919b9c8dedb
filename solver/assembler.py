"""
solver/assembler.py — składanie wyników składowych i grup.

combine_results — iloczyn kartezjański wyników składowych jednej grupy
union_results   — suma wyników grup (WHERE {..} OR WHERE {..})
"""

from __future__ import annotations

from collections import deque
from collections.abc import Iterable, Sequence

from query_model import Binding, QueryResult


def eliminate_duplicates(result: QueryResult) -> QueryResult:
    """Usuwa strukturalnie równe podstawienia, zachowując pierwsze wystąpienie."""
    seen:   set[Binding]  = set()
    unique: list[Binding] = []
    for binding in result.bindings:
        if binding not in seen:
            seen.add(binding)
            unique.append(binding)
    return QueryResult(result.ask, unique)


def _product(a: QueryResult, b: QueryResult) -> QueryResult:
    combined = QueryResult(ask=a.ask and b.ask)
    for left in a.bindings:
        for right in b.bindings:
            combined.bindings.append(left.merge(right))
    return combined


def combine_results(results: Sequence[QueryResult], distinct: bool = False) -> QueryResult:
    """
    Łączy wyniki składowych: zdejmuje dwa z kolejki, wstawia ich iloczyn
    na koniec, aż zostanie jeden. Przy distinct duplikaty są usuwane
    po każdym złączeniu.

    Wynik z ask=False (składowa niespełniona) daje pusty wynik z ask=False.
    """
    if not results:
        return QueryResult()
    if any(not r.ask for r in results):
        return QueryResult(ask=False)

    queue: deque[QueryResult] = deque(results)
    while len(queue) > 1:
        merged = _product(queue.popleft(), queue.popleft())
        if distinct:
            merged = eliminate_duplicates(merged)
        queue.append(merged)
    return queue[0]


def union_results(results: Iterable[QueryResult], distinct: bool = False) -> QueryResult:
    """Suma wyników grup: ask = OR, podstawienia w kolejności grup."""
    union = QueryResult(ask=False)
    for r in results:
        union.ask = union.ask or r.ask
        union.bindings.extend(r.bindings)
    if distinct:
        union = eliminate_duplicates(union)
    return union
