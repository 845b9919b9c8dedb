"""
solver/engine.py — silnik zapytań SPARQL-DL: przeszukiwanie z nawrotami.

Przebieg execute(query):
  1. migawka Signature (raz na execute albo raz na silnik przy static_ontology)
  2. dla każdej grupy: podział na składowe (find_components), kolejność
     atomów (preorder), rekurencyjna ewaluacja _eval od pustego wiązania
  3. iloczyn wyników składowych (combine_results), suma grup (union_results)

Rekurencja _eval(group, binding):
  - pusta grupa              → zapis rzutu wiązania (SELECT), sukces
  - kontrola argumentów      → błąd: porażka gałęzi / wyjątek (tryb ścisły)
  - atom uziemiony           → check_bound (o ile flaga nie mówi inaczej)
  - atom ze zmiennymi        → kandydaci z handlera, podstawienie w całej
                               grupie, OR po wszystkich kandydatach

Wyjątki reasonera nie są przechwytywane.
"""

from __future__ import annotations

import time
from dataclasses import dataclass, replace

from query_model import Atom, AtomGroup, Binding, Query, QueryResult
from reasoner.protocol import Reasoner
from reasoner.signature import Signature
from validator.argument_checker import ArgumentChecker
from validator.types import (
    ArgumentKindError,
    EngineTypeError,
    QueryTimeoutError,
    UndeclaredEntityError,
)

from .assembler import combine_results, eliminate_duplicates, union_results
from .checks import check_bound
from .config import EngineConfig
from .decomposer import find_components
from .handlers import HANDLERS, BoundCheck
from .scheduler import NO_GENERATOR, preorder


@dataclass(slots=True)
class EvaluationStats:
    """Liczniki ostatniego execute() — do diagnostyki w CLI."""
    groups:        int   = 0
    components:    int   = 0
    candidates:    int   = 0
    ground_checks: int   = 0
    elapsed:       float = 0.0


class QueryEngine:
    """
    Ewaluator zapytań SPARQL-DL nad reasonerem zgodnym z reasoner.Reasoner.

    Użycie::

        engine = QueryEngine(StructuralReasoner(ontology))
        result = engine.execute(query)
        for binding in result:
            ...
    """

    def __init__(self, reasoner: Reasoner, config: EngineConfig | None = None) -> None:
        if not isinstance(reasoner, Reasoner):
            raise EngineTypeError(
                f"Obiekt {type(reasoner).__name__} nie implementuje protokołu Reasoner."
            )
        self.reasoner = reasoner
        self.config   = config or EngineConfig()
        self.stats    = EvaluationStats()

        self._signature: Signature | None       = None
        self._checker:   ArgumentChecker | None = None
        self._deadline:  float | None           = None

    # ------------------------------------------------------------------
    # Ustawienia
    # ------------------------------------------------------------------

    def set_strict_mode(self, strict: bool) -> None:
        self.config = replace(self.config, strict=strict)

    def set_perform_argument_checking(self, check: bool) -> None:
        self.config = replace(self.config, check_arguments=check)

    @property
    def signature(self) -> Signature:
        """Bieżąca migawka sygnatury (budowana przy pierwszym użyciu)."""
        if self._signature is None:
            self._signature = Signature(self.reasoner)
        return self._signature

    # ------------------------------------------------------------------
    # Wykonanie
    # ------------------------------------------------------------------

    def execute(self, query: Query) -> QueryResult:
        """
        Wykonuje zapytanie i zwraca QueryResult.

        Raises:
            EngineTypeError       — zapytanie nie jest Query / nieznany typ atomu
            ArgumentKindError,
            UndeclaredEntityError — tylko w trybie ścisłym
            QueryTimeoutError     — przekroczony config.timeout
        """
        if not isinstance(query, Query):
            raise EngineTypeError(
                f"Oczekiwano Query, otrzymano {type(query).__name__}.",
                details={"type": type(query).__name__},
            )

        started    = time.perf_counter()
        self.stats = EvaluationStats(groups=len(query.groups))

        if not query.groups:
            return QueryResult(ask=False)

        if not self.config.static_ontology:
            self._signature = None
        signature      = self.signature
        self._checker  = ArgumentChecker(signature) if self.config.check_arguments else None
        self._deadline = started + self.config.timeout if self.config.timeout else None

        try:
            group_results: list[QueryResult] = []
            for group in query.groups:
                group_results.append(self._execute_group(query, group))
            return union_results(group_results, distinct=query.is_distinct)
        finally:
            self._deadline = None
            self.stats.elapsed = time.perf_counter() - started

    def _execute_group(self, query: Query, group: AtomGroup) -> QueryResult:
        component_results: list[QueryResult] = []
        for component in find_components(group):
            self.stats.components += 1
            result = QueryResult()
            result.ask = self._eval(query, preorder(component), result, Binding(), BoundCheck.CHECK)
            if query.is_distinct:
                result = eliminate_duplicates(result)
            component_results.append(result)
        return combine_results(component_results, distinct=query.is_distinct)

    # ------------------------------------------------------------------
    # Rekurencja
    # ------------------------------------------------------------------

    def _eval(
        self,
        query:       Query,
        group:       AtomGroup,
        result:      QueryResult,
        binding:     Binding,
        bound_check: BoundCheck,
    ) -> bool:
        if group.is_empty():
            if query.is_select:
                result.add(binding.project(query.result_vars))
            return True

        self._check_deadline()

        atom = group.next_atom()
        if self._checker is not None and not self._arguments_ok(atom):
            return False

        signature = self.signature

        if atom.is_bound:
            if bound_check is BoundCheck.CHECK:
                self.stats.ground_checks += 1
                if not check_bound(atom, signature):
                    return False
            return self._eval(query, group.pop(), result, binding, BoundCheck.CHECK)

        # węzły anonimowe nie są wiązane przez handlery
        if any(a.is_bnode for a in atom.args):
            return False

        handler = HANDLERS.get(atom.type)
        if handler is None:
            if atom.type in NO_GENERATOR:
                return False
            raise EngineTypeError(
                f"Brak strategii ewaluacji dla typu atomu {atom.type!r}.",
                details={"atom": str(atom)},
            )

        found = False
        for assignment, flag in handler(signature, atom):
            self.stats.candidates += 1
            extended = binding.extend_many(assignment)
            if self._eval(query, group.substitute(extended), result, extended, flag):
                found = True
        return found

    def _arguments_ok(self, atom: Atom) -> bool:
        try:
            self._checker.check(atom)
        except (ArgumentKindError, UndeclaredEntityError):
            if self.config.strict:
                raise
            return False
        return True

    def _check_deadline(self) -> None:
        if self._deadline is not None and time.perf_counter() > self._deadline:
            raise QueryTimeoutError(
                f"Przekroczono limit czasu ewaluacji ({self.config.timeout} s).",
                details={"timeout": self.config.timeout},
            )
