"""
validator/query_validator.py — statyczna walidacja dokumentu zapytania.

QueryValidator.validate(query_json) -> ValidationReport

Etapy:
  A — JSON Schema           (validator/schema.py, jsonschema Draft 2020-12)
  B — typy atomów i arność  (nazwa typu znana, liczba argumentów zgodna)
  C — argumenty             (rodzaj argumentu + deklaracja encji w sygnaturze)
  D — zmienne wynikowe      (ostrzeżenie, gdy zmienna SELECT nie występuje w żadnej grupie)
"""

from __future__ import annotations

from typing import Any

import jsonschema

from query_model import Argument, Atom, AtomArityError, AtomType
from reasoner.signature import Signature

from .argument_checker import ArgumentChecker
from .schema import QUERY_SCHEMA
from .types import ErrorCode, QueryEngineError, ValidationError, ValidationReport

# Limit błędów: po przekroczeniu przerywamy dalsze etapy
MAX_ERRORS = 20


class QueryValidator:
    """
    Walidator dokumentu zapytania względem sygnatury ontologii.

    Użycie:
        signature = Signature(StructuralReasoner(load_ontology(path)))
        validator = QueryValidator(signature)
        report    = validator.validate(json.loads(query_text))
    """

    def __init__(
        self,
        signature: Signature,
        schema: dict[str, Any] | None = QUERY_SCHEMA,
    ) -> None:
        self._checker = ArgumentChecker(signature)
        self._schema  = schema

    # ------------------------------------------------------------------
    # Publiczny interfejs
    # ------------------------------------------------------------------

    def validate(self, query_json: dict[str, Any]) -> ValidationReport:
        errors: list[ValidationError] = []
        warnings: list[str] = []

        # A: JSON Schema (fail-fast)
        if self._schema is not None:
            self._stage_schema(query_json, errors)
            if errors:
                return ValidationReport(is_valid=False, errors=errors, warnings=warnings)

        prefixes = query_json.get("prefixes") or {}

        # B + C: atomy
        used_vars: set[Argument] = set()
        for g_idx, group in enumerate(query_json.get("groups", [])):
            for a_idx, raw in enumerate(group.get("atoms", [])):
                if len(errors) >= MAX_ERRORS:
                    break
                path = f"/groups/{g_idx}/atoms/{a_idx}"
                atom = self._stage_atom(raw, path, prefixes, errors)
                if atom is None:
                    continue
                used_vars.update(atom.variables)
                self._stage_arguments(atom, raw, path, errors)

        # D: zmienne wynikowe
        self._stage_result_vars(query_json, prefixes, used_vars, warnings)

        return ValidationReport(
            is_valid=len(errors) == 0,
            errors=errors,
            warnings=warnings,
        )

    # ------------------------------------------------------------------
    # Stage A: JSON Schema
    # ------------------------------------------------------------------

    def _stage_schema(self, query_json: Any, errors: list[ValidationError]) -> None:
        validator = jsonschema.Draft202012Validator(self._schema)
        for e in validator.iter_errors(query_json):
            path = (
                "/" + "/".join(str(p) for p in e.absolute_path)
                if e.absolute_path
                else "/"
            )
            errors.append(ValidationError(
                code=ErrorCode.SCHEMA_VIOLATION,
                path=path,
                message=e.message,
                expected_fix=f"Popraw naruszenie schematu JSON na ścieżce {path}.",
            ))

    # ------------------------------------------------------------------
    # Stage B: typ atomu i arność
    # ------------------------------------------------------------------

    def _stage_atom(
        self,
        raw: Any,
        path: str,
        prefixes: dict[str, str],
        errors: list[ValidationError],
    ) -> Atom | None:
        from solver.loader import parse_argument, parse_atom

        if isinstance(raw, str):
            try:
                return parse_atom(raw, prefixes)
            except AtomArityError as e:
                code = ErrorCode.ARITY_MISMATCH
                message = str(e)
            except ValueError as e:
                code = self._code_for_shorthand(raw)
                message = str(e)
            errors.append(ValidationError(
                code=code,
                path=path,
                message=message,
                expected_fix="Zapisz atom jako Typ(arg1, ..., argN) z poprawnym typem i arnością.",
                details={"atom": raw},
            ))
            return None

        type_name = str(raw.get("type", ""))
        try:
            atom_type = AtomType.from_syntax(type_name)
        except ValueError:
            errors.append(ValidationError(
                code=ErrorCode.ATOM_TYPE_UNKNOWN,
                path=f"{path}/type",
                message=f"Typ atomu '{type_name}' nie istnieje w SPARQL-DL.",
                expected_fix="Użyj jednego z typów: " + ", ".join(t.value for t in AtomType) + ".",
                details={"type": type_name},
            ))
            return None

        raw_args = raw.get("args", [])
        if len(raw_args) != atom_type.arity:
            errors.append(ValidationError(
                code=ErrorCode.ARITY_MISMATCH,
                path=f"{path}/args",
                message=(
                    f"Atom {atom_type}() wymaga {atom_type.arity} arg(s), "
                    f"podano {len(raw_args)}."
                ),
                expected_fix=f"Podaj dokładnie {atom_type.arity} argumentów dla {atom_type}().",
                details={"expected": atom_type.arity, "actual": len(raw_args)},
            ))
            return None

        args: list[Argument] = []
        for i, raw_arg in enumerate(raw_args):
            try:
                args.append(parse_argument(raw_arg, prefixes))
            except ValueError as e:
                errors.append(ValidationError(
                    code=ErrorCode.ARG_KIND,
                    path=f"{path}/args/{i}",
                    message=str(e),
                    expected_fix="Użyj ?zmiennej, <IRI>, prefiks:nazwa lub literału \"...\".",
                    details={"arg": raw_arg},
                ))
        if len(args) != len(raw_args):
            return None
        return Atom(atom_type, tuple(args))

    @staticmethod
    def _code_for_shorthand(raw: str) -> ErrorCode:
        """Nieznana nazwa typu albo błędny argument (arność obsługuje AtomArityError)."""
        try:
            AtomType.from_syntax(raw.split("(", 1)[0])
        except ValueError:
            return ErrorCode.ATOM_TYPE_UNKNOWN
        return ErrorCode.ARG_KIND

    # ------------------------------------------------------------------
    # Stage C: rodzaje argumentów i deklaracje
    # ------------------------------------------------------------------

    def _stage_arguments(
        self,
        atom: Atom,
        raw: Any,
        path: str,
        errors: list[ValidationError],
    ) -> None:
        for index, error in self._checker.iter_violations(atom):
            arg_path = f"{path}/args/{index}" if isinstance(raw, dict) else path
            errors.append(ValidationError(
                code=error.code,
                path=arg_path,
                message=error.message,
                expected_fix=self._fix_for(error),
                details=error.details,
            ))

    @staticmethod
    def _fix_for(error: QueryEngineError) -> str:
        if error.code is ErrorCode.UNDECLARED_ENTITY:
            expected = ", ".join(error.details.get("expected", []))
            return f"Użyj encji zadeklarowanej w ontologii (rodzaj: {expected}) albo zmiennej."
        return "Zamień argument na URI lub zmienną zgodnie z typem atomu."

    # ------------------------------------------------------------------
    # Stage D: zmienne wynikowe
    # ------------------------------------------------------------------

    def _stage_result_vars(
        self,
        query_json: dict[str, Any],
        prefixes: dict[str, str],
        used_vars: set[Argument],
        warnings: list[str],
    ) -> None:
        from solver.loader import parse_argument

        for i, raw in enumerate(query_json.get("select") or []):
            try:
                arg = parse_argument(raw, prefixes)
            except ValueError as e:
                warnings.append(f"{ErrorCode.RESULT_VAR_UNUSED}: /select/{i}: {e}")
                continue
            if not arg.is_var:
                warnings.append(
                    f"{ErrorCode.RESULT_VAR_UNUSED}: /select/{i}: '{raw}' nie jest zmienną "
                    f"i zostanie pominięte."
                )
            elif arg not in used_vars:
                warnings.append(
                    f"{ErrorCode.RESULT_VAR_UNUSED}: /select/{i}: zmienna {arg} nie występuje "
                    f"w żadnej grupie atomów."
                )
