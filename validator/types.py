"""
validator/types.py — kody błędów, wyjątki silnika i struktury raportu walidacji.

QueryEngineError — baza wyjątków silnika (kod ErrorCode + details).
ValidationError  — pojedynczy błąd walidacji statycznej z kodem, ścieżką
    JSON Pointer, komunikatem i mechaniczną instrukcją naprawy.
ValidationReport — wynik walidacji: is_valid, errors, warnings.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any


class ErrorCode(StrEnum):
    """Stałe kody błędów (walidacja statyczna A–D + błędy wykonania)."""

    # A: JSON Schema dokumentu zapytania
    SCHEMA_VIOLATION   = "E_SCHEMA_VIOLATION"

    # B: typy atomów i arność
    ATOM_TYPE_UNKNOWN  = "E_ATOM_TYPE_UNKNOWN"
    ARITY_MISMATCH     = "E_ARITY_MISMATCH"

    # C: rodzaje argumentów i deklaracje encji
    ARG_KIND           = "E_ARG_KIND"
    UNDECLARED_ENTITY  = "E_UNDECLARED_ENTITY"

    # D: zmienne wynikowe (ostrzeżenie)
    RESULT_VAR_UNUSED  = "E_RESULT_VAR_UNUSED"

    # wykonanie
    ENGINE_TYPE        = "E_ENGINE_TYPE"
    TIMEOUT            = "E_TIMEOUT"


# ---------------------------------------------------------------------------
# Wyjątki silnika
# ---------------------------------------------------------------------------

class QueryEngineError(Exception):
    """Błąd ewaluacji zapytania; code identyfikuje klasę błędu."""

    code: ErrorCode = ErrorCode.ENGINE_TYPE

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ArgumentKindError(QueryEngineError):
    """Argument innego rodzaju niż wymagany (np. literał tam, gdzie URI)."""
    code = ErrorCode.ARG_KIND


class UndeclaredEntityError(QueryEngineError):
    """URI nie jest zadeklarowaną encją wymaganego rodzaju."""
    code = ErrorCode.UNDECLARED_ENTITY


class EngineTypeError(QueryEngineError):
    """Nieoczekiwana reprezentacja zapytania lub nieznany typ atomu."""
    code = ErrorCode.ENGINE_TYPE


class QueryTimeoutError(QueryEngineError):
    code = ErrorCode.TIMEOUT


# ---------------------------------------------------------------------------
# Raport walidacji statycznej
# ---------------------------------------------------------------------------

@dataclass(slots=True)
class ValidationError:
    """
    Pojedynczy błąd walidacji.

    - code:         stały identyfikator klasy błędu (ErrorCode)
    - path:         JSON Pointer do miejsca błędu, np. "/groups/0/atoms/1/args/0"
    - message:      czytelny opis błędu
    - expected_fix: krótka mechaniczna instrukcja naprawy
    - details:      opcjonalny słownik z dodatkowymi danymi
    """

    code: ErrorCode
    path: str
    message: str
    expected_fix: str
    details: dict[str, Any] | None = None


@dataclass(slots=True)
class ValidationReport:
    """
    Wynik pełnej walidacji zapytania.

    - is_valid: True gdy brak błędów (warnings nie wpływają)
    - errors:   lista błędów (ValidationError)
    - warnings: lista komunikatów ostrzegawczych (str, z prefiksem kodu)
    """

    is_valid: bool
    errors: list[ValidationError] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "is_valid": self.is_valid,
            "errors": [
                {
                    "code": str(e.code),
                    "path": e.path,
                    "message": e.message,
                    "expected_fix": e.expected_fix,
                    "details": e.details,
                }
                for e in self.errors
            ],
            "warnings": list(self.warnings),
        }
