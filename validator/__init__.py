"""
validator — kontrola argumentów atomów i statyczna walidacja zapytań.

Interfejs publiczny:
    ArgumentChecker  — kontrola rodzajów argumentów atomu (używana przez silnik)
    QueryValidator   — walidator dokumentu zapytania (etapy A–D)
    ValidationReport, ValidationError, ErrorCode — typy raportu
    QueryEngineError i podklasy — wyjątki silnika

Typowe użycie:
    from validator import QueryValidator

    validator = QueryValidator(signature)
    report    = validator.validate(query_json)
    if not report.is_valid:
        for e in report.errors:
            print(e.code, e.path, e.message)
"""

from .types import (
    ArgumentKindError,
    EngineTypeError,
    ErrorCode,
    QueryEngineError,
    QueryTimeoutError,
    UndeclaredEntityError,
    ValidationError,
    ValidationReport,
)
from .argument_checker import ArgumentChecker
from .query_validator import QueryValidator

__all__ = [
    "ErrorCode",
    "ValidationError",
    "ValidationReport",
    "QueryEngineError",
    "ArgumentKindError",
    "UndeclaredEntityError",
    "EngineTypeError",
    "QueryTimeoutError",
    "ArgumentChecker",
    "QueryValidator",
]
