"""
solver/config.py — konfiguracja silnika zapytań.

Zmienne środowiskowe (EngineConfig.from_env):
  SDL_STRICT           1/true → tryb ścisły (błędy argumentów przerywają ewaluację)
  SDL_CHECK_ARGS       0/false → wyłącza kontrolę argumentów atomów
  SDL_STATIC_ONTOLOGY  1/true → migawka sygnatury żyje przez cały czas życia silnika
  SDL_TIMEOUT          limit czasu ewaluacji w sekundach (pusty = brak)
"""

from __future__ import annotations

import os
from dataclasses import dataclass, replace

_TRUE  = {"1", "true", "yes", "on", "tak"}
_FALSE = {"0", "false", "no", "off", "nie"}


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    value = raw.strip().lower()
    if value in _TRUE:
        return True
    if value in _FALSE:
        return False
    raise ValueError(f"Zmienna {name}: oczekiwano wartości logicznej, podano '{raw}'")


def _env_float(name: str) -> float | None:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return None
    try:
        value = float(raw)
    except ValueError as e:
        raise ValueError(f"Zmienna {name}: oczekiwano liczby sekund, podano '{raw}'") from e
    if value <= 0:
        raise ValueError(f"Zmienna {name}: limit czasu musi być dodatni, podano '{raw}'")
    return value


@dataclass(frozen=True, slots=True)
class EngineConfig:
    """
    Ustawienia QueryEngine.

    - strict:          błędy rodzaju / deklaracji argumentu rzucają wyjątek
                       zamiast odcinać gałąź przeszukiwania
    - check_arguments: kontrola argumentów przed każdym atomem
    - static_ontology: ontologia nie zmienia się w czasie życia silnika,
                       więc migawka Signature jest budowana raz
    - timeout:         limit czasu jednego execute() w sekundach
    """
    strict:          bool         = False
    check_arguments: bool         = True
    static_ontology: bool         = False
    timeout:         float | None = None

    @classmethod
    def from_env(cls) -> "EngineConfig":
        return cls(
            strict          = _env_bool("SDL_STRICT", False),
            check_arguments = _env_bool("SDL_CHECK_ARGS", True),
            static_ontology = _env_bool("SDL_STATIC_ONTOLOGY", False),
            timeout         = _env_float("SDL_TIMEOUT"),
        )

    def with_overrides(self, **changes) -> "EngineConfig":
        """Kopia z nadpisanymi polami; wartości None są pomijane."""
        return replace(self, **{k: v for k, v in changes.items() if v is not None})
