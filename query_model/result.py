"""
query_model/result.py — wynik zapytania.
"""

from __future__ import annotations

from collections.abc import Iterator

from .binding import Binding


class QueryResult:
    """
    Wynik ewaluacji: flaga ask + lista podstawień.

    ask domyślnie True (pusta koniunkcja jest spełniona); add() ustawia
    ask na True. Kolejność podstawień odpowiada kolejności znalezienia.
    """

    __slots__ = ("ask", "bindings")

    def __init__(self, ask: bool = True, bindings: list[Binding] | None = None) -> None:
        self.ask:      bool          = ask
        self.bindings: list[Binding] = list(bindings) if bindings else []

    def add(self, binding: Binding) -> None:
        self.bindings.append(binding)
        self.ask = True

    def size(self) -> int:
        return len(self.bindings)

    def is_empty(self) -> bool:
        return not self.bindings

    def get(self, index: int) -> Binding:
        return self.bindings[index]

    def __iter__(self) -> Iterator[Binding]:
        return iter(self.bindings)

    def __len__(self) -> int:
        return len(self.bindings)

    def __repr__(self) -> str:
        return f"QueryResult(ask={self.ask}, bindings={len(self.bindings)})"

    def to_dict(self) -> dict:
        """Postać JSON: {"ask": bool, "bindings": [{"x": "<iri>"}, ...]}."""
        return {
            "ask": self.ask,
            "bindings": [
                {var.value: str(val) for var, val in b.items()}
                for b in self.bindings
            ],
        }
