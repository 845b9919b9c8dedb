"""
query_model/binding.py — podstawienie zmiennych zapytania.

Binding jest niemutowalny: extend() / extend_many() / merge() zwracają nowy
obiekt, więc gałęzie przeszukiwania nigdy nie współdzielą stanu.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping

from .arguments import Argument


class Binding(Mapping[Argument, Argument]):
    """
    Częściowe odwzorowanie zmienna → wartość.

    Klucze są zawsze argumentami rodzaju VAR; wartości to URI lub literały.
    """

    __slots__ = ("_map", "_hash")

    def __init__(self, values: Mapping[Argument, Argument] | None = None) -> None:
        data: dict[Argument, Argument] = {}
        if values:
            for var, value in values.items():
                _require_var(var)
                data[var] = value
        self._map:  dict[Argument, Argument] = data
        self._hash: int | None                = None

    # ------------------------------------------------------------------
    # Odczyt
    # ------------------------------------------------------------------

    def get(self, arg: Argument, default: Argument | None = None) -> Argument | None:  # type: ignore[override]
        return self._map.get(arg, default)

    def is_bound(self, arg: Argument) -> bool:
        return arg in self._map

    def bound_args(self) -> frozenset[Argument]:
        return frozenset(self._map)

    def size(self) -> int:
        return len(self._map)

    def is_empty(self) -> bool:
        return not self._map

    def __getitem__(self, arg: Argument) -> Argument:
        return self._map[arg]

    def __iter__(self) -> Iterator[Argument]:
        return iter(self._map)

    def __len__(self) -> int:
        return len(self._map)

    # ------------------------------------------------------------------
    # Kopie rozszerzone
    # ------------------------------------------------------------------

    def extend(self, var: Argument, value: Argument) -> "Binding":
        """Nowe podstawienie z dodanym (lub nadpisanym) var → value."""
        return self.extend_many({var: value})

    def extend_many(self, values: Mapping[Argument, Argument]) -> "Binding":
        new = dict(self._map)
        for var, value in values.items():
            _require_var(var)
            new[var] = value
        return Binding._from_trusted(new)

    def merge(self, other: "Binding") -> "Binding":
        """Suma dwóch podstawień; przy kolizji wygrywa other."""
        if not other._map:
            return self
        if not self._map:
            return other
        return Binding._from_trusted({**self._map, **other._map})

    def project(self, variables: Iterable[Argument]) -> "Binding":
        """Rzutowanie na podany zbiór zmiennych (zmienne wynikowe zapytania)."""
        keep = set(variables)
        return Binding._from_trusted(
            {k: v for k, v in self._map.items() if k in keep}
        )

    @classmethod
    def _from_trusted(cls, data: dict[Argument, Argument]) -> "Binding":
        b = cls.__new__(cls)
        b._map  = data
        b._hash = None
        return b

    # ------------------------------------------------------------------
    # Równość strukturalna
    # ------------------------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Binding):
            return self._map == other._map
        return NotImplemented

    def __hash__(self) -> int:
        if self._hash is None:
            self._hash = hash(frozenset(self._map.items()))
        return self._hash

    def __repr__(self) -> str:
        inner = ", ".join(f"{k}={v}" for k, v in self._map.items())
        return f"Binding({inner})"


def _require_var(arg: Argument) -> None:
    if not isinstance(arg, Argument) or not arg.is_var:
        raise TypeError(f"Kluczem podstawienia musi być zmienna, podano: {arg!r}")
