"""
query_model — struktury danych zapytań SPARQL-DL.

Użycie:
  from query_model import Argument, Atom, AtomType, AtomGroup, Binding, Query, ...

Moduły:
  arguments — Argument, ArgumentKind
  atoms     — Atom, AtomType, ATOM_ARITY
  groups    — AtomGroup
  binding   — Binding (niemutowalne podstawienie)
  query     — Query, QueryMode
  result    — QueryResult
"""

from .arguments import Argument, ArgumentKind
from .atoms import ATOM_ARITY, Atom, AtomArityError, AtomType
from .binding import Binding
from .groups import AtomGroup
from .query import Query, QueryMode
from .result import QueryResult

__all__ = [
    "Argument",
    "ArgumentKind",
    "ATOM_ARITY",
    "Atom",
    "AtomArityError",
    "AtomType",
    "AtomGroup",
    "Binding",
    "Query",
    "QueryMode",
    "QueryResult",
]
