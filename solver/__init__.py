"""
solver — silnik zapytań SPARQL-DL.

Publiczne API:
  QueryEngine(reasoner, config)      ewaluator z nawrotami
  EngineConfig                       ustawienia (strict, check_arguments, ...)
  find_components(group)             → list[AtomGroup]
  preorder(group)                    → AtomGroup (stabilnie wg kosztu)
  combine_results / union_results    składanie wyników
  check_bound(atom, signature)       → bool dla atomu uziemionego
  load_query_json(path)              → Query
  query_from_dict(data)              → Query
  parse_atom(text) / parse_argument  składnia skrócona atomów
"""

from .assembler  import combine_results, eliminate_duplicates, union_results
from .checks     import check_bound
from .config     import EngineConfig
from .decomposer import UnionFind, find_components
from .engine     import EvaluationStats, QueryEngine
from .handlers   import HANDLERS, BoundCheck
from .loader     import (
    atom_from_dict,
    load_query_json,
    parse_argument,
    parse_atom,
    query_from_dict,
)
from .scheduler  import NO_GENERATOR, estimate_cost, preorder

__all__ = [
    "QueryEngine",
    "EvaluationStats",
    "EngineConfig",
    "BoundCheck",
    "HANDLERS",
    "check_bound",
    "UnionFind",
    "find_components",
    "NO_GENERATOR",
    "estimate_cost",
    "preorder",
    "combine_results",
    "eliminate_duplicates",
    "union_results",
    "atom_from_dict",
    "load_query_json",
    "parse_argument",
    "parse_atom",
    "query_from_dict",
]
