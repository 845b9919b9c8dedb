"""
solver/loader.py — wczytywanie zapytań z JSON i z zapisu skróconego.

Publiczne API:
  load_query_json(path)                  -> Query
  query_from_dict(data)                  -> Query
  parse_argument(value, prefixes=None)   -> Argument
  parse_atom(text, prefixes=None)        -> Atom
  atom_from_dict(d, prefixes=None)       -> Atom
"""

from __future__ import annotations

import json
import pathlib
import re
from typing import Any

from query_model import Argument, Atom, AtomGroup, AtomType, Query, QueryMode
from reasoner.vocabulary import DEFAULT_PREFIXES, XSD_NS, expand_iri


# ---------------------------------------------------------------------------
# Argumenty
# ---------------------------------------------------------------------------

_LITERAL_RE = re.compile(
    r'^"((?:[^"\\]|\\.)*)"(?:@([A-Za-z]+(?:-[A-Za-z0-9]+)*)|\^\^(\S+))?$'
)
_INT_RE     = re.compile(r"^[+-]?\d+$")
_DECIMAL_RE = re.compile(r"^[+-]?\d*\.\d+$")


def _prefixes(extra: dict[str, str] | None) -> dict[str, str]:
    merged = dict(DEFAULT_PREFIXES)
    if extra:
        merged.update(extra)
    return merged


def _unescape(lexical: str) -> str:
    return re.sub(r"\\(.)", r"\1", lexical)


def parse_argument(value: Any, prefixes: dict[str, str] | None = None) -> Argument:
    """
    Parsuje argument atomu.

    Przykłady::

        "?x"                     → VAR x
        "_:b0"                   → BNODE b0
        "<urn:ex#Person>"        → URI urn:ex#Person
        "ex:Person"              → URI (po rozwinięciu prefiksu)
        '"Anna"@pl'              → LITERAL Anna (lang=pl)
        '"42"^^xsd:integer'      → LITERAL 42 (datatype xsd:integer)
        42                       → LITERAL 42 (xsd:integer)
        {"literal": "42", "datatype": "xsd:int"}

    Raises:
        ValueError jeśli argumentu nie da się rozpoznać.
    """
    pfx = _prefixes(prefixes)

    if isinstance(value, dict):
        return _argument_from_dict(value, pfx)
    if isinstance(value, bool):
        return Argument.literal("true" if value else "false", XSD_NS + "boolean")
    if isinstance(value, int):
        return Argument.literal(str(value), XSD_NS + "integer")
    if isinstance(value, float):
        return Argument.literal(repr(value), XSD_NS + "double")
    if not isinstance(value, str):
        raise ValueError(f"Nieobsługiwany typ argumentu: {type(value).__name__}")

    text = value.strip()
    if not text:
        raise ValueError("Pusty argument atomu.")
    if text[0] in "?$":
        if len(text) == 1:
            raise ValueError("Zmienna bez nazwy.")
        return Argument.var(text)
    if text.startswith("_:"):
        return Argument.bnode(text)
    if text.startswith('"'):
        m = _LITERAL_RE.match(text)
        if not m:
            raise ValueError(f"Nieprawidłowy literał: {text}")
        lexical, lang, datatype = m.groups()
        return Argument.literal(
            _unescape(lexical),
            expand_iri(datatype, pfx) if datatype else None,
            lang,
        )
    if _INT_RE.match(text):
        return Argument.literal(text, XSD_NS + "integer")
    if _DECIMAL_RE.match(text):
        return Argument.literal(text, XSD_NS + "decimal")
    if text in ("true", "false"):
        return Argument.literal(text, XSD_NS + "boolean")
    if text.startswith("<") and text.endswith(">"):
        return Argument.uri(text[1:-1])
    if ":" in text:
        return Argument.uri(expand_iri(text, pfx))
    raise ValueError(f"Nie można rozpoznać argumentu: '{text}'")


def _argument_from_dict(d: dict, pfx: dict[str, str]) -> Argument:
    if "var" in d:
        return Argument.var(str(d["var"]))
    if "uri" in d:
        return Argument.uri(expand_iri(str(d["uri"]), pfx))
    if "bnode" in d:
        return Argument.bnode(str(d["bnode"]))
    if "literal" in d:
        raw = d["literal"]
        if isinstance(raw, bool):
            lexical = "true" if raw else "false"
        else:
            lexical = str(raw)
        datatype = d.get("datatype")
        return Argument.literal(
            lexical,
            expand_iri(str(datatype), pfx) if datatype else None,
            d.get("lang"),
        )
    raise ValueError(f"Argument musi mieć jedno z pól uri/var/bnode/literal: {d}")


# ---------------------------------------------------------------------------
# Atomy
# ---------------------------------------------------------------------------

_ATOM_RE = re.compile(r"^\s*([A-Za-z]+)\s*\((.*)\)\s*$", re.DOTALL)


def _split_args(raw: str) -> list[str]:
    """Dzieli listę argumentów po przecinkach poza literałami i <IRI>."""
    parts:   list[str] = []
    current: list[str] = []
    in_str  = False
    in_iri  = False
    escaped = False
    for ch in raw:
        if in_str:
            current.append(ch)
            if escaped:
                escaped = False
            elif ch == "\\":
                escaped = True
            elif ch == '"':
                in_str = False
            continue
        if ch == '"':
            in_str = True
        elif ch == "<":
            in_iri = True
        elif ch == ">":
            in_iri = False
        elif ch == "," and not in_iri:
            parts.append("".join(current).strip())
            current = []
            continue
        current.append(ch)
    if in_str:
        raise ValueError(f"Niezamknięty literał w argumentach: {raw}")
    tail = "".join(current).strip()
    if tail or parts:
        parts.append(tail)
    return parts


def parse_atom(text: str, prefixes: dict[str, str] | None = None) -> Atom:
    """
    Parsuje atom w zapisie skróconym.

    Przykłady::

        "Type(?x, <urn:ex#Person>)"
        "PropertyValue(ex:anna, ex:age, \"42\"^^xsd:integer)"
        "class(?c)"                  (nazwa typu bez rozróżniania wielkości liter)

    Raises:
        ValueError przy nieznanym typie, złej arności lub błędnym argumencie.
    """
    m = _ATOM_RE.match(text)
    if not m:
        raise ValueError(f"Nieprawidłowy format atomu: '{text}'")
    atom_type = AtomType.from_syntax(m.group(1))
    raw_args  = _split_args(m.group(2))
    if any(not a for a in raw_args):
        raise ValueError(f"Pusty argument w atomie: '{text}'")
    args = tuple(parse_argument(a, prefixes) for a in raw_args)
    return Atom(atom_type, args)


def atom_from_dict(d: Any, prefixes: dict[str, str] | None = None) -> Atom:
    """Atom z obiektu {"type": ..., "args": [...]} albo z zapisu skróconego (str)."""
    if isinstance(d, str):
        return parse_atom(d, prefixes)
    if not isinstance(d, dict) or "type" not in d:
        raise ValueError(f"Atom musi być napisem lub obiektem z polem 'type': {d}")
    atom_type = AtomType.from_syntax(str(d["type"]))
    args = tuple(parse_argument(a, prefixes) for a in d.get("args", []))
    return Atom(atom_type, args)


# ---------------------------------------------------------------------------
# Zapytanie
# ---------------------------------------------------------------------------

_MODES: dict[str, QueryMode] = {
    "ask":             QueryMode.ASK,
    "select":          QueryMode.SELECT,
    "distinct":        QueryMode.SELECT_DISTINCT,
    "select_distinct": QueryMode.SELECT_DISTINCT,
}


def query_from_dict(data: dict[str, Any]) -> Query:
    """
    Buduje Query z dokumentu JSON (format: validator/schema.py).

    Brak pola "mode" oznacza SELECT, gdy podano "select", w przeciwnym razie ASK.

    Raises:
        ValueError przy niepoprawnym dokumencie.
    """
    if not isinstance(data, dict):
        raise ValueError("Dokument zapytania musi być obiektem JSON.")

    prefixes = data.get("prefixes") or {}
    select   = data.get("select") or []

    mode_raw = data.get("mode") or ("select" if select else "ask")
    mode = _MODES.get(str(mode_raw).lower())
    if mode is None:
        raise ValueError(f"Nieznany tryb zapytania: '{mode_raw}'")

    result_vars = frozenset(parse_argument(v, prefixes) for v in select)

    groups: list[AtomGroup] = []
    for g_idx, group in enumerate(data.get("groups") or []):
        raw_atoms = group.get("atoms", []) if isinstance(group, dict) else group
        atoms: list[Atom] = []
        for a_idx, raw in enumerate(raw_atoms):
            try:
                atoms.append(atom_from_dict(raw, prefixes))
            except ValueError as e:
                raise ValueError(f"groups[{g_idx}].atoms[{a_idx}]: {e}") from e
        groups.append(AtomGroup(tuple(atoms)))

    return Query(mode, result_vars, tuple(groups))


def load_query_json(path: pathlib.Path) -> Query:
    """Wczytuje dokument zapytania z pliku JSON."""
    try:
        raw = json.loads(pathlib.Path(path).read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise ValueError(f"Niepoprawny JSON zapytania ({path}): {e}") from e
    return query_from_dict(raw)
