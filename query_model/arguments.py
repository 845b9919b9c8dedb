"""
query_model/arguments.py — argument atomu SPARQL-DL (unia oznaczona).

Rodzaje argumentów:
  URI      — IRI encji (klasa, osobnik, właściwość, typ danych)
  LITERAL  — literał: forma leksykalna + opcjonalnie typ danych lub język
  VAR      — zmienna zapytania (?x)
  BNODE    — węzeł pusty (_:b0)
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum


class ArgumentKind(StrEnum):
    """Rodzaj argumentu atomu."""
    URI     = "uri"
    LITERAL = "literal"
    VAR     = "var"
    BNODE   = "bnode"


@dataclass(frozen=True, slots=True)
class Argument:
    """
    Niemutowalny argument atomu.

    - kind:     rodzaj argumentu (ArgumentKind)
    - value:    IRI, forma leksykalna literału, nazwa zmiennej (bez '?')
                lub identyfikator węzła pustego
    - datatype: IRI typu danych literału (tylko LITERAL, opcjonalnie)
    - lang:     znacznik języka literału (tylko LITERAL, opcjonalnie)

    Równość i hash po (kind, value); dla literału wartością jest trójka
    (forma leksykalna, typ danych, język).
    """
    kind:     ArgumentKind
    value:    str
    datatype: str | None = None
    lang:     str | None = None

    # ------------------------------------------------------------------
    # Konstruktory fabryczne
    # ------------------------------------------------------------------

    @classmethod
    def uri(cls, iri: str) -> "Argument":
        return cls(ArgumentKind.URI, str(iri))

    @classmethod
    def var(cls, name: str) -> "Argument":
        """Zmienna; wiodący '?' lub '$' jest obcinany."""
        name = str(name)
        if name[:1] in ("?", "$"):
            name = name[1:]
        return cls(ArgumentKind.VAR, name)

    @classmethod
    def bnode(cls, node_id: str) -> "Argument":
        node_id = str(node_id)
        if node_id.startswith("_:"):
            node_id = node_id[2:]
        return cls(ArgumentKind.BNODE, node_id)

    @classmethod
    def literal(
        cls,
        lexical:  str,
        datatype: str | None = None,
        lang:     str | None = None,
    ) -> "Argument":
        return cls(ArgumentKind.LITERAL, str(lexical), datatype or None, lang or None)

    # ------------------------------------------------------------------
    # Predykaty rodzaju
    # ------------------------------------------------------------------

    @property
    def is_uri(self) -> bool:
        return self.kind is ArgumentKind.URI

    @property
    def is_var(self) -> bool:
        return self.kind is ArgumentKind.VAR

    @property
    def is_literal(self) -> bool:
        return self.kind is ArgumentKind.LITERAL

    @property
    def is_bnode(self) -> bool:
        return self.kind is ArgumentKind.BNODE

    def __str__(self) -> str:
        match self.kind:
            case ArgumentKind.URI:
                return f"<{self.value}>"
            case ArgumentKind.VAR:
                return f"?{self.value}"
            case ArgumentKind.BNODE:
                return f"_:{self.value}"
            case _:
                escaped = self.value.replace("\\", "\\\\").replace('"', '\\"')
                if self.lang:
                    return f'"{escaped}"@{self.lang}'
                if self.datatype:
                    return f'"{escaped}"^^<{self.datatype}>'
                return f'"{escaped}"'
