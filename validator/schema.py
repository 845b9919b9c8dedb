"""
validator/schema.py — JSON Schema dokumentu zapytania (Draft 2020-12).

Dokument zapytania::

    {
        "mode":     "select",                 # ask | select | distinct
        "select":   ["?x"],
        "prefixes": {"ex": "urn:ex#"},
        "groups": [
            {"atoms": [
                {"type": "Type", "args": ["?x", "ex:Person"]},
                "Class(?c)"
            ]}
        ]
    }
"""

from __future__ import annotations

from typing import Any

_ARGUMENT: dict[str, Any] = {
    "oneOf": [
        {"type": "string", "minLength": 1},
        {"type": ["number", "boolean"]},
        {
            "type": "object",
            "properties": {
                "uri":      {"type": "string"},
                "var":      {"type": "string"},
                "bnode":    {"type": "string"},
                "literal":  {"type": ["string", "number", "boolean"]},
                "datatype": {"type": "string"},
                "lang":     {"type": "string"},
            },
            "minProperties": 1,
            "additionalProperties": False,
        },
    ]
}

_ATOM: dict[str, Any] = {
    "oneOf": [
        {"type": "string", "minLength": 3},
        {
            "type": "object",
            "required": ["type", "args"],
            "properties": {
                "type": {"type": "string", "minLength": 1},
                "args": {"type": "array", "items": _ARGUMENT},
            },
            "additionalProperties": False,
        },
    ]
}

QUERY_SCHEMA: dict[str, Any] = {
    "$schema": "https://json-schema.org/draft/2020-12/schema",
    "title": "SPARQL-DL query document",
    "type": "object",
    "required": ["groups"],
    "properties": {
        "mode":     {"enum": ["ask", "select", "distinct"]},
        "select":   {"type": "array", "items": {"type": "string"}},
        "prefixes": {"type": "object", "additionalProperties": {"type": "string"}},
        "groups": {
            "type": "array",
            "items": {
                "type": "object",
                "required": ["atoms"],
                "properties": {
                    "atoms": {"type": "array", "items": _ATOM},
                },
                "additionalProperties": False,
            },
        },
    },
    "additionalProperties": False,
}
