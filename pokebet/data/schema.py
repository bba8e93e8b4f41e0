"""JSON schemas for the raw PokeAPI records the builder consumes.

Only the fields the battle model reads are required; everything else in the
API payload is ignored. ``accuracy`` and ``power`` may be null on a move: such
moves are filtered out later rather than rejected here.
"""
from __future__ import annotations
from typing import Any, Dict

import jsonschema

from pokebet.core.errors import ParseError

_NAMED_REF: Dict[str, Any] = {
    "type": "object",
    "required": ["name", "url"],
    "properties": {
        "name": {"type": "string"},
        "url": {"type": "string"},
    },
}

_NAME_ONLY: Dict[str, Any] = {
    "type": "object",
    "required": ["name"],
    "properties": {"name": {"type": "string"}},
}

ENTITY_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "required": ["id", "name", "stats", "types", "moves"],
    "properties": {
        "id": {"type": "integer"},
        "name": {"type": "string"},
        "stats": {
            "type": "array",
            "items": {
                "type": "object",
                "required": ["base_stat", "stat"],
                "properties": {
                    "base_stat": {"type": "integer", "minimum": 0},
                    "stat": _NAMED_REF,
                },
            },
        },
        "types": {
            "type": "array",
            "minItems": 1,
            "maxItems": 2,
            "items": {
                "type": "object",
                "required": ["type"],
                "properties": {"type": _NAMED_REF},
            },
        },
        "moves": {
            "type": "array",
            "items": {
                "type": "object",
                "required": ["move"],
                "properties": {"move": _NAMED_REF},
            },
        },
    },
}

MOVE_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "required": ["name", "pp", "type", "damage_class"],
    "properties": {
        "name": {"type": "string"},
        "accuracy": {"type": ["integer", "null"]},
        "power": {"type": ["integer", "null"]},
        "pp": {"type": "integer", "minimum": 0},
        "type": _NAME_ONLY,
        "damage_class": _NAME_ONLY,
    },
}

RELATION_KEYS = (
    "double_damage_from", "double_damage_to",
    "half_damage_from", "half_damage_to",
    "no_damage_from", "no_damage_to",
)

TYPE_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "required": ["name", "damage_relations"],
    "properties": {
        "name": {"type": "string"},
        "damage_relations": {
            "type": "object",
            "required": list(RELATION_KEYS),
            "properties": {k: {"type": "array", "items": _NAME_ONLY} for k in RELATION_KEYS},
        },
    },
}

def validate_record(record: Any, schema: Dict[str, Any], ref: str) -> Dict[str, Any]:
    """Validate ``record`` against ``schema`` and return it, raising ParseError on mismatch."""
    try:
        jsonschema.validate(record, schema)
    except jsonschema.ValidationError as e:
        path = "/".join(str(p) for p in e.absolute_path) or "<root>"
        raise ParseError(ref, f"{path}: {e.message}") from e
    return record

__all__ = ["ENTITY_SCHEMA", "MOVE_SCHEMA", "TYPE_SCHEMA", "RELATION_KEYS", "validate_record"]
