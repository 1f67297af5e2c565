from __future__ import annotations
from typing import Dict, Any, Optional
from jsonschema import Draft202012Validator, FormatChecker, ValidationError
from jsonschema.exceptions import best_match

from ..types import LOGICAL_TYPES, Strategy

SCENARIO_FILE_SCHEMA: Dict[str, Any] = {
    "$schema": "https://json-schema.org/draft/2020-12/schema",
    "type": "object",
    "required": ["scenarios"],
    "additionalProperties": False,
    "properties": {
        "scenarios": {
            "type": "array",
            "minItems": 1,
            "items": {"$ref": "#/$defs/scenario"},
        },
    },
    "$defs": {
        "scenario": {
            "type": "object",
            "required": ["seed", "row_count", "columns"],
            "additionalProperties": False,
            "properties": {
                "name": {"type": "string"},
                "seed": {"type": "integer", "minimum": 0},
                "row_count": {"type": "integer", "minimum": 0},
                "metadata": {
                    "type": "array",
                    "items": {
                        "type": "array",
                        "prefixItems": [{"type": "string"}, {"type": "string"}],
                        "minItems": 2,
                        "maxItems": 2,
                    },
                },
                "columns": {
                    "type": "array",
                    "minItems": 1,
                    "items": {"$ref": "#/$defs/column"},
                },
            },
        },
        "column": {
            "type": "object",
            "required": ["name", "type", "strategy"],
            "additionalProperties": False,
            "properties": {
                "name": {"type": "string", "format": "column-name"},
                "type": {"enum": sorted(LOGICAL_TYPES)},
                "strategy": {"enum": [s.value for s in Strategy]},
                "null_probability": {"type": "number"},
                "min": {"type": "number"},
                "max": {"type": "number"},
                "min_length": {"type": "integer"},
                "max_length": {"type": "integer"},
                "value": {"type": ["number", "string"]},
                "child_factor": {"type": "integer"},
            },
        },
    },
}


class Validator:
    def __init__(self, schema: Dict[str, Any] = SCENARIO_FILE_SCHEMA):
        self.fc = FormatChecker()
        self._register_formats()
        self._validator = Draft202012Validator(schema, format_checker=self.fc)

    def _register_formats(self) -> None:
        @self.fc.checks("column-name", raises=Exception)
        def _is_column_name(value: str) -> bool:
            # dots would be read as nested paths by the dictionary settings
            return bool(value) and "." not in value

    def validate(self, document: Any) -> Optional[ValidationError]:
        return best_match(self._validator.iter_errors(document))
