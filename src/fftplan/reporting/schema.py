"""JSON schema definition for reporter output."""
from __future__ import annotations

SCHEMA_VERSION = "1.0.0"

_NUMBER_OR_NULL = {"type": ["number", "null"]}

JSON_SCHEMA_V1 = {
    "$schema": "http://json-schema.org/draft-07/schema#",
    "title": "fftplan job report",
    "type": "object",
    "required": ["schema_version", "generated_at", "summary", "jobs"],
    "properties": {
        "schema_version": {"type": "string"},
        "generated_at": {"type": "string", "format": "date-time"},
        "summary": {
            "type": "object",
            "required": ["total", "passed", "failed", "errors", "source", "duration_s"],
            "properties": {
                "total": {"type": "integer"},
                "passed": {"type": "integer"},
                "failed": {"type": "integer"},
                "errors": {"type": "integer"},
                "source": {"type": "string"},
                "provider": {"type": ["string", "null"]},
                "duration_s": {"type": "number"},
            },
        },
        "jobs": {
            "type": "array",
            "items": {
                "type": "object",
                "required": [
                    "id",
                    "name",
                    "kind",
                    "size",
                    "inverse",
                    "effort",
                    "status",
                    "duration_ms",
                    "calls",
                    "tolerance",
                ],
                "properties": {
                    "id": {"type": "string"},
                    "name": {"type": "string"},
                    "kind": {"type": "string"},
                    "size": {"type": "integer", "minimum": 1},
                    "inverse": {"type": "boolean"},
                    "effort": {"type": "string"},
                    "provider": {"type": ["string", "null"]},
                    "status": {"type": "string", "enum": ["passed", "failed", "error"]},
                    "duration_ms": {"type": "number"},
                    "calls": {"type": "integer"},
                    "tags": {"type": "array", "items": {"type": "string"}},
                    "tolerance": {
                        "type": "object",
                        "required": ["abs", "rel"],
                        "properties": {
                            "abs": {"type": "number"},
                            "rel": {"type": "number"},
                        },
                    },
                    "error": {"type": "string"},
                    "comparison": {
                        "type": "object",
                        "required": ["passed", "max_abs_error", "max_rel_error", "mismatched", "total"],
                        "properties": {
                            "passed": {"type": "boolean"},
                            "max_abs_error": _NUMBER_OR_NULL,
                            "max_rel_error": _NUMBER_OR_NULL,
                            "mismatched": {"type": "integer"},
                            "total": {"type": "integer"},
                            "detail": {"type": ["string", "null"]},
                        },
                    },
                },
            },
        },
    },
}
