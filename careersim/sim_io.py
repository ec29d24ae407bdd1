"""
I/O helpers for schemas and message construction.

PURPOSE: Central place for JSON schema validation and Converse message formatting
         used by the simulate pipeline and the model back-ends.
CONTEXT: The final ComparisonOutput is checked against a schema before it leaves the
         pipeline, so a sanitizer regression shows up as an error rather than as a
         payload the renderer cannot draw.
"""

from __future__ import annotations

import json
import pathlib
from functools import lru_cache
from typing import Any, Dict

from jsonschema import Draft7Validator, ValidationError

SCHEMA_DIR = pathlib.Path(__file__).resolve().parent / "schemas"


# -------------------- Schema loading utilities -------------------- #

@lru_cache(maxsize=64)
def _load_schema_cached(abs_path: str) -> Dict[str, Any]:
    """Read and parse a JSON schema file, cached per absolute path."""
    p = pathlib.Path(abs_path)
    text = p.read_text(encoding="utf-8")
    return json.loads(text)


def load_schema(path: str) -> Dict[str, Any]:
    """
    Load a JSON schema by file name or path (with caching).

    parameters:
    - path: str – a name inside careersim/schemas/ (e.g. "decision_input.schema.json"),
      or a relative/absolute path.

    returns:
    - dict – schema as a Python dictionary.

    raises:
    - FileNotFoundError – if the file cannot be located.
    - json.JSONDecodeError – if the file is not valid JSON.
    """
    p = SCHEMA_DIR / path
    if not p.exists():
        # Fallback: treat it as a path relative to the working directory.
        p = pathlib.Path(path)
        if not p.exists():
            raise FileNotFoundError(f"Schema not found at: {path}")
    return _load_schema_cached(str(p.resolve()))


# -------------------- Validation helpers -------------------- #

def validate_with_schema(instance: Dict[str, Any], schema: Dict[str, Any]) -> None:
    """
    Validate a given instance against a provided schema.

    raises:
    - ValidationError – if instance fails to meet schema requirements.
    """
    Draft7Validator(schema).validate(instance)


def validate_comparison_output(output: Dict[str, Any]) -> None:
    """Validate the final comparison payload handed to clients."""
    validate_with_schema(output, load_schema("comparison_output.schema.json"))


def validate_decision_input_shape(payload: Dict[str, Any]) -> None:
    """
    Schema-check a DecisionInput produced by validation.py.
    The pipeline runs it right after validation; raw request bodies never come here.
    """
    validate_with_schema(payload, load_schema("decision_input.schema.json"))


# -------------------- Message construction helpers -------------------- #

def make_user_message(content: str) -> Dict[str, Any]:
    """
    Create a Converse user turn with a single text block.
    """
    return {"role": "user", "content": [{"text": str(content)}]}


def error_to_string(err: Exception) -> str:
    """
    Convert exceptions into readable strings for log lines and error bodies.

    returns:
    - str – "<message> at $.path" for ValidationError, "<Type>: <message>" otherwise.
    """
    if isinstance(err, ValidationError):
        # Include JSON path context (e.g. $.optionA.bestCase.probability)
        path = "$" + "".join(f"[{repr(p)}]" if isinstance(p, int) else f".{p}" for p in err.path)
        return f"{err.message} at {path}"
    return f"{type(err).__name__}: {err}"


__all__ = [
    "load_schema",
    "validate_with_schema",
    "validate_comparison_output",
    "validate_decision_input_shape",
    "make_user_message",
    "error_to_string",
]
