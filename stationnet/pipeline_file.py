"""YAML loader + schema validation for pipeline files.

Parses a YAML string, rejects unknown top-level keys, validates the result
against the packaged JSON schema and returns a plain dictionary.
"""

from __future__ import annotations

import json
from importlib import resources
from typing import Any, Dict

import jsonschema
import yaml

RECOGNIZED_KEYS = {"stations", "routes", "seed", "loader", "render"}


def load_pipeline_yaml(yaml_str: str) -> Dict[str, Any]:
    """Load and validate a pipeline YAML string.

    Raises:
        ValueError: If the document is not a mapping or has unknown top-level keys.
        jsonschema.ValidationError: If the document does not match the schema.
    """
    data = yaml.safe_load(yaml_str)
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ValueError("The provided YAML must map to a dictionary at top-level.")

    extra = set(map(str, data)) - RECOGNIZED_KEYS
    if extra:
        raise ValueError(
            f"Unrecognized top-level key(s) in pipeline: {', '.join(sorted(extra))}. "
            f"Allowed keys are {sorted(RECOGNIZED_KEYS)}"
        )

    with (
        resources.files("stationnet.schemas")
        .joinpath("pipeline.json")
        .open("r", encoding="utf-8")
    ) as f:
        schema_data = json.load(f)

    jsonschema.validate(data, schema_data)
    return data
