"""
JSON Schema generator for projection models.

This module generates the JSON schemas of the projection request and result
models and saves them to files for use by the front end and other systems.
"""

import json
from pathlib import Path
from typing import Any, Dict

from .household import ProjectionRequest
from .projection_result import ProjectionResult


def generate_request_schema() -> Dict[str, Any]:
    """Generate JSON schema for the ProjectionRequest model."""
    return ProjectionRequest.model_json_schema()


def generate_result_schema() -> Dict[str, Any]:
    """Generate JSON schema for the ProjectionResult model."""
    return ProjectionResult.model_json_schema(mode="serialization")


def save_request_schema(output_path: Path) -> None:
    """Save the projection request JSON schema to a file."""
    schema = generate_request_schema()

    schema.update(
        {
            "$schema": "http://json-schema.org/draft-07/schema#",
            "title": "Household Projection Request",
            "description": "Income streams, assets, liabilities, configuration and estate parameters for one projection run",
        }
    )

    output_path.parent.mkdir(parents=True, exist_ok=True)
    with open(output_path, "w") as f:
        json.dump(schema, f, indent=2)


if __name__ == "__main__":
    schema_path = Path(__file__).parent.parent.parent / "schema" / "projection_request.json"
    save_request_schema(schema_path)
    print(f"Schema saved to {schema_path}")
