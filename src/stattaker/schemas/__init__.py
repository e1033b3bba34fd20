"""JSON Schema definitions and loaders for workflow definition files.

Schemas:
    - workflow.schema.json: list of workflows (steps, options, branching)

Usage:
    from stattaker.schemas import load_workflows

    workflows = load_workflows(Path("workflows.json"))  # Raises ConfigurationError
"""

from __future__ import annotations

import json
from importlib.resources import files
from pathlib import Path
from typing import Any

import jsonschema

from stattaker.domain.exceptions import ConfigurationError
from stattaker.domain.models import Option, Step, WorkflowDefinition


def _load_schema(name: str) -> dict[str, Any]:
    """Load a JSON schema from the schemas package.

    Args:
        name: Schema filename (e.g., 'workflow.schema.json')

    Returns:
        Parsed JSON schema as a dictionary
    """
    schema_text = files("stattaker.schemas").joinpath(name).read_text()
    result: dict[str, Any] = json.loads(schema_text)
    return result


def get_workflow_schema() -> dict[str, Any]:
    """Get the workflow definitions schema."""
    return _load_schema("workflow.schema.json")


def validate_workflows(data: Any) -> None:
    """Validate workflow definitions against the schema.

    Args:
        data: Parsed JSON list of workflows

    Raises:
        jsonschema.ValidationError: If validation fails
    """
    jsonschema.validate(data, get_workflow_schema())


def _option_from_dict(data: dict[str, Any]) -> Option:
    return Option(
        id=data["id"],
        label=data["label"],
        next_step_id=data.get("next_step_id"),
        event_type_id=data.get("event_type_id"),
        collect_participant=data.get("collect_participant", False),
        participant_prompt=data.get("participant_prompt"),
        participant_copy_step_id=data.get("participant_copy_step_id"),
        collect_value=data.get("collect_value", False),
        value_prompt=data.get("value_prompt"),
        display_order=data.get("display_order", 0),
    )


def workflow_from_dict(data: dict[str, Any]) -> WorkflowDefinition:
    """Build a WorkflowDefinition from validated JSON. Options keep display order."""
    steps = tuple(
        Step(
            id=s["id"],
            prompt=s["prompt"],
            options=tuple(
                sorted(
                    (_option_from_dict(o) for o in s["options"]),
                    key=lambda o: o.display_order,
                )
            ),
        )
        for s in data["steps"]
    )
    return WorkflowDefinition(
        id=data["id"],
        name=data["name"],
        first_step_id=data.get("first_step_id"),
        system_reserved=data.get("system_reserved", False),
        steps=steps,
        display_order=data.get("display_order", 0),
    )


def parse_workflows(data: Any) -> list[WorkflowDefinition]:
    """Validate and convert a parsed JSON document.

    Raises:
        ConfigurationError: If the document violates the schema
    """
    try:
        validate_workflows(data)
    except jsonschema.ValidationError as e:
        location = "/".join(str(p) for p in e.absolute_path) or "<root>"
        raise ConfigurationError(f"Invalid workflow definitions at {location}: {e.message}") from e
    return [workflow_from_dict(w) for w in data]


def load_workflows(path: Path) -> list[WorkflowDefinition]:
    """
    Load workflow definitions from a JSON file.

    Args:
        path: Path to the definitions file

    Returns:
        Workflows in file order

    Raises:
        ConfigurationError: If file is missing or invalid
    """
    if not path.exists():
        raise ConfigurationError(f"Workflow file not found: {path}")

    try:
        with open(path) as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"Invalid JSON in {path}: {e}") from e

    return parse_workflows(data)


__all__ = [
    "get_workflow_schema",
    "validate_workflows",
    "workflow_from_dict",
    "parse_workflows",
    "load_workflows",
]
