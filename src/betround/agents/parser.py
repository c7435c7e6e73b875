"""Turn raw action payloads into ActionDecisions.

Payloads look like ``{"action": "raise", "amount": 300}`` and are validated
against ``schema.json`` before conversion. BET/RAISE may omit ``amount``;
the engine then sizes them to the minimum.
"""

import json
from functools import lru_cache
from pathlib import Path

import jsonschema
import yaml

from betround.core.errors import DecisionParseError
from betround.core.types import Action, ActionDecision

_SCHEMA_PATH = Path(__file__).parent / "schema.json"


@lru_cache(maxsize=1)
def load_action_schema() -> dict:
    """Load the action JSON Schema shipped with the package."""
    with open(_SCHEMA_PATH) as f:
        return json.load(f)


def parse_decision(payload: dict) -> ActionDecision:
    """Validate ``payload`` and convert it. Raises DecisionParseError."""
    if not isinstance(payload, dict):
        raise DecisionParseError(f"Action payload must be an object, got {type(payload).__name__}")
    try:
        jsonschema.validate(payload, load_action_schema())
    except jsonschema.ValidationError as e:
        raise DecisionParseError(f"Schema validation: {e.message}") from e
    return ActionDecision(Action(payload["action"]), payload.get("amount"))


def load_decisions(path: Path) -> list[ActionDecision]:
    """Read a JSON or YAML file holding a list of action payloads."""
    path = Path(path)
    try:
        with open(path) as f:
            if path.suffix in (".yaml", ".yml"):
                raw = yaml.safe_load(f)
            else:
                raw = json.load(f)
    except OSError as e:
        raise DecisionParseError(f"{path}: {e.strerror or e}") from e
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise DecisionParseError(f"{path}: malformed action file: {e}") from e
    if not isinstance(raw, list):
        raise DecisionParseError(f"{path} must contain a list of actions")
    return [parse_decision(item) for item in raw]
