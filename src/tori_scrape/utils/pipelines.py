from __future__ import annotations

from typing import Any

from pydantic import BaseModel


def jsonify(obj: Any) -> Any:
    """Convert Pydantic models (and lists/tuples of them) to JSON-serializable data.

    - Calls ``model_dump(mode="json")`` on BaseModel instances so fields like
      ``datetime`` serialize as ISO 8601 strings.
    - Leaves plain values untouched.
    """
    if isinstance(obj, BaseModel):
        return obj.model_dump(mode="json")
    if isinstance(obj, (list, tuple)):
        return [jsonify(o) for o in obj]
    return obj


def outcome_summary(outcome: Any) -> dict[str, Any]:
    """Counts used by the CLI's text output and log lines."""
    return {
        "items": len(outcome.items),
        "failures": len(outcome.failures),
        "error": outcome.error.stage if outcome.error is not None else None,
    }
