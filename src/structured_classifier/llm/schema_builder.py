"""
JSON Schema construction for constrained classification output.

The schema is rebuilt for every request from the caller's label set.
"""

from typing import Any, Dict, Sequence


def build_schema(labels: Sequence[str]) -> Dict[str, Any]:
    """
    Build the strict output schema for a closed label set.

    ``label`` is enumerated to exactly the given labels (order and text
    preserved), ``reason`` is a free string, both are required and no other
    property is allowed.

    Args:
        labels: Non-empty sequence of unique labels (validated by the caller)

    Returns:
        Fresh JSON Schema dict, safe to mutate
    """
    return {
        "type": "object",
        "additionalProperties": False,
        "properties": {
            "label": {"type": "string", "enum": list(labels)},
            "reason": {"type": "string"},
        },
        "required": ["label", "reason"],
    }
