import json
from dataclasses import dataclass, field
from typing import Any, Dict, Union

from appbuilder.errors import InvalidStructure


CODE_FIELD = "code"
STRUCTURE_PREVIEW_LIMIT = 300


# ============================================================
# PAYLOAD VARIANTS
# ============================================================

@dataclass(frozen=True)
class StringPayload:
    """The model answered with a bare JSON string."""
    value: str


@dataclass(frozen=True)
class ObjectPayload:
    """The model answered with an object carrying the code in a named field."""
    field_name: str
    value: str
    data: Dict[str, Any] = field(default_factory=dict, compare=False)


Payload = Union[StringPayload, ObjectPayload]


# ============================================================
# VALIDATION (LLM TRUST BOUNDARY)
# ============================================================

def _structure_preview(parsed: Any) -> str:
    try:
        text = json.dumps(parsed)
    except (TypeError, ValueError):
        text = repr(parsed)
    return text[:STRUCTURE_PREVIEW_LIMIT]


def classify_payload(parsed: Any, code_field: str = CODE_FIELD) -> Payload:
    """
    Turn parsed model JSON into a payload variant.

    Accepts a non-empty string, or an object whose `code_field` is a
    non-empty string. Anything else raises InvalidStructure.
    """
    if isinstance(parsed, str):
        if parsed:
            return StringPayload(value=parsed)
    elif isinstance(parsed, dict):
        value = parsed.get(code_field)
        if isinstance(value, str) and value:
            return ObjectPayload(field_name=code_field, value=value, data=parsed)

    raise InvalidStructure(
        details=f"Model JSON missing '{code_field}' string",
        candidate=_structure_preview(parsed),
    )


def payload_code(payload: Payload) -> str:
    if isinstance(payload, StringPayload):
        return payload.value
    if isinstance(payload, ObjectPayload):
        return payload.value
    raise TypeError(f"Unsupported payload type: {type(payload).__name__}")
