"""Normalization of agent results into display text.

Hides the priority order used to dig text out of heterogeneous payloads.
Extraction is total: it never raises, whatever the payload looks like.
"""

import json
from typing import Any

from .models import AgentResult

DEFAULT_RESPONSE_TEXT = "Sorry, I could not generate a response."
EXTRACTION_ERROR_TEXT = "An error occurred while processing the response."


def _as_text(value: Any) -> str:
    """Coerce a field value to text; falsy values become empty."""
    if not value:
        return ""
    return value if isinstance(value, str) else str(value)


def _text_or_message(data: dict[str, Any]) -> str:
    return _as_text(data.get("text")) or _as_text(data.get("message"))


def _from_text_payload(payload: str) -> str:
    try:
        parsed = json.loads(payload)
    except ValueError:
        return payload
    if isinstance(parsed, dict):
        return _text_or_message(parsed) or payload
    return payload


def _from_structured_payload(payload: dict[str, Any] | list[Any]) -> str:
    if isinstance(payload, dict):
        text = _text_or_message(payload)
        if text:
            return text
    return json.dumps(payload, ensure_ascii=False, default=str)


def extract_response_text(raw: AgentResult | Any) -> str:
    """Extract the display text from an agent result.

    Priority:
    1. ``response.result`` as text: parsed as JSON for a ``text`` or ``message``
       field, else used verbatim
    2. ``response.result`` as structured data: its ``text`` or ``message`` field,
       else the whole payload serialized as JSON
       (any other payload type, such as a number, is skipped)
    3. ``response.message``, then the top-level ``message``, then a default

    Args:
        raw: An AgentResult or a raw mapping in the same shape

    Returns:
        Display text; never raises
    """
    try:
        result = raw if isinstance(raw, AgentResult) else AgentResult.model_validate(raw)

        text = ""
        payload = result.response.result if result.response else None
        if isinstance(payload, str) and payload:
            text = _from_text_payload(payload)
        elif isinstance(payload, (dict, list)):
            text = _from_structured_payload(payload)

        if not text:
            text = (
                _as_text(result.response.message if result.response else None)
                or _as_text(result.message)
                or DEFAULT_RESPONSE_TEXT
            )
        return text
    except Exception:
        return EXTRACTION_ERROR_TEXT
