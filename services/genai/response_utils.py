"""Helpers to pull text out of Responses API payloads."""

import json
from typing import Any, Optional


def extract_text(response: Any) -> Optional[str]:
    """Return the model's text output, or None if the response carries none."""
    text = getattr(response, "output_text", None)
    if text:
        return text

    chunks = []
    for item in getattr(response, "output", None) or []:
        if getattr(item, "type", None) != "message":
            continue
        for content in getattr(item, "content", None) or []:
            if getattr(content, "type", None) == "output_text":
                chunks.append(getattr(content, "text", "") or "")
    return "".join(chunks) or None


def serialize_response(response: Any) -> str:
    """Convert a response object into a JSON string for logging or fallback text."""
    if hasattr(response, "model_dump_json"):
        return response.model_dump_json()
    if hasattr(response, "model_dump"):
        return json.dumps(response.model_dump(), default=str)
    if hasattr(response, "to_dict"):
        return json.dumps(response.to_dict(), default=str)
    return str(response)
