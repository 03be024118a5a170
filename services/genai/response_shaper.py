"""Normalize model output into response bodies, and supply fallbacks.

Everything here is a pure function of its inputs. Fallback payloads depend
only on the endpoint and failure kind, never on partial model output.
"""

from __future__ import annotations

import copy
import json
import re
from dataclasses import dataclass
from typing import Any, Dict, Optional, Union

ANALYSIS = "analysis"
ASSISTANT = "assistant"
MODEL_UNAVAILABLE = "model_unavailable"

ANALYSIS_FALLBACK: Dict[str, Any] = {
    "diagnosis": "other",
    "differential": ["acne", "contact_dermatitis"],
    "confidence": 45,
    "severity": "low",
    "treatment_recommendations": [
        "Keep area clean",
        "Use gentle cleanser",
        "Apply non-comedogenic moisturizer",
        "Avoid irritants",
    ],
    "refer_to_dermatologist": False,
    "notes": "Model unavailable; returning conservative suggestions.",
    "disclaimer": "Not a medical diagnosis; consult a dermatologist.",
}

ASSISTANT_FALLBACK_TEXT = (
    "I'm temporarily unable to reach the AI model. Here are some general skin care tips: "
    "keep skin clean, avoid picking lesions, use gentle sunscreen, and consult a "
    "dermatologist for persistent issues."
)

_FALLBACKS: Dict[tuple, Any] = {
    (ANALYSIS, MODEL_UNAVAILABLE): ANALYSIS_FALLBACK,
    (ASSISTANT, MODEL_UNAVAILABLE): ASSISTANT_FALLBACK_TEXT,
}

# Body key under which each endpoint carries its fallback.
_FALLBACK_KEYS = {ANALYSIS: "result", ASSISTANT: "text"}

_CODE_FENCE = re.compile(r"^```[A-Za-z0-9_-]*\s*\n?(.*?)\n?\s*```$", re.DOTALL)


@dataclass(frozen=True)
class StructuredResult:
    value: Dict[str, Any]

    def to_payload(self) -> Dict[str, Any]:
        return self.value


@dataclass(frozen=True)
class RawTextResult:
    text: str

    def to_payload(self) -> Dict[str, Any]:
        return {"rawText": self.text}


AnalysisResult = Union[StructuredResult, RawTextResult]


def _strip_code_fence(text: str) -> str:
    match = _CODE_FENCE.match(text.strip())
    return match.group(1) if match else text


def shape_analysis_text(text: Optional[str]) -> AnalysisResult:
    """Parse model text as a JSON object, or wrap it verbatim as raw text.

    A JSON object (optionally inside one Markdown code fence) becomes a
    `StructuredResult`. Anything else, including JSON scalars and arrays, is
    kept as `RawTextResult` holding the original text.
    """
    original = text or ""
    try:
        parsed = json.loads(_strip_code_fence(original))
    except ValueError:
        return RawTextResult(original)
    if isinstance(parsed, dict):
        return StructuredResult(parsed)
    return RawTextResult(original)


def analysis_success_body(result: AnalysisResult) -> Dict[str, Any]:
    return {"success": True, "result": result.to_payload()}


def assistant_success_body(text: Optional[str]) -> Dict[str, Any]:
    """The assistant returns model text as-is; no JSON parsing is attempted."""
    return {"success": True, "text": text or ""}


def fallback_payload(endpoint: str, failure_kind: str = MODEL_UNAVAILABLE) -> Any:
    """Return a fresh copy of the fixed degraded payload for `endpoint`.

    Raises:
        KeyError: If no fallback is defined for the combination.
    """
    try:
        return copy.deepcopy(_FALLBACKS[(endpoint, failure_kind)])
    except KeyError:
        raise KeyError(f"No fallback defined for {endpoint!r}/{failure_kind!r}") from None


def unavailable_body(endpoint: str) -> Dict[str, Any]:
    """Body for the 503 response sent when every model attempt failed."""
    return {
        "success": False,
        "error": "model unavailable",
        _FALLBACK_KEYS[endpoint]: fallback_payload(endpoint, MODEL_UNAVAILABLE),
    }
