"""Value types exchanged with the generative model client."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple, Union


@dataclass(frozen=True)
class TextPart:
    text: str


@dataclass(frozen=True)
class InlineMediaPart:
    """Binary content sent inline with the request (e.g. an uploaded photo)."""

    media_type: str
    data: bytes


ContentPart = Union[TextPart, InlineMediaPart]


@dataclass(frozen=True)
class GenerationRequest:
    """A single model call: the model identifier plus ordered content parts.

    Raises:
        ValueError: If there are no content parts.
        TypeError: If a part is neither a TextPart nor an InlineMediaPart.
    """

    model_id: str
    content: Tuple[ContentPart, ...]

    def __post_init__(self) -> None:
        if not self.content:
            raise ValueError("A generation request needs at least one content part.")
        for part in self.content:
            if not isinstance(part, (TextPart, InlineMediaPart)):
                raise TypeError(f"Unsupported content part: {type(part).__name__}")

    @classmethod
    def build(cls, model_id: str, *parts: ContentPart) -> "GenerationRequest":
        return cls(model_id=model_id, content=tuple(parts))


@dataclass(frozen=True)
class GenerationResult:
    text: Optional[str] = None
