"""Thin adapter over OpenAI's Responses API for generation requests."""

import base64
import logging
from typing import Any, Dict, List, Optional

from openai import AsyncOpenAI

from models.generation import GenerationRequest, GenerationResult, InlineMediaPart, TextPart
from services.genai.response_utils import extract_text, serialize_response

LOGGER = logging.getLogger(__name__)


class ModelClient:
    """Send a `GenerationRequest` to the model and return its text output."""

    def __init__(self, client: Optional[AsyncOpenAI]) -> None:
        """Initialize with a shared async OpenAI client.

        Args:
            client: Client created at startup. None means the model is not
                configured; every call then fails and callers fall back.
        """
        self.client = client

    @staticmethod
    def _encode_media(part: InlineMediaPart) -> str:
        """Encode inline bytes to a base64 data URL string."""
        encoded = base64.b64encode(part.data).decode("utf-8")
        return f"data:{part.media_type};base64,{encoded}"

    def _build_input(self, request: GenerationRequest) -> List[Dict[str, Any]]:
        """Map content parts, in order, onto a single user message.

        Part types are checked when the request is built.
        """
        content: List[Dict[str, Any]] = []
        for part in request.content:
            if isinstance(part, TextPart):
                content.append({"type": "input_text", "text": part.text})
            else:
                content.append({"type": "input_image", "image_url": self._encode_media(part)})
        return [{"type": "message", "role": "user", "content": content}]

    async def generate(self, request: GenerationRequest) -> GenerationResult:
        """Run one generation call. Raises on any transport or API error."""
        if self.client is None:
            raise RuntimeError("OpenAI client is not configured.")

        response = await self.client.responses.create(
            model=request.model_id,
            input=self._build_input(request),
        )
        text = extract_text(response)
        if text is None:
            LOGGER.warning("Model response carried no text output; returning serialized response.")
            text = serialize_response(response)
        return GenerationResult(text=text)

    async def aclose(self) -> None:
        if self.client is not None:
            await self.client.close()
