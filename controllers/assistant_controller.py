"""Controller for the free-text dermatology assistant."""

import logging
from typing import Any, Dict, Optional, Union

from fastapi.responses import JSONResponse

from models.generation import GenerationRequest, TextPart
from services.genai import response_shaper
from services.genai.prompts import ASSISTANT_SYSTEM_PROMPT
from services.genai.retrying_invoker import RetryingInvoker
from utils.errors import ModelUnavailable, ValidationError

LOGGER = logging.getLogger(__name__)


class AssistantController:
    """Forward user prompts to the model and shape the reply."""

    def __init__(self, invoker: RetryingInvoker, model_id: str) -> None:
        self.invoker = invoker
        self.model_id = model_id

    def build_request(self, prompt: str) -> GenerationRequest:
        return GenerationRequest.build(self.model_id, TextPart(ASSISTANT_SYSTEM_PROMPT), TextPart(prompt))

    async def reply(self, prompt: Optional[str]) -> Union[Dict[str, Any], JSONResponse]:
        """Return the model's reply, or a 503 fallback if the model stays unavailable.

        Raises:
            ValidationError: If `prompt` is missing or empty. The model is not called.
        """
        if not prompt:
            raise ValidationError("Missing prompt")

        try:
            result = await self.invoker.invoke(self.build_request(prompt))
        except ModelUnavailable as exc:
            LOGGER.error("Assistant final error: %s", exc)
            return JSONResponse(
                status_code=503,
                content=response_shaper.unavailable_body(response_shaper.ASSISTANT),
            )
        return response_shaper.assistant_success_body(result.text)
