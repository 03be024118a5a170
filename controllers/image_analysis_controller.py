"""Controller for photo-based skin assessments."""

import logging
from typing import Any, Dict, Union

from fastapi.responses import JSONResponse

from models.generation import GenerationRequest, InlineMediaPart, TextPart
from services.genai import response_shaper
from services.genai.prompts import ANALYSIS_PROMPT
from services.genai.retrying_invoker import RetryingInvoker
from utils.errors import ModelUnavailable

LOGGER = logging.getLogger(__name__)


class ImageAnalysisController:
    """Send an uploaded photo to the model and return a structured assessment."""

    def __init__(self, invoker: RetryingInvoker, model_id: str) -> None:
        self.invoker = invoker
        self.model_id = model_id

    def build_request(self, image_bytes: bytes, media_type: str) -> GenerationRequest:
        return GenerationRequest.build(
            self.model_id,
            InlineMediaPart(media_type=media_type, data=image_bytes),
            TextPart(ANALYSIS_PROMPT),
        )

    async def analyze(self, image_bytes: bytes, media_type: str) -> Union[Dict[str, Any], JSONResponse]:
        """Assess the image.

        Returns:
            `{"success": True, "result": ...}` where result is the parsed JSON
            object or a `{"rawText": ...}` wrapper; a 503 `JSONResponse` with the
            fixed fallback assessment when every model attempt failed.
        """
        try:
            result = await self.invoker.invoke(self.build_request(image_bytes, media_type))
        except ModelUnavailable as exc:
            LOGGER.error("Analyze final error: %s", exc)
            return JSONResponse(
                status_code=503,
                content=response_shaper.unavailable_body(response_shaper.ANALYSIS),
            )

        shaped = response_shaper.shape_analysis_text(result.text)
        if isinstance(shaped, response_shaper.RawTextResult):
            LOGGER.warning("Model output was not a JSON object; returning raw text.")
        return response_shaper.analysis_success_body(shaped)
