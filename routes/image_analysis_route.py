"""FastAPI route for photo-based skin assessment."""

import logging

from fastapi import APIRouter, Request

from controllers.image_analysis_controller import ImageAnalysisController
from routes.app_state import get_invoker, get_settings
from utils.errors import ApiError
from utils.media_validation import read_image_upload

LOGGER = logging.getLogger(__name__)

router = APIRouter(tags=["analyze-image"])

IMAGE_FIELD = "image"


@router.post("/api/analyze-image")
async def analyze_image_route(request: Request):
    """Handle a multipart upload (field "image") and return the model's assessment.

    The form is read directly so that a missing file, a plain text value, or a
    file part without a filename all answer with the same "No image uploaded".

    Args:
        request: The FastAPI request containing application state and the form.

    Returns:
        `{"success": True, "result": ...}`, or a 503 response carrying the
        fallback assessment when the model could not be reached.

    Raises:
        ApiError: 400 when no image was sent, 413 when it is too large, 500 otherwise.
    """
    settings = get_settings(request)
    try:
        async with request.form() as form:
            image_bytes, media_type = await read_image_upload(
                form.get(IMAGE_FIELD), settings.max_upload_bytes
            )
        controller = ImageAnalysisController(get_invoker(request), settings.model_id)
        return await controller.analyze(image_bytes, media_type)
    except ApiError:
        raise
    except Exception as exc:
        LOGGER.exception("Analyze error")
        raise ApiError(str(exc) or "server error", envelope=False) from exc
