"""FastAPI route for the conversational dermatology assistant."""

import logging
from typing import Optional

from fastapi import APIRouter, Request
from pydantic import BaseModel

from controllers.assistant_controller import AssistantController
from routes.app_state import get_invoker, get_settings
from utils.errors import ApiError

LOGGER = logging.getLogger(__name__)

router = APIRouter(tags=["assistant"])


class AssistantPayload(BaseModel):
    prompt: Optional[str] = None


@router.post("/api/assistant")
async def assistant_route(request: Request, payload: Optional[AssistantPayload] = None):
    """Proxy a text prompt to the model and return its reply."""
    prompt = payload.prompt if payload is not None else None
    try:
        controller = AssistantController(get_invoker(request), get_settings(request).model_id)
        return await controller.reply(prompt)
    except ApiError:
        raise
    except Exception as exc:
        LOGGER.exception("Assistant error")
        raise ApiError(str(exc) or "assistant error") from exc
