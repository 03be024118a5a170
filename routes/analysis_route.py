"""FastAPI routes for stored skin assessments."""

import logging
from typing import Any, Optional

from fastapi import APIRouter, Request
from pydantic import BaseModel, ConfigDict, Field

from controllers import analysis_controller
from routes.app_state import get_analysis_dal
from utils.errors import ApiError, StoreError

LOGGER = logging.getLogger(__name__)

router = APIRouter(prefix="/api/analyses", tags=["analyses"])


class AnalysisPayload(BaseModel):
    """Record fields accepted on create and update; unknown keys are ignored."""

    model_config = ConfigDict(populate_by_name=True)

    image_name: Optional[str] = Field(default=None, alias="imageName")
    result: Any = None
    notes: Optional[str] = None
    refer_to_derm: Optional[bool] = Field(default=None, alias="referToDerm")


def _store_failure(action: str, exc: Exception) -> StoreError:
    LOGGER.exception("%s analysis error", action)
    return StoreError(str(exc))


@router.post("")
async def create_analysis_route(request: Request, payload: AnalysisPayload):
    try:
        return await analysis_controller.create_analysis(
            get_analysis_dal(request),
            result=payload.result,
            image_name=payload.image_name,
            notes=payload.notes,
            refer_to_derm=payload.refer_to_derm,
        )
    except ApiError:
        raise
    except Exception as exc:
        raise _store_failure("Create", exc) from exc


@router.get("")
async def list_analyses_route(request: Request):
    try:
        return await analysis_controller.list_analyses(get_analysis_dal(request))
    except ApiError:
        raise
    except Exception as exc:
        raise _store_failure("List", exc) from exc


@router.get("/{analysis_id}")
async def get_analysis_route(request: Request, analysis_id: str):
    try:
        return await analysis_controller.get_analysis(get_analysis_dal(request), analysis_id)
    except ApiError:
        raise
    except Exception as exc:
        raise _store_failure("Get", exc) from exc


@router.put("/{analysis_id}")
async def update_analysis_route(request: Request, analysis_id: str, payload: AnalysisPayload):
    """Update only the fields present in the request body."""
    try:
        return await analysis_controller.update_analysis(
            get_analysis_dal(request), analysis_id, payload.model_dump(exclude_unset=True)
        )
    except ApiError:
        raise
    except Exception as exc:
        raise _store_failure("Update", exc) from exc


@router.delete("/{analysis_id}")
async def delete_analysis_route(request: Request, analysis_id: str):
    try:
        return await analysis_controller.delete_analysis(get_analysis_dal(request), analysis_id)
    except ApiError:
        raise
    except Exception as exc:
        raise _store_failure("Delete", exc) from exc
