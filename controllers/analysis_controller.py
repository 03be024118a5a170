"""CRUD controller for stored skin assessments."""

from __future__ import annotations

from typing import Any, Dict, Optional

from dal.analysis_dal import LIST_LIMIT, AnalysisDAL
from models.analysis_record import AnalysisRecord
from utils.errors import NotFound, ValidationError


async def create_analysis(
    dal: AnalysisDAL,
    *,
    result: Any,
    image_name: Optional[str] = None,
    notes: Optional[str] = None,
    refer_to_derm: Optional[bool] = None,
) -> Dict[str, Any]:
    """Persist a new assessment and return it.

    Raises:
        ValidationError: If `result` is missing.
    """
    if result is None:
        raise ValidationError("result is required")

    record = AnalysisRecord(
        id=None,
        result=result,
        image_name=image_name,
        notes=notes,
        refer_to_derm=bool(refer_to_derm),
    )
    saved = await dal.create_analysis(record)
    return {"success": True, "analysis": saved.to_dict()}


async def list_analyses(dal: AnalysisDAL) -> Dict[str, Any]:
    """Return up to 100 assessments, newest first."""
    records = await dal.list_analyses(limit=LIST_LIMIT)
    return {"success": True, "analyses": [r.to_dict() for r in records]}


async def get_analysis(dal: AnalysisDAL, analysis_id: str) -> Dict[str, Any]:
    record = await dal.get_analysis_by_id(analysis_id)
    if record is None:
        raise NotFound()
    return {"success": True, "analysis": record.to_dict()}


async def update_analysis(dal: AnalysisDAL, analysis_id: str, changes: Dict[str, Any]) -> Dict[str, Any]:
    """Apply the provided fields to an assessment.

    Args:
        dal: Data access layer for assessments.
        analysis_id: Identifier of the record to update.
        changes: Only the fields the client sent, keyed by record attribute name.

    Raises:
        ValidationError: If the update would clear `result`.
        NotFound: If no record has that id.
    """
    if "result" in changes and changes["result"] is None:
        raise ValidationError("result is required")

    updated = await dal.update_analysis(analysis_id, changes)
    if updated is None:
        raise NotFound()
    return {"success": True, "analysis": updated.to_dict()}


async def delete_analysis(dal: AnalysisDAL, analysis_id: str) -> Dict[str, Any]:
    removed = await dal.delete_analysis(analysis_id)
    if not removed:
        raise NotFound()
    return {"success": True}
