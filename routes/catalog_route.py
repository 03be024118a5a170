from fastapi import APIRouter

from services.condition_catalog import list_conditions

router = APIRouter(tags=["catalog"])


@router.get("/api/health")
async def health():
    return {"ok": True}


@router.get("/common-conditions")
async def common_conditions():
    """Return the curated list of common facial skin conditions."""
    return {"success": True, "conditions": list_conditions()}
