"""Wellness tip routes."""
from fastapi import APIRouter, Depends, HTTPException

from app.api.deps import require_role
from app.core.database import get_db, serialize
from app.models.account import Role

router = APIRouter(prefix="/api/tips", tags=["tips"])


@router.get("")
async def random_tip(
    user=Depends(require_role([Role.PATIENT.value], "Only patients can view tips")),
):
    """Return one tip picked uniformly at random."""
    tips = list(get_db()["tips"].aggregate([{"$sample": {"size": 1}}]))
    if not tips:
        raise HTTPException(status_code=404, detail="No tips found")
    return {"tip": serialize(tips[0])}
