"""Profile routes for the authenticated account."""
from fastapi import APIRouter, Body, Depends, HTTPException
from pymongo import ReturnDocument
from pymongo.errors import DuplicateKeyError

from app.api.deps import get_current_user
from app.core.database import get_db, serialize, to_object_id
from app.models.account import ProfileUpdate

router = APIRouter(prefix="/api/profile", tags=["profile"])

NO_PASSWORD = {"password": 0}


@router.get("")
async def get_profile(user=Depends(get_current_user)):
    account_id = to_object_id(user["id"])
    account = get_db()["users"].find_one({"_id": account_id}, NO_PASSWORD) if account_id else None
    if not account:
        raise HTTPException(status_code=404, detail="User not found")
    return serialize(account)


@router.put("")
async def update_profile(
    changes: ProfileUpdate = Body(...),
    user=Depends(get_current_user),
):
    """Update the caller's profile.

    The role never changes; fields that do not belong to the account's role
    are ignored.
    """
    account_id = to_object_id(user["id"])
    users = get_db()["users"]
    account = users.find_one({"_id": account_id}, {"role": 1}) if account_id else None
    if not account:
        raise HTTPException(status_code=404, detail="User not found")

    data = changes.changes_for(account["role"])
    if data.get("email"):
        taken = users.find_one({"email": data["email"], "_id": {"$ne": account_id}})
        if taken:
            raise HTTPException(status_code=400, detail="Email already in use")

    try:
        if data:
            updated = users.find_one_and_update(
                {"_id": account_id},
                {"$set": data},
                projection=NO_PASSWORD,
                return_document=ReturnDocument.AFTER,
            )
        else:
            updated = users.find_one({"_id": account_id}, NO_PASSWORD)
    except DuplicateKeyError as exc:
        raise HTTPException(status_code=400, detail="Email already in use") from exc

    if not updated:
        raise HTTPException(status_code=404, detail="User not found")
    return {"message": "Profile updated successfully", "user": serialize(updated)}
