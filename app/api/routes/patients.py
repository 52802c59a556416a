"""Patient-related API routes."""

from fastapi import APIRouter, Body

from app.core.database import get_db, serialize
from app.models.account import PatientCreate, new_patient_document

router = APIRouter(prefix="/api/patient", tags=["patients"])


# TEMPORARY DEV ENDPOINT (NO AUTH)
@router.api_route("/test", methods=["GET", "POST"], status_code=201)
async def create_test_patient(payload: PatientCreate = Body(...)):
    """Create a patient with allergies and current medications, for testing."""
    doc = new_patient_document(
        payload.name,
        payload.email,
        payload.password,
        age=payload.age,
        allergies=payload.allergies,
        current_medications=payload.current_medications,
    )
    # A duplicate email surfaces as a 500 from the store
    result = get_db()["users"].insert_one(doc)
    doc["_id"] = result.inserted_id
    doc.pop("password", None)

    return {
        "message": "Patient created successfully",
        "patient": serialize(doc),
    }
