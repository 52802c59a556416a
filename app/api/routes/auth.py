"""Authentication routes.

Accounts register and log in here; both return a signed bearer token
carrying the account id and role.
"""
from fastapi import APIRouter, HTTPException
from pymongo.errors import DuplicateKeyError

from app.core.auth_utils import create_access_token, verify_password
from app.core.database import get_db
from app.models.account import (
    LoginRequest,
    RegisterRequest,
    Role,
    new_patient_document,
    new_provider_document,
)
from app.services.logger import log_debug

router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.post("/register", status_code=201)
async def register(payload: RegisterRequest):
    """Register a new account. Defaults to a patient when no role is given."""
    if not payload.name or not payload.email or not payload.password:
        raise HTTPException(status_code=400, detail="Name, email and password are required")

    role = payload.role or Role.PATIENT.value
    if role not in {r.value for r in Role}:
        raise HTTPException(status_code=400, detail=f"Invalid role: {role}")

    users = get_db()["users"]
    if users.find_one({"email": payload.email}):
        raise HTTPException(status_code=400, detail="User already exists")

    if role == Role.PROVIDER.value:
        doc = new_provider_document(
            payload.name,
            payload.email,
            payload.password,
            specialty=payload.specialty,
        )
    else:
        doc = new_patient_document(
            payload.name,
            payload.email,
            payload.password,
            age=payload.age if payload.age is not None else 0,
            allergies=payload.allergies,
            current_medications=payload.current_medications,
        )

    try:
        result = users.insert_one(doc)
    except DuplicateKeyError as exc:
        # Lost a race with a concurrent registration for the same email
        raise HTTPException(status_code=400, detail="User already exists") from exc

    log_debug("account_registered", {"id": result.inserted_id, "role": role})
    token = create_access_token(result.inserted_id, role)
    return {"message": "User registered successfully", "token": token}


@router.post("/login")
async def login(payload: LoginRequest):
    user = get_db()["users"].find_one({"email": payload.email}) if payload.email else None

    if not user or not verify_password(user.get("password"), payload.password):
        log_debug("login_failed", {"email": payload.email})
        raise HTTPException(status_code=400, detail="Invalid credentials")

    return {"token": create_access_token(user["_id"], user["role"])}
