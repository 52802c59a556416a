"""Pydantic models and document builders for accounts.

Patients and providers live in the same ``users`` collection. The ``role``
tag decides which specialized fields a document carries.
"""
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.core.auth_utils import hash_password


class Role(str, Enum):
    PATIENT = "patient"
    PROVIDER = "provider"


COMMON_FIELDS = {"name", "email", "password"}
PATIENT_FIELDS = COMMON_FIELDS | {"age", "allergies", "currentMedications"}
PROVIDER_FIELDS = COMMON_FIELDS | {"specialty"}


class RegisterRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    # Required, checked in the route so a missing field is a 400
    name: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None
    role: Optional[str] = None

    # Patient
    age: Optional[int] = Field(None, ge=0)
    allergies: Optional[List[str]] = None
    current_medications: Optional[List[str]] = Field(None, alias="currentMedications")

    # Provider
    specialty: Optional[str] = None


class LoginRequest(BaseModel):
    email: Optional[str] = None
    password: Optional[str] = None


class ProfileUpdate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None
    age: Optional[int] = Field(None, ge=0)
    allergies: Optional[List[str]] = None
    current_medications: Optional[List[str]] = Field(None, alias="currentMedications")
    specialty: Optional[str] = None

    @field_validator("name", "email", "password")
    @classmethod
    def not_blank(cls, v):
        if v is not None and not v.strip():
            raise ValueError("must not be empty")
        return v

    def changes_for(self, role: str) -> dict:
        """Fields that were sent and are legal for an account of ``role``."""
        allowed = PROVIDER_FIELDS if role == Role.PROVIDER.value else PATIENT_FIELDS
        data = self.model_dump(by_alias=True, exclude_none=True)
        changes = {k: v for k, v in data.items() if k in allowed}
        if "password" in changes:
            changes["password"] = hash_password(changes["password"])
        return changes


class PatientCreate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: str
    email: str
    password: str
    age: Optional[int] = Field(None, ge=0)
    allergies: List[str] = []
    current_medications: List[str] = Field([], alias="currentMedications")


def new_patient_document(name, email, password, age=None, allergies=None, current_medications=None) -> dict:
    return {
        "name": name,
        "email": email,
        "password": hash_password(password),
        "role": Role.PATIENT.value,
        "age": age,
        "allergies": allergies or [],
        "currentMedications": current_medications or [],
        "goals": [],
    }


def new_provider_document(name, email, password, specialty=None) -> dict:
    return {
        "name": name,
        "email": email,
        "password": hash_password(password),
        "role": Role.PROVIDER.value,
        "specialty": specialty or "",
        "patients": [],
    }
