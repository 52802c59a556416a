"""Assign a patient to a provider's patient list.

Usage:
    python -m scripts.assign_patient <provider_id> <patient_id>
"""
import sys

from app.core.database import init_mongo, to_object_id


def assign(db, provider_id: str, patient_id: str) -> bool:
    provider_oid = to_object_id(provider_id)
    patient_oid = to_object_id(patient_id)
    if provider_oid is None or patient_oid is None:
        raise ValueError("Both ids must be valid ObjectIds")

    users = db["users"]
    if users.find_one({"_id": patient_oid, "role": "patient"}) is None:
        raise LookupError(f"Patient not found: {patient_id}")

    result = users.update_one(
        {"_id": provider_oid, "role": "provider"},
        {"$addToSet": {"patients": patient_oid}},
    )
    if result.matched_count == 0:
        raise LookupError(f"Provider not found: {provider_id}")
    return result.modified_count == 1


if __name__ == "__main__":
    if len(sys.argv) != 3:
        print(__doc__)
        sys.exit(1)

    added = assign(init_mongo(), sys.argv[1], sys.argv[2])
    if added:
        print(f"✅ Patient {sys.argv[2]} assigned to provider {sys.argv[1]}")
    else:
        print(f"Patient {sys.argv[2]} was already assigned to provider {sys.argv[1]}")
