"""Goal tracking routes.

Patients create, edit and list their own goals. Providers list the goals
of the patients assigned to them and set a goal's status. Goals are
embedded in the patient document, so every write replaces the patient's
goal list.
"""
from typing import Any, Dict, List

from fastapi import APIRouter, Depends, HTTPException, Request
from pydantic import ValidationError

from app.api.deps import require_role
from app.core.database import get_db, serialize, to_object_id
from app.models.account import Role
from app.models.goal import (
    GoalCreate,
    GoalStatusUpdate,
    GoalUpdate,
    find_goal,
    is_valid_status,
    new_goal,
)
from app.services.logger import log_debug

router = APIRouter(prefix="/api/goals", tags=["goals"])

PATIENT = [Role.PATIENT.value]
PROVIDER = [Role.PROVIDER.value]


def _load_account(account_id: str, role: Role, projection=None):
    oid = to_object_id(account_id)
    if oid is None:
        return None
    return get_db()["users"].find_one({"_id": oid, "role": role.value}, projection)


def _save_goals(patient: Dict[str, Any]):
    get_db()["users"].update_one(
        {"_id": patient["_id"]},
        {"$set": {"goals": patient.get("goals", [])}},
    )


async def _read_body(request: Request, model):
    """Parse the JSON body after the role check has run. An empty body is {}."""
    raw = await request.body()
    try:
        data = await request.json() if raw.strip() else {}
        return model.model_validate(data)
    except (ValueError, ValidationError) as exc:
        raise HTTPException(status_code=400, detail="Invalid request body") from exc


@router.post("", status_code=201)
async def add_goal(
    request: Request,
    user=Depends(require_role(PATIENT, "Only patients can add goals")),
):
    payload = await _read_body(request, GoalCreate)
    if not payload.title or not payload.target_date:
        raise HTTPException(status_code=400, detail="Title and target date are required")

    patient = _load_account(user["id"], Role.PATIENT)
    if not patient:
        raise HTTPException(status_code=404, detail="Patient not found")

    goal = new_goal(payload.title, payload.target_date)
    patient.setdefault("goals", []).append(goal)
    _save_goals(patient)

    log_debug("goal_added", {"patient": patient["_id"], "goal": goal["_id"]})
    return {"message": "Goal added successfully", "goals": serialize(patient["goals"])}


@router.put("/{goal_id}")
async def edit_goal(
    goal_id: str,
    request: Request,
    user=Depends(require_role(PATIENT, "Only patients can edit their goals")),
):
    changes = await _read_body(request, GoalUpdate)

    patient = _load_account(user["id"], Role.PATIENT)
    if not patient:
        raise HTTPException(status_code=404, detail="Patient not found")

    goal = find_goal(patient.get("goals"), goal_id)
    if goal is None:
        raise HTTPException(status_code=404, detail="Goal not found")

    if changes.title:
        goal["title"] = changes.title
    if changes.target_date:
        goal["targetDate"] = changes.target_date
    if changes.progress:
        goal["progress"] = changes.progress
    _save_goals(patient)

    log_debug("goal_edited", {"patient": patient["_id"], "goal": goal_id})
    return {"message": "Goal updated successfully", "goal": serialize(goal)}


@router.get("")
async def list_goals(user=Depends(require_role(PATIENT, "Only patients can view their goals"))):
    patient = _load_account(user["id"], Role.PATIENT, {"goals": 1})
    if not patient:
        raise HTTPException(status_code=404, detail="Patient not found")
    return {"goals": serialize(patient.get("goals", []))}


@router.get("/patients")
async def list_patient_goals(
    user=Depends(require_role(PROVIDER, "Only providers can view patient goals")),
):
    """Goals of every patient in the provider's own patient list, in list order."""
    provider = _load_account(user["id"], Role.PROVIDER, {"patients": 1})
    if not provider:
        raise HTTPException(status_code=404, detail="Provider not found")

    patient_ids = provider.get("patients", [])
    docs = get_db()["users"].find(
        {"_id": {"$in": patient_ids}, "role": Role.PATIENT.value},
        {"name": 1, "goals": 1},
    )
    by_id = {doc["_id"]: doc for doc in docs}

    patient_goals: List[Dict[str, Any]] = []
    for pid in patient_ids:
        patient = by_id.get(pid)
        if patient is None:
            continue
        patient_goals.append({
            "patientId": str(pid),
            "name": patient.get("name"),
            "goals": serialize(patient.get("goals", [])),
        })

    return {"patientGoals": patient_goals}


@router.put("/patient/{patient_id}/{goal_id}")
async def set_goal_status(
    patient_id: str,
    goal_id: str,
    request: Request,
    user=Depends(require_role(PROVIDER, "Only providers can update goal status")),
):
    payload = await _read_body(request, GoalStatusUpdate)
    if not is_valid_status(payload.status):
        raise HTTPException(status_code=400, detail="Invalid status value")

    provider = _load_account(user["id"], Role.PROVIDER, {"patients": 1})
    if not provider:
        raise HTTPException(status_code=404, detail="Provider not found")

    patient = _load_account(patient_id, Role.PATIENT)
    if not patient:
        raise HTTPException(status_code=404, detail="Patient not found")

    if patient["_id"] not in provider.get("patients", []):
        raise HTTPException(status_code=403, detail="Patient is not assigned to this provider")

    goal = find_goal(patient.get("goals"), goal_id)
    if goal is None:
        raise HTTPException(status_code=404, detail="Goal not found")

    goal["status"] = payload.status
    _save_goals(patient)

    log_debug("goal_status_set", {"patient": patient_id, "goal": goal_id, "status": payload.status})
    return {"message": "Goal status updated successfully", "goal": serialize(goal)}
