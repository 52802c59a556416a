"""Pydantic models for patient goals.

Goals are embedded in the patient document; they have no collection of
their own.
"""
from datetime import datetime, timezone
from enum import Enum
from typing import List, Optional

from bson import ObjectId
from pydantic import BaseModel, ConfigDict, Field, field_validator


class GoalStatus(str, Enum):
    PENDING = "Pending"
    COMPLETED = "Completed"
    MISSED = "Missed"


def to_utc_naive(value: Optional[datetime]) -> Optional[datetime]:
    """MongoDB hands dates back as naive UTC; store them the same way."""
    if value is None or value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


class GoalCreate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    title: Optional[str] = None
    target_date: Optional[datetime] = Field(None, alias="targetDate")

    @field_validator("target_date")
    @classmethod
    def normalize_target_date(cls, v):
        return to_utc_naive(v)


class GoalUpdate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    title: Optional[str] = None
    target_date: Optional[datetime] = Field(None, alias="targetDate")
    progress: Optional[str] = None

    @field_validator("target_date")
    @classmethod
    def normalize_target_date(cls, v):
        return to_utc_naive(v)


class GoalStatusUpdate(BaseModel):
    # Plain string so an unknown value is answered with our own 400
    status: Optional[str] = None


def new_goal(title: str, target_date: datetime) -> dict:
    return {
        "_id": ObjectId(),
        "title": title,
        "status": GoalStatus.PENDING.value,
        "targetDate": target_date,
        "progress": "0%",
    }


def find_goal(goals: List[dict], goal_id: str) -> Optional[dict]:
    """Linear scan of a patient's goals by id."""
    for goal in goals or []:
        if goal.get("_id") is not None and str(goal["_id"]) == goal_id:
            return goal
    return None


def is_valid_status(status) -> bool:
    return status in {s.value for s in GoalStatus}
