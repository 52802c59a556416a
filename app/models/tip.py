"""Pydantic model for wellness tips stored in MongoDB."""
from pydantic import BaseModel, Field


class Tip(BaseModel):
    title: str = Field(..., min_length=1)
    description: str = Field(..., min_length=1)
