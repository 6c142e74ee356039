"""Pydantic schemas for mood endpoints."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel


class SetMoodRequest(BaseModel):
	mood: str
	recipient: str


class MoodOut(BaseModel):
	owner: str
	recipient: str
	mood: str
	updated_at: datetime


class SetMoodResponse(BaseModel):
	msg: str
	mood: MoodOut


class BothMoodsResponse(BaseModel):
	you: Optional[str] = None
	them: Optional[str] = None
	recipient: str
	display: str
