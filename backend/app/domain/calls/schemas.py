"""Pydantic schemas for call endpoints."""

from __future__ import annotations

from datetime import datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


class StartCallRequest(BaseModel):
	recipient: str


class CallOut(BaseModel):
	id: str
	caller: str
	recipient: str
	status: Literal["pending", "active", "ended"]
	start_time: datetime
	accepted_at: Optional[datetime] = None
	end_time: Optional[datetime] = None


class CallResponse(BaseModel):
	msg: str
	call: CallOut


class CallStatusResponse(BaseModel):
	"""Polled call state. ``status`` is absent when the user is not in a call."""

	model_config = ConfigDict(populate_by_name=True)

	msg: str
	status: Optional[Literal["pending", "active"]] = None
	call_id: Optional[str] = Field(default=None, alias="callId")
	caller: Optional[str] = None
	recipient: Optional[str] = None
	other_user: Optional[str] = Field(default=None, alias="otherUser")


class CallHistoryResponse(BaseModel):
	calls: List[CallOut]
