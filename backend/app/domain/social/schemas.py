"""Pydantic schemas for friend requests and friendships."""

from __future__ import annotations

from datetime import datetime
from typing import List

from pydantic import BaseModel, ConfigDict, Field


class FriendRequestOut(BaseModel):
	model_config = ConfigDict(populate_by_name=True)

	id: str
	from_: str = Field(..., alias="from")
	to: str
	created_at: datetime


class FriendRequestsResponse(BaseModel):
	incoming: List[FriendRequestOut]
	outgoing: List[FriendRequestOut]


class FriendActionResponse(BaseModel):
	msg: str
