"""Pydantic schemas for the messages API."""

from __future__ import annotations

from datetime import datetime
from typing import List

from pydantic import BaseModel, Field


class SendMessageRequest(BaseModel):
	content: str = Field(..., max_length=4000)


class MessageOut(BaseModel):
	id: str
	sender: str
	recipient: str
	content: str
	timestamp: datetime


class SendMessageResponse(BaseModel):
	msg: str
	message: MessageOut


class MessageListResponse(BaseModel):
	messages: List[MessageOut]
