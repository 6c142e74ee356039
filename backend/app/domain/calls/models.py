"""Domain models for call sessions."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Mapping, Optional


class CallStatus(str, Enum):
	"""Lifecycle of a call. ``ENDED`` is terminal and kept for history."""

	PENDING = "pending"
	ACTIVE = "active"
	ENDED = "ended"


OPEN_STATUSES = (CallStatus.PENDING.value, CallStatus.ACTIVE.value)


class CallRole(str, Enum):
	CALLER = "caller"
	RECIPIENT = "recipient"


@dataclass(slots=True)
class Call:
	id: str
	caller_id: str
	recipient_id: str
	status: CallStatus
	start_time: datetime
	accepted_at: Optional[datetime] = None
	end_time: Optional[datetime] = None

	@classmethod
	def from_document(cls, doc: Mapping[str, Any]) -> "Call":
		return cls(
			id=str(doc["id"]),
			caller_id=str(doc["caller_id"]),
			recipient_id=str(doc["recipient_id"]),
			status=CallStatus(doc["status"]),
			start_time=doc["start_time"],
			accepted_at=doc.get("accepted_at"),
			end_time=doc.get("end_time"),
		)

	@property
	def is_open(self) -> bool:
		return self.status is not CallStatus.ENDED

	def involves(self, user_id: str) -> bool:
		return str(user_id) in (self.caller_id, self.recipient_id)

	def role_of(self, user_id: str) -> CallRole:
		if str(user_id) == self.caller_id:
			return CallRole.CALLER
		if str(user_id) == self.recipient_id:
			return CallRole.RECIPIENT
		raise ValueError(f"user {user_id} is not part of call {self.id}")

	def other_party(self, user_id: str) -> str:
		return self.recipient_id if self.role_of(user_id) is CallRole.CALLER else self.caller_id
