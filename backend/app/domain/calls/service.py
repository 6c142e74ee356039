"""Call session manager.

Every call moves ``pending -> active -> ended`` (or ``pending -> ended`` when
declined or cancelled). A user takes part in at most one open call: starting
a call is a guarded insert that fails when either participant already has a
pending or active call, and each transition is a compare-and-swap on the
call's current status.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import List, Optional

from app.domain.calls.exceptions import (
	CallAlreadyEnded,
	CallConflict,
	CallForbidden,
	CallNotFound,
	CallNotPending,
	CallSelfError,
	NoPendingCall,
)
from app.domain.calls.models import OPEN_STATUSES, Call, CallStatus
from app.infra.docstore import DocCollection, DuplicateDocumentError
from app.obs import metrics as obs_metrics

logger = logging.getLogger(__name__)


def _now() -> datetime:
	return datetime.now(timezone.utc)


def _open_calls_involving(*user_ids: str) -> dict:
	ids = [str(u) for u in user_ids]
	return {
		"status": {"$in": list(OPEN_STATUSES)},
		"$or": [{"caller_id": {"$in": ids}}, {"recipient_id": {"$in": ids}}],
	}


class CallService:
	def __init__(self, calls: DocCollection) -> None:
		self.calls = calls

	async def start_call(self, caller_id: str, recipient_id: str) -> Call:
		"""Ring ``recipient_id``. Friendship is checked by the caller of this method."""
		if str(caller_id) == str(recipient_id):
			raise CallSelfError()
		try:
			call_id = await self.calls.create_one(
				{
					"caller_id": str(caller_id),
					"recipient_id": str(recipient_id),
					"status": CallStatus.PENDING.value,
					"start_time": _now(),
					"accepted_at": None,
					"end_time": None,
				},
				unless=_open_calls_involving(caller_id, recipient_id),
			)
		except DuplicateDocumentError:
			obs_metrics.inc_call_transition("start_rejected")
			raise CallConflict() from None
		obs_metrics.inc_call_transition("started")
		logger.info("call_started", extra={"call_id": call_id, "caller_id": caller_id, "recipient_id": recipient_id})
		return await self.get_call(call_id)

	async def get_call(self, call_id: str) -> Call:
		doc = await self.calls.read_one({"id": str(call_id)})
		if doc is None:
			raise CallNotFound()
		return Call.from_document(doc)

	async def accept_call(self, call_id: str, recipient_id: str) -> Call:
		updated = await self.calls.partial_update_one(
			{"id": str(call_id), "recipient_id": str(recipient_id), "status": CallStatus.PENDING.value},
			{"status": CallStatus.ACTIVE.value, "accepted_at": _now()},
		)
		if updated is None:
			call = await self.get_call(call_id)
			if call.recipient_id != str(recipient_id):
				raise CallForbidden()
			if call.status is CallStatus.ENDED:
				raise CallAlreadyEnded()
			raise CallNotPending()
		obs_metrics.inc_call_transition("accepted")
		logger.info("call_accepted", extra={"call_id": call_id})
		return Call.from_document(updated)

	async def accept_pending_call(self, recipient_id: str) -> Call:
		"""Accept the most recent call ringing ``recipient_id``."""
		pending = await self.get_pending_call(recipient_id)
		if pending is None:
			raise NoPendingCall()
		return await self.accept_call(pending.id, recipient_id)

	async def reject_pending_call(self, recipient_id: str) -> Call:
		"""Decline the most recent call ringing ``recipient_id``."""
		pending = await self.get_pending_call(recipient_id)
		if pending is None:
			raise NoPendingCall()
		updated = await self.calls.partial_update_one(
			{"id": pending.id, "status": CallStatus.PENDING.value},
			{"status": CallStatus.ENDED.value, "end_time": _now()},
		)
		if updated is None:
			raise CallNotPending()
		obs_metrics.inc_call_transition("rejected")
		logger.info("call_rejected", extra={"call_id": pending.id})
		return Call.from_document(updated)

	async def end_call(self, call_id: str) -> Call:
		"""End an open call. Ending an ended call is an error, not a no-op."""
		call = await self.get_call(call_id)
		if call.status is CallStatus.ENDED:
			raise CallAlreadyEnded()
		updated = await self.calls.partial_update_one(
			{"id": call.id, "status": {"$in": list(OPEN_STATUSES)}},
			{"status": CallStatus.ENDED.value, "end_time": _now()},
		)
		if updated is None:
			raise CallAlreadyEnded()
		obs_metrics.inc_call_transition("ended")
		logger.info("call_ended", extra={"call_id": call.id})
		return Call.from_document(updated)

	async def get_call_status_for_user(self, user_id: str) -> Optional[Call]:
		"""Return the open call involving ``user_id``, if any."""
		docs = await self.calls.read_many(
			_open_calls_involving(user_id),
			sort=[("start_time", -1)],
			limit=1,
		)
		return Call.from_document(docs[0]) if docs else None

	async def get_pending_call(self, user_id: str) -> Optional[Call]:
		"""Return the newest call still ringing ``user_id``."""
		docs = await self.calls.read_many(
			{"recipient_id": str(user_id), "status": CallStatus.PENDING.value},
			sort=[("start_time", -1)],
			limit=1,
		)
		return Call.from_document(docs[0]) if docs else None

	async def get_call_history(self, user_id: str, *, limit: int = 50) -> List[Call]:
		docs = await self.calls.read_many(
			{
				"status": CallStatus.ENDED.value,
				"$or": [{"caller_id": str(user_id)}, {"recipient_id": str(user_id)}],
			},
			sort=[("end_time", -1)],
			limit=limit,
		)
		return [Call.from_document(doc) for doc in docs]
