"""Audit helpers for friend requests & friendships."""

from __future__ import annotations

import logging
from typing import Dict

from app.infra.redis import RedisProxy
from app.obs import metrics as obs_metrics

logger = logging.getLogger(__name__)

FRIEND_EVENTS_STREAM = "x:friendships.events"
FRIEND_EVENTS_MAXLEN = 10_000


async def log_friend_event(client: RedisProxy, event: str, fields: Dict[str, str]) -> None:
	obs_metrics.inc_friend_event(event)
	payload = {"event": event, **fields}
	await client.xadd(FRIEND_EVENTS_STREAM, payload, maxlen=FRIEND_EVENTS_MAXLEN, approximate=True)
	logger.info("friend_event", extra=payload)
