"""Helpers for endpoints aimed at another user."""

from __future__ import annotations

from app.container import Services
from app.domain.identity.models import User
from app.infra.auth import AuthenticatedUser


async def resolve_friend(services: Services, auth_user: AuthenticatedUser, username: str) -> tuple[User, User]:
	"""Return ``(me, peer)`` after checking that the two are friends.

	Unknown usernames fail with 404 before the friendship check runs.
	"""
	peer = await services.identity.get_user_by_username(username)
	me = await services.identity.get_user_by_id(auth_user.id)
	await services.social.assert_are_friends(me.id, peer.id, me.username, peer.username)
	return me, peer
