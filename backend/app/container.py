"""Service wiring.

Every feature service is built once per application from a Redis client and
handed to endpoints through ``get_services``; tests build their own.
"""

from __future__ import annotations

from dataclasses import dataclass

from fastapi import Request

from app.domain.calls import CallService
from app.domain.chat import ChatService
from app.domain.identity import IdentityService, SessionStore
from app.domain.moods import MoodService
from app.domain.posts import PostService
from app.domain.social import SocialService
from app.infra.docstore import DocCollection
from app.infra.redis import RedisProxy, redis_client


@dataclass(slots=True)
class Services:
	identity: IdentityService
	sessions: SessionStore
	social: SocialService
	posts: PostService
	chat: ChatService
	moods: MoodService
	calls: CallService


def build_services(client: RedisProxy = redis_client) -> Services:
	identity = IdentityService(DocCollection("users", client))
	return Services(
		identity=identity,
		sessions=SessionStore(client),
		social=SocialService(
			DocCollection("friend_requests", client),
			DocCollection("friends", client),
			identity,
			client,
		),
		posts=PostService(DocCollection("posts", client)),
		chat=ChatService(DocCollection("messages", client)),
		moods=MoodService(DocCollection("moods", client)),
		calls=CallService(DocCollection("calls", client)),
	)


def get_services(request: Request) -> Services:
	return request.app.state.services
