"""FastAPI application entrypoint."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api import auth, calls, chat, moods, ops, posts, social
from app.api.errors import install_error_handlers
from app.container import build_services
from app.infra.redis import RedisProxy, redis_client
from app.obs import init as obs_init
from app.settings import settings

logger = logging.getLogger(__name__)

DEV_ORIGINS = [
	"http://localhost:3000",
	"http://127.0.0.1:3000",
	"http://localhost:5173",
	"http://127.0.0.1:5173",
]


@asynccontextmanager
async def lifespan(app: FastAPI):
	try:
		await redis_client.ping()
	except Exception:
		logger.warning("redis_unreachable_at_startup", exc_info=True)
	yield


def _allow_origins() -> list[str]:
	allow_origins = list(settings.cors_allow_origins)
	if not allow_origins:
		return DEV_ORIGINS if settings.is_dev() else []
	# Starlette disallows wildcard '*' with allow_credentials=True.
	if "*" in allow_origins:
		return DEV_ORIGINS if settings.is_dev() else [o for o in allow_origins if o != "*"]
	return allow_origins


def create_app(client: RedisProxy = redis_client) -> FastAPI:
	app = FastAPI(title="Circle API", lifespan=lifespan)
	app.state.services = build_services(client)
	install_error_handlers(app)

	app.add_middleware(
		CORSMiddleware,
		allow_origins=_allow_origins(),
		allow_credentials=True,
		allow_methods=["*"],
		allow_headers=["*"],
	)
	obs_init(app)

	app.include_router(auth.router, tags=["identity"])
	app.include_router(posts.router, tags=["posts"])
	app.include_router(social.router, tags=["social"])
	app.include_router(chat.router, tags=["messages"])
	app.include_router(moods.router, tags=["moods"])
	app.include_router(calls.router, tags=["calls"])
	app.include_router(ops.router, tags=["ops"])
	return app


app = create_app()
