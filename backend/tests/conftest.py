import sys
from pathlib import Path

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from fakeredis.aioredis import FakeRedis

# Ensure backend package is importable when tests run from repo root
BACKEND_ROOT = Path(__file__).resolve().parents[1]
if str(BACKEND_ROOT) not in sys.path:
	sys.path.insert(0, str(BACKEND_ROOT))

from app.container import build_services
from app.infra.redis import redis_client, set_redis_client
from app.main import app
from app.settings import settings


@pytest_asyncio.fixture(autouse=True)
async def fake_redis():
	original = redis_client.client
	client = FakeRedis(decode_responses=True)
	set_redis_client(client)
	try:
		yield client
	finally:
		set_redis_client(original)
		await client.flushall()


@pytest.fixture(autouse=True)
def force_test_settings():
	"""Run every test in dev mode with fast-failing compare-and-swap retries."""
	original_env = settings.environment
	original_retries = settings.docstore_cas_retries
	settings.environment = "dev"
	settings.docstore_cas_retries = 3
	try:
		yield
	finally:
		settings.environment = original_env
		settings.docstore_cas_retries = original_retries


@pytest.fixture
def services():
	"""Fresh services over the proxied (fake) Redis client."""
	return build_services(redis_client)


@pytest_asyncio.fixture
async def api_client():
	transport = ASGITransport(app=app)
	async with AsyncClient(transport=transport, base_url="http://testserver") as client:
		yield client


@pytest_asyncio.fixture
async def user_client():
	"""Factory for clients that are registered and logged in as ``username``."""
	opened = []

	async def _make(username: str, password: str = "hunter2!") -> AsyncClient:
		client = AsyncClient(transport=ASGITransport(app=app), base_url="http://testserver")
		opened.append(client)
		created = await client.post("/users", json={"username": username, "password": password})
		assert created.status_code == 201, created.text
		login = await client.post("/login", json={"username": username, "password": password})
		assert login.status_code == 200, login.text
		client.headers["Authorization"] = f"Bearer {login.json()['token']}"
		return client

	try:
		yield _make
	finally:
		for client in opened:
			await client.aclose()
