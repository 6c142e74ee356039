"""Account directory: usernames, ids and credentials."""

from __future__ import annotations

import logging
from typing import Iterable, List, Optional

from app.domain.common.errors import AlreadyExistsError, NotAllowedError, NotFoundError
from app.domain.identity import policy
from app.domain.identity.models import DELETED_USERNAME, User
from app.infra.docstore import DocCollection, DuplicateDocumentError
from app.infra.password import check_needs_rehash, hash_password, verify_password

logger = logging.getLogger(__name__)


class UsernameTaken(AlreadyExistsError):
	reason = "username_taken"

	def __init__(self, username: str) -> None:
		super().__init__(f"User with username {username} already exists!")


class UserNotFound(NotFoundError):
	reason = "user_not_found"


class InvalidCredentials(NotAllowedError):
	reason = "invalid_credentials"
	default_message = "Username or password is incorrect."


class IdentityService:
	def __init__(self, users: DocCollection) -> None:
		self.users = users

	async def create(self, username: str, password: str) -> User:
		username = policy.normalise_username(username)
		password = policy.guard_password(password)
		try:
			user_id = await self.users.create_one(
				{"username": username, "password_hash": hash_password(password)},
				unless={"username": username},
			)
		except DuplicateDocumentError:
			raise UsernameTaken(username) from None
		logger.info("user_created", extra={"user_id": user_id})
		return await self.get_user_by_id(user_id)

	async def get_user_by_id(self, user_id: str) -> User:
		doc = await self.users.read_one({"id": str(user_id)})
		if doc is None:
			raise UserNotFound("User not found!")
		return User.from_document(doc)

	async def get_user_by_username(self, username: str) -> User:
		doc = await self.users.read_one({"username": username})
		if doc is None:
			raise UserNotFound(f"User with username {username} not found!")
		return User.from_document(doc)

	async def get_users(self, username: Optional[str] = None) -> List[User]:
		flt = {"username": username} if username else None
		docs = await self.users.read_many(flt, sort=[("username", 1)])
		return [User.from_document(doc) for doc in docs]

	async def ids_to_usernames(self, ids: Iterable[str]) -> List[str]:
		"""Map ids to usernames, keeping order; unknown ids become ``DELETED_USER``."""
		wanted = [str(i) for i in ids]
		if not wanted:
			return []
		docs = await self.users.read_many({"id": {"$in": wanted}})
		by_id = {doc["id"]: doc["username"] for doc in docs}
		return [by_id.get(user_id, DELETED_USERNAME) for user_id in wanted]

	async def authenticate(self, username: str, password: str) -> User:
		doc = await self.users.read_one({"username": (username or "").strip()})
		if doc is None or not password or not verify_password(doc["password_hash"], password):
			raise InvalidCredentials()
		if check_needs_rehash(doc["password_hash"]):
			doc = await self.users.partial_update_one(
				{"id": doc["id"], "password_hash": doc["password_hash"]},
				{"password_hash": hash_password(password)},
			) or doc
		return User.from_document(doc)

	async def update_username(self, user_id: str, username: str) -> User:
		username = policy.normalise_username(username)
		try:
			updated = await self.users.partial_update_one(
				{"id": str(user_id)},
				{"username": username},
				unless={"username": username},
			)
		except DuplicateDocumentError:
			raise UsernameTaken(username) from None
		if updated is None:
			raise UserNotFound("User not found!")
		logger.info("username_updated", extra={"user_id": user_id})
		return User.from_document(updated)

	async def update_password(self, user_id: str, current_password: str, new_password: str) -> None:
		user = await self.get_user_by_id(user_id)
		if not current_password or not verify_password(user.password_hash, current_password):
			raise NotAllowedError("The given current password is wrong!", reason="wrong_password")
		new_password = policy.guard_password(new_password)
		updated = await self.users.partial_update_one(
			{"id": user.id, "password_hash": user.password_hash},
			{"password_hash": hash_password(new_password)},
		)
		if updated is None:
			raise NotAllowedError("Password changed concurrently; try again.", reason="password_changed")
		logger.info("password_updated", extra={"user_id": user_id})

	async def delete(self, user_id: str) -> None:
		deleted = await self.users.delete_one({"id": str(user_id)})
		if not deleted:
			raise UserNotFound("User not found!")
		logger.info("user_deleted", extra={"user_id": user_id})

	async def assert_user_exists(self, user_id: str) -> None:
		await self.get_user_by_id(user_id)
