"""Author-owned posts."""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from app.domain.common.errors import BadValuesError, NotAllowedError, NotFoundError
from app.domain.posts.models import Post, PostOptions
from app.infra.docstore import DocCollection
from app.obs import metrics as obs_metrics

logger = logging.getLogger(__name__)


class EmptyPostError(BadValuesError):
	reason = "post_empty"
	default_message = "Post content cannot be empty!"


class PostNotFound(NotFoundError):
	reason = "post_not_found"

	def __init__(self, post_id: str) -> None:
		super().__init__(f"Post {post_id} does not exist!")


class PostAuthorNotMatchError(NotAllowedError):
	reason = "not_author"

	def __init__(self, author_id: str, post_id: str) -> None:
		super().__init__(f"{author_id} is not the author of post {post_id}!")
		self.author_id = author_id
		self.post_id = post_id


def _content(value: Optional[str]) -> str:
	if value is None or not value.strip():
		raise EmptyPostError()
	return value


class PostService:
	def __init__(self, posts: DocCollection) -> None:
		self.posts = posts

	async def create(self, author_id: str, content: str, options: Optional[PostOptions] = None) -> Post:
		post_id = await self.posts.create_one(
			{
				"author_id": str(author_id),
				"content": _content(content),
				"options": options.to_dict() if options else None,
			}
		)
		obs_metrics.inc_post_written("create")
		logger.info("post_created", extra={"post_id": post_id, "author_id": author_id})
		return await self.get(post_id)

	async def get(self, post_id: str) -> Post:
		doc = await self.posts.read_one({"id": str(post_id)})
		if doc is None:
			raise PostNotFound(post_id)
		return Post.from_document(doc)

	async def get_posts(self) -> List[Post]:
		docs = await self.posts.read_many(None, sort=[("created_at", -1), ("id", -1)])
		return [Post.from_document(doc) for doc in docs]

	async def get_by_author(self, author_id: str) -> List[Post]:
		docs = await self.posts.read_many({"author_id": str(author_id)}, sort=[("created_at", -1), ("id", -1)])
		return [Post.from_document(doc) for doc in docs]

	async def update(
		self,
		post_id: str,
		content: Optional[str] = None,
		options: Optional[PostOptions] = None,
	) -> Post:
		"""Patch content and/or options; omitted fields are left alone."""
		patch: Dict[str, Any] = {}
		if content is not None:
			patch["content"] = _content(content)
		if options is not None:
			patch["options"] = options.to_dict()
		updated = await self.posts.partial_update_one({"id": str(post_id)}, patch)
		if updated is None:
			raise PostNotFound(post_id)
		obs_metrics.inc_post_written("update")
		logger.info("post_updated", extra={"post_id": post_id})
		return Post.from_document(updated)

	async def delete(self, post_id: str) -> None:
		deleted = await self.posts.delete_one({"id": str(post_id)})
		if not deleted:
			raise PostNotFound(post_id)
		obs_metrics.inc_post_written("delete")
		logger.info("post_deleted", extra={"post_id": post_id})

	async def assert_author_is_user(self, post_id: str, user_id: str) -> None:
		post = await self.get(post_id)
		if post.author_id != str(user_id):
			raise PostAuthorNotMatchError(str(user_id), post.id)
