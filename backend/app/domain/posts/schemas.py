"""Pydantic schemas for post endpoints."""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from .models import Post, PostOptions


class PostOptionsIn(BaseModel):
	model_config = ConfigDict(populate_by_name=True)

	background_color: Optional[str] = Field(default=None, alias="backgroundColor", max_length=32)

	def to_domain(self) -> PostOptions:
		return PostOptions(background_color=self.background_color)


class CreatePostRequest(BaseModel):
	content: str
	options: Optional[PostOptionsIn] = None


class UpdatePostRequest(BaseModel):
	content: Optional[str] = None
	options: Optional[PostOptionsIn] = None


class PostOut(BaseModel):
	id: str
	author: str
	content: str
	options: Optional[dict] = None
	created_at: datetime
	updated_at: datetime

	@classmethod
	def from_post(cls, post: Post, author: str) -> "PostOut":
		return cls(
			id=post.id,
			author=author,
			content=post.content,
			options=post.options.to_dict() if post.options else None,
			created_at=post.created_at,
			updated_at=post.updated_at,
		)


class PostResponse(BaseModel):
	msg: str
	post: PostOut


class PostListResponse(BaseModel):
	posts: List[PostOut]
