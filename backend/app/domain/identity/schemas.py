"""Pydantic schemas for account and session endpoints."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

from app.domain.identity.models import User


class RegisterRequest(BaseModel):
	username: str = Field(..., description="Unique public username")
	password: str


class LoginRequest(BaseModel):
	username: str
	password: str


class UpdateUsernameRequest(BaseModel):
	username: str


class UpdatePasswordRequest(BaseModel):
	current_password: str = Field(..., validation_alias="currentPassword")
	new_password: str = Field(..., validation_alias="newPassword")

	model_config = {"populate_by_name": True}


class UserOut(BaseModel):
	id: str
	username: str
	created_at: datetime
	updated_at: datetime

	@classmethod
	def from_user(cls, user: User) -> "UserOut":
		return cls(id=user.id, username=user.username, created_at=user.created_at, updated_at=user.updated_at)


class UserResponse(BaseModel):
	msg: str
	user: UserOut


class LoginResponse(BaseModel):
	msg: str
	user: UserOut
	token: str
	expires_in: int


class MessageResponse(BaseModel):
	msg: str
