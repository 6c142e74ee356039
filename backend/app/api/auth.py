"""Account and session API endpoints."""

from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Response, status

from app.container import Services, get_services
from app.domain.identity import schemas
from app.infra.auth import AuthenticatedUser, SessionContext, get_current_user, require_logged_out
from app.infra.cookies import clear_session_cookie, set_session_cookie

router = APIRouter()


@router.get("/session", response_model=schemas.UserOut)
async def get_session_user(
	auth_user: AuthenticatedUser = Depends(get_current_user),
	services: Services = Depends(get_services),
) -> schemas.UserOut:
	return schemas.UserOut.from_user(await services.identity.get_user_by_id(auth_user.id))


@router.get("/users", response_model=List[schemas.UserOut])
async def get_users(
	username: Optional[str] = Query(default=None),
	services: Services = Depends(get_services),
) -> List[schemas.UserOut]:
	return [schemas.UserOut.from_user(user) for user in await services.identity.get_users(username)]


@router.get("/users/{username}", response_model=schemas.UserOut)
async def get_user(username: str, services: Services = Depends(get_services)) -> schemas.UserOut:
	return schemas.UserOut.from_user(await services.identity.get_user_by_username(username))


@router.post("/users", response_model=schemas.UserResponse, status_code=status.HTTP_201_CREATED)
async def create_user(
	payload: schemas.RegisterRequest,
	_: SessionContext = Depends(require_logged_out),
	services: Services = Depends(get_services),
) -> schemas.UserResponse:
	user = await services.identity.create(payload.username, payload.password)
	return schemas.UserResponse(msg="User created successfully!", user=schemas.UserOut.from_user(user))


@router.patch("/users/username", response_model=schemas.UserResponse)
async def update_username(
	payload: schemas.UpdateUsernameRequest,
	auth_user: AuthenticatedUser = Depends(get_current_user),
	services: Services = Depends(get_services),
) -> schemas.UserResponse:
	user = await services.identity.update_username(auth_user.id, payload.username)
	return schemas.UserResponse(msg="Updated username successfully!", user=schemas.UserOut.from_user(user))


@router.patch("/users/password", response_model=schemas.MessageResponse)
async def update_password(
	payload: schemas.UpdatePasswordRequest,
	auth_user: AuthenticatedUser = Depends(get_current_user),
	services: Services = Depends(get_services),
) -> schemas.MessageResponse:
	await services.identity.update_password(auth_user.id, payload.current_password, payload.new_password)
	return schemas.MessageResponse(msg="Password updated successfully!")


@router.delete("/users", response_model=schemas.MessageResponse)
async def delete_user(
	response: Response,
	auth_user: AuthenticatedUser = Depends(get_current_user),
	services: Services = Depends(get_services),
) -> schemas.MessageResponse:
	await services.sessions.end_all_for_user(auth_user.id)
	clear_session_cookie(response)
	await services.identity.delete(auth_user.id)
	return schemas.MessageResponse(msg="You deleted your account")


@router.post("/login", response_model=schemas.LoginResponse)
async def login(
	payload: schemas.LoginRequest,
	response: Response,
	services: Services = Depends(get_services),
) -> schemas.LoginResponse:
	user = await services.identity.authenticate(payload.username, payload.password)
	issued = await services.sessions.start(user.id)
	set_session_cookie(response, issued.token)
	return schemas.LoginResponse(
		msg="Logged in!",
		user=schemas.UserOut.from_user(user),
		token=issued.token,
		expires_in=issued.expires_in,
	)


@router.post("/logout", response_model=schemas.MessageResponse)
async def logout(
	response: Response,
	auth_user: AuthenticatedUser = Depends(get_current_user),
	services: Services = Depends(get_services),
) -> schemas.MessageResponse:
	await services.sessions.end(auth_user.session_id)
	clear_session_cookie(response)
	return schemas.MessageResponse(msg="Logged out!")
