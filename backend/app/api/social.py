"""REST API surface for friend requests & friendships."""

from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends

from app.api import responses
from app.container import Services, get_services
from app.domain.social.schemas import FriendActionResponse, FriendRequestsResponse
from app.infra.auth import AuthenticatedUser, get_current_user

router = APIRouter()


@router.get("/friends", response_model=List[str])
async def get_friends(
	auth_user: AuthenticatedUser = Depends(get_current_user),
	services: Services = Depends(get_services),
) -> List[str]:
	return await services.identity.ids_to_usernames(await services.social.get_friends(auth_user.id))


@router.delete("/friends/{friend}", response_model=FriendActionResponse)
async def remove_friend(
	friend: str,
	auth_user: AuthenticatedUser = Depends(get_current_user),
	services: Services = Depends(get_services),
) -> FriendActionResponse:
	friend_user = await services.identity.get_user_by_username(friend)
	await services.social.remove_friend(auth_user.id, friend_user.id)
	return FriendActionResponse(msg="Unfriended!")


@router.get("/friend/requests", response_model=FriendRequestsResponse)
async def get_requests(
	auth_user: AuthenticatedUser = Depends(get_current_user),
	services: Services = Depends(get_services),
) -> FriendRequestsResponse:
	incoming, outgoing = await services.social.get_requests(auth_user.id)
	return FriendRequestsResponse(
		incoming=await responses.friend_requests(services.identity, incoming),
		outgoing=await responses.friend_requests(services.identity, outgoing),
	)


@router.post("/friend/requests/{to}", response_model=FriendActionResponse)
async def send_friend_request(
	to: str,
	auth_user: AuthenticatedUser = Depends(get_current_user),
	services: Services = Depends(get_services),
) -> FriendActionResponse:
	to_user = await services.identity.get_user_by_username(to)
	await services.social.send_request(auth_user.id, to_user.id)
	return FriendActionResponse(msg="Sent request!")


@router.delete("/friend/requests/{to}", response_model=FriendActionResponse)
async def remove_friend_request(
	to: str,
	auth_user: AuthenticatedUser = Depends(get_current_user),
	services: Services = Depends(get_services),
) -> FriendActionResponse:
	to_user = await services.identity.get_user_by_username(to)
	await services.social.remove_request(auth_user.id, to_user.id)
	return FriendActionResponse(msg="Removed request!")


@router.put("/friend/accept/{from_username}", response_model=FriendActionResponse)
async def accept_friend_request(
	from_username: str,
	auth_user: AuthenticatedUser = Depends(get_current_user),
	services: Services = Depends(get_services),
) -> FriendActionResponse:
	from_user = await services.identity.get_user_by_username(from_username)
	await services.social.accept_request(from_user.id, auth_user.id)
	return FriendActionResponse(msg="Accepted request!")


@router.put("/friend/reject/{from_username}", response_model=FriendActionResponse)
async def reject_friend_request(
	from_username: str,
	auth_user: AuthenticatedUser = Depends(get_current_user),
	services: Services = Depends(get_services),
) -> FriendActionResponse:
	from_user = await services.identity.get_user_by_username(from_username)
	await services.social.reject_request(from_user.id, auth_user.id)
	return FriendActionResponse(msg="Rejected request!")
