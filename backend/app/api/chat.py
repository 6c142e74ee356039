"""Direct message API endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, status

from app.api import responses
from app.api.peers import resolve_friend
from app.container import Services, get_services
from app.domain.common.errors import NotAllowedError
from app.domain.identity.schemas import MessageResponse
from app.domain.chat.schemas import MessageListResponse, SendMessageRequest, SendMessageResponse
from app.infra.auth import AuthenticatedUser, get_current_user

router = APIRouter()


@router.get("/messages", response_model=MessageListResponse)
async def get_inbox(
	auth_user: AuthenticatedUser = Depends(get_current_user),
	services: Services = Depends(get_services),
) -> MessageListResponse:
	found = await services.chat.get_messages_for_user(auth_user.id)
	return MessageListResponse(messages=await responses.messages(services.identity, found))


@router.get("/messages/{recipient}", response_model=MessageListResponse)
async def get_messages_between_users(
	recipient: str,
	auth_user: AuthenticatedUser = Depends(get_current_user),
	services: Services = Depends(get_services),
) -> MessageListResponse:
	me, peer = await resolve_friend(services, auth_user, recipient)
	found = await services.chat.get_messages_between_users(me.id, peer.id)
	return MessageListResponse(messages=await responses.messages(services.identity, found))


@router.post("/messages/{recipient}", response_model=SendMessageResponse, status_code=status.HTTP_201_CREATED)
async def send_message(
	recipient: str,
	payload: SendMessageRequest,
	auth_user: AuthenticatedUser = Depends(get_current_user),
	services: Services = Depends(get_services),
) -> SendMessageResponse:
	me, peer = await resolve_friend(services, auth_user, recipient)
	sent = await services.chat.send_message(me.id, peer.id, payload.content)
	return SendMessageResponse(msg="Message sent successfully!", message=await responses.message(services.identity, sent))


@router.delete("/messages/{message_id}", response_model=MessageResponse)
async def delete_message(
	message_id: str,
	auth_user: AuthenticatedUser = Depends(get_current_user),
	services: Services = Depends(get_services),
) -> MessageResponse:
	message = await services.chat.get_message_by_id(message_id)
	if message.sender_id != auth_user.id:
		raise NotAllowedError("Only the sender can delete a message.", reason="not_sender")
	await services.chat.delete_message(message.id)
	return MessageResponse(msg="Message deleted successfully!")
