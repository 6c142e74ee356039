"""Video call session API endpoints. Clients poll ``/calls/status``."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query, status

from app.api import responses
from app.api.peers import resolve_friend
from app.container import Services, get_services
from app.domain.calls.exceptions import CallSelfError, NotInCall
from app.domain.calls.models import CallRole, CallStatus
from app.domain.calls.schemas import CallHistoryResponse, CallResponse, CallStatusResponse, StartCallRequest
from app.infra.auth import AuthenticatedUser, get_current_user

router = APIRouter()


@router.post("/calls", response_model=CallResponse, status_code=status.HTTP_201_CREATED)
async def start_call(
	payload: StartCallRequest,
	auth_user: AuthenticatedUser = Depends(get_current_user),
	services: Services = Depends(get_services),
) -> CallResponse:
	# Calling yourself is a bad request, not a friendship failure.
	if (await services.identity.get_user_by_username(payload.recipient)).id == auth_user.id:
		raise CallSelfError()
	me, peer = await resolve_friend(services, auth_user, payload.recipient)
	call = await services.calls.start_call(me.id, peer.id)
	return CallResponse(msg=f"Calling {peer.username}...", call=await responses.call(services.identity, call))


@router.put("/calls/accept", response_model=CallResponse)
async def accept_call(
	auth_user: AuthenticatedUser = Depends(get_current_user),
	services: Services = Depends(get_services),
) -> CallResponse:
	call = await services.calls.accept_pending_call(auth_user.id)
	return CallResponse(msg="Call accepted!", call=await responses.call(services.identity, call))


@router.put("/calls/reject", response_model=CallResponse)
async def reject_call(
	auth_user: AuthenticatedUser = Depends(get_current_user),
	services: Services = Depends(get_services),
) -> CallResponse:
	call = await services.calls.reject_pending_call(auth_user.id)
	return CallResponse(msg="Call rejected.", call=await responses.call(services.identity, call))


@router.put("/calls/end", response_model=CallResponse)
async def end_call(
	auth_user: AuthenticatedUser = Depends(get_current_user),
	services: Services = Depends(get_services),
) -> CallResponse:
	current = await services.calls.get_call_status_for_user(auth_user.id)
	if current is None:
		raise NotInCall()
	call = await services.calls.end_call(current.id)
	return CallResponse(msg="Call ended.", call=await responses.call(services.identity, call))


@router.get("/calls/status", response_model=CallStatusResponse, response_model_exclude_none=True)
async def get_call_status(
	auth_user: AuthenticatedUser = Depends(get_current_user),
	services: Services = Depends(get_services),
) -> CallStatusResponse:
	call = await services.calls.get_call_status_for_user(auth_user.id)
	if call is None:
		return CallStatusResponse(msg="You are not in a call and no one is calling you.")
	# The other party may have deleted their account mid-call.
	(other_name,) = await services.identity.ids_to_usernames([call.other_party(auth_user.id)])
	if call.status is CallStatus.ACTIVE:
		return CallStatusResponse(
			msg=f"You are in an active call with {other_name}.",
			status="active",
			call_id=call.id,
			other_user=other_name,
		)
	if call.role_of(auth_user.id) is CallRole.CALLER:
		return CallStatusResponse(
			msg=f"You are ringing {other_name}.",
			status="pending",
			call_id=call.id,
			recipient=other_name,
		)
	return CallStatusResponse(
		msg=f"{other_name} is calling you.",
		status="pending",
		call_id=call.id,
		caller=other_name,
	)


@router.get("/calls/history", response_model=CallHistoryResponse)
async def get_call_history(
	limit: int = Query(default=50, ge=1, le=200),
	auth_user: AuthenticatedUser = Depends(get_current_user),
	services: Services = Depends(get_services),
) -> CallHistoryResponse:
	found = await services.calls.get_call_history(auth_user.id, limit=limit)
	return CallHistoryResponse(calls=await responses.calls(services.identity, found))
