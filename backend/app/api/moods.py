"""Mood exchange API endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from app.api.peers import resolve_friend
from app.container import Services, get_services
from app.domain.identity.schemas import MessageResponse
from app.domain.moods.schemas import BothMoodsResponse, MoodOut, SetMoodRequest, SetMoodResponse
from app.infra.auth import AuthenticatedUser, get_current_user

router = APIRouter()


@router.post("/moods", response_model=SetMoodResponse)
async def set_mood(
	payload: SetMoodRequest,
	auth_user: AuthenticatedUser = Depends(get_current_user),
	services: Services = Depends(get_services),
) -> SetMoodResponse:
	me, peer = await resolve_friend(services, auth_user, payload.recipient)
	msg, mood = await services.moods.set_mood(me.id, peer.id, payload.mood)
	return SetMoodResponse(
		msg=msg,
		mood=MoodOut(owner=me.username, recipient=peer.username, mood=mood.mood, updated_at=mood.updated_at),
	)


@router.get("/moods/{recipient}", response_model=BothMoodsResponse)
async def get_moods(
	recipient: str,
	auth_user: AuthenticatedUser = Depends(get_current_user),
	services: Services = Depends(get_services),
) -> BothMoodsResponse:
	me, peer = await resolve_friend(services, auth_user, recipient)
	mine, theirs = await services.moods.get_both_moods(me.id, peer.id)
	return BothMoodsResponse(
		you=mine,
		them=theirs,
		recipient=peer.username,
		display=f"You: {mine or ''}    {peer.username}: {theirs or ''}",
	)


@router.delete("/moods", response_model=MessageResponse)
async def remove_mood(
	recipient: str = Query(...),
	auth_user: AuthenticatedUser = Depends(get_current_user),
	services: Services = Depends(get_services),
) -> MessageResponse:
	me, peer = await resolve_friend(services, auth_user, recipient)
	await services.moods.remove_mood(me.id, peer.id)
	return MessageResponse(msg="Mood removed successfully!")
