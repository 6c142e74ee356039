"""Post API endpoints."""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query, status

from app.api import responses
from app.container import Services, get_services
from app.domain.identity.schemas import MessageResponse
from app.domain.posts.schemas import CreatePostRequest, PostListResponse, PostResponse, UpdatePostRequest
from app.infra.auth import AuthenticatedUser, get_current_user

router = APIRouter()


@router.get("/posts", response_model=PostListResponse)
async def get_posts(
	author: Optional[str] = Query(default=None),
	services: Services = Depends(get_services),
) -> PostListResponse:
	if author:
		author_user = await services.identity.get_user_by_username(author)
		found = await services.posts.get_by_author(author_user.id)
	else:
		found = await services.posts.get_posts()
	return PostListResponse(posts=await responses.posts(services.identity, found))


@router.post("/posts", response_model=PostResponse, status_code=status.HTTP_201_CREATED)
async def create_post(
	payload: CreatePostRequest,
	auth_user: AuthenticatedUser = Depends(get_current_user),
	services: Services = Depends(get_services),
) -> PostResponse:
	options = payload.options.to_domain() if payload.options else None
	created = await services.posts.create(auth_user.id, payload.content, options)
	return PostResponse(msg="Post successfully created!", post=await responses.post(services.identity, created))


@router.patch("/posts/{post_id}", response_model=PostResponse)
async def update_post(
	post_id: str,
	payload: UpdatePostRequest,
	auth_user: AuthenticatedUser = Depends(get_current_user),
	services: Services = Depends(get_services),
) -> PostResponse:
	await services.posts.assert_author_is_user(post_id, auth_user.id)
	options = payload.options.to_domain() if payload.options else None
	updated = await services.posts.update(post_id, payload.content, options)
	return PostResponse(msg="Post successfully updated!", post=await responses.post(services.identity, updated))


@router.delete("/posts/{post_id}", response_model=MessageResponse)
async def delete_post(
	post_id: str,
	auth_user: AuthenticatedUser = Depends(get_current_user),
	services: Services = Depends(get_services),
) -> MessageResponse:
	await services.posts.assert_author_is_user(post_id, auth_user.id)
	await services.posts.delete(post_id)
	return MessageResponse(msg="Deleted post!")
