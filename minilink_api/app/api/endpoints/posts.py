"""
Post endpoints.

Every route requires an authenticated user.  Fixed paths (``/create``,
``/feed``, ``/loggedUser``, ``/like/{id}``, ``/comment/{id}``,
``/comments/{id}``) are declared before the ``/{post_id}`` routes so
they are matched first.
"""

from typing import List

from fastapi import APIRouter, Depends, status

from minilink_api.app.core.security import get_current_user
from minilink_api.app.schemas.post import (
    CommentCreate,
    CommentRead,
    CommentsResponse,
    LikeResponse,
    PostCreate,
    PostRead,
    PostUpdate,
)
from minilink_api.app.schemas.user import MessageResponse, UserRead
from minilink_api.app.services.post_service import PostService


router = APIRouter()


@router.post("/create", response_model=PostRead, status_code=status.HTTP_201_CREATED)
async def create_post(
    data: PostCreate,
    current_user: UserRead = Depends(get_current_user),
) -> PostRead:
    """Create a post.  Content must be 1–1000 characters after trimming."""
    return await PostService.create_post(current_user.id, data.content)


@router.get("/feed", response_model=List[PostRead])
async def get_feed(current_user: UserRead = Depends(get_current_user)) -> List[PostRead]:
    """Posts written by everyone except the caller, newest first."""
    return await PostService.get_feed(current_user.id)


@router.get("/loggedUser", response_model=List[PostRead])
async def get_logged_user_posts(current_user: UserRead = Depends(get_current_user)) -> List[PostRead]:
    """The caller's own posts, newest first."""
    return await PostService.get_own_posts(current_user.id)


@router.put("/like/{post_id}", response_model=LikeResponse)
async def toggle_like(
    post_id: int,
    current_user: UserRead = Depends(get_current_user),
) -> LikeResponse:
    """Like the post, or unlike it if the caller already liked it."""
    liked, likes = await PostService.toggle_like(post_id, current_user.id)
    return LikeResponse(message="Post liked" if liked else "Post unliked", liked=liked, likes=likes)


@router.post("/comment/{post_id}", response_model=CommentsResponse, status_code=status.HTTP_201_CREATED)
async def add_comment(
    post_id: int,
    data: CommentCreate,
    current_user: UserRead = Depends(get_current_user),
) -> CommentsResponse:
    comments = await PostService.add_comment(post_id, current_user.id, data.text)
    return CommentsResponse(message="Comment added", comments=comments)


@router.get("/comments/{post_id}", response_model=List[CommentRead])
async def get_comments(
    post_id: int,
    current_user: UserRead = Depends(get_current_user),
) -> List[CommentRead]:
    return await PostService.get_comments(post_id)


@router.get("/{post_id}", response_model=PostRead)
async def get_post(
    post_id: int,
    current_user: UserRead = Depends(get_current_user),
) -> PostRead:
    return await PostService.get_post(post_id)


@router.put("/{post_id}", response_model=PostRead)
async def update_post(
    post_id: int,
    data: PostUpdate,
    current_user: UserRead = Depends(get_current_user),
) -> PostRead:
    """Edit a post.  Only the author may do this (403 otherwise)."""
    return await PostService.update_post(post_id, current_user.id, data.content)


@router.delete("/{post_id}", response_model=MessageResponse)
async def delete_post(
    post_id: int,
    current_user: UserRead = Depends(get_current_user),
) -> MessageResponse:
    """Delete a post.  Only the author may do this (403 otherwise)."""
    await PostService.delete_post(post_id, current_user.id)
    return MessageResponse(message="Post deleted successfully")
