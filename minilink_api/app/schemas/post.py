"""
Pydantic schemas for posts, likes and comments.

A post is returned with its author, like set and comments already
resolved, so clients never need a second round trip to show names.
References to users that no longer exist resolve to ``None``.
"""

from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

from .user import check_text


POST_MAX_LENGTH = 1000
COMMENT_MAX_LENGTH = 500


class PostCreate(BaseModel):
    content: Optional[str] = Field(None, examples=["Hello, network!"])

    validate_content = field_validator("content")(check_text)


class PostUpdate(BaseModel):
    """Schema for editing a post.  A missing or blank ``content`` keeps the old text."""

    content: Optional[str] = Field(None, examples=["Edited text"])

    validate_content = field_validator("content")(check_text)


class CommentCreate(BaseModel):
    text: Optional[str] = Field(None, examples=["Congrats!"])

    validate_text = field_validator("text")(check_text)


class PostAuthor(BaseModel):
    id: int
    name: str
    email: str


class CommentAuthor(BaseModel):
    id: int
    name: str


class CommentRead(BaseModel):
    id: int
    user: Optional[CommentAuthor] = None
    text: str
    created_at: str


class PostRead(BaseModel):
    """Schema for reading a post from the API."""

    id: int
    content: str
    author: Optional[PostAuthor] = None
    likes: List[int] = Field(default_factory=list, description="Ids of users who liked the post, oldest like first")
    comments: List[CommentRead] = Field(default_factory=list)
    created_at: str
    updated_at: str


class LikeResponse(BaseModel):
    message: str
    liked: bool
    likes: List[int]


class CommentsResponse(BaseModel):
    message: str
    comments: List[CommentRead]
