from datetime import datetime
from typing import Any

from pydantic import BaseModel, StrictInt


# --- Topic ---

class TopicResponse(BaseModel):
    slug: str
    description: str | None = None


class TopicList(BaseModel):
    topics: list[TopicResponse]


# --- User ---

class UserResponse(BaseModel):
    username: str
    name: str
    avatar_url: str | None = None


class UserList(BaseModel):
    users: list[UserResponse]


# --- Article ---

class ArticleResponse(BaseModel):
    article_id: int
    title: str
    topic: str
    author: str
    created_at: datetime
    votes: int
    comment_count: int


class ArticleDetail(ArticleResponse):
    body: str


class ArticleList(BaseModel):
    articles: list[ArticleResponse]


class ArticleEnvelope(BaseModel):
    article: ArticleDetail


class ArticleVotes(BaseModel):
    # Optional so a missing value gets the API's own 400 body; strict so
    # JSON booleans and numeric strings are rejected.
    inc_votes: StrictInt | None = None


# --- Comment ---

class CommentCreate(BaseModel):
    # Both optional: a missing value is left for the NOT NULL constraint
    # to reject, which the error handler reports as "Not Null Violation".
    username: str | None = None
    body: str | None = None


class CommentResponse(BaseModel):
    comment_id: int
    body: str
    article_id: int
    author: str
    votes: int
    created_at: datetime


class CommentList(BaseModel):
    comments: list[CommentResponse]


class CommentEnvelope(BaseModel):
    comment: CommentResponse


# --- Endpoints ---

class EndpointDescription(BaseModel):
    description: str
    example_response: Any = None


class EndpointList(BaseModel):
    endpoints: dict[str, EndpointDescription]
