from datetime import datetime

from pydantic import BaseModel, Field, StrictInt, StrictStr, field_validator

from app.validation import MAX_INT


# --- Topic ---

class TopicCreate(BaseModel):
    slug: StrictStr
    description: StrictStr

    @field_validator("slug")
    @classmethod
    def lower_slug(cls, value: str) -> str:
        # The topic filter matches case-insensitively, so slugs are stored lower-case.
        return value.lower()


class TopicResponse(BaseModel):
    slug: str
    description: str


class TopicEnvelope(BaseModel):
    topic: TopicResponse


class TopicList(BaseModel):
    topics: list[TopicResponse]


# --- User ---

class UserResponse(BaseModel):
    username: str
    name: str
    avatar_url: str | None = None


class UserEnvelope(BaseModel):
    user: UserResponse


class UserList(BaseModel):
    users: list[UserResponse]


# --- Votes ---

class VoteUpdate(BaseModel):
    """PATCH body for articles and comments.  Negative deltas are allowed."""

    inc_votes: StrictInt = Field(ge=-MAX_INT, le=MAX_INT)


# --- Article ---

class ArticleCreate(BaseModel):
    username: StrictStr
    title: StrictStr
    body: StrictStr
    topic: StrictStr


class ArticleSummary(BaseModel):
    article_id: int
    title: str
    topic: str
    author: str
    created_at: datetime
    votes: int
    comment_count: int


class ArticleResponse(ArticleSummary):
    body: str


class ArticleEnvelope(BaseModel):
    article: ArticleResponse


class ArticleList(BaseModel):
    articles: list[ArticleSummary]
    total_count: int = Field(ge=0)


# --- Comment ---

class CommentCreate(BaseModel):
    username: StrictStr
    body: StrictStr


class CommentResponse(BaseModel):
    comment_id: int
    article_id: int
    author: str
    body: str
    votes: int
    created_at: datetime


class CommentEnvelope(BaseModel):
    comment: CommentResponse


class CommentList(BaseModel):
    comments: list[CommentResponse]
    total_count: int = Field(ge=0)
