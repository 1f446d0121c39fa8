from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from news_api.database import get_db
from news_api.dependencies import INT4_MAX, INT4_MIN, valid_article_id
from news_api.errors import ApiError
from news_api.schemas import (
    ArticleEnvelope,
    ArticleList,
    ArticleVotes,
    CommentCreate,
    CommentEnvelope,
    CommentList,
)
from news_api.services import article_service, comment_service

router = APIRouter(prefix="/api/articles", tags=["articles"])


@router.get("", response_model=ArticleList)
async def list_articles(db: AsyncSession = Depends(get_db)):
    """All articles, newest first, with their comment counts."""
    return {"articles": await article_service.get_articles(db)}


@router.get("/{article_id}", response_model=ArticleEnvelope)
async def get_article(
    article_id: int = Depends(valid_article_id),
    db: AsyncSession = Depends(get_db),
):
    """A single article including its body."""
    article = await article_service.get_article(db, article_id)
    if article is None:
        raise ApiError.not_found("Article Not Found")
    return {"article": article}


@router.patch("/{article_id}", response_model=ArticleEnvelope)
async def update_article_votes(
    data: ArticleVotes,
    article_id: int = Depends(valid_article_id),
    db: AsyncSession = Depends(get_db),
):
    """Add inc_votes to an article's vote count."""
    if data.inc_votes is None:
        raise ApiError.validation("Bad Request")
    if not INT4_MIN <= data.inc_votes <= INT4_MAX:
        raise ApiError.validation("Out Of Range For Type Integer")
    article = await article_service.update_article_votes(db, article_id, data.inc_votes)
    if article is None:
        raise ApiError.not_found("Article Not Found")
    return {"article": article}


@router.get("/{article_id}/comments", response_model=CommentList)
async def list_comments(
    article_id: int = Depends(valid_article_id),
    db: AsyncSession = Depends(get_db),
):
    """An article's comments, most recent first."""
    return {"comments": await comment_service.get_comments(db, article_id)}


@router.post("/{article_id}/comments", status_code=201, response_model=CommentEnvelope)
async def add_comment(
    data: CommentCreate,
    article_id: int = Depends(valid_article_id),
    db: AsyncSession = Depends(get_db),
):
    """Post a comment on an article as an existing user."""
    return {"comment": await comment_service.add_comment(db, article_id, data)}
