"""
Comment service: comments belonging to the Article aggregate.

Both operations first confirm the parent article exists so that an unknown
article is reported as "Article Not Found" rather than as an empty list or
a raw foreign-key violation.
"""
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from news_api.models import Comment
from news_api.schemas import CommentCreate
from news_api.services import article_service, user_service


def _comment_to_dict(comment: Comment) -> dict:
    return {
        "comment_id": comment.comment_id,
        "body": comment.body,
        "article_id": comment.article_id,
        "author": comment.author,
        "votes": comment.votes,
        "created_at": comment.created_at.isoformat() if comment.created_at else None,
    }


async def get_comments(db: AsyncSession, article_id: int) -> list[dict]:
    """Return the article's comments, most recent first (may be empty)."""
    await article_service.ensure_article_exists(db, article_id)

    q = (
        select(Comment)
        .where(Comment.article_id == article_id)
        .order_by(Comment.created_at.desc(), Comment.comment_id.desc())
    )
    result = await db.execute(q)
    return [_comment_to_dict(c) for c in result.scalars().all()]


async def add_comment(db: AsyncSession, article_id: int, data: CommentCreate) -> dict:
    """
    Insert a comment by ``data.username`` on *article_id* and return it.

    A missing username or body is passed through as NULL; the store's
    NOT NULL constraint rejects it and the error handler reports it.
    """
    await article_service.ensure_article_exists(db, article_id)
    if data.username is not None:
        await user_service.ensure_user_exists(db, data.username)

    comment = Comment(body=data.body, author=data.username, article_id=article_id)
    db.add(comment)
    await db.flush()
    # created_at is assigned by the database.
    await db.refresh(comment)
    return _comment_to_dict(comment)
