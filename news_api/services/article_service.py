"""
Article service: reads and vote updates for the Article aggregate.

Design notes
------------
- ``comment_count`` is never stored.  Every article read LEFT JOINs
  comments and aggregates with ``COUNT(comments.comment_id)`` so articles
  without comments report 0.
- Grouping by the primary key alone is enough for PostgreSQL (functional
  dependency) and SQLite to allow selecting the other article columns.
- Service functions flush but do not commit; the transaction boundary
  is owned by the ``get_db`` dependency in the router layer.
"""
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from news_api.errors import ApiError
from news_api.models import Article, Comment

# ---------------------------------------------------------------------------
# Serialisation helpers
# ---------------------------------------------------------------------------


def _article_to_dict(article: Article, comment_count: int) -> dict:
    """Serialise an Article ORM instance to a plain dict (list view)."""
    return {
        "article_id": article.article_id,
        "title": article.title,
        "topic": article.topic,
        "author": article.author,
        "created_at": article.created_at.isoformat() if article.created_at else None,
        "votes": article.votes,
        "comment_count": comment_count,
    }


def _article_detail_to_dict(article: Article, comment_count: int) -> dict:
    """Serialise an Article ORM instance to a plain dict (detail view)."""
    data = _article_to_dict(article, comment_count)
    data["body"] = article.body
    return data


def _with_comment_count():
    comment_count = func.count(Comment.comment_id).label("comment_count")
    return (
        select(Article, comment_count)
        .outerjoin(Article.comments)
        .group_by(Article.article_id)
    )


# ---------------------------------------------------------------------------
# Public service functions
# ---------------------------------------------------------------------------

async def get_articles(db: AsyncSession) -> list[dict]:
    """Return every article, newest first, each with its comment count."""
    q = _with_comment_count().order_by(
        Article.created_at.desc(), Article.article_id.desc()
    )
    result = await db.execute(q)
    return [_article_to_dict(article, count) for article, count in result.all()]


async def get_article(db: AsyncSession, article_id: int) -> dict | None:
    """
    Return the detail dict for *article_id* (body included).

    Returns None when the article does not exist.
    """
    q = _with_comment_count().where(Article.article_id == article_id)
    row = (await db.execute(q)).one_or_none()
    if row is None:
        return None
    article, count = row
    return _article_detail_to_dict(article, count)


async def update_article_votes(
    db: AsyncSession, article_id: int, inc_votes: int
) -> dict | None:
    """
    Add *inc_votes* (possibly negative) to the article's vote count and
    return the refreshed detail dict.

    Returns None when the article does not exist.
    """
    article = await db.get(Article, article_id)
    if article is None:
        return None

    # SQL-side increment: UPDATE ... SET votes = votes + :n
    article.votes = Article.votes + inc_votes
    await db.flush()
    await db.refresh(article, ["votes"])
    return await get_article(db, article_id)


async def ensure_article_exists(db: AsyncSession, article_id: int) -> None:
    """Raise ``ApiError`` "Article Not Found" unless *article_id* exists."""
    q = select(Article.article_id).where(Article.article_id == article_id)
    if (await db.execute(q)).scalar_one_or_none() is None:
        raise ApiError.not_found("Article Not Found")
