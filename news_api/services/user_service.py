"""
User service: reads for the User aggregate.

Users are only read by this API; they are created by the seed script or
by whatever owns the database.
"""
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from news_api.errors import ApiError
from news_api.models import User


def _user_to_dict(user: User) -> dict:
    return {
        "username": user.username,
        "name": user.name,
        "avatar_url": user.avatar_url,
    }


async def get_users(db: AsyncSession) -> list[dict]:
    """Return all users ordered by username."""
    result = await db.execute(select(User).order_by(User.username))
    return [_user_to_dict(u) for u in result.scalars().all()]


async def ensure_user_exists(db: AsyncSession, username: str) -> None:
    """
    Raise ``ApiError`` "User Not Found" unless *username* exists.

    This is a separate read from any subsequent insert; a user removed in
    between surfaces as a foreign-key violation instead.
    """
    result = await db.execute(select(User.username).where(User.username == username))
    if result.scalar_one_or_none() is None:
        raise ApiError.not_found("User Not Found")
