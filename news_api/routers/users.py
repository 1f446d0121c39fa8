from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from news_api.database import get_db
from news_api.schemas import UserList
from news_api.services import user_service

router = APIRouter(prefix="/api/users", tags=["users"])


@router.get("", response_model=UserList)
async def list_users(db: AsyncSession = Depends(get_db)):
    """All users."""
    return {"users": await user_service.get_users(db)}
