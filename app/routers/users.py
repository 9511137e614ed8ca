from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db
from app.schemas import UserEnvelope, UserList
from app.services import user_service

router = APIRouter(prefix="/api/users", tags=["users"])


@router.get("", response_model=UserList)
async def list_users(db: AsyncSession = Depends(get_db)):
    return {"users": await user_service.get_users(db)}


@router.get("/{username}", response_model=UserEnvelope)
async def get_user(username: str, db: AsyncSession = Depends(get_db)):
    return {"user": await user_service.get_user(db, username)}
