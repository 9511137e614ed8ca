from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db
from app.schemas import TopicCreate, TopicEnvelope, TopicList
from app.services import topic_service

router = APIRouter(prefix="/api/topics", tags=["topics"])


@router.get("", response_model=TopicList)
async def list_topics(db: AsyncSession = Depends(get_db)):
    return {"topics": await topic_service.get_topics(db)}


@router.post("", response_model=TopicEnvelope)
async def create_topic(data: TopicCreate, db: AsyncSession = Depends(get_db)):
    return {"topic": await topic_service.create_topic(db, data)}
