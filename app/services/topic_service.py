"""
Topic service: read and create topics.

Topic slugs double as the live allow-list for the ``topic`` filter on the
article listing, so ``get_topic_slugs`` is read per request rather than
hard-coded.
"""
import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.errors import AlreadyExists, translate_db_errors
from app.models import Topic
from app.schemas import TopicCreate

logger = logging.getLogger(__name__)


def _topic_to_dict(topic: Topic) -> dict:
    return {"slug": topic.slug, "description": topic.description}


async def get_topics(db: AsyncSession) -> list[dict]:
    result = await db.execute(select(Topic).order_by(Topic.slug))
    return [_topic_to_dict(t) for t in result.scalars().all()]


async def get_topic_slugs(db: AsyncSession) -> list[str]:
    result = await db.execute(select(Topic.slug))
    return list(result.scalars().all())


async def create_topic(db: AsyncSession, data: TopicCreate) -> dict:
    """
    Insert a topic.  ``TopicCreate`` lower-cases the slug, so slugs that
    differ only by case collide and surface as ``AlreadyExists`` (409).
    """
    topic = Topic(slug=data.slug, description=data.description)
    db.add(topic)
    try:
        with translate_db_errors():
            await db.flush()
    except AlreadyExists as exc:
        raise AlreadyExists("topic already exists") from exc

    logger.info("Created topic %r", topic.slug)
    return _topic_to_dict(topic)
