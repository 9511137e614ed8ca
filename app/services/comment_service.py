"""
Comment service: comments hang off an article and share its lifecycle.

Listing confirms the parent article first, so comments for a missing
article are ``NotFound`` while an article without comments is an empty
list.  Creation does not pre-check: the article and author foreign keys
reject bad references and the error surfaces as ``ForeignKeyViolation``.
"""
import logging

from sqlalchemy import delete, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.errors import NotFound, translate_db_errors
from app.models import Comment
from app.queries import (
    COMMENT_LISTING,
    build_comment_count_query,
    build_comment_detail_query,
    build_comment_list_query,
)
from app.schemas import CommentCreate
from app.services.article_service import ensure_article_exists
from app.validation import validate_listing

logger = logging.getLogger(__name__)


def _comment_to_dict(row) -> dict:
    return {
        "comment_id": row["comment_id"],
        "article_id": row["article_id"],
        "author": row["author"],
        "body": row["body"],
        "votes": row["votes"],
        "created_at": row["created_at"].isoformat() if row["created_at"] else None,
    }


async def _fetch_comment(db: AsyncSession, comment_id: int) -> dict | None:
    with translate_db_errors():
        result = await db.execute(build_comment_detail_query(comment_id))
    row = result.mappings().one_or_none()
    return _comment_to_dict(row) if row is not None else None


async def get_comments(db: AsyncSession, article_id: int, params: dict[str, str]) -> dict:
    """Return ``{"comments": [...], "total_count": n}`` for one article, newest first."""
    query = validate_listing(params, COMMENT_LISTING)
    await ensure_article_exists(db, article_id)

    with translate_db_errors():
        rows = (await db.execute(build_comment_list_query(article_id, query))).mappings().all()
        total: int = (await db.execute(build_comment_count_query(article_id))).scalar_one()

    return {"comments": [_comment_to_dict(r) for r in rows], "total_count": total}


async def add_comment(db: AsyncSession, article_id: int, data: CommentCreate) -> dict:
    """Create a comment by ``data.username`` on *article_id*."""
    comment = Comment(
        body=data.body,
        author=data.username,
        article_id=article_id,
        votes=0,
    )
    db.add(comment)
    with translate_db_errors():
        await db.flush()

    logger.info("Created comment %d on article %d", comment.comment_id, article_id)
    return await _fetch_comment(db, comment.comment_id)


async def update_comment_votes(db: AsyncSession, comment_id: int, delta: int) -> dict:
    if await _fetch_comment(db, comment_id) is None:
        raise NotFound()

    stmt = (
        update(Comment)
        .where(Comment.comment_id == comment_id)
        .values(votes=Comment.votes + delta)
        .execution_options(synchronize_session=False)
    )
    with translate_db_errors():
        result = await db.execute(stmt)
    if result.rowcount == 0:
        raise NotFound()

    logger.info("Comment %d votes changed by %+d", comment_id, delta)
    return await _fetch_comment(db, comment_id)


async def delete_comment(db: AsyncSession, comment_id: int) -> None:
    if await _fetch_comment(db, comment_id) is None:
        raise NotFound()

    stmt = (
        delete(Comment)
        .where(Comment.comment_id == comment_id)
        .execution_options(synchronize_session=False)
    )
    with translate_db_errors():
        result = await db.execute(stmt)
    if result.rowcount == 0:
        raise NotFound()

    logger.info("Deleted comment %d", comment_id)
