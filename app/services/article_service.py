"""
Article service: listing, lookup and mutation rules for the Article aggregate.

Design notes
------------
- Listing is validate → assemble → execute.  Validation errors are raised
  before any statement runs, except that the live topic slugs are read
  when (and only when) a ``topic`` filter is supplied.
- ``comment_count`` is never stored: every read joins ``comments`` and
  counts, see ``app.queries``.
- Vote updates and deletes check existence first so a missing row is
  reported as ``NotFound`` rather than a silent zero-row write.  The
  check is advisory; the UPDATE / DELETE row count is checked as well,
  so a row removed in between still reports ``NotFound``.
- Service functions flush but do not commit; the transaction boundary
  is owned by the ``get_db`` dependency in the router layer.
"""
import logging

from sqlalchemy import delete, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.errors import NotFound, translate_db_errors
from app.models import Article
from app.queries import (
    ARTICLE_LISTING,
    build_article_count_query,
    build_article_detail_query,
    build_article_list_query,
)
from app.schemas import ArticleCreate
from app.services.topic_service import get_topic_slugs
from app.validation import check_query_keys, validate_listing

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Serialisation helpers
# ---------------------------------------------------------------------------

def _article_to_dict(row) -> dict:
    """Serialise an article row (mapping from ``app.queries``) to a plain dict."""
    data = {
        "article_id": row["article_id"],
        "title": row["title"],
        "topic": row["topic"],
        "author": row["author"],
        "created_at": row["created_at"].isoformat() if row["created_at"] else None,
        "votes": row["votes"],
        "comment_count": row["comment_count"],
    }
    if "body" in row:
        data["body"] = row["body"]
    return data


async def _fetch_article(db: AsyncSession, article_id: int) -> dict | None:
    with translate_db_errors():
        result = await db.execute(build_article_detail_query(article_id))
    row = result.mappings().one_or_none()
    return _article_to_dict(row) if row is not None else None


async def ensure_article_exists(db: AsyncSession, article_id: int) -> None:
    """Raise ``NotFound`` unless *article_id* names an existing article."""
    if await _fetch_article(db, article_id) is None:
        raise NotFound()


# ---------------------------------------------------------------------------
# Public service functions
# ---------------------------------------------------------------------------

async def get_articles(db: AsyncSession, params: dict[str, str]) -> dict:
    """
    Return ``{"articles": [...], "total_count": n}`` for a raw query bag.

    Two SQL statements are issued once validation passes:
    1. SELECT with comment_count, topic filter, ORDER BY and LIMIT/OFFSET.
    2. COUNT of all articles matching the topic filter.

    A page past the end yields an empty list with the real total.
    """
    check_query_keys(params, ARTICLE_LISTING)
    topics = await get_topic_slugs(db) if "topic" in params else ()
    query = validate_listing(params, ARTICLE_LISTING, topics)

    with translate_db_errors():
        rows = (await db.execute(build_article_list_query(query))).mappings().all()
        total: int = (await db.execute(build_article_count_query(query.topic))).scalar_one()

    return {"articles": [_article_to_dict(r) for r in rows], "total_count": total}


async def get_article(db: AsyncSession, article_id: int) -> dict:
    """Return the full article (including ``body``) or raise ``NotFound``."""
    article = await _fetch_article(db, article_id)
    if article is None:
        raise NotFound()
    return article


async def create_article(db: AsyncSession, data: ArticleCreate) -> dict:
    """
    Create an article from a validated request body.

    Unknown authors or topics are rejected by the foreign keys and
    reported as ``ForeignKeyViolation``.
    """
    article = Article(
        title=data.title,
        body=data.body,
        topic=data.topic,
        author=data.username,
        votes=0,
    )
    db.add(article)
    with translate_db_errors():
        await db.flush()

    logger.info("Created article %d by %r", article.article_id, article.author)
    return await get_article(db, article.article_id)


async def update_article_votes(db: AsyncSession, article_id: int, delta: int) -> dict:
    """
    Add *delta* to the article's vote count and return it.

    The delta is applied in a single ``votes = votes + :delta`` UPDATE, so
    concurrent increments never lose writes.  No floor is applied.
    """
    await ensure_article_exists(db, article_id)

    stmt = (
        update(Article)
        .where(Article.article_id == article_id)
        .values(votes=Article.votes + delta)
        .execution_options(synchronize_session=False)
    )
    with translate_db_errors():
        result = await db.execute(stmt)
    if result.rowcount == 0:
        raise NotFound()

    logger.info("Article %d votes changed by %+d", article_id, delta)
    return await get_article(db, article_id)


async def delete_article(db: AsyncSession, article_id: int) -> None:
    """
    Delete the article identified by *article_id*; its comments go with it
    via ON DELETE CASCADE.  Deleting a missing article raises ``NotFound``.
    """
    await ensure_article_exists(db, article_id)

    stmt = (
        delete(Article)
        .where(Article.article_id == article_id)
        .execution_options(synchronize_session=False)
    )
    with translate_db_errors():
        result = await db.execute(stmt)
    if result.rowcount == 0:
        raise NotFound()

    logger.info("Deleted article %d", article_id)
