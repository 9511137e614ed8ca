"""
Query assembler for the listing endpoints.

The ``*_SORT_COLUMNS`` mappings are the single declaration of what each
listing can be ordered by: their keys are the ``sort_by`` allow-list used
by ``app.validation`` and their values are the ORDER BY expressions used
here.  A sort key reaches SQL only by lookup in one of these mappings,
never as text.
"""
from functools import partial

from sqlalchemy import Select, asc, desc, func, select

from app.config import settings
from app.errors import BadRequest, InvalidDataType
from app.models import Article, Comment
from app.validation import ListingQuery, ListingRules

# ---------------------------------------------------------------------------
# Sortable columns
# ---------------------------------------------------------------------------

ARTICLE_SORT_COLUMNS = {
    "article_id": Article.article_id,
    "title": Article.title,
    "topic": Article.topic,
    "author": Article.author,
    "body": Article.body,
    "votes": Article.votes,
    "created_at": Article.created_at,
}

COMMENT_SORT_COLUMNS = {
    "created_at": Comment.created_at,
}

# ---------------------------------------------------------------------------
# Listing rules per endpoint
# ---------------------------------------------------------------------------

ARTICLE_LISTING = ListingRules(
    allowed_keys=frozenset({"topic", "sort_by", "order", "limit", "p"}),
    sortable=frozenset(ARTICLE_SORT_COLUMNS),
    default_sort_by=settings.DEFAULT_SORT_BY,
    default_order=settings.DEFAULT_ORDER,
    default_limit=settings.DEFAULT_LIMIT,
    unknown_key_error=partial(BadRequest, "invalid query key"),
    limit_error=partial(BadRequest, "invalid limit query"),
    page_error=partial(BadRequest, "invalid page query"),
)

# Comments are always newest first; only pagination is negotiable.
COMMENT_LISTING = ListingRules(
    allowed_keys=frozenset({"limit", "p"}),
    sortable=frozenset(COMMENT_SORT_COLUMNS),
    default_sort_by="created_at",
    default_order="DESC",
    default_limit=settings.DEFAULT_LIMIT,
    unknown_key_error=partial(BadRequest, "invalid query"),
    limit_error=InvalidDataType,
    page_error=InvalidDataType,
)

# ---------------------------------------------------------------------------
# Column sets
# ---------------------------------------------------------------------------

ARTICLE_SUMMARY_COLUMNS = (
    Article.article_id,
    Article.title,
    Article.topic,
    Article.author,
    Article.created_at,
    Article.votes,
)

COMMENT_COLUMNS = (
    Comment.comment_id,
    Comment.article_id,
    Comment.author,
    Comment.body,
    Comment.votes,
    Comment.created_at,
)


def _comment_count():
    return func.count(Comment.comment_id).label("comment_count")


def _order_clauses(sort_columns: dict, primary_key, query: ListingQuery) -> list:
    """
    Return ORDER BY clauses for *query*.

    ``query.sort_by`` has already passed the allow-list check; the lookup
    below is what turns it into a column.  The primary key breaks ties in
    the same direction so LIMIT/OFFSET pages never overlap.
    """
    column = sort_columns[query.sort_by]
    direction = desc if query.descending else asc
    clauses = [direction(column)]
    if column is not primary_key:
        clauses.append(direction(primary_key))
    return clauses


# ---------------------------------------------------------------------------
# Articles
# ---------------------------------------------------------------------------

def _articles_with_comment_count(*columns) -> Select:
    return (
        select(*columns, _comment_count())
        .outerjoin(Comment, Comment.article_id == Article.article_id)
        .group_by(Article.article_id)
    )


def build_article_list_query(query: ListingQuery) -> Select:
    stmt = _articles_with_comment_count(*ARTICLE_SUMMARY_COLUMNS)
    if query.topic is not None:
        stmt = stmt.where(Article.topic == query.topic)
    return (
        stmt.order_by(*_order_clauses(ARTICLE_SORT_COLUMNS, Article.article_id, query))
        .limit(query.limit)
        .offset(query.offset)
    )


def build_article_count_query(topic: str | None = None) -> Select:
    """COUNT of articles matching the topic filter, ignoring pagination."""
    stmt = select(func.count()).select_from(Article)
    if topic is not None:
        stmt = stmt.where(Article.topic == topic)
    return stmt


def build_article_detail_query(article_id: int) -> Select:
    return _articles_with_comment_count(*ARTICLE_SUMMARY_COLUMNS, Article.body).where(
        Article.article_id == article_id
    )


# ---------------------------------------------------------------------------
# Comments
# ---------------------------------------------------------------------------

def build_comment_list_query(article_id: int, query: ListingQuery) -> Select:
    return (
        select(*COMMENT_COLUMNS)
        .where(Comment.article_id == article_id)
        .order_by(*_order_clauses(COMMENT_SORT_COLUMNS, Comment.comment_id, query))
        .limit(query.limit)
        .offset(query.offset)
    )


def build_comment_count_query(article_id: int) -> Select:
    return select(func.count()).select_from(Comment).where(Comment.article_id == article_id)


def build_comment_detail_query(comment_id: int) -> Select:
    return select(*COMMENT_COLUMNS).where(Comment.comment_id == comment_id)
