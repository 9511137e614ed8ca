"""
Query assembler tests: inspect the generated SQL without executing it.
"""
from sqlalchemy import inspect as sa_inspect

from app.models import Article, Comment, Topic, User
from app.queries import (
    ARTICLE_LISTING,
    ARTICLE_SORT_COLUMNS,
    COMMENT_LISTING,
    COMMENT_SORT_COLUMNS,
    build_article_count_query,
    build_article_list_query,
    build_comment_list_query,
)
from app.validation import ListingQuery


def _sql(stmt) -> str:
    return " ".join(str(stmt).split())


def test_sort_allow_lists_share_the_column_maps():
    assert ARTICLE_LISTING.sortable == set(ARTICLE_SORT_COLUMNS)
    assert COMMENT_LISTING.sortable == set(COMMENT_SORT_COLUMNS)
    assert ARTICLE_LISTING.sortable == {
        "title", "topic", "author", "body", "votes", "created_at", "article_id",
    }


def test_article_list_joins_and_counts_comments():
    sql = _sql(build_article_list_query(ListingQuery(None, "created_at", "DESC", 10, 1)))
    assert "count(comments.comment_id) AS comment_count" in sql
    assert "LEFT OUTER JOIN comments ON comments.article_id = articles.article_id" in sql
    assert "GROUP BY articles.article_id" in sql
    assert "WHERE" not in sql
    assert "ORDER BY articles.created_at DESC, articles.article_id DESC" in sql
    assert "LIMIT" in sql and "OFFSET" in sql


def test_article_list_topic_filter_is_a_bound_parameter():
    stmt = build_article_list_query(ListingQuery("mitch", "votes", "ASC", 5, 3))
    sql = _sql(stmt)
    assert "WHERE articles.topic = :topic_1" in sql
    assert "ORDER BY articles.votes ASC, articles.article_id ASC" in sql
    params = stmt.compile().params
    assert params["topic_1"] == "mitch"
    assert 5 in params.values() and 10 in params.values()


def test_article_list_primary_key_sort_has_no_tie_breaker():
    sql = _sql(build_article_list_query(ListingQuery(None, "article_id", "ASC", 10, 1)))
    assert "ORDER BY articles.article_id ASC LIMIT" in sql


def test_article_count_ignores_pagination():
    sql = _sql(build_article_count_query("cats"))
    assert "count(*)" in sql
    assert "WHERE articles.topic = :topic_1" in sql
    assert "LIMIT" not in sql

    assert "WHERE" not in _sql(build_article_count_query())


def test_comment_list_is_newest_first_for_one_article():
    sql = _sql(build_comment_list_query(1, ListingQuery(None, "created_at", "DESC", 10, 2)))
    assert "WHERE comments.article_id = :article_id_1" in sql
    assert "ORDER BY comments.created_at DESC, comments.comment_id DESC" in sql


def test_models_carry_no_orm_relationships():
    for model in (Topic, User, Article, Comment):
        assert not sa_inspect(model).relationships


def test_comment_cascade_lives_on_the_foreign_key():
    (fk,) = Comment.__table__.c.article_id.foreign_keys
    assert fk.ondelete == "CASCADE"
