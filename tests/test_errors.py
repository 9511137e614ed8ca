"""
Error classification tests: storage failures are classified once and
re-raised with a stable message, anything unknown propagates untouched.
Request-validation failures reduce to a single API error.
"""
import pytest
from pydantic import ValidationError
from sqlalchemy.exc import DataError, IntegrityError, OperationalError

from app.errors import (
    AlreadyExists,
    BadRequest,
    ForeignKeyViolation,
    InvalidDataType,
    MissingFields,
    normalize_db_error,
    translate_db_errors,
)
from app.exception_handlers import classify_validation_errors
from app.schemas import TopicCreate, VoteUpdate


class _PgError(Exception):
    """Stand-in for a driver exception exposing a SQLSTATE."""

    def __init__(self, message: str, sqlstate: str):
        super().__init__(message)
        self.sqlstate = sqlstate


@pytest.mark.parametrize(
    "exc, expected",
    [
        (IntegrityError("INSERT", {}, Exception("FOREIGN KEY constraint failed")), ForeignKeyViolation),
        (IntegrityError("INSERT", {}, _PgError("violates foreign key", "23503")), ForeignKeyViolation),
        (IntegrityError("INSERT", {}, Exception("UNIQUE constraint failed: topics.slug")), AlreadyExists),
        (IntegrityError("INSERT", {}, _PgError("duplicate key value", "23505")), AlreadyExists),
        (DataError("SELECT", {}, _PgError("invalid input syntax", "22P02")), InvalidDataType),
        (DataError("SELECT", {}, _PgError("out of range", "22003")), InvalidDataType),
        (DataError("SELECT", {}, Exception("value out of int32 range")), InvalidDataType),
        (IntegrityError("INSERT", {}, Exception("NOT NULL constraint failed")), BadRequest),
    ],
)
def test_normalize_db_error(exc, expected):
    assert type(normalize_db_error(exc)) is expected


def test_normalize_db_error_leaves_unknown_failures():
    exc = OperationalError("SELECT", {}, Exception("database is locked"))
    assert normalize_db_error(exc) is None


def test_translate_db_errors_reraises_as_api_error():
    with pytest.raises(ForeignKeyViolation) as excinfo:
        with translate_db_errors():
            raise IntegrityError("INSERT", {}, Exception("FOREIGN KEY constraint failed"))
    assert excinfo.value.msg == "foreign key violation"
    assert excinfo.value.status_code == 400
    assert isinstance(excinfo.value.__cause__, IntegrityError)


def test_translate_db_errors_propagates_unclassified():
    with pytest.raises(OperationalError):
        with translate_db_errors():
            raise OperationalError("SELECT", {}, Exception("connection refused"))


def test_translate_db_errors_ignores_non_storage_errors():
    with pytest.raises(KeyError):
        with translate_db_errors():
            raise KeyError("not a storage failure")


# ---------------------------------------------------------------------------
# Request validation errors
# ---------------------------------------------------------------------------

def _err(type_, *loc):
    return {"type": type_, "loc": loc, "msg": "", "input": None}


@pytest.mark.parametrize(
    "errors, expected, msg",
    [
        ([_err("int_parsing", "path", "article_id")], InvalidDataType, "input uses invalid data type"),
        (
            [_err("missing", "body", "username"), _err("less_than_equal", "path", "article_id")],
            InvalidDataType,
            "input uses invalid data type",
        ),
        ([_err("missing", "body")], MissingFields, "posted body missing required fields"),
        (
            [_err("string_type", "body", "title"), _err("missing", "body", "topic")],
            MissingFields,
            "posted body missing required fields",
        ),
        ([_err("json_invalid", "body", 1)], BadRequest, "invalid request body"),
        ([_err("model_attributes_type", "body")], BadRequest, "invalid request body"),
        ([_err("int_type", "body", "inc_votes")], InvalidDataType, "input uses invalid data type"),
        ([_err("less_than_equal", "body", "inc_votes")], InvalidDataType, "input uses invalid data type"),
    ],
)
def test_classify_validation_errors(errors, expected, msg):
    api_error = classify_validation_errors(errors)
    assert type(api_error) is expected
    assert api_error.msg == msg


@pytest.mark.parametrize("delta", [True, 1.0, "1", None, 2**31])
def test_vote_update_rejects_non_int_or_out_of_range(delta):
    with pytest.raises(ValidationError):
        VoteUpdate(inc_votes=delta)


def test_vote_update_accepts_negative_delta():
    assert VoteUpdate(inc_votes=-(2**31 - 1)).inc_votes == -(2**31 - 1)


def test_topic_create_lower_cases_slug():
    assert TopicCreate(slug="MiTcH", description="d").slug == "mitch"
