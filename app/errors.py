"""
API error kinds and the storage-error normalizer.

Every failure the services report to the routing layer is an ``ApiError``
carrying an HTTP status and a stable ``msg``.  Storage exceptions are
caught once, at the point of execution, by ``translate_db_errors`` and
re-raised as one of these kinds; anything it cannot classify propagates
unchanged and ends up as a 500.
"""
import logging
from contextlib import contextmanager
from typing import Iterator

from sqlalchemy.exc import DataError, DBAPIError, IntegrityError

logger = logging.getLogger(__name__)


class ApiError(Exception):
    """Base class for errors rendered as ``{"msg": ...}`` responses."""

    status_code: int = 400
    msg: str = "bad request"

    def __init__(self, msg: str | None = None) -> None:
        if msg is not None:
            self.msg = msg
        super().__init__(self.msg)


class BadRequest(ApiError):
    status_code = 400


class MissingFields(ApiError):
    status_code = 400
    msg = "posted body missing required fields"


class InvalidDataType(ApiError):
    status_code = 400
    msg = "input uses invalid data type"


class ForeignKeyViolation(ApiError):
    status_code = 400
    msg = "foreign key violation"


class NotFound(ApiError):
    status_code = 404
    msg = "id not found"


class AlreadyExists(ApiError):
    status_code = 409
    msg = "resource already exists"


# ---------------------------------------------------------------------------
# Storage error classification
# ---------------------------------------------------------------------------

# PostgreSQL SQLSTATE codes
_FOREIGN_KEY_VIOLATION = "23503"
_UNIQUE_VIOLATION = "23505"
_INVALID_TEXT_REPRESENTATION = "22P02"
_NUMERIC_VALUE_OUT_OF_RANGE = "22003"


def _sqlstate(exc: DBAPIError) -> str | None:
    orig = exc.orig
    return getattr(orig, "sqlstate", None) or getattr(orig, "pgcode", None)


def normalize_db_error(exc: DBAPIError) -> ApiError | None:
    """
    Map a driver-level failure onto an API error kind.

    PostgreSQL drivers expose the SQLSTATE; SQLite only gives a message,
    so both are checked.  Returns None for failures with no mapping.
    """
    code = _sqlstate(exc)
    message = str(exc.orig).lower()

    if code == _FOREIGN_KEY_VIOLATION or "foreign key constraint" in message:
        return ForeignKeyViolation()
    if code == _UNIQUE_VIOLATION or "unique constraint" in message:
        return AlreadyExists()
    if code in (_INVALID_TEXT_REPRESENTATION, _NUMERIC_VALUE_OUT_OF_RANGE):
        return InvalidDataType()
    if isinstance(exc, DataError):
        return InvalidDataType()
    if isinstance(exc, IntegrityError):
        # NOT NULL / CHECK failures come from bad input rather than the server.
        return BadRequest("posted body violates a constraint")
    return None


@contextmanager
def translate_db_errors() -> Iterator[None]:
    """
    Re-raise storage failures inside the block as ``ApiError`` subclasses.

    Usage::

        with translate_db_errors():
            await db.flush()
    """
    try:
        yield
    except DBAPIError as exc:
        api_error = normalize_db_error(exc)
        if api_error is None:
            logger.error("Unclassified storage failure: %s", exc, exc_info=True)
            raise
        logger.debug("Storage failure mapped to %r: %s", api_error.msg, exc.orig)
        raise api_error from exc
