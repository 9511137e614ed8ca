"""
Listing query validation.

Pure functions: nothing here touches storage.  Request bodies and path
identifiers are validated by FastAPI against ``app.schemas``; the raw
listing query bag needs its own messages, so it is checked here.

Listing parameters are checked in a fixed precedence (unknown key, topic,
sort_by, order, limit, page) and the first violation is raised; a passing
bag is normalised into a ``ListingQuery``.
"""
import re
from collections.abc import Collection, Mapping
from dataclasses import dataclass
from typing import Callable

from app.errors import ApiError, BadRequest

_POSITIVE_INT_RE = re.compile(r"^\d+$", re.ASCII)

ORDERS = ("ASC", "DESC")

# Identifiers, vote deltas, limits and pages all fit 32-bit integer columns or clauses.
MAX_INT = 2**31 - 1


@dataclass(frozen=True)
class ListingRules:
    """
    Per-endpoint listing contract.

    ``sortable`` is the closed allow-list for ``sort_by``; the query
    assembler builds its ORDER BY from the same mapping.  The ``*_error``
    callables produce the endpoint-specific failure for each rule.
    """

    allowed_keys: frozenset[str]
    sortable: frozenset[str]
    default_sort_by: str
    default_order: str
    default_limit: int
    unknown_key_error: Callable[[], ApiError]
    limit_error: Callable[[], ApiError]
    page_error: Callable[[], ApiError]
    topic_error: Callable[[], ApiError] = lambda: BadRequest("invalid topic query")
    sort_by_error: Callable[[], ApiError] = lambda: BadRequest("invalid sort_by query")
    order_error: Callable[[], ApiError] = lambda: BadRequest("order must be asc or desc")

    def __post_init__(self) -> None:
        if self.default_sort_by not in self.sortable:
            raise ValueError(f"default sort_by {self.default_sort_by!r} is not sortable")
        if self.default_order not in ORDERS:
            raise ValueError(f"default order must be one of {ORDERS}, got {self.default_order!r}")
        if self.default_limit < 1:
            raise ValueError("default limit must be a positive integer")


@dataclass(frozen=True)
class ListingQuery:
    """Normalised filter / sort / pagination descriptor."""

    topic: str | None
    sort_by: str
    order: str
    limit: int
    page: int

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit

    @property
    def descending(self) -> bool:
        return self.order == "DESC"


def parse_positive_int(raw: str) -> int | None:
    """Return ``int(raw)`` when *raw* is a decimal integer >= 1, else None."""
    raw = raw.strip()
    if not _POSITIVE_INT_RE.match(raw):
        return None
    value = int(raw)
    return value if 1 <= value <= MAX_INT else None


def check_query_keys(params: Mapping[str, str], rules: ListingRules) -> None:
    for key in params:
        if key not in rules.allowed_keys:
            raise rules.unknown_key_error()


def validate_listing(
    params: Mapping[str, str],
    rules: ListingRules,
    topics: Collection[str] = (),
) -> ListingQuery:
    """
    Validate a raw query-parameter bag against *rules*.

    *topics* is the live set of topic slugs; it is only consulted when a
    ``topic`` parameter is present.  The returned descriptor carries the
    stored spelling of the topic slug, so the filter matches exactly.

    The key check runs first here as well, which keeps this function
    complete on its own.  A caller that must read *topics* from storage
    calls ``check_query_keys`` before that read, so a bag with an unknown
    key is rejected without touching storage.
    """
    check_query_keys(params, rules)

    topic = None
    if "topic" in params:
        known = {slug.lower(): slug for slug in topics}
        topic = known.get(params["topic"].lower())
        if topic is None:
            raise rules.topic_error()

    sort_by = rules.default_sort_by
    if "sort_by" in params:
        sort_by = params["sort_by"].lower()
        if sort_by not in rules.sortable:
            raise rules.sort_by_error()

    order = rules.default_order
    if "order" in params:
        order = params["order"].upper()
        if order not in ORDERS:
            raise rules.order_error()

    limit = rules.default_limit
    if "limit" in params:
        limit = parse_positive_int(params["limit"])
        if limit is None:
            raise rules.limit_error()

    page = 1
    if "p" in params:
        page = parse_positive_int(params["p"])
        if page is None:
            raise rules.page_error()

    return ListingQuery(topic=topic, sort_by=sort_by, order=order, limit=limit, page=page)

