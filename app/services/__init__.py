# Services package.
#
# Each module exposes a focused set of async functions that encapsulate
# business logic and database access for a single aggregate:
#
#   article_service : filtered listing, lookup, votes, create, delete
#   comment_service : per-article listing, votes, create, delete
#   topic_service   : topic list / create and the live topic allow-list
#   user_service    : user list and lookup by username
#
# All service functions accept an AsyncSession as their first argument
# so that the router layer controls the transaction boundary via the
# ``get_db`` dependency.  Failures are raised as ``app.errors.ApiError``.
