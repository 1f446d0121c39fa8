# Services package: the data access layer.
#
# Each module exposes a focused set of async functions for one resource:
#
#   topic_service    - topic listing
#   article_service  - article listing, lookup, vote updates, existence check
#   comment_service  - comments for an article, comment creation
#   user_service     - user listing, existence check
#
# All service functions accept an AsyncSession as their first argument so
# that the router layer controls the transaction boundary via the
# ``get_db`` dependency.  Database errors are never caught here; they
# propagate to the handlers registered in ``news_api.error_handlers``.
