import re

from fastapi import Path

from news_api.errors import ApiError

# PostgreSQL ``integer`` column bounds.
INT4_MIN = -2_147_483_648
INT4_MAX = 2_147_483_647

_INTEGER_RE = re.compile(r"[+-]?[0-9]+")


def parse_integer_id(raw: str) -> int:
    """
    Parse a path segment that must hold an ``integer`` identifier.

    Raises
    ------
    ApiError
        ``Bad Request`` when *raw* is not a base-10 integer literal, and
        ``Out Of Range For Type Integer`` when it does not fit the column
        type, so neither case ever reaches the database.
    """
    if not _INTEGER_RE.fullmatch(raw):
        raise ApiError.validation("Bad Request")
    value = int(raw)
    if not INT4_MIN <= value <= INT4_MAX:
        raise ApiError.validation("Out Of Range For Type Integer")
    return value


def valid_article_id(
    article_id: str = Path(description="Numeric article identifier."),
) -> int:
    """
    FastAPI dependency resolving the ``{article_id}`` path segment.

    The segment is declared as ``str`` so malformed values produce the
    API's own 400 body instead of FastAPI's 422 validation payload.
    """
    return parse_integer_id(article_id)
