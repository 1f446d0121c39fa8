"""
Error model for the News API.

Application code raises exactly one exception type, ``ApiError``, tagged
with an ``ErrorKind``.  Database failures are never caught where they
happen; the error handlers call ``classify`` to turn whatever reached them
into an ``ApiError``.

Vendor error codes are PostgreSQL SQLSTATE values.  The SQLite driver used
by the test-suite reports extended result-code names instead, which are
translated to the equivalent SQLSTATE before lookup.
"""
from enum import Enum

from sqlalchemy.exc import DBAPIError


class ErrorKind(str, Enum):
    VALIDATION = "validation"
    NOT_FOUND = "notFound"
    INTERNAL = "internal"

    @property
    def status_code(self) -> int:
        return _KIND_STATUS[self]


_KIND_STATUS = {
    ErrorKind.VALIDATION: 400,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.INTERNAL: 500,
}


class ApiError(Exception):
    """A failure that maps directly onto an HTTP status and a ``msg`` body."""

    def __init__(self, kind: ErrorKind, msg: str) -> None:
        super().__init__(msg)
        self.kind = kind
        self.msg = msg

    @property
    def status_code(self) -> int:
        return self.kind.status_code

    def to_response(self) -> dict:
        return {"msg": self.msg}

    @classmethod
    def validation(cls, msg: str = "Bad Request") -> "ApiError":
        return cls(ErrorKind.VALIDATION, msg)

    @classmethod
    def not_found(cls, msg: str = "Not found") -> "ApiError":
        return cls(ErrorKind.NOT_FOUND, msg)

    @classmethod
    def internal(cls) -> "ApiError":
        return cls(ErrorKind.INTERNAL, "Internal Server Error")

    def __repr__(self) -> str:
        return f"ApiError(kind={self.kind.value!r}, msg={self.msg!r})"


# ---------------------------------------------------------------------------
# Vendor error codes
# ---------------------------------------------------------------------------

INVALID_TEXT_REPRESENTATION = "22P02"
NOT_NULL_VIOLATION = "23502"
FOREIGN_KEY_VIOLATION = "23503"
NUMERIC_VALUE_OUT_OF_RANGE = "22003"

SQLSTATE_ERRORS: dict[str, tuple[ErrorKind, str]] = {
    INVALID_TEXT_REPRESENTATION: (ErrorKind.VALIDATION, "Bad Request"),
    NOT_NULL_VIOLATION: (ErrorKind.VALIDATION, "Not Null Violation"),
    FOREIGN_KEY_VIOLATION: (ErrorKind.NOT_FOUND, "Not found"),
    NUMERIC_VALUE_OUT_OF_RANGE: (ErrorKind.VALIDATION, "Out of range for type integer"),
}

_SQLITE_TO_SQLSTATE = {
    "SQLITE_CONSTRAINT_NOTNULL": NOT_NULL_VIOLATION,
    "SQLITE_CONSTRAINT_FOREIGNKEY": FOREIGN_KEY_VIOLATION,
    "SQLITE_MISMATCH": INVALID_TEXT_REPRESENTATION,
}


def vendor_code(exc: DBAPIError) -> str | None:
    """
    Return the SQLSTATE carried by *exc*, or None when the driver did not
    report one.

    psycopg exposes ``pgcode``/``sqlstate`` on the DBAPI exception; the
    asyncpg adapter copies ``sqlstate`` across and also chains the native
    asyncpg exception as ``__cause__``.
    """
    orig = exc.orig
    for candidate in (orig, getattr(orig, "__cause__", None)):
        if candidate is None:
            continue
        for attr in ("sqlstate", "pgcode"):
            code = getattr(candidate, attr, None)
            if code:
                return str(code)
        errorname = getattr(candidate, "sqlite_errorname", None)
        if errorname in _SQLITE_TO_SQLSTATE:
            return _SQLITE_TO_SQLSTATE[errorname]
    return None


def classify(exc: Exception) -> ApiError:
    """
    Map any exception onto an ``ApiError``.

    Precedence: an ``ApiError`` is returned unchanged; a database error with
    a recognised vendor code gets its fixed (kind, message) pair; everything
    else is internal.
    """
    if isinstance(exc, ApiError):
        return exc
    if isinstance(exc, DBAPIError):
        known = SQLSTATE_ERRORS.get(vendor_code(exc))
        if known is not None:
            return ApiError(*known)
    return ApiError.internal()
