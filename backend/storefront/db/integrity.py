"""Helpers for reading database integrity errors across drivers."""
from sqlalchemy.exc import IntegrityError

UNIQUE_VIOLATION_SQLSTATE = "23505"


def is_unique_violation(exc: IntegrityError) -> bool:
    orig = exc.orig
    code = getattr(orig, "sqlstate", None) or getattr(orig, "pgcode", None)
    if code == UNIQUE_VIOLATION_SQLSTATE:
        return True
    # SQLite has no SQLSTATE codes
    return "UNIQUE constraint failed" in str(orig)


def violation_detail(exc: IntegrityError) -> str:
    """Return the driver's detail text, e.g. 'Key (email)=(a@b.com) already exists.'"""
    orig = exc.orig
    # asyncpg errors are wrapped by SQLAlchemy's adapter; the original is the cause
    for source in (getattr(orig, "__cause__", None), orig):
        detail = getattr(source, "detail", None)
        if detail:
            return detail
    diag = getattr(orig, "diag", None)
    if diag is not None and getattr(diag, "message_detail", None):
        return diag.message_detail
    return str(orig)
