"""Helpers shared by the table models."""

from datetime import UTC, datetime


def utc_now() -> datetime:
    """Current UTC time without tzinfo.

    ``reg_date`` columns are ``TIMESTAMP WITHOUT TIME ZONE``. The engine stamps
    them with this value, and it must compare equal after a round-trip through
    the database or the JSON read cache.
    """
    return datetime.now(UTC).replace(tzinfo=None)
