"""Shared utilities."""

import uuid


def is_uuid(value: str | None) -> bool:
    """True if value parses as a UUID (row ids are UUIDs)."""
    try:
        uuid.UUID(str(value))
    except (ValueError, TypeError):
        return False
    return True


def canonical_uuid(value: str | None) -> str | None:
    """Lowercase hyphenated form of a UUID string (as stored), or None if it is not one."""
    try:
        return str(uuid.UUID(str(value).strip()))
    except (ValueError, TypeError):
        return None


def blank_to_none(value: str | None) -> str | None:
    """Trim text; empty or whitespace-only becomes None."""
    trimmed = (value or "").strip()
    return trimmed or None
