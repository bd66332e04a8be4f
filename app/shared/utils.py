"""Shared utility functions."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any
from uuid import UUID


def utc_now() -> datetime:
    """Return aware UTC datetime."""
    return datetime.now(timezone.utc)


def parse_uuid(value: Any) -> UUID | None:
    """Parse a client-supplied identifier; anything unusable resolves to None."""
    if isinstance(value, UUID):
        return value
    if not isinstance(value, str):
        return None
    try:
        return UUID(value.strip())
    except ValueError:
        return None
