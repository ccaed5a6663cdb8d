"""Identifier and timestamp helpers."""

from datetime import UTC, datetime
from uuid import uuid4


def generate_id(prefix: str) -> str:
    """Generate an opaque unique identifier such as ``alloc_3f2a...``."""
    return f"{prefix}_{uuid4().hex}"


def utc_now() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(UTC)
