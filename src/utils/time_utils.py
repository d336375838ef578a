"""Timestamp and identifier helpers."""

import uuid
from datetime import datetime, timezone


def utc_now_iso() -> str:
    """Current UTC time as fixed-width ISO-8601 with milliseconds and a Z suffix."""
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def new_ticket_id() -> str:
    """Random, collision-resistant ticket identifier."""
    return str(uuid.uuid4())
