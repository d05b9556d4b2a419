# blockhub/utils/optimistic_lock.py
from datetime import datetime, timezone
from typing import Optional

from dateutil.parser import parse
from flask import request

from blockhub.domain.exceptions import Conflict, ValidationError


def as_utc(ts: datetime) -> datetime:
    # SQLite returns naive datetimes; everything stored here is UTC
    if ts.tzinfo is None:
        return ts.replace(tzinfo=timezone.utc)
    return ts.astimezone(timezone.utc)


def unmodified_since() -> Optional[datetime]:
    """Client timestamp from If-Unmodified-Since, or None when absent."""
    raw = request.headers.get("If-Unmodified-Since")
    if not raw:
        return None
    try:
        return as_utc(parse(raw))
    except (ValueError, OverflowError) as exc:
        raise ValidationError("Invalid If-Unmodified-Since header") from exc


def enforce_optimistic_lock(entity) -> None:
    """
    Refuse to write over ``entity`` if it changed after the client's copy.

    Meant as a ``before_update`` hook: it runs on the locked row, so the
    comparison and the write share one transaction.
    """
    client_ts = unmodified_since()
    if client_ts is None:
        return

    # HTTP dates carry whole seconds only
    server_ts = as_utc(entity.updated_at).replace(microsecond=0)
    if server_ts > client_ts:
        raise Conflict(
            f"{type(entity).__name__} {entity.id} was modified at {server_ts.isoformat()}"
        )
