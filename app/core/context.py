from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional

from app.models.user_model import User


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def as_utc(value: datetime) -> datetime:
    # SQLite hands back naive timestamps; they are stored as UTC.
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


@dataclass(frozen=True)
class RequestContext:
    """Who is calling and what time it is, passed explicitly into every flow."""

    current_user: Optional[User] = None
    now: datetime = field(default_factory=utcnow)

    @property
    def current_user_id(self) -> Optional[int]:
        return self.current_user.user_id if self.current_user is not None else None
