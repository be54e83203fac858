"""Tomato entity: one completed unit of tracked work."""

from datetime import datetime, timedelta, timezone
from typing import Optional

from pydantic import Field

from tomatoes.domain.model.common import DomainModel
from tomatoes.domain.value import TomatoId, UserId

# Length of one tomato, used to turn counts into worked time
TOMATO_DURATION = timedelta(minutes=25)


class Tomato(DomainModel):
    """Completed tomato.

    ``user_id`` is cleared when the owning user is deleted; the record
    itself is kept.
    """

    id: TomatoId
    user_id: Optional[UserId] = None
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
