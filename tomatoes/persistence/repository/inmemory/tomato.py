"""In-memory tomato repository for testing."""

from datetime import datetime
from typing import Iterable

from tomatoes.domain.model.tomato import Tomato
from tomatoes.domain.repository.tomato import TomatoRepository
from tomatoes.domain.value import UserId


class InMemoryTomatoRepository(TomatoRepository):
    """In-memory implementation of TomatoRepository for testing."""

    def __init__(self) -> None:
        self._tomatoes: list[Tomato] = []

    async def add(self, tomato: Tomato) -> Tomato:
        """Append a completed tomato."""
        self._tomatoes.append(tomato)
        return tomato

    async def count_after(self, user_id: UserId, since: datetime) -> int:
        """Count a user's tomatoes completed at or after ``since``."""
        return sum(
            1
            for tomato in self._tomatoes
            if tomato.user_id == user_id and tomato.created_at >= since
        )

    async def count_by_user(self, user_ids: Iterable[UserId]) -> dict[UserId, int]:
        """Total tomatoes per user."""
        counts = {user_id: 0 for user_id in user_ids}
        for tomato in self._tomatoes:
            if tomato.user_id in counts:
                counts[tomato.user_id] += 1
        return counts

    async def nullify_user(self, user_id: UserId) -> None:
        """Clear the owner of a user's tomatoes."""
        self._tomatoes = [
            tomato.model_copy(update={"user_id": None})
            if tomato.user_id == user_id
            else tomato
            for tomato in self._tomatoes
        ]
