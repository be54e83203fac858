"""Tomato repository interface."""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Iterable

from tomatoes.domain.model.tomato import Tomato
from tomatoes.domain.value import UserId


class TomatoRepository(ABC):
    """Repository for the completed-tomatoes log."""

    @abstractmethod
    async def add(self, tomato: Tomato) -> Tomato:
        """Append a completed tomato."""
        pass

    @abstractmethod
    async def count_after(self, user_id: UserId, since: datetime) -> int:
        """Count a user's tomatoes completed at or after ``since``.

        Args:
            user_id: Owner of the tomatoes
            since: Timezone-aware lower bound (inclusive)

        Returns:
            Number of matching tomatoes
        """
        pass

    @abstractmethod
    async def count_by_user(self, user_ids: Iterable[UserId]) -> dict[UserId, int]:
        """Total tomatoes per user.

        Users without tomatoes map to 0.
        """
        pass

    @abstractmethod
    async def nullify_user(self, user_id: UserId) -> None:
        """Detach a deleted user's tomatoes without removing them."""
        pass
