"""PostgreSQL implementation of Tomato repository."""

from datetime import datetime
from typing import Iterable

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from tomatoes.domain.model import Tomato
from tomatoes.domain.repository import TomatoRepository
from tomatoes.domain.value import UserId
from tomatoes.persistence.error import store_errors
from tomatoes.persistence.mappers import tomato_to_dict
from tomatoes.persistence.tables import tomatoes_table


class PostgresTomatoRepository(TomatoRepository):
    """PostgreSQL implementation of TomatoRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def add(self, tomato: Tomato) -> Tomato:
        """Insert a completed tomato."""
        async with store_errors("add_tomato"):
            await self.session.execute(
                tomatoes_table.insert().values(**tomato_to_dict(tomato))
            )
            await self.session.flush()
        return tomato

    async def count_after(self, user_id: UserId, since: datetime) -> int:
        """Count a user's tomatoes completed at or after ``since``.

        Args:
            user_id: Owner of the tomatoes
            since: Inclusive lower bound

        Returns:
            Number of tomatoes
        """
        stmt = (
            select(func.count())
            .select_from(tomatoes_table)
            .where(tomatoes_table.c.user_id == user_id)
            .where(tomatoes_table.c.created_at >= since)
        )
        async with store_errors("count_tomatoes_after"):
            result = await self.session.execute(stmt)
            return result.scalar_one()

    async def count_by_user(self, user_ids: Iterable[UserId]) -> dict[UserId, int]:
        """Total tomatoes per user, 0 for users without any."""
        ids = list(user_ids)
        if not ids:
            return {}

        stmt = (
            select(tomatoes_table.c.user_id, func.count().label("count"))
            .where(tomatoes_table.c.user_id.in_(ids))
            .group_by(tomatoes_table.c.user_id)
        )
        async with store_errors("count_tomatoes_by_user"):
            result = await self.session.execute(stmt)
            counts = {UserId(row.user_id): row.count for row in result.all()}
        return {user_id: counts.get(user_id, 0) for user_id in ids}

    async def nullify_user(self, user_id: UserId) -> None:
        """Clear the owner of a user's tomatoes."""
        async with store_errors("nullify_tomatoes_user"):
            await self.session.execute(
                tomatoes_table.update()
                .where(tomatoes_table.c.user_id == user_id)
                .values(user_id=None)
            )
            await self.session.flush()
