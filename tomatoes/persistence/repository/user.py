"""PostgreSQL implementation of User repository."""

from collections import defaultdict
from typing import Any, Optional

from sqlalchemy import Select, select
from sqlalchemy.ext.asyncio import AsyncSession

from tomatoes.domain.error import NotFoundError
from tomatoes.domain.model import User
from tomatoes.domain.repository import UserRepository
from tomatoes.domain.value import UserId
from tomatoes.persistence.error import store_errors
from tomatoes.persistence.mappers import (
    authorization_to_dict,
    row_to_user,
    user_to_dict,
)
from tomatoes.persistence.tables import authorizations_table, users_table


class PostgresUserRepository(UserRepository):
    """PostgreSQL implementation of UserRepository.

    A user is stored as one ``users`` row plus its ``authorizations`` rows.
    Writes replace both inside the request's transaction.
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Find a user by ID.

        Args:
            user_id: User ID to look up

        Returns:
            User if found, None otherwise
        """
        return await self._find_one(
            select(users_table).where(users_table.c.id == user_id)
        )

    async def find_by_token(self, token: str) -> Optional[User]:
        """Find the user owning an authorization with this token."""
        stmt = (
            select(users_table)
            .join(
                authorizations_table,
                users_table.c.id == authorizations_table.c.user_id,
            )
            .where(authorizations_table.c.token == token)
            .limit(1)
        )
        return await self._find_one(stmt)

    async def find_by_authorization(
        self, provider: str, uid: str
    ) -> Optional[User]:
        """Find a user through one of its authorization rows."""
        stmt = (
            select(users_table)
            .join(
                authorizations_table,
                users_table.c.id == authorizations_table.c.user_id,
            )
            .where(authorizations_table.c.provider == provider)
            .where(authorizations_table.c.uid == uid)
            .limit(1)
        )
        return await self._find_one(stmt)

    async def find_by_legacy_identity(
        self, provider: str, uid: str
    ) -> Optional[User]:
        """Find a user through the deprecated provider/uid columns."""
        stmt = (
            select(users_table)
            .where(users_table.c.provider == provider)
            .where(users_table.c.uid == uid)
            .limit(1)
        )
        return await self._find_one(stmt)

    async def find_all(self) -> list[User]:
        """Get every user with its authorizations.

        Loads the two tables in two queries instead of one query per user.
        """
        async with store_errors("find_all_users"):
            user_rows = (
                (await self.session.execute(select(users_table))).mappings().all()
            )
            auth_rows = (
                (
                    await self.session.execute(
                        select(authorizations_table).order_by(
                            authorizations_table.c.user_id,
                            authorizations_table.c.position,
                        )
                    )
                )
                .mappings()
                .all()
            )

        by_user: dict[Any, list[Any]] = defaultdict(list)
        for auth_row in auth_rows:
            by_user[auth_row["user_id"]].append(auth_row)
        return [row_to_user(row, by_user.get(row["id"], [])) for row in user_rows]

    async def add(self, user: User) -> User:
        """Insert a user and its authorizations.

        Args:
            user: User to insert

        Returns:
            Inserted user
        """
        async with store_errors("add_user"):
            await self.session.execute(
                users_table.insert().values(**user_to_dict(user))
            )
            await self._insert_authorizations(user)
            await self.session.flush()
        return user

    async def update(self, user: User) -> User:
        """Replace a user and its authorizations.

        Args:
            user: User to store

        Returns:
            Stored user

        Raises:
            NotFoundError: If the user row no longer exists
        """
        async with store_errors("update_user"):
            result = await self.session.execute(
                users_table.update()
                .where(users_table.c.id == user.id)
                .values(**user_to_dict(user))
            )
            if result.rowcount == 0:
                raise NotFoundError("User", str(user.id))

            await self.session.execute(
                authorizations_table.delete().where(
                    authorizations_table.c.user_id == user.id
                )
            )
            await self._insert_authorizations(user)
            await self.session.flush()
        return user

    async def delete(self, user_id: UserId) -> None:
        """Delete a user.

        Authorizations go with it; tomatoes keep existing with no owner
        (``ON DELETE SET NULL``).
        """
        async with store_errors("delete_user"):
            result = await self.session.execute(
                users_table.delete().where(users_table.c.id == user_id)
            )
            if result.rowcount == 0:
                raise NotFoundError("User", str(user_id))
            await self.session.flush()

    async def _insert_authorizations(self, user: User) -> None:
        if not user.authorizations:
            return
        await self.session.execute(
            authorizations_table.insert(),
            [
                authorization_to_dict(user.id, position, authorization)
                for position, authorization in enumerate(user.authorizations)
            ],
        )

    async def _find_one(self, stmt: Select) -> Optional[User]:
        async with store_errors("find_user"):
            result = await self.session.execute(stmt)
            row = result.mappings().first()
            if not row:
                return None

            auth_result = await self.session.execute(
                select(authorizations_table)
                .where(authorizations_table.c.user_id == row["id"])
                .order_by(authorizations_table.c.position)
            )
            return row_to_user(row, auth_result.mappings().all())
