"""User repository interface."""

from abc import ABC, abstractmethod
from typing import Optional

from tomatoes.domain.model.user import User
from tomatoes.domain.value import UserId


class UserRepository(ABC):
    """Repository for the User aggregate.

    A user and its embedded authorizations are always written together as
    one atomic unit. Implementations live in the persistence layer.
    """

    @abstractmethod
    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Find a user by ID.

        Args:
            user_id: The user's unique identifier

        Returns:
            The user if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_token(self, token: str) -> Optional[User]:
        """Find the user owning an authorization with exactly this token.

        Args:
            token: Provider access token

        Returns:
            The user if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_authorization(
        self, provider: str, uid: str
    ) -> Optional[User]:
        """Find a user through an embedded authorization.

        Args:
            provider: Provider name
            uid: Provider-scoped user id

        Returns:
            The user if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_legacy_identity(
        self, provider: str, uid: str
    ) -> Optional[User]:
        """Find a user through the deprecated top-level provider/uid fields.

        Args:
            provider: Provider name
            uid: Provider-scoped user id

        Returns:
            The user if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_all(self) -> list[User]:
        """Get every user."""
        pass

    @abstractmethod
    async def add(self, user: User) -> User:
        """Insert a new user with its authorizations.

        Raises:
            DuplicateError: If an authorization is already linked elsewhere
            PersistenceError: On any other store failure
        """
        pass

    @abstractmethod
    async def update(self, user: User) -> User:
        """Replace a stored user and its authorizations.

        Raises:
            NotFoundError: If the user no longer exists
            DuplicateError: If an authorization is already linked elsewhere
            PersistenceError: On any other store failure
        """
        pass

    @abstractmethod
    async def delete(self, user_id: UserId) -> None:
        """Delete a user and its authorizations.

        Raises:
            NotFoundError: If the user does not exist
        """
        pass
