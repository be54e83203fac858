"""In-memory user repository for testing."""

from typing import Optional

from tomatoes.domain.error import DuplicateError, NotFoundError
from tomatoes.domain.model.user import User
from tomatoes.domain.repository.user import UserRepository
from tomatoes.domain.value import UserId


class InMemoryUserRepository(UserRepository):
    """In-memory implementation of UserRepository for testing.

    Enforces the same uniqueness rules as the Postgres schema: an
    authorization's (provider, uid) pair and its token belong to one user.
    """

    def __init__(self) -> None:
        self._users: dict[UserId, User] = {}

    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Find a user by ID."""
        return self._users.get(user_id)

    async def find_by_token(self, token: str) -> Optional[User]:
        """Find the user owning an authorization with this token."""
        for user in self._users.values():
            if any(a.token == token for a in user.authorizations):
                return user
        return None

    async def find_by_authorization(
        self, provider: str, uid: str
    ) -> Optional[User]:
        """Find a user through an embedded authorization."""
        for user in self._users.values():
            if any(
                a.provider == provider and a.uid == uid for a in user.authorizations
            ):
                return user
        return None

    async def find_by_legacy_identity(
        self, provider: str, uid: str
    ) -> Optional[User]:
        """Find a user through the deprecated provider/uid fields."""
        for user in self._users.values():
            if user.provider == provider and user.uid == uid:
                return user
        return None

    async def find_all(self) -> list[User]:
        """Get every user."""
        return list(self._users.values())

    async def add(self, user: User) -> User:
        """Insert a new user."""
        if user.id in self._users:
            raise DuplicateError(f"User already exists: {user.id}")
        self._check_unique(user)
        self._users[user.id] = user
        return user

    async def update(self, user: User) -> User:
        """Replace a stored user."""
        if user.id not in self._users:
            raise NotFoundError("User", str(user.id))
        self._check_unique(user)
        self._users[user.id] = user
        return user

    async def delete(self, user_id: UserId) -> None:
        """Delete a user."""
        if self._users.pop(user_id, None) is None:
            raise NotFoundError("User", str(user_id))

    def _check_unique(self, user: User) -> None:
        identities = {(a.provider, a.uid) for a in user.authorizations}
        tokens = {a.token for a in user.authorizations if a.token is not None}
        for other in self._users.values():
            if other.id == user.id:
                continue
            for authorization in other.authorizations:
                if (authorization.provider, authorization.uid) in identities:
                    raise DuplicateError(
                        f"Authorization {authorization.provider}:{authorization.uid} "
                        f"already linked to user {other.id}"
                    )
                if authorization.token is not None and authorization.token in tokens:
                    raise DuplicateError(
                        f"Token already linked to user {other.id}"
                    )
