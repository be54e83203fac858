"""Mock persistence providers for testing."""

from dishka import Scope, provide

from tomatoes.domain.repository import TomatoRepository, UserRepository
from tomatoes.persistence.repository.inmemory import (
    InMemoryTomatoRepository,
    InMemoryUserRepository,
)
from tomatoes.util.di.infrastructure.persistence import PersistenceProvider


class MockPersistenceProvider(PersistenceProvider):
    """Mock persistence provider using in-memory repositories.

    Uses REQUEST scope to ensure test isolation - each test gets fresh repositories.
    """

    __is_mock__ = True

    @provide(scope=Scope.REQUEST)
    def get_user_repository(self) -> UserRepository:
        """Provide in-memory user repository."""
        return InMemoryUserRepository()

    @provide(scope=Scope.REQUEST)
    def get_tomato_repository(self) -> TomatoRepository:
        """Provide in-memory tomato repository."""
        return InMemoryTomatoRepository()
