"""PostgreSQL repository implementations."""

from tomatoes.persistence.repository.tomato import PostgresTomatoRepository
from tomatoes.persistence.repository.user import PostgresUserRepository

__all__ = [
    "PostgresTomatoRepository",
    "PostgresUserRepository",
]
