"""In-memory repository implementations for testing."""

from .tomato import InMemoryTomatoRepository
from .user import InMemoryUserRepository

__all__ = [
    "InMemoryTomatoRepository",
    "InMemoryUserRepository",
]
