"""Repository interfaces.

Repository interfaces are defined in the domain layer (dependency inversion).
Implementations live in the persistence layer.
"""

from tomatoes.domain.repository.tomato import TomatoRepository
from tomatoes.domain.repository.user import UserRepository

__all__ = [
    "TomatoRepository",
    "UserRepository",
]
