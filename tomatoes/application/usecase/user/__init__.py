"""User use cases."""

from .delete_user import DeleteUserUseCase
from .get_tomatoes_counters import GetTomatoesCountersUseCase
from .get_user_profile import GetUserProfileUseCase

__all__ = [
    "DeleteUserUseCase",
    "GetTomatoesCountersUseCase",
    "GetUserProfileUseCase",
]
