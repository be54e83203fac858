"""Authentication use cases."""

from .authenticate import AuthenticateUseCase
from .get_current_user import GetCurrentUserUseCase

__all__ = ["AuthenticateUseCase", "GetCurrentUserUseCase"]
