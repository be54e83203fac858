"""Report use cases."""

from .get_users_statistics import GetUsersStatisticsUseCase

__all__ = ["GetUsersStatisticsUseCase"]
