"""Get users statistics use case."""

from datetime import date

import logfire
from pydantic import BaseModel

from tomatoes.application.usecase.base import BaseUseCase
from tomatoes.domain.repository import UserRepository
from tomatoes.domain.service import ActivityAggregator


class GetUsersStatisticsRequest(BaseModel):
    """Get users statistics request (no parameters yet)."""


class GetUsersStatisticsResponse(BaseModel):
    """Histograms for the users report."""

    by_tomatoes: dict[int, int]  # tomatoes bucket -> users
    by_day: dict[date, int]  # signup day -> users
    users_before_timestamps: int  # starting value of the running total
    total_by_day: dict[date, int]  # day -> users signed up so far


class GetUsersStatisticsUseCase(BaseUseCase):
    """Use case for the users report."""

    def __init__(
        self,
        user_repository: UserRepository,
        activity_aggregator: ActivityAggregator,
    ) -> None:
        """Initialize get users statistics use case.

        Args:
            user_repository: User repository
            activity_aggregator: Activity aggregator domain service
        """
        self.user_repository = user_repository
        self.activity_aggregator = activity_aggregator

    async def execute(
        self, request: GetUsersStatisticsRequest
    ) -> GetUsersStatisticsResponse:
        """Execute users statistics flow.

        Raises:
            AggregationError: If counting tomatoes fails
        """
        with logfire.span("get_users_statistics"):
            users = await self.user_repository.find_all()
            logfire.info("Users loaded for statistics", count=len(users))

            totals = self.activity_aggregator.total_by_day(users)
            offset = totals.pop(None)

            return GetUsersStatisticsResponse(
                by_tomatoes=await self.activity_aggregator.by_tomatoes(users),
                by_day=self.activity_aggregator.by_day(users),
                users_before_timestamps=offset,
                total_by_day=totals,
            )
