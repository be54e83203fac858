"""Get tomatoes counters use case."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel

from tomatoes.application.usecase.base import BaseUseCase
from tomatoes.domain.error import NotFoundError
from tomatoes.domain.repository import UserRepository
from tomatoes.domain.service import ActivityAggregator
from tomatoes.domain.value import TomatoesCounters, UserId


class GetTomatoesCountersRequest(BaseModel):
    """Get tomatoes counters request."""

    user_id: str
    now: datetime | None = None  # Reference instant, defaults to now


class GetTomatoesCountersUseCase(BaseUseCase):
    """Use case for a user's day/week/month tomatoes counters."""

    def __init__(
        self,
        user_repository: UserRepository,
        activity_aggregator: ActivityAggregator,
    ) -> None:
        """Initialize get tomatoes counters use case.

        Args:
            user_repository: User repository
            activity_aggregator: Activity aggregator domain service
        """
        self.user_repository = user_repository
        self.activity_aggregator = activity_aggregator

    async def execute(self, request: GetTomatoesCountersRequest) -> TomatoesCounters:
        """Execute get tomatoes counters flow.

        Raises:
            NotFoundError: If the user does not exist
            AggregationError: If counting fails
        """
        user = await self.user_repository.find_by_id(UserId(UUID(request.user_id)))
        if not user:
            raise NotFoundError("User", request.user_id)

        return await self.activity_aggregator.tomatoes_counters(user, request.now)
