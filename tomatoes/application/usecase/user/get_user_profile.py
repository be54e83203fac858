"""Get user profile use case."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel

from tomatoes.application.usecase.base import BaseUseCase
from tomatoes.domain.error import NotFoundError
from tomatoes.domain.model import User
from tomatoes.domain.repository import TomatoRepository, UserRepository
from tomatoes.domain.value import Currency, UserId


class GetUserProfileRequest(BaseModel):
    """Get user profile request."""

    user_id: str


class AuthorizationInfo(BaseModel):
    """Linked provider information for response."""

    provider: str
    uid: str
    nickname: str | None


class UserProfileResponse(BaseModel):
    """User profile with defaults applied."""

    user_id: str
    name: str | None
    email: str | None
    nickname: str | None
    image_file: str
    time_zone: str | None
    color: str
    volume: int
    ticking: bool
    currency: Currency
    currency_unit: str
    work_hours_per_day: int | None
    average_hourly_rate: float | None
    tomatoes_count: int
    estimated_revenues: float | None
    created_at: datetime | None
    authorizations: list[AuthorizationInfo]

    @classmethod
    def from_user(cls, user: User, tomatoes_count: int) -> "UserProfileResponse":
        """Build the response from a user and its total tomatoes."""
        return cls(
            user_id=str(user.id),
            name=user.name,
            email=user.email,
            nickname=user.nickname,
            image_file=user.image_file,
            time_zone=user.effective_time_zone,
            color=user.effective_color,
            volume=user.effective_volume,
            ticking=user.effective_ticking,
            currency=user.effective_currency,
            currency_unit=user.currency_unit,
            work_hours_per_day=user.work_hours_per_day,
            average_hourly_rate=user.average_hourly_rate,
            tomatoes_count=tomatoes_count,
            estimated_revenues=user.estimated_revenues(tomatoes_count),
            created_at=user.created_at,
            authorizations=[
                AuthorizationInfo(
                    provider=authorization.provider,
                    uid=authorization.uid,
                    nickname=authorization.nickname,
                )
                for authorization in user.authorizations
            ],
        )


class GetUserProfileUseCase(BaseUseCase):
    """Use case for reading a user's profile as it is displayed."""

    def __init__(
        self,
        user_repository: UserRepository,
        tomato_repository: TomatoRepository,
    ) -> None:
        """Initialize get user profile use case.

        Args:
            user_repository: User repository
            tomato_repository: Tomato repository
        """
        self.user_repository = user_repository
        self.tomato_repository = tomato_repository

    async def execute(self, request: GetUserProfileRequest) -> UserProfileResponse:
        """Execute get user profile flow.

        Args:
            request: Request with user ID

        Returns:
            Profile with read-time defaults applied

        Raises:
            NotFoundError: If the user does not exist
        """
        user_id = UserId(UUID(request.user_id))
        user = await self.user_repository.find_by_id(user_id)
        if not user:
            raise NotFoundError("User", request.user_id)

        counts = await self.tomato_repository.count_by_user([user.id])
        return UserProfileResponse.from_user(user, counts.get(user.id, 0))
