"""Get current user use case."""

from pydantic import BaseModel

from tomatoes.application.usecase.base import BaseUseCase
from tomatoes.application.usecase.user.get_user_profile import UserProfileResponse
from tomatoes.domain.error import NotFoundError
from tomatoes.domain.repository import TomatoRepository
from tomatoes.domain.service import IdentityLinker


class GetCurrentUserRequest(BaseModel):
    """Get current user request."""

    token: str  # Provider access token sent by API clients


class GetCurrentUserUseCase(BaseUseCase):
    """Use case for resolving an API client's token to its user."""

    def __init__(
        self,
        identity_linker: IdentityLinker,
        tomato_repository: TomatoRepository,
    ) -> None:
        """Initialize get current user use case.

        Args:
            identity_linker: Identity linker domain service
            tomato_repository: Tomato repository
        """
        self.identity_linker = identity_linker
        self.tomato_repository = tomato_repository

    async def execute(self, request: GetCurrentUserRequest) -> UserProfileResponse:
        """Execute get current user flow.

        Raises:
            NotFoundError: If no authorization carries the token
        """
        user = await self.identity_linker.find_by_token(request.token)
        if not user:
            raise NotFoundError("User", "token")

        counts = await self.tomato_repository.count_by_user([user.id])
        return UserProfileResponse.from_user(user, counts.get(user.id, 0))
