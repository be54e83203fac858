"""Delete user use case."""

from uuid import UUID

import logfire
from pydantic import BaseModel

from tomatoes.application.usecase.base import BaseUseCase
from tomatoes.domain.repository import TomatoRepository, UserRepository
from tomatoes.domain.value import UserId


class DeleteUserRequest(BaseModel):
    """Delete user request."""

    user_id: str


class DeleteUserUseCase(BaseUseCase):
    """Use case for deleting a user account.

    The user's authorizations are deleted with it. Its tomatoes are kept
    and detached from the user.
    """

    def __init__(
        self,
        user_repository: UserRepository,
        tomato_repository: TomatoRepository,
    ) -> None:
        """Initialize delete user use case.

        Args:
            user_repository: User repository
            tomato_repository: Tomato repository
        """
        self.user_repository = user_repository
        self.tomato_repository = tomato_repository

    async def execute(self, request: DeleteUserRequest) -> None:
        """Execute delete user flow.

        Raises:
            NotFoundError: If the user does not exist
        """
        user_id = UserId(UUID(request.user_id))
        with logfire.span("delete_user", user_id=request.user_id):
            await self.tomato_repository.nullify_user(user_id)
            await self.user_repository.delete(user_id)
            logfire.info("User deleted", user_id=request.user_id)
