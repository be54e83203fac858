"""Application layer DI providers."""

from dishka import Scope, provide

from tomatoes.application.usecase.auth import (
    AuthenticateUseCase,
    GetCurrentUserUseCase,
)
from tomatoes.application.usecase.report import GetUsersStatisticsUseCase
from tomatoes.application.usecase.user import (
    DeleteUserUseCase,
    GetTomatoesCountersUseCase,
    GetUserProfileUseCase,
)
from tomatoes.domain.repository import TomatoRepository, UserRepository
from tomatoes.domain.service import ActivityAggregator, IdentityLinker
from tomatoes.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Production application use cases provider - concrete, no mocks needed."""

    # Auth use cases
    @provide(scope=Scope.REQUEST)
    def get_authenticate_use_case(
        self, identity_linker: IdentityLinker
    ) -> AuthenticateUseCase:
        """Provide authenticate use case."""
        return AuthenticateUseCase(identity_linker=identity_linker)

    @provide(scope=Scope.REQUEST)
    def get_current_user_use_case(
        self, identity_linker: IdentityLinker, tomato_repository: TomatoRepository
    ) -> GetCurrentUserUseCase:
        """Provide get current user use case."""
        return GetCurrentUserUseCase(
            identity_linker=identity_linker, tomato_repository=tomato_repository
        )

    # User use cases
    @provide(scope=Scope.REQUEST)
    def get_get_user_profile_use_case(
        self, user_repository: UserRepository, tomato_repository: TomatoRepository
    ) -> GetUserProfileUseCase:
        """Provide get user profile use case."""
        return GetUserProfileUseCase(
            user_repository=user_repository, tomato_repository=tomato_repository
        )

    @provide(scope=Scope.REQUEST)
    def get_get_tomatoes_counters_use_case(
        self,
        user_repository: UserRepository,
        activity_aggregator: ActivityAggregator,
    ) -> GetTomatoesCountersUseCase:
        """Provide get tomatoes counters use case."""
        return GetTomatoesCountersUseCase(
            user_repository=user_repository, activity_aggregator=activity_aggregator
        )

    @provide(scope=Scope.REQUEST)
    def get_delete_user_use_case(
        self, user_repository: UserRepository, tomato_repository: TomatoRepository
    ) -> DeleteUserUseCase:
        """Provide delete user use case."""
        return DeleteUserUseCase(
            user_repository=user_repository, tomato_repository=tomato_repository
        )

    # Report use cases
    @provide(scope=Scope.REQUEST)
    def get_get_users_statistics_use_case(
        self,
        user_repository: UserRepository,
        activity_aggregator: ActivityAggregator,
    ) -> GetUsersStatisticsUseCase:
        """Provide get users statistics use case."""
        return GetUsersStatisticsUseCase(
            user_repository=user_repository, activity_aggregator=activity_aggregator
        )
