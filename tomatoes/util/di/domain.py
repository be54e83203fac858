"""Domain layer DI providers."""

from dishka import Scope, provide

from tomatoes.config import AggregationSettings
from tomatoes.domain.repository import TomatoRepository, UserRepository
from tomatoes.domain.service import ActivityAggregator, IdentityLinker
from tomatoes.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Production domain services provider - concrete, no mocks needed.

    Domain services are REQUEST-scoped to align with repository/session lifecycle.
    """

    scope = Scope.REQUEST

    @provide
    def get_identity_linker(self, user_repository: UserRepository) -> IdentityLinker:
        """Provide identity linker with the default resolver chain."""
        return IdentityLinker(user_repository=user_repository)

    @provide
    def get_activity_aggregator(
        self,
        tomato_repository: TomatoRepository,
        aggregation_settings: AggregationSettings,
    ) -> ActivityAggregator:
        """Provide activity aggregator domain service."""
        return ActivityAggregator(
            tomato_repository=tomato_repository, settings=aggregation_settings
        )
