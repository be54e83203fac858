"""Domain services."""

from .activity_aggregator import HISTORICAL_USERS_OFFSET, ActivityAggregator
from .identity_linker import IdentityLinker
from .identity_resolver import (
    EmbeddedAuthorizationResolver,
    IdentityResolver,
    IdentityResolverChain,
    LegacyIdentityResolver,
)

__all__ = [
    "ActivityAggregator",
    "EmbeddedAuthorizationResolver",
    "HISTORICAL_USERS_OFFSET",
    "IdentityLinker",
    "IdentityResolver",
    "IdentityResolverChain",
    "LegacyIdentityResolver",
]
