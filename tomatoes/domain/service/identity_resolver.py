"""Identity resolution strategies.

Accounts created before multi-provider support keep their identity in
deprecated top-level ``provider``/``uid`` fields. Lookups therefore go
through an ordered chain of resolvers; the first one to return a user wins:

1. ``EmbeddedAuthorizationResolver`` - an authorization on the user matches
2. ``LegacyIdentityResolver`` - the deprecated top-level fields match
"""

from abc import ABC, abstractmethod
from typing import Optional, Sequence

import logfire

from tomatoes.domain.model.user import User
from tomatoes.domain.repository import UserRepository


class IdentityResolver(ABC):
    """Strategy for finding the user that owns a provider identity."""

    name: str

    def __init__(self, user_repository: UserRepository) -> None:
        self.user_repository = user_repository

    @abstractmethod
    async def resolve(self, provider: str, uid: str) -> Optional[User]:
        """Find the user owning ``(provider, uid)``, if any."""
        pass


class EmbeddedAuthorizationResolver(IdentityResolver):
    """Matches an embedded authorization."""

    name = "authorization"

    async def resolve(self, provider: str, uid: str) -> Optional[User]:
        return await self.user_repository.find_by_authorization(provider, uid)


class LegacyIdentityResolver(IdentityResolver):
    """Matches the deprecated single-provider fields."""

    name = "legacy"

    async def resolve(self, provider: str, uid: str) -> Optional[User]:
        return await self.user_repository.find_by_legacy_identity(provider, uid)


def default_resolvers(user_repository: UserRepository) -> list[IdentityResolver]:
    """Resolver chain in precedence order."""
    return [
        EmbeddedAuthorizationResolver(user_repository),
        LegacyIdentityResolver(user_repository),
    ]


class IdentityResolverChain:
    """Tries each resolver in order and returns the first match."""

    def __init__(self, resolvers: Sequence[IdentityResolver]) -> None:
        self.resolvers = list(resolvers)

    async def resolve(self, provider: str, uid: str) -> Optional[User]:
        for resolver in self.resolvers:
            user = await resolver.resolve(provider, uid)
            if user:
                logfire.info(
                    "Identity resolved",
                    resolver=resolver.name,
                    provider=provider,
                    uid=uid,
                    user_id=str(user.id),
                )
                return user
        return None
