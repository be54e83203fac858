"""Identity linker domain service.

Maps an external-authentication payload to exactly one user. Provider data
never overwrites a name or email the user has already set, and a second
provider is linked to the existing account instead of creating a new one.
"""

from datetime import datetime, timezone
from typing import Optional, Sequence
from uuid import uuid4

import logfire

from tomatoes.domain.model import Authorization, User
from tomatoes.domain.repository import UserRepository
from tomatoes.domain.service.identity_resolver import (
    IdentityResolver,
    IdentityResolverChain,
    default_resolvers,
)
from tomatoes.domain.value import AuthPayload, UserId


class IdentityLinker:
    """Domain service for finding, creating and reconciling users."""

    def __init__(
        self,
        user_repository: UserRepository,
        resolvers: Optional[Sequence[IdentityResolver]] = None,
    ) -> None:
        """Initialize identity linker.

        Args:
            user_repository: User repository
            resolvers: Lookup strategies in precedence order
                (defaults to embedded authorizations, then legacy fields)
        """
        self.user_repository = user_repository
        self.resolver = IdentityResolverChain(
            resolvers if resolvers is not None else default_resolvers(user_repository)
        )

    async def find_by_token(self, token: str) -> Optional[User]:
        """Find the user owning an authorization with this exact token.

        Args:
            token: Provider access token

        Returns:
            User if found, None otherwise
        """
        with logfire.span("identity_linker.find_by_token"):
            user = await self.user_repository.find_by_token(token)
            if user:
                logfire.info("User found by token", user_id=str(user.id))
            else:
                logfire.warn("No user for token")
            return user

    async def find_by_provider_and_external_id(
        self, provider: str, uid: str
    ) -> Optional[User]:
        """Find a user by provider identity.

        Embedded authorizations are checked first, then the deprecated
        top-level fields of accounts created before multi-provider support.

        Args:
            provider: Provider name
            uid: Provider-scoped user id

        Returns:
            User if found, None otherwise
        """
        with logfire.span(
            "identity_linker.find_by_provider_and_external_id",
            provider=provider,
            uid=uid,
        ):
            user = await self.resolver.resolve(provider, uid)
            if not user:
                logfire.warn("User not found", provider=provider, uid=uid)
            return user

    async def find_by_payload(self, payload: AuthPayload) -> Optional[User]:
        """Find the user owning the payload's provider identity."""
        return await self.find_by_provider_and_external_id(
            payload.provider, payload.uid
        )

    async def create_from_payload(self, payload: AuthPayload) -> User:
        """Create a user from an authentication payload.

        Name, email and image are seeded from the payload when present and
        one authorization is attached. User and authorization are stored in
        a single write.

        Args:
            payload: Authentication payload

        Returns:
            Created user

        Raises:
            DuplicateError: If the identity is already linked to another user
            PersistenceError: If the store rejects the write
        """
        with logfire.span(
            "identity_linker.create_from_payload",
            provider=payload.provider,
            uid=payload.uid,
        ):
            now = datetime.now(timezone.utc)
            user = User.build(
                id=UserId(uuid4()),
                **payload.profile_attributes(),
                authorizations=(Authorization.from_payload(payload),),
                created_at=now,
                updated_at=now,
            )
            saved = await self.user_repository.add(user)
            logfire.info(
                "User created",
                user_id=str(saved.id),
                provider=payload.provider,
                uid=payload.uid,
            )
            return saved

    async def reconcile_payload(self, user: User, payload: AuthPayload) -> User:
        """Merge a fresh authentication payload into an existing user.

        Steps:
        1. Fill name/email from the payload only where the user left them blank
           (image is always taken from the payload when present)
        2. Overwrite the authorization for the payload's provider, or link a
           new one when the provider is not linked yet
        3. Store the whole user in one write

        Args:
            user: Existing user
            payload: Authentication payload

        Returns:
            Updated user

        Raises:
            NotFoundError: If the user was deleted in the meantime
            DuplicateError: If the identity is already linked to another user
            PersistenceError: If the store rejects the write
        """
        with logfire.span(
            "identity_linker.reconcile_payload",
            user_id=str(user.id),
            provider=payload.provider,
        ):
            delta = user.unset_profile_attributes(payload.profile_attributes())

            authorizations = list(user.authorizations)
            existing = user.authorization_by_provider(payload.provider)
            if existing:
                index = authorizations.index(existing)
                authorizations[index] = existing.refreshed_from(payload)
                logfire.info(
                    "Authorization refreshed",
                    user_id=str(user.id),
                    provider=payload.provider,
                )
            else:
                authorizations.append(Authorization.from_payload(payload))
                logfire.info(
                    "Authorization linked",
                    user_id=str(user.id),
                    provider=payload.provider,
                    count=len(authorizations),
                )

            updated = user.with_changes(
                **delta,
                authorizations=tuple(authorizations),
                updated_at=datetime.now(timezone.utc),
            )
            saved = await self.user_repository.update(updated)
            logfire.info(
                "User reconciled",
                user_id=str(saved.id),
                updated_fields=sorted(delta),
            )
            return saved
