"""Authenticate use case."""

from typing import Any

import logfire
from pydantic import BaseModel

from tomatoes.application.usecase.base import BaseUseCase
from tomatoes.domain.service import IdentityLinker
from tomatoes.domain.value import AuthPayload


class AuthenticateRequest(BaseModel):
    """Payload handed over by the OAuth client after a successful sign-in."""

    payload: dict[str, Any]


class AuthenticateResponse(BaseModel):
    """Authenticate response."""

    user_id: str
    name: str | None
    is_new_user: bool
    providers: list[str]


class AuthenticateUseCase(BaseUseCase):
    """Use case for signing a user in from an external provider.

    Finds the user owning the payload's identity and merges the payload into
    it, or creates a new user. A ``DuplicateError`` from a concurrent sign-in
    with the same identity is passed on; the caller may retry, in which case
    the lookup finds the user created by the other request.
    """

    def __init__(self, identity_linker: IdentityLinker) -> None:
        """Initialize authenticate use case.

        Args:
            identity_linker: Identity linker domain service
        """
        self.identity_linker = identity_linker

    async def execute(self, request: AuthenticateRequest) -> AuthenticateResponse:
        """Execute sign-in flow.

        Steps:
        1. Validate the payload
        2. Look the user up by provider identity (authorizations, then legacy fields)
        3. Existing user: reconcile the payload into it
        4. New user: create it from the payload

        Args:
            request: Request with the raw payload

        Returns:
            The signed-in user

        Raises:
            ValidationError: If the payload lacks provider or uid
            DuplicateError: If a concurrent request linked the identity first
            NotFoundError: If the user was deleted during reconciliation
            PersistenceError: If the store rejects the write
        """
        payload = AuthPayload.parse(request.payload)

        with logfire.span(
            "authenticate", provider=payload.provider, uid=payload.uid
        ) as span:
            user = await self.identity_linker.find_by_payload(payload)
            is_new_user = user is None
            span.set_attribute("is_new_user", is_new_user)

            if user:
                user = await self.identity_linker.reconcile_payload(user, payload)
            else:
                user = await self.identity_linker.create_from_payload(payload)

            return AuthenticateResponse(
                user_id=str(user.id),
                name=user.name,
                is_new_user=is_new_user,
                providers=[a.provider for a in user.authorizations],
            )
