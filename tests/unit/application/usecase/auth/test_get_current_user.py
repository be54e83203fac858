"""Unit tests for GetCurrentUserUseCase."""

from datetime import datetime, timezone
from uuid import UUID

from dishka import AsyncContainer
import pytest

from tomatoes.application.usecase.auth import (
    AuthenticateUseCase,
    GetCurrentUserUseCase,
)
from tomatoes.application.usecase.auth.authenticate import AuthenticateRequest
from tomatoes.application.usecase.auth.get_current_user import GetCurrentUserRequest
from tomatoes.domain.error import NotFoundError
from tomatoes.domain.repository import TomatoRepository
from tomatoes.domain.value import UserId
from tests.conftest import github_payload, make_tomato
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


class TestGetCurrentUserUseCase:
    """Tests for GetCurrentUserUseCase."""

    @pytest.mark.asyncio
    async def test_token_resolves_to_profile(self, unit_env: AsyncContainer):
        """The access token of a linked provider identifies the user."""
        # Arrange
        authenticate = await unit_env.get(AuthenticateUseCase)
        use_case = await unit_env.get(GetCurrentUserUseCase)
        tomato_repo = await unit_env.get(TomatoRepository)
        signed_in = await authenticate.execute(
            AuthenticateRequest(payload=github_payload())
        )
        await tomato_repo.add(
            make_tomato(UserId(UUID(signed_in.user_id)), datetime.now(timezone.utc))
        )

        # Act
        profile = await use_case.execute(
            GetCurrentUserRequest(token="gh-token-12345")
        )

        # Assert
        assert profile.user_id == signed_in.user_id
        assert profile.nickname == "ada"
        assert profile.tomatoes_count == 1

    @pytest.mark.asyncio
    async def test_unknown_token(self, unit_env: AsyncContainer):
        """An unknown token raises NotFoundError."""
        use_case = await unit_env.get(GetCurrentUserUseCase)

        with pytest.raises(NotFoundError):
            await use_case.execute(GetCurrentUserRequest(token="unknown"))
