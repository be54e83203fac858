"""Unit tests for AuthenticateUseCase."""

from dishka import AsyncContainer
import pytest

from tomatoes.application.usecase.auth import AuthenticateUseCase
from tomatoes.application.usecase.auth.authenticate import AuthenticateRequest
from tomatoes.domain.error import ValidationError
from tomatoes.domain.repository import UserRepository
from tests.conftest import github_payload
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


class TestAuthenticateUseCase:
    """Tests for AuthenticateUseCase."""

    @pytest.mark.asyncio
    async def test_first_sign_in_creates_user(self, unit_env: AsyncContainer):
        """An unknown identity creates a new user."""
        # Arrange
        use_case = await unit_env.get(AuthenticateUseCase)
        user_repo = await unit_env.get(UserRepository)

        # Act
        response = await use_case.execute(AuthenticateRequest(payload=github_payload()))

        # Assert
        assert response.is_new_user is True
        assert response.name == "Ada Lovelace"
        assert response.providers == ["github"]
        assert len(await user_repo.find_all()) == 1

    @pytest.mark.asyncio
    async def test_repeated_sign_in_reuses_user(self, unit_env: AsyncContainer):
        """Signing in again returns the same user without duplicating it."""
        # Arrange
        use_case = await unit_env.get(AuthenticateUseCase)
        user_repo = await unit_env.get(UserRepository)
        first = await use_case.execute(AuthenticateRequest(payload=github_payload()))

        # Act
        second = await use_case.execute(
            AuthenticateRequest(payload=github_payload(name="Renamed"))
        )

        # Assert
        assert second.is_new_user is False
        assert second.user_id == first.user_id
        assert second.name == "Ada Lovelace"
        assert second.providers == ["github"]
        assert len(await user_repo.find_all()) == 1

    @pytest.mark.asyncio
    async def test_numeric_uid_matches_existing_user(self, unit_env: AsyncContainer):
        """A numeric uid finds the user stored with the string uid."""
        # Arrange
        use_case = await unit_env.get(AuthenticateUseCase)
        first = await use_case.execute(
            AuthenticateRequest(payload=github_payload(uid="12345"))
        )
        payload = {**github_payload(), "uid": 12345}

        # Act
        second = await use_case.execute(AuthenticateRequest(payload=payload))

        # Assert
        assert second.user_id == first.user_id

    @pytest.mark.asyncio
    async def test_invalid_payload(self, unit_env: AsyncContainer):
        """A payload without uid is rejected before any lookup."""
        use_case = await unit_env.get(AuthenticateUseCase)

        with pytest.raises(ValidationError):
            await use_case.execute(AuthenticateRequest(payload={"provider": "github"}))
