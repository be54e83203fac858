"""Unit tests for GetTomatoesCountersUseCase."""

from datetime import datetime, timezone
from uuid import uuid4

from dishka import AsyncContainer
import pytest

from tomatoes.application.usecase.user import GetTomatoesCountersUseCase
from tomatoes.application.usecase.user.get_tomatoes_counters import (
    GetTomatoesCountersRequest,
)
from tomatoes.domain.error import NotFoundError
from tomatoes.domain.repository import TomatoRepository, UserRepository
from tomatoes.domain.value import TomatoesCounters
from tests.conftest import make_tomato, make_user
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


class TestGetTomatoesCountersUseCase:
    """Tests for GetTomatoesCountersUseCase."""

    @pytest.mark.asyncio
    async def test_counters(self, unit_env: AsyncContainer):
        """Counters are computed for the requested user."""
        # Arrange
        user_repo = await unit_env.get(UserRepository)
        tomato_repo = await unit_env.get(TomatoRepository)
        use_case = await unit_env.get(GetTomatoesCountersUseCase)
        user = await user_repo.add(make_user(time_zone="UTC"))
        for created_at in (
            datetime(2024, 5, 15, 9, tzinfo=timezone.utc),
            datetime(2024, 5, 14, 9, tzinfo=timezone.utc),
            datetime(2024, 5, 2, 9, tzinfo=timezone.utc),
        ):
            await tomato_repo.add(make_tomato(user.id, created_at))

        # Act
        counters = await use_case.execute(
            GetTomatoesCountersRequest(
                user_id=str(user.id),
                now=datetime(2024, 5, 15, 18, tzinfo=timezone.utc),
            )
        )

        # Assert
        assert counters == TomatoesCounters(day=1, week=2, month=3)

    @pytest.mark.asyncio
    async def test_unknown_user(self, unit_env: AsyncContainer):
        use_case = await unit_env.get(GetTomatoesCountersUseCase)

        with pytest.raises(NotFoundError):
            await use_case.execute(GetTomatoesCountersRequest(user_id=str(uuid4())))
