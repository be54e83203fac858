"""Unit tests for ActivityAggregator."""

from datetime import date, datetime, timezone
from typing import Iterable

import pytest

from tomatoes.config import AggregationSettings
from tomatoes.domain.error import AggregationError
from tomatoes.domain.service import HISTORICAL_USERS_OFFSET, ActivityAggregator
from tomatoes.domain.value import TomatoesCounters, UserId
from tomatoes.persistence.repository.inmemory import InMemoryTomatoRepository
from tests.conftest import make_tomato, make_user

# Wednesday
NOW = datetime(2024, 5, 15, 12, 0, tzinfo=timezone.utc)


def utc(*args: int) -> datetime:
    return datetime(*args, tzinfo=timezone.utc)


class FailingTomatoRepository(InMemoryTomatoRepository):
    """Tomato repository whose counting queries always fail."""

    async def count_after(self, user_id: UserId, since: datetime) -> int:
        raise ConnectionError("database unavailable")

    async def count_by_user(self, user_ids: Iterable[UserId]) -> dict[UserId, int]:
        raise ConnectionError("database unavailable")


class TestCountByBucket:
    """Tests for ActivityAggregator.count_by_bucket()."""

    def test_sorted_by_bucket(self, aggregation_settings):
        """Buckets come back in ascending key order."""
        aggregator = ActivityAggregator(
            InMemoryTomatoRepository(), aggregation_settings
        )
        users = [make_user(volume=v) for v in (3, 1, 3, 0)]

        result = aggregator.count_by_bucket(users, lambda user: user.volume)

        assert result == [(0, 1), (1, 1), (3, 2)]

    def test_none_keys_are_skipped(self, aggregation_settings):
        """Users without a bucket are not counted."""
        aggregator = ActivityAggregator(
            InMemoryTomatoRepository(), aggregation_settings
        )
        users = [make_user(volume=1), make_user()]

        result = aggregator.count_by_bucket(users, lambda user: user.volume)

        assert result == [(1, 1)]

    def test_empty_input(self, aggregation_settings):
        aggregator = ActivityAggregator(
            InMemoryTomatoRepository(), aggregation_settings
        )

        assert aggregator.count_by_bucket([], lambda user: user.volume) == []


class TestByTomatoes:
    """Tests for ActivityAggregator.by_tomatoes()."""

    @pytest.mark.asyncio
    async def test_exact_counts(self, aggregation_settings):
        """With the default bucket size each count is its own bucket."""
        # Arrange
        tomato_repo = InMemoryTomatoRepository()
        aggregator = ActivityAggregator(tomato_repo, aggregation_settings)
        idle, one_a, one_b, busy = (make_user() for _ in range(4))
        for user, count in ((one_a, 1), (one_b, 1), (busy, 5)):
            for _ in range(count):
                await tomato_repo.add(make_tomato(user.id, NOW))

        # Act
        result = await aggregator.by_tomatoes([idle, one_a, one_b, busy])

        # Assert
        assert result == {0: 1, 1: 2, 5: 1}
        assert list(result) == [0, 1, 5]

    @pytest.mark.asyncio
    async def test_configured_bucket_size(self):
        """Counts are grouped by the lower bound of their bucket."""
        # Arrange
        tomato_repo = InMemoryTomatoRepository()
        aggregator = ActivityAggregator(
            tomato_repo, AggregationSettings(tomatoes_bucket_size=5)
        )
        users = [make_user() for _ in range(4)]
        for user, count in zip(users, (0, 4, 5, 12)):
            for _ in range(count):
                await tomato_repo.add(make_tomato(user.id, NOW))

        # Act
        result = await aggregator.by_tomatoes(users)

        # Assert
        assert result == {0: 2, 5: 1, 10: 1}

    @pytest.mark.asyncio
    async def test_tomatoes_of_deleted_users_are_ignored(self, aggregation_settings):
        """Detached tomatoes belong to no bucket."""
        # Arrange
        tomato_repo = InMemoryTomatoRepository()
        aggregator = ActivityAggregator(tomato_repo, aggregation_settings)
        user = make_user()
        await tomato_repo.add(make_tomato(None, NOW))

        # Act
        result = await aggregator.by_tomatoes([user])

        # Assert
        assert result == {0: 1}

    @pytest.mark.asyncio
    async def test_empty_input(self, aggregation_settings):
        aggregator = ActivityAggregator(
            InMemoryTomatoRepository(), aggregation_settings
        )

        assert await aggregator.by_tomatoes([]) == {}

    @pytest.mark.asyncio
    async def test_counting_failure_raises_aggregation_error(
        self, aggregation_settings
    ):
        """Repository failures surface as AggregationError."""
        aggregator = ActivityAggregator(
            FailingTomatoRepository(), aggregation_settings
        )

        with pytest.raises(AggregationError):
            await aggregator.by_tomatoes([make_user()])


class TestByDay:
    """Tests for ActivityAggregator.by_day() and total_by_day()."""

    def test_users_on_same_day(self, aggregation_settings):
        """Three users created on one day make one bucket of three."""
        aggregator = ActivityAggregator(
            InMemoryTomatoRepository(), aggregation_settings
        )
        users = [
            make_user(created_at=utc(2024, 5, 15, hour))
            for hour in (0, 9, 23)
        ]

        assert aggregator.by_day(users) == {date(2024, 5, 15): 3}

    def test_users_without_created_at_are_skipped(self, aggregation_settings):
        """Users predating timestamps are not placed on any day."""
        aggregator = ActivityAggregator(
            InMemoryTomatoRepository(), aggregation_settings
        )
        users = [make_user(), make_user(created_at=utc(2024, 5, 1))]

        assert aggregator.by_day(users) == {date(2024, 5, 1): 1}

    def test_days_follow_reference_zone(self):
        """Days are calendar days in the configured zone."""
        aggregator = ActivityAggregator(
            InMemoryTomatoRepository(), AggregationSettings(time_zone="Europe/Rome")
        )
        # 23:30 UTC is already the next day in Rome
        users = [make_user(created_at=utc(2024, 5, 15, 23, 30))]

        assert aggregator.by_day(users) == {date(2024, 5, 16): 1}

    def test_naive_timestamps_are_utc(self, aggregation_settings):
        """Naive creation times are read as UTC."""
        aggregator = ActivityAggregator(
            InMemoryTomatoRepository(), aggregation_settings
        )
        users = [make_user(created_at=datetime(2024, 5, 15, 23, 59))]

        assert aggregator.by_day(users) == {date(2024, 5, 15): 1}

    def test_by_day_empty(self, aggregation_settings):
        aggregator = ActivityAggregator(
            InMemoryTomatoRepository(), aggregation_settings
        )

        assert aggregator.by_day([]) == {}

    def test_total_by_day_empty(self, aggregation_settings):
        """Without users only the historical offset is left."""
        aggregator = ActivityAggregator(
            InMemoryTomatoRepository(), aggregation_settings
        )

        assert aggregator.total_by_day([]) == {None: 1687}
        assert HISTORICAL_USERS_OFFSET == 1687

    def test_total_by_day_is_cumulative(self, aggregation_settings):
        """Each day adds its signups to the previous total."""
        aggregator = ActivityAggregator(
            InMemoryTomatoRepository(), aggregation_settings
        )
        users = [
            make_user(created_at=utc(2024, 5, 3)),
            make_user(created_at=utc(2024, 5, 1)),
            make_user(created_at=utc(2024, 5, 1, 18)),
            make_user(),
        ]

        result = aggregator.total_by_day(users)

        assert result == {
            None: 1687,
            date(2024, 5, 1): 1689,
            date(2024, 5, 3): 1690,
        }
        assert list(result) == [None, date(2024, 5, 1), date(2024, 5, 3)]


class TestTomatoesCounters:
    """Tests for ActivityAggregator.tomatoes_counters()."""

    @pytest.mark.asyncio
    async def test_day_week_month(self, aggregation_settings):
        """Each period counts tomatoes since its own start."""
        # Arrange
        tomato_repo = InMemoryTomatoRepository()
        aggregator = ActivityAggregator(tomato_repo, aggregation_settings)
        user = make_user()
        other = make_user()
        for created_at in (
            utc(2024, 5, 15, 8),  # today
            utc(2024, 5, 13, 10),  # Monday of this week
            utc(2024, 5, 12, 22),  # Sunday, previous week
            utc(2024, 4, 30, 9),  # previous month
        ):
            await tomato_repo.add(make_tomato(user.id, created_at))
        await tomato_repo.add(make_tomato(other.id, utc(2024, 5, 15, 9)))

        # Act
        counters = await aggregator.tomatoes_counters(user, now=NOW)

        # Assert
        assert counters == TomatoesCounters(day=1, week=2, month=3)

    @pytest.mark.asyncio
    async def test_yesterday_and_today(self, aggregation_settings):
        """Yesterday counts for the week and month but not the day."""
        # Arrange
        tomato_repo = InMemoryTomatoRepository()
        aggregator = ActivityAggregator(tomato_repo, aggregation_settings)
        user = make_user()
        await tomato_repo.add(make_tomato(user.id, utc(2024, 5, 14, 16)))
        await tomato_repo.add(make_tomato(user.id, utc(2024, 5, 15, 10)))

        # Act
        counters = await aggregator.tomatoes_counters(user, now=NOW)

        # Assert
        assert counters == TomatoesCounters(day=1, week=2, month=2)

    @pytest.mark.asyncio
    async def test_no_tomatoes(self, aggregation_settings):
        aggregator = ActivityAggregator(
            InMemoryTomatoRepository(), aggregation_settings
        )

        counters = await aggregator.tomatoes_counters(make_user(), now=NOW)

        assert counters == TomatoesCounters(day=0, week=0, month=0)

    @pytest.mark.asyncio
    async def test_user_time_zone(self, aggregation_settings):
        """Periods start at local midnight in the user's zone."""
        # Arrange
        tomato_repo = InMemoryTomatoRepository()
        aggregator = ActivityAggregator(tomato_repo, aggregation_settings)
        user = make_user(time_zone="Asia/Tokyo")
        # 16:00 UTC is 01:00 on Thursday in Tokyo
        now = utc(2024, 5, 15, 16)
        await tomato_repo.add(make_tomato(user.id, utc(2024, 5, 15, 15, 30)))
        await tomato_repo.add(make_tomato(user.id, utc(2024, 5, 15, 14)))

        # Act
        counters = await aggregator.tomatoes_counters(user, now=now)

        # Assert
        assert counters == TomatoesCounters(day=1, week=2, month=2)

    def test_unknown_time_zone_uses_reference_zone(self, aggregation_settings):
        """An invalid user zone falls back to the configured one."""
        aggregator = ActivityAggregator(
            InMemoryTomatoRepository(), aggregation_settings
        )
        user = make_user(time_zone="Mars/Olympus_Mons")

        starts = aggregator.period_starts(user, NOW)

        assert starts["day"] == utc(2024, 5, 15)
        assert starts["week"] == utc(2024, 5, 13)
        assert starts["month"] == utc(2024, 5, 1)

    @pytest.mark.asyncio
    async def test_counting_failure_raises_aggregation_error(
        self, aggregation_settings
    ):
        """No partial counters are returned when counting fails."""
        aggregator = ActivityAggregator(
            FailingTomatoRepository(), aggregation_settings
        )

        with pytest.raises(AggregationError):
            await aggregator.tomatoes_counters(make_user(), now=NOW)
