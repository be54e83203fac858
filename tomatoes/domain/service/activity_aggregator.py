"""Activity aggregator domain service.

Builds the user statistics shown on the reports page (users per tomatoes
count, users per signup day, running total of users) and the per-user
day/week/month tomatoes counters.
"""

from collections import Counter
from datetime import date, datetime, timedelta, timezone, tzinfo
from typing import Callable, Hashable, Iterable, Optional, TypeVar
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

import logfire

from tomatoes.config import AggregationSettings
from tomatoes.domain.error import AggregationError
from tomatoes.domain.model import User
from tomatoes.domain.repository import TomatoRepository
from tomatoes.domain.value import TomatoesCounters, UserId

K = TypeVar("K", bound=Hashable)

# The first 1687 users signed up before account creation times were stored,
# so they can't be placed on any day. Running totals start from this count.
# It describes the production data set and is not meant to be tuned.
HISTORICAL_USERS_OFFSET = 1687


def zone_or_default(name: Optional[str], default: tzinfo) -> tzinfo:
    """Resolve a time zone name, falling back to ``default`` if unknown."""
    if not name:
        return default
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError):
        logfire.warn("Unknown time zone, using default", time_zone=name)
        return default


class ActivityAggregator:
    """Domain service for time-bucketed activity statistics."""

    def __init__(
        self,
        tomato_repository: TomatoRepository,
        settings: AggregationSettings,
    ) -> None:
        """Initialize activity aggregator.

        Args:
            tomato_repository: Tomato repository
            settings: Aggregation settings (reference zone, bucket size)
        """
        self.tomato_repository = tomato_repository
        self.settings = settings
        self.zone = zone_or_default(settings.time_zone, timezone.utc)

    def local_day(self, moment: datetime) -> date:
        """Calendar day of ``moment`` in the reference zone.

        Naive datetimes are taken as UTC.
        """
        if moment.tzinfo is None:
            moment = moment.replace(tzinfo=timezone.utc)
        return moment.astimezone(self.zone).date()

    def count_by_bucket(
        self, users: Iterable[User], bucket_fn: Callable[[User], Optional[K]]
    ) -> list[tuple[K, int]]:
        """Count users per bucket.

        Args:
            users: Users to group
            bucket_fn: Bucket key of a user, or None to leave the user out

        Returns:
            ``(bucket, count)`` pairs sorted by bucket; empty buckets are absent
        """
        counts: Counter = Counter()
        for user in users:
            key = bucket_fn(user)
            if key is not None:
                counts[key] += 1
        return sorted(counts.items(), key=lambda item: item[0])

    async def by_tomatoes(self, users: Iterable[User]) -> dict[int, int]:
        """Number of users per tomatoes-count bucket.

        A bucket is keyed by its lower bound, ``count // size * size``.

        Raises:
            AggregationError: If counting tomatoes fails
        """
        users = list(users)
        with logfire.span("activity_aggregator.by_tomatoes", users=len(users)):
            if not users:
                return {}
            try:
                totals = await self.tomato_repository.count_by_user(
                    user.id for user in users
                )
            except Exception as e:
                logfire.error("Counting tomatoes failed", error=str(e))
                raise AggregationError(f"Counting tomatoes failed: {e}") from e

            size = self.settings.tomatoes_bucket_size
            buckets = self.count_by_bucket(
                users, lambda user: totals.get(user.id, 0) // size * size
            )
            logfire.info("Tomatoes histogram built", buckets=len(buckets))
            return dict(buckets)

    def by_day(self, users: Iterable[User]) -> dict[date, int]:
        """Number of users created on each day.

        Users without a creation time are left out.
        """
        with logfire.span("activity_aggregator.by_day"):
            return dict(self._users_per_day(users))

    def total_by_day(self, users: Iterable[User]) -> dict[Optional[date], int]:
        """Running total of users at the end of each day.

        The first entry, keyed by None, is ``HISTORICAL_USERS_OFFSET``: the
        users that predate creation timestamps. Each day's value adds the
        users created that day to the previous total.
        """
        with logfire.span("activity_aggregator.total_by_day"):
            users_count = HISTORICAL_USERS_OFFSET
            totals: dict[Optional[date], int] = {None: users_count}
            for day, count in self._users_per_day(users):
                users_count += count
                totals[day] = users_count
            return totals

    def _users_per_day(self, users: Iterable[User]) -> list[tuple[date, int]]:
        return self.count_by_bucket(
            users,
            lambda user: self.local_day(user.created_at) if user.created_at else None,
        )

    def period_starts(
        self, user: User, now: Optional[datetime] = None
    ) -> dict[str, datetime]:
        """Start of the current day, ISO week and month for a user.

        Uses the user's time zone when set, otherwise the reference zone.
        """
        zone = zone_or_default(user.effective_time_zone, self.zone)
        local = (now or datetime.now(timezone.utc)).astimezone(zone)
        start_of_day = local.replace(hour=0, minute=0, second=0, microsecond=0)
        return {
            "day": start_of_day,
            "week": start_of_day - timedelta(days=start_of_day.weekday()),
            "month": start_of_day.replace(day=1),
        }

    async def tomatoes_counters(
        self, user: User, now: Optional[datetime] = None
    ) -> TomatoesCounters:
        """Tomatoes completed since the start of the current day, week and month.

        Each period is counted on its own against the tomatoes log.

        Args:
            user: User whose tomatoes are counted
            now: Reference instant (defaults to the current time)

        Returns:
            Day, week and month counters

        Raises:
            AggregationError: If any of the counts fails
        """
        with logfire.span(
            "activity_aggregator.tomatoes_counters", user_id=str(user.id)
        ):
            starts = self.period_starts(user, now)
            counters = {
                period: await self._count_after(user.id, since)
                for period, since in starts.items()
            }
            logfire.info(
                "Tomatoes counters computed", user_id=str(user.id), **counters
            )
            return TomatoesCounters(**counters)

    async def _count_after(self, user_id: UserId, since: datetime) -> int:
        try:
            return await self.tomato_repository.count_after(user_id, since)
        except Exception as e:
            logfire.error(
                "Counting tomatoes failed", user_id=str(user_id), error=str(e)
            )
            raise AggregationError(f"Counting tomatoes failed: {e}") from e
