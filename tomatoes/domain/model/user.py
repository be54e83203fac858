"""User aggregate root.

Users sign in through one or more external providers and track their
work as tomatoes. Profile fields are stored nullable; the defaults below
are substituted when a value is read, never when it is written.
"""

import re
from datetime import datetime
from typing import Any, Optional

from pydantic import Field, field_validator

from tomatoes.domain.model.authorization import Authorization
from tomatoes.domain.model.common import DomainModel
from tomatoes.domain.model.tomato import TOMATO_DURATION
from tomatoes.domain.value import Currency, UserId, effective_value

DEFAULT_COLOR = "#000000"
DEFAULT_CURRENCY = Currency.USD
DEFAULT_IMAGE_FILE = "user.png"
DEFAULT_VOLUME = 2
DEFAULT_TICKING = False

COLOR_PATTERN = re.compile(r"^#[A-Fa-f0-9]{6}$")

# Fields a user edits by hand; provider data only fills them while blank
USER_OWNED_FIELDS = ("name", "email")


class User(DomainModel):
    """User aggregate root - provider-agnostic.

    One user can have several linked authorizations. ``provider``, ``uid``,
    ``token`` and ``gravatar_id`` are the deprecated single-provider fields
    still present on accounts created before authorizations existed.
    """

    id: UserId

    # Deprecated single-provider identity
    provider: Optional[str] = None
    uid: Optional[str] = None
    token: Optional[str] = None
    gravatar_id: Optional[str] = None

    name: Optional[str] = None
    email: Optional[str] = None
    image: Optional[str] = None
    time_zone: Optional[str] = None
    color: Optional[str] = None
    volume: Optional[int] = Field(default=None, ge=0, lt=4)
    ticking: Optional[bool] = None

    work_hours_per_day: Optional[int] = Field(default=None, gt=0)
    average_hourly_rate: Optional[float] = Field(default=None, gt=0)
    currency: Optional[Currency] = None

    authorizations: tuple[Authorization, ...] = ()

    # None for accounts created before timestamps were recorded
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @field_validator("color")
    @classmethod
    def validate_color(cls, v: Optional[str]) -> Optional[str]:
        """Colors are ``#RRGGBB``; blank is allowed."""
        if v and not COLOR_PATTERN.match(v):
            raise ValueError("Color must be a '#' followed by 6 hex digits")
        return v

    @field_validator(
        "currency", "volume", "work_hours_per_day", "average_hourly_rate", mode="before"
    )
    @classmethod
    def blank_to_none(cls, v: Any) -> Any:
        """Blank form values mean unset."""
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @property
    def effective_color(self) -> str:
        return effective_value(self.color, DEFAULT_COLOR)

    @property
    def effective_volume(self) -> int:
        return effective_value(self.volume, DEFAULT_VOLUME)

    @property
    def effective_ticking(self) -> bool:
        return effective_value(self.ticking, DEFAULT_TICKING)

    @property
    def effective_currency(self) -> Currency:
        return effective_value(self.currency, DEFAULT_CURRENCY)

    @property
    def currency_unit(self) -> str:
        """Symbol of the user's currency, e.g. ``€``."""
        return self.effective_currency.symbol

    @property
    def effective_time_zone(self) -> Optional[str]:
        """Time zone, or None when unset. No default is substituted."""
        return effective_value(self.time_zone, None)

    @property
    def nickname(self) -> Optional[str]:
        """Nickname reported by the first linked provider."""
        if not self.authorizations:
            return None
        return self.authorizations[0].nickname

    @property
    def image_file(self) -> str:
        """Avatar: own image, then the first provider's image, then a placeholder."""
        image = self.image
        if image is None and self.authorizations:
            image = self.authorizations[0].image
        return effective_value(image, DEFAULT_IMAGE_FILE)

    def authorization_by_provider(self, provider: str) -> Optional[Authorization]:
        """First authorization linked through ``provider``."""
        for authorization in self.authorizations:
            if authorization.provider == provider:
                return authorization
        return None

    def estimated_revenues(self, tomatoes_count: int) -> Optional[float]:
        """Revenue earned by ``tomatoes_count`` tomatoes at the hourly rate.

        Returns None when the user has no hourly rate.
        """
        if self.average_hourly_rate is None:
            return None
        hours = tomatoes_count * TOMATO_DURATION.total_seconds() / 60 / 60
        return hours * self.average_hourly_rate

    def unset_profile_attributes(
        self, attributes: dict[str, Optional[str]]
    ) -> dict[str, Optional[str]]:
        """Drop user-owned fields the user has already filled in.

        Args:
            attributes: Candidate profile values (e.g. from a provider)

        Returns:
            The subset that may be applied without overwriting user data
        """
        return {
            field: value
            for field, value in attributes.items()
            if field not in USER_OWNED_FIELDS
            or effective_value(getattr(self, field), None) is None
        }
