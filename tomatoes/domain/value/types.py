"""Domain value objects.

Value objects are immutable and defined by their values, not identity.
They encapsulate validation rules for the data entering the domain.
"""

from enum import Enum
from types import MappingProxyType
from typing import Any, Mapping, Optional, TypeVar

from pydantic import Field, field_validator
from pydantic import ValidationError as PydanticValidationError

from tomatoes.domain.error import ValidationError
from tomatoes.domain.value.common import ValueObject

T = TypeVar("T")


def effective_value(stored: Optional[T], default: T) -> T:
    """Return the stored value, or the default when it is unset or blank.

    Defaults are applied when a value is read, storage stays nullable.
    ``False`` and ``0`` count as set.
    """
    if stored is None:
        return default
    if isinstance(stored, str) and not stored.strip():
        return default
    return stored


class Currency(str, Enum):
    """Currencies a user can bill in."""

    USD = "USD"
    EUR = "EUR"
    JPY = "JPY"
    GBP = "GBP"
    CHF = "CHF"

    @property
    def symbol(self) -> str:
        """Display symbol of the currency."""
        return CURRENCY_SYMBOLS[self]


CURRENCY_SYMBOLS: Mapping[Currency, str] = MappingProxyType(
    {
        Currency.USD: "$",
        Currency.EUR: "€",
        Currency.JPY: "¥",
        Currency.GBP: "£",
        Currency.CHF: "Fr.",
    }
)


class AuthInfo(ValueObject):
    """Profile information reported by the provider."""

    name: str | None = None
    email: str | None = None
    image: str | None = None
    nickname: str | None = None


class AuthCredentials(ValueObject):
    """Credentials issued by the provider."""

    token: str | None = None


class AuthPayload(ValueObject):
    """Inbound external-authentication payload.

    Shape produced by OAuth-style clients::

        {
            "provider": "github",
            "uid": "12345",
            "info": {"name": ..., "email": ..., "image": ..., "nickname": ...},
            "credentials": {"token": ...},
        }
    """

    provider: str = Field(min_length=1)
    uid: str = Field(min_length=1)
    info: AuthInfo | None = None
    credentials: AuthCredentials | None = None

    @field_validator("provider", "uid", mode="before")
    @classmethod
    def coerce_to_string(cls, v: Any) -> Any:
        """Providers may report numeric ids."""
        if v is None:
            return v
        return str(v)

    @classmethod
    def parse(cls, data: Mapping[str, Any]) -> "AuthPayload":
        """Build a payload from a raw mapping.

        Args:
            data: Raw payload mapping

        Returns:
            Validated payload

        Raises:
            ValidationError: If provider or uid are missing or malformed
        """
        try:
            return cls.model_validate(dict(data))
        except PydanticValidationError as e:
            raise ValidationError(f"Invalid authentication payload: {e}") from e

    @property
    def token(self) -> str | None:
        """Access token, if the provider issued one."""
        return self.credentials.token if self.credentials else None

    def profile_attributes(self) -> dict[str, str]:
        """User profile fields carried by the payload.

        Fields the provider did not report are left out.
        """
        if self.info is None:
            return {}
        attributes = {
            "name": self.info.name,
            "email": self.info.email,
            "image": self.info.image,
        }
        return {k: v for k, v in attributes.items() if v is not None}


class TomatoesCounters(ValueObject):
    """Tomatoes completed since the start of the current day, week and month."""

    day: int = Field(ge=0)
    week: int = Field(ge=0)
    month: int = Field(ge=0)
