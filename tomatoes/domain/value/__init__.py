"""Domain value objects."""

from tomatoes.domain.value.identifiers import TomatoId, UserId
from tomatoes.domain.value.types import (
    CURRENCY_SYMBOLS,
    AuthCredentials,
    AuthInfo,
    AuthPayload,
    Currency,
    TomatoesCounters,
    effective_value,
)

__all__ = [
    # Identifiers
    "UserId",
    "TomatoId",
    # Types
    "AuthCredentials",
    "AuthInfo",
    "AuthPayload",
    "Currency",
    "CURRENCY_SYMBOLS",
    "TomatoesCounters",
    "effective_value",
]
