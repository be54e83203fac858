"""Domain model entities."""

from tomatoes.domain.model.authorization import Authorization
from tomatoes.domain.model.tomato import TOMATO_DURATION, Tomato
from tomatoes.domain.model.user import User

__all__ = [
    "Authorization",
    "Tomato",
    "TOMATO_DURATION",
    "User",
]
