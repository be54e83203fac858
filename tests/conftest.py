"""Test configuration and fixtures."""

from datetime import datetime
from uuid import uuid4

import pytest

from tomatoes.config import AggregationSettings
from tomatoes.domain.model import Tomato, User
from tomatoes.domain.value import TomatoId, UserId


def make_user(**fields) -> User:
    """Build a user with a fresh id; any field can be overridden."""
    fields.setdefault("id", UserId(uuid4()))
    return User(**fields)


def make_tomato(user_id: UserId | None, created_at: datetime) -> Tomato:
    """Build a tomato completed by ``user_id`` at ``created_at``."""
    return Tomato(id=TomatoId(uuid4()), user_id=user_id, created_at=created_at)


def github_payload(uid: str = "12345", **info) -> dict:
    """Raw GitHub sign-in payload as delivered by the OAuth client."""
    return {
        "provider": "github",
        "uid": uid,
        "info": {
            "name": "Ada Lovelace",
            "email": "ada@example.com",
            "image": "https://avatars.example.com/ada.png",
            "nickname": "ada",
            **info,
        },
        "credentials": {"token": f"gh-token-{uid}"},
    }


@pytest.fixture
def aggregation_settings() -> AggregationSettings:
    """Aggregation settings with the default UTC zone and exact buckets."""
    return AggregationSettings()
