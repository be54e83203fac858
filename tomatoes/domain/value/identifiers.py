"""Strongly typed identifiers for domain entities."""

from typing import NewType
from uuid import UUID

UserId = NewType("UserId", UUID)
TomatoId = NewType("TomatoId", UUID)
