"""Mappers for converting between database rows and domain models.

Since domain models are immutable pydantic models, rows are mapped by hand
instead of through SQLAlchemy's ORM.
"""

from typing import Any, Dict, Iterable, Mapping
from uuid import UUID

from tomatoes.domain.model import Authorization, Tomato, User
from tomatoes.domain.value import Currency, UserId


def _uuid(value: Any) -> UUID:
    return UUID(value) if isinstance(value, str) else value


def row_to_authorization(row: Mapping[str, Any]) -> Authorization:
    """Convert database row to Authorization domain model.

    Args:
        row: Database row as mapping

    Returns:
        Authorization domain model
    """
    return Authorization(
        provider=row["provider"],
        uid=row["uid"],
        token=row.get("token"),
        nickname=row.get("nickname"),
        image=row.get("image"),
    )


def authorization_to_dict(
    user_id: UserId, position: int, authorization: Authorization
) -> Dict[str, Any]:
    """Convert an embedded Authorization to a database dict.

    Args:
        user_id: Owning user
        position: Index of the authorization within the user
        authorization: Authorization domain model

    Returns:
        Dict suitable for database insertion
    """
    return {"user_id": user_id, "position": position, **authorization.model_dump()}


def row_to_user(
    row: Mapping[str, Any], authorization_rows: Iterable[Mapping[str, Any]] = ()
) -> User:
    """Convert a user row and its authorization rows to a User domain model.

    Args:
        row: User row as mapping
        authorization_rows: The user's authorization rows, ordered by position

    Returns:
        User domain model
    """
    return User(
        id=UserId(_uuid(row["id"])),
        provider=row.get("provider"),
        uid=row.get("uid"),
        token=row.get("token"),
        gravatar_id=row.get("gravatar_id"),
        name=row.get("name"),
        email=row.get("email"),
        image=row.get("image"),
        time_zone=row.get("time_zone"),
        color=row.get("color"),
        volume=row.get("volume"),
        ticking=row.get("ticking"),
        work_hours_per_day=row.get("work_hours_per_day"),
        average_hourly_rate=row.get("average_hourly_rate"),
        currency=Currency(row["currency"]) if row.get("currency") else None,
        authorizations=tuple(row_to_authorization(a) for a in authorization_rows),
        created_at=row.get("created_at"),
        updated_at=row.get("updated_at"),
    )


def user_to_dict(user: User) -> Dict[str, Any]:
    """Convert User domain model to a users-table dict.

    Authorizations are stored separately, see ``authorization_to_dict``.

    Args:
        user: User domain model

    Returns:
        Dict suitable for database insertion/update
    """
    data = user.model_dump(exclude={"authorizations"})
    data["currency"] = user.currency.value if user.currency else None
    return data


def tomato_to_dict(tomato: Tomato) -> Dict[str, Any]:
    """Convert Tomato domain model to database dict."""
    return tomato.model_dump()
