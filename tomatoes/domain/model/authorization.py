"""Authorization entity.

Links a user to one external identity provider account.
"""

from typing import Optional

from tomatoes.domain.model.common import DomainModel
from tomatoes.domain.value import AuthPayload


class Authorization(DomainModel):
    """External identity embedded in a user.

    The (provider, uid) pair and the token are meant to be unique across
    all users; the Postgres store enforces both.
    """

    provider: str
    uid: str  # Provider-scoped id
    token: Optional[str] = None
    nickname: Optional[str] = None
    image: Optional[str] = None

    @staticmethod
    def payload_attributes(payload: AuthPayload) -> dict[str, Optional[str]]:
        """Authorization fields carried by a payload."""
        return {
            "provider": payload.provider,
            "uid": payload.uid,
            "token": payload.token,
            "nickname": payload.info.nickname if payload.info else None,
            "image": payload.info.image if payload.info else None,
        }

    @classmethod
    def from_payload(cls, payload: AuthPayload) -> "Authorization":
        """Build an authorization from a payload."""
        return cls.build(**cls.payload_attributes(payload))

    def refreshed_from(self, payload: AuthPayload) -> "Authorization":
        """Return this authorization overwritten with the payload's values."""
        return self.with_changes(**self.payload_attributes(payload))
