"""Base model for all domain entities."""

from typing import Any, Self

from pydantic import BaseModel, ConfigDict
from pydantic import ValidationError as PydanticValidationError

from tomatoes.domain.error import ValidationError


class DomainModel(BaseModel):
    """Base class for all domain models.

    Provides common configuration for immutability and custom types.
    """

    model_config = ConfigDict(
        frozen=True,  # All domain models are immutable
        arbitrary_types_allowed=True,  # Allow custom value objects
    )

    @classmethod
    def build(cls, **fields: Any) -> Self:
        """Construct a validated instance.

        Raises:
            ValidationError: If any field breaks a model constraint
        """
        try:
            return cls(**fields)
        except PydanticValidationError as e:
            raise ValidationError(str(e)) from e

    def with_changes(self, **changes: Any) -> Self:
        """Return a re-validated copy with ``changes`` applied.

        Unlike ``model_copy(update=...)`` the constraints are checked again.
        """
        return self.build(**{**dict(self), **changes})
