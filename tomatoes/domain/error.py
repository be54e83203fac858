"""Domain layer errors."""


class DomainError(Exception):
    """Base domain error."""

    pass


class ValidationError(DomainError):
    """A profile field or payload fails a format, range or enumeration rule."""

    pass


class NotFoundError(DomainError):
    """Raised when a requested resource is not found."""

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}")


class DuplicateError(DomainError):
    """Raised when the store rejects a write on a unique identity field."""

    pass


class PersistenceError(DomainError):
    """Generic store failure."""

    pass


class AggregationError(DomainError):
    """Raised when counting from the tomatoes log fails."""

    pass
