"""Translation of store failures into domain errors."""

from contextlib import asynccontextmanager
from typing import AsyncIterator

import logfire
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from tomatoes.domain.error import DuplicateError, PersistenceError

UNIQUE_VIOLATION = "23505"


def is_unique_violation(error: IntegrityError) -> bool:
    """Whether the database reported a unique constraint violation."""
    orig = error.orig
    code = getattr(orig, "pgcode", None) or getattr(orig, "sqlstate", None)
    return code == UNIQUE_VIOLATION


@asynccontextmanager
async def store_errors(operation: str) -> AsyncIterator[None]:
    """Re-raise SQLAlchemy errors as domain errors.

    Args:
        operation: Name of the repository operation, for logs and messages

    Raises:
        DuplicateError: On unique constraint violations
        PersistenceError: On any other database failure
    """
    try:
        yield
    except IntegrityError as e:
        if is_unique_violation(e):
            logfire.warn("Duplicate identity rejected", operation=operation)
            raise DuplicateError(f"{operation}: {e.orig}") from e
        logfire.error("Write rejected by store", operation=operation, error=str(e))
        raise PersistenceError(f"{operation}: {e.orig}") from e
    except SQLAlchemyError as e:
        logfire.error("Store failure", operation=operation, error=str(e))
        raise PersistenceError(f"{operation}: {e}") from e
