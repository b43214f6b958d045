"""Shared session handling for repositories."""

import logging
from typing import Any

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from tally.core.exceptions import PersistenceError, UniqueConstraintError, ValidationError

logger = logging.getLogger(__name__)


def is_unique_violation(exc: IntegrityError) -> bool:
    """Tell unique-key violations apart from other integrity failures.

    PostgreSQL reports SQLSTATE 23505; SQLite only says so in the message.
    """
    orig = getattr(exc, "orig", None)
    sqlstate = getattr(orig, "sqlstate", None) or getattr(orig, "pgcode", None)
    if sqlstate == "23505":
        return True
    return "unique" in str(orig or exc).lower()


class BaseRepository:
    """Base class holding the session and translating database errors."""

    def __init__(self, session: AsyncSession):
        """Initialize the repository with a database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def _commit(self, unique_message: str = "Record already exists") -> None:
        """Commit the current transaction.

        On failure the transaction is rolled back, so nothing written since
        the last commit survives, and the error is re-raised as a domain
        error.

        A failed commit also expires every object loaded earlier in the
        session; read attributes again through an awaited query before use.

        Args:
            unique_message: Message for UniqueConstraintError

        Raises:
            UniqueConstraintError: If a unique key was violated
            ValidationError: If another integrity constraint was violated
            PersistenceError: For any other database failure
        """
        try:
            await self.session.commit()
        except IntegrityError as e:
            await self.session.rollback()
            if is_unique_violation(e):
                raise UniqueConstraintError(unique_message) from e
            raise ValidationError(f"Invalid data: {e.orig}") from e
        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.error(f"Database write failed: {e}")
            raise PersistenceError("Could not save changes, please try again") from e

    async def _execute(self, statement: Any):
        """Run a read statement, turning driver failures into PersistenceError."""
        try:
            return await self.session.execute(statement)
        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.error(f"Database statement failed: {e}")
            raise PersistenceError("Could not load data, please try again") from e
