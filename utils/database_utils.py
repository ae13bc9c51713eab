"""
Database utilities shared by the session registry and attendance ledger
"""
import logging
from contextlib import contextmanager
from typing import Iterator, Type, TypeVar

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from utils.exceptions import StorageUnavailable

T = TypeVar('T')

logger = logging.getLogger(__name__)


class DatabaseUtils:
    """Utility class for common database operations"""

    @staticmethod
    def exists(db: Session, model_class: Type[T], **filters) -> bool:
        """
        Check whether any row matches the given filters

        Args:
            db: Database session
            model_class: SQLAlchemy model class
            **filters: Filter conditions

        Returns:
            True if at least one row matches
        """
        return db.query(
            db.query(model_class).filter_by(**filters).exists()
        ).scalar()

    @staticmethod
    @contextmanager
    def storage_guard(db: Session, action: str) -> Iterator[None]:
        """
        Translate driver/ORM failures into ``StorageUnavailable``.

        The session is rolled back so the caller can keep using it. Domain
        exceptions raised inside the block pass through untouched.
        """
        try:
            yield
        except SQLAlchemyError as exc:
            logger.exception(f"Storage failure while {action}")
            try:
                db.rollback()
            except SQLAlchemyError:
                logger.exception("Rollback failed after storage failure")
            raise StorageUnavailable(f"Storage unavailable while {action}") from exc
