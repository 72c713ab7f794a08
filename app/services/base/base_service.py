"""
Base service class providing common functionality for all services.
"""

from contextlib import contextmanager
from datetime import datetime
from functools import wraps
from typing import Any, Dict, Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.exceptions import BaseAppException, EntityAlreadyExistsError, RepositoryError
from app.core.logging import get_logger

logger = get_logger(__name__)


def track_performance(operation_name: str):
    """Decorator to track operation performance."""
    def decorator(func):
        @wraps(func)
        def wrapper(*args, **kwargs):
            start_time = datetime.utcnow()
            try:
                result = func(*args, **kwargs)
                duration = (datetime.utcnow() - start_time).total_seconds()
                logger.info(
                    f"Operation '{operation_name}' completed in {duration:.3f}s",
                    extra={
                        "operation": operation_name,
                        "duration_seconds": duration,
                    }
                )
                return result
            except BaseAppException as e:
                duration = (datetime.utcnow() - start_time).total_seconds()
                logger.warning(
                    f"Operation '{operation_name}' rejected after {duration:.3f}s: {e.message}",
                    extra={
                        "operation": operation_name,
                        "duration_seconds": duration,
                        "error_code": e.error_code.value,
                    }
                )
                raise
            except Exception as e:
                duration = (datetime.utcnow() - start_time).total_seconds()
                logger.error(
                    f"Operation '{operation_name}' failed after {duration:.3f}s: {str(e)}",
                    extra={
                        "operation": operation_name,
                        "duration_seconds": duration,
                        "error": str(e)
                    },
                    exc_info=True
                )
                raise
        return wrapper
    return decorator


class BaseService:
    """
    Base service with common behaviors:
    - Shared logger and db session
    - Transaction management utilities

    Business rule violations are raised as ``BaseAppException`` subclasses;
    a failing transaction is rolled back before the exception propagates.
    """

    def __init__(self, db_session: Session):
        """
        Initialize base service.

        Args:
            db_session: SQLAlchemy database session
        """
        self.db: Session = db_session
        self._logger = get_logger(f"{self.__class__.__module__}.{self.__class__.__name__}")

    # -------------------------------------------------------------------------
    # Transaction Management
    # -------------------------------------------------------------------------

    @contextmanager
    def transaction(self, auto_commit: bool = True):
        """
        Context manager for database transactions with automatic rollback.

        Example:
            with self.transaction():
                self.bookings.add(booking)
                # automatic commit on success, rollback on exception
        """
        try:
            yield self.db
            if auto_commit:
                self._commit()
        except BaseAppException:
            self._rollback()
            raise
        except SQLAlchemyError as e:
            self._rollback()
            self._logger.error(f"Transaction failed: {e}", exc_info=True)
            raise RepositoryError(f"Transaction failed: {e}") from e
        except Exception as e:
            self._rollback()
            self._logger.error(f"Transaction failed: {e}", exc_info=True)
            raise

    def _commit(self) -> None:
        """Commit the current transaction, mapping datastore errors."""
        try:
            self.db.commit()
            self._logger.debug("Transaction committed successfully")
        except IntegrityError as e:
            self._rollback()
            raise EntityAlreadyExistsError(f"Unique constraint violated: {e.orig}") from e
        except SQLAlchemyError as e:
            self._logger.error(f"Commit failed: {e}", exc_info=True)
            self._rollback()
            raise RepositoryError(f"Commit failed: {e}") from e

    def _rollback(self) -> None:
        """Rollback the current transaction, suppressing rollback errors."""
        try:
            self.db.rollback()
            self._logger.debug("Transaction rolled back")
        except SQLAlchemyError as e:
            # Log but don't raise - rollback errors should not mask original error
            self._logger.warning(f"Rollback failed: {e}")

    # -------------------------------------------------------------------------
    # Utility Methods
    # -------------------------------------------------------------------------

    def _log_operation(
        self,
        operation: str,
        entity_ref: Optional[Any] = None,
        extra: Optional[Dict[str, Any]] = None,
    ) -> None:
        """
        Log service operation with standardized format.

        Args:
            operation: Description of the operation
            entity_ref: Reference to the entity involved
            extra: Additional context to log
        """
        log_data = {
            "operation": operation,
            "service": self.__class__.__name__,
        }
        if entity_ref is not None:
            log_data["entity_ref"] = str(entity_ref)
        if extra:
            log_data.update(extra)
        self._logger.info(f"{operation}", extra=log_data)
