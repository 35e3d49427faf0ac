# backend/drivedesk/services/base.py
"""
Common plumbing for DriveDesk services.

Services own the unit of work: repositories flush, services commit through
``transaction()``. Public operations are wrapped in ``measure_operation`` so
their timings and failures reach the Prometheus collectors.
"""

from contextlib import contextmanager
from functools import wraps
import logging
import time
from typing import Any, Callable, Iterator, Optional, TypeVar, cast

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..core.exceptions import NotFoundException, ServiceException
from ..core.ulid_helper import is_valid_ulid
from ..monitoring.prometheus_metrics import prometheus_metrics

logger = logging.getLogger(__name__)

F = TypeVar("F", bound=Callable[..., Any])

SLOW_OPERATION_SECONDS = 1.0


class BaseService:
    """Holds the session and a per-class logger."""

    def __init__(self, db: Session):
        self.db = db
        self.logger = logging.getLogger(self.__class__.__name__)

    @contextmanager
    def transaction(self) -> Iterator[Session]:
        """
        Commit on clean exit, roll back on any error.

        Database errors surface as ServiceException; domain exceptions raised
        inside the block propagate unchanged after the rollback.
        """
        try:
            yield self.db
            self.db.commit()
        except SQLAlchemyError as exc:
            self.db.rollback()
            self.logger.error("Rolled back after database error: %s", exc)
            raise ServiceException(f"Database operation failed: {exc}") from exc
        except Exception:
            self.db.rollback()
            raise

    @staticmethod
    def measure_operation(operation_name: str) -> Callable[[F], F]:
        """
        Decorate a service method so each call is timed.

        Durations and outcomes go to the Prometheus service-operation
        collectors; calls slower than SLOW_OPERATION_SECONDS are also logged.
        """

        def decorator(func: F) -> F:
            @wraps(func)
            def wrapper(self: "BaseService", *args: Any, **kwargs: Any) -> Any:
                started = time.perf_counter()
                error_type: Optional[str] = None
                try:
                    return func(self, *args, **kwargs)
                except Exception as exc:
                    error_type = type(exc).__name__
                    raise
                finally:
                    elapsed = time.perf_counter() - started
                    prometheus_metrics.record_service_operation(
                        service=self.__class__.__name__,
                        operation=operation_name,
                        duration=elapsed,
                        status="error" if error_type else "success",
                        error_type=error_type,
                    )
                    if elapsed > SLOW_OPERATION_SECONDS:
                        self.logger.warning("Slow operation %s: %.2fs", operation_name, elapsed)
                    else:
                        self.logger.debug("%s took %.1fms", operation_name, elapsed * 1000)

            return cast(F, wrapper)

        return decorator

    def _require_owned(self, repository: Any, entity_id: str, user_id: str, label: str) -> Any:
        """Return the caller's record or raise NotFoundException; other owners' rows count as missing."""
        entity = None
        if entity_id and is_valid_ulid(entity_id):
            entity = repository.get_owned(entity_id, user_id)
        if entity is None:
            raise NotFoundException(f"{label} not found", details={"id": entity_id})
        return entity

    def log_operation(self, operation: str, **context: Any) -> None:
        self.logger.info("Operation: %s", operation, extra={"operation": operation, **context})
