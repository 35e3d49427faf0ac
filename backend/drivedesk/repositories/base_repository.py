# backend/drivedesk/repositories/base_repository.py
"""
Shared data access for DriveDesk tables.

Every table carries a ``user_id`` column naming the owning instructor, so the
read helpers here come in owner-scoped flavours. Repositories flush but never
commit; the calling service decides when a unit of work is finished.
"""

from contextlib import contextmanager
import logging
from typing import Any, Dict, Generic, Iterator, List, Optional, Type, TypeVar

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Query, Session

from ..core.exceptions import RepositoryException

T = TypeVar("T")

logger = logging.getLogger(__name__)


class BaseRepository(Generic[T]):
    """Owner-aware CRUD for a single model class."""

    def __init__(self, db: Session, model: Type[T]):
        self.db = db
        self.model = model
        self.logger = logging.getLogger(f"{__name__}.{model.__name__}")

    @contextmanager
    def _db_errors(self, action: str, rollback: bool = False) -> Iterator[None]:
        """Translate SQLAlchemy failures into RepositoryException."""
        name = self.model.__name__
        try:
            yield
        except IntegrityError as exc:
            self.logger.error("Constraint violation while trying to %s %s: %s", action, name, exc)
            if rollback:
                self.db.rollback()
            raise RepositoryException(f"Could not {action} {name}: constraint violated") from exc
        except SQLAlchemyError as exc:
            self.logger.error("Database error while trying to %s %s: %s", action, name, exc)
            if rollback:
                self.db.rollback()
            raise RepositoryException(f"Could not {action} {name}: {exc}") from exc

    # Reads

    def get_by_id(self, id: str, load_relationships: bool = True) -> Optional[T]:
        """Fetch by primary key regardless of owner."""
        with self._db_errors("load"):
            query = self._build_query().filter(self.model.id == id)
            if load_relationships:
                query = self._apply_eager_loading(query)
            return query.first()

    def get_owned(self, id: str, user_id: str, load_relationships: bool = True) -> Optional[T]:
        """Fetch by primary key, but only when ``user_id`` owns the row."""
        with self._db_errors("load"):
            query = self._build_query().filter(self.model.id == id, self.model.user_id == user_id)
            if load_relationships:
                query = self._apply_eager_loading(query)
            return query.first()

    def list_for_user(self, user_id: str, *order_by: Any) -> List[T]:
        query = self._apply_eager_loading(self._build_query().filter(self.model.user_id == user_id))
        if order_by:
            query = query.order_by(*order_by)
        return self._execute_query(query)

    def find_by(self, **criteria: Any) -> List[T]:
        with self._db_errors("search"):
            return self._build_query().filter_by(**criteria).all()

    def count(self, **criteria: Any) -> int:
        with self._db_errors("count"):
            return self._build_query().filter_by(**criteria).count()

    # Writes

    def create(self, **values: Any) -> T:
        """Add a row and flush so its generated id is available."""
        with self._db_errors("create", rollback=True):
            entity = self.model(**values)
            self.db.add(entity)
            self.db.flush()
            return entity

    def bulk_create(self, rows: List[Dict[str, Any]]) -> List[T]:
        with self._db_errors("create", rollback=True):
            entities = [self.model(**values) for values in rows]
            self.db.add_all(entities)
            self.db.flush()
            return entities

    def update_entity(self, entity: T, **changes: Any) -> T:
        """Set the given attributes on a loaded row; unknown keys are ignored."""
        with self._db_errors("update", rollback=True):
            for field, value in changes.items():
                if hasattr(entity, field):
                    setattr(entity, field, value)
            self.db.flush()
            return entity

    def delete_entity(self, entity: T) -> None:
        with self._db_errors("delete", rollback=True):
            self.db.delete(entity)
            self.db.flush()

    # Hooks for subclasses

    def _apply_eager_loading(self, query: Query) -> Query:
        """Subclasses add ``selectinload`` options for their relationships."""
        return query

    def _build_query(self) -> Query:
        return self.db.query(self.model)

    def _execute_query(self, query: Query) -> List[T]:
        with self._db_errors("query"):
            return query.all()

    def _execute_scalar(self, query: Query) -> Any:
        with self._db_errors("query"):
            return query.scalar()
