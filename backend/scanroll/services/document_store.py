"""Document-style persistence used by the attendance engine."""
import logging
from typing import Any, Dict, List, Optional

from sqlalchemy.exc import SQLAlchemyError

from scanroll import db
from scanroll.models.attendance import AttendanceRecord
from scanroll.models.student import Student
from scanroll.models.user import User

logger = logging.getLogger(__name__)

class StoreError(Exception):
    """Raised when the backing store cannot complete an operation."""
    pass

class DocumentStore:
    """Narrow create/query/get interface the engine depends on.

    Documents are plain dicts carrying an ``id`` key. Implementations raise
    ``StoreError`` for any backend failure so callers never see driver
    exceptions.
    """

    def create_record(self, collection: str, fields: Dict[str, Any]) -> Any:
        """Append a document and return its id."""
        raise NotImplementedError

    def query_documents(
        self,
        collection: str,
        filters: Dict[str, Any],
        order_by: Optional[str] = None,
        descending: bool = False
    ) -> List[Dict[str, Any]]:
        """Return documents whose fields equal every filter value."""
        raise NotImplementedError

    def get_document(self, collection: str, id: Any) -> Optional[Dict[str, Any]]:
        """Return one document or ``None`` if it does not exist."""
        raise NotImplementedError

    def delete_document(self, collection: str, id: Any) -> bool:
        """Remove one document; used by roster management only."""
        raise NotImplementedError

class SQLAlchemyDocumentStore(DocumentStore):
    """DocumentStore backed by the Flask-SQLAlchemy models."""

    collections = {
        'students': Student,
        'attendance': AttendanceRecord,
        'users': User,
    }

    def __init__(self, session=None):
        self._session = session

    @property
    def session(self):
        return self._session if self._session is not None else db.session

    def _model(self, collection: str):
        try:
            return self.collections[collection]
        except KeyError:
            raise ValueError(f"Unknown collection: {collection}")

    @staticmethod
    def _coerce_id(id: Any) -> Optional[int]:
        try:
            return int(id)
        except (TypeError, ValueError):
            return None

    def create_record(self, collection, fields):
        model = self._model(collection)
        try:
            instance = model(**fields)
            self.session.add(instance)
            self.session.commit()
            return instance.id
        except SQLAlchemyError as e:
            self.session.rollback()
            logger.error("Store write to %s failed: %s", collection, e)
            raise StoreError(f"Could not write to {collection}") from e

    def query_documents(self, collection, filters, order_by=None, descending=False):
        model = self._model(collection)
        try:
            query = self.session.query(model).filter_by(**filters)
            if order_by:
                # id breaks ties between records written in the same instant
                columns = (getattr(model, order_by), model.id)
                if descending:
                    query = query.order_by(*(column.desc() for column in columns))
                else:
                    query = query.order_by(*(column.asc() for column in columns))
            return [row.to_document() for row in query.all()]
        except SQLAlchemyError as e:
            self.session.rollback()
            logger.error("Store query on %s failed: %s", collection, e)
            raise StoreError(f"Could not query {collection}") from e

    def get_document(self, collection, id):
        model = self._model(collection)
        key = self._coerce_id(id)
        if key is None:
            return None
        try:
            instance = self.session.get(model, key)
        except SQLAlchemyError as e:
            self.session.rollback()
            logger.error("Store read from %s failed: %s", collection, e)
            raise StoreError(f"Could not read from {collection}") from e
        return instance.to_document() if instance else None

    def delete_document(self, collection, id):
        model = self._model(collection)
        key = self._coerce_id(id)
        if key is None:
            return False
        try:
            instance = self.session.get(model, key)
            if instance is None:
                return False
            self.session.delete(instance)
            self.session.commit()
            return True
        except SQLAlchemyError as e:
            self.session.rollback()
            logger.error("Store delete from %s failed: %s", collection, e)
            raise StoreError(f"Could not delete from {collection}") from e
