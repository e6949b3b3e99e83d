"""SQLAlchemy-backed record store."""
from typing import Any, List, Mapping, Optional, Sequence

import structlog
from sqlalchemy import inspect
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from slotpoll.core.constants import (
    CALENDAR_VOTES,
    POLL_MEMBERS,
    POLLS,
    SCHEDULE_VOTES,
    USER_PROFILES,
)
from slotpoll.core.exceptions import StoreReadFailure, StoreWriteFailure
from slotpoll.db.models import CalendarVote, Poll, PollMember, ScheduleVote, UserProfile
from slotpoll.store.base import Filters, Record, RecordStore

logger = structlog.get_logger(__name__)

MODELS = {
    POLLS: Poll,
    SCHEDULE_VOTES: ScheduleVote,
    CALENDAR_VOTES: CalendarVote,
    POLL_MEMBERS: PollMember,
    USER_PROFILES: UserProfile,
}


def to_record(obj: Any) -> Record:
    """Column values of an ORM instance as a plain dict."""
    return {attr.key: getattr(obj, attr.key) for attr in inspect(obj).mapper.column_attrs}


class SqlRecordStore(RecordStore):
    """
    RecordStore over a synchronous SQLAlchemy session.

    Each write commits on success and rolls back on failure. SQLAlchemy
    errors are logged and re-raised as StoreReadFailure / StoreWriteFailure.
    Deletes go through the ORM so relationship cascades apply (deleting a
    poll removes its votes and memberships).
    """

    def __init__(self, db: Session):
        self.db = db

    def _model(self, collection: str):
        try:
            return MODELS[collection]
        except KeyError:
            raise ValueError(f"Unknown collection: {collection}")

    def _select(self, collection: str, filters: Optional[Filters]):
        model = self._model(collection)
        query = self.db.query(model)
        for field, value in (filters or {}).items():
            column = getattr(model, field, None)
            if column is None:
                raise ValueError(f"Unknown field {field!r} for {collection}")
            if isinstance(value, (list, tuple, set, frozenset)):
                query = query.filter(column.in_(list(value)))
            else:
                query = query.filter(column == value)
        return model, query

    async def query(
        self,
        collection: str,
        filters: Optional[Filters] = None,
        order_by: Optional[Sequence[str]] = None,
        limit: Optional[int] = None,
    ) -> List[Record]:
        model, query = self._select(collection, filters)
        for field in order_by or ():
            column = getattr(model, field.lstrip("-"))
            query = query.order_by(column.desc() if field.startswith("-") else column.asc())
        if limit is not None:
            query = query.limit(limit)

        try:
            return [to_record(row) for row in query.all()]
        except SQLAlchemyError as e:
            logger.error("store_query_failed", collection=collection, error=str(e))
            raise StoreReadFailure() from e

    async def search_prefix(self, collection: str, field: str, prefix: str, limit: int) -> List[Record]:
        """Records whose ``field`` starts with ``prefix`` (case-insensitive)."""
        model = self._model(collection)
        column = getattr(model, field)
        try:
            rows = (
                self.db.query(model)
                .filter(column.istartswith(prefix, autoescape=True))
                .order_by(column.asc())
                .limit(limit)
                .all()
            )
        except SQLAlchemyError as e:
            logger.error("store_query_failed", collection=collection, error=str(e))
            raise StoreReadFailure() from e
        return [to_record(row) for row in rows]

    async def insert(self, collection: str, record: Mapping[str, Any]) -> Record:
        model = self._model(collection)
        obj = model(**record)
        try:
            self.db.add(obj)
            self.db.commit()
            self.db.refresh(obj)
        except IntegrityError as e:
            self.db.rollback()
            logger.warning("store_insert_conflict", collection=collection, error=str(e.orig))
            raise StoreWriteFailure() from e
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error("store_insert_failed", collection=collection, error=str(e))
            raise StoreWriteFailure() from e
        return to_record(obj)

    async def delete(self, collection: str, filters: Filters) -> int:
        _, query = self._select(collection, filters)
        try:
            rows = query.all()
            for row in rows:
                self.db.delete(row)
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error("store_delete_failed", collection=collection, error=str(e))
            raise StoreWriteFailure() from e
        return len(rows)

    async def update(self, collection: str, filters: Filters, patch: Mapping[str, Any]) -> int:
        model, query = self._select(collection, filters)
        for field in patch:
            if getattr(model, field, None) is None:
                raise ValueError(f"Unknown field {field!r} for {collection}")
        try:
            changed = query.update(dict(patch), synchronize_session="fetch")
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error("store_update_failed", collection=collection, error=str(e))
            raise StoreWriteFailure() from e
        return changed
