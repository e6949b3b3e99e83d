"""Record store interface and implementations."""
from slotpoll.store.base import RecordStore
from slotpoll.store.sql import SqlRecordStore

__all__ = ["RecordStore", "SqlRecordStore"]
