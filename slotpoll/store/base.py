"""Record store interface.

The polling core reaches persistence only through these four calls
(plus ``get`` as a convenience). Implementations raise StoreReadFailure for
failed reads and StoreWriteFailure for failed writes.
"""
from typing import Any, Dict, List, Mapping, Optional, Sequence

Record = Dict[str, Any]
Filters = Mapping[str, Any]


class RecordStore:
    """Async structured-record store.

    Filters are equality matches on record fields. A list or tuple value
    matches any of its members.
    """

    async def query(
        self,
        collection: str,
        filters: Optional[Filters] = None,
        order_by: Optional[Sequence[str]] = None,
        limit: Optional[int] = None,
    ) -> List[Record]:
        raise NotImplementedError

    async def insert(self, collection: str, record: Mapping[str, Any]) -> Record:
        raise NotImplementedError

    async def delete(self, collection: str, filters: Filters) -> int:
        raise NotImplementedError

    async def update(self, collection: str, filters: Filters, patch: Mapping[str, Any]) -> int:
        raise NotImplementedError

    async def get(self, collection: str, filters: Filters) -> Optional[Record]:
        """First record matching ``filters``, or None."""
        records = await self.query(collection, filters, limit=1)
        return records[0] if records else None

    async def search_prefix(self, collection: str, field: str, prefix: str, limit: int) -> List[Record]:
        """Records whose ``field`` starts with ``prefix``, case-insensitively."""
        raise NotImplementedError
