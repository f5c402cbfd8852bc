from typing import Any

from pymongo.asynchronous.database import AsyncDatabase

from entrydesk.core.core import Service
from entrydesk.core.modules.entry.models import ENTRY_KINDS, Entry, EntryKind
from entrydesk.core.modules.entry.store import EntryStore
from entrydesk.core.pagination import PaginationResult
from entrydesk.errors import NotFoundError


class EntryService(Service):
    """Owns one EntryStore per registration kind."""

    def __init__(self, database: AsyncDatabase[dict[str, Any]]) -> None:
        super().__init__(database)
        self._stores = {
            kind: EntryStore(database.get_collection(config.collection), config.entry_model)
            for kind, config in ENTRY_KINDS.items()
        }

    async def on_start(self) -> None:
        """Create uniqueness and lookup indexes on startup."""
        for store in self._stores.values():
            await store.ensure_indexes()

    def store(self, kind: EntryKind) -> EntryStore:
        return self._stores[kind]

    async def get_entry(self, kind: EntryKind, entry_id: str) -> Entry:
        entry = await self._stores[kind].find_by_entry_id(entry_id)
        if entry is None:
            raise NotFoundError(f"Entry not found: {entry_id}")
        return entry

    async def list_entries(self, kind: EntryKind, limit: int = 50, offset: int = 0) -> PaginationResult[Entry]:
        return await self._stores[kind].list_entries(limit, offset)
