"""MongoDB-backed record store for registration entries."""

import re
from typing import Any

import structlog
from pymongo.asynchronous.collection import AsyncCollection
from pymongo.errors import DuplicateKeyError

from entrydesk.core.modules.counter.identifiers import parse_entry_number
from entrydesk.core.modules.entry.models import Entry
from entrydesk.core.pagination import PaginationResult
from entrydesk.errors import ConstraintKind, ConstraintViolationError

logger = structlog.get_logger(__name__)

EXTERNAL_ID_FIELD = "tfi_id_card_no"
SEED_SCAN_LIMIT = 100  # Most recent entries inspected when seeding a missing counter


def classify_duplicate_key(error: DuplicateKeyError) -> ConstraintKind | None:
    """Map a duplicate key error to the violated constraint, None for unrelated indexes."""
    details = error.details or {}
    key_pattern = details.get("keyPattern") or {}
    if EXTERNAL_ID_FIELD in key_pattern:
        return ConstraintKind.EXTERNAL_ID
    if "entry_id" in key_pattern:
        return ConstraintKind.ENTRY_ID

    # Older servers only report the index name in the message
    message = str(details.get("errmsg") or error)
    if EXTERNAL_ID_FIELD in message:
        return ConstraintKind.EXTERNAL_ID
    if "entry_id" in message:
        return ConstraintKind.ENTRY_ID
    return None


class EntryStore:
    """Entries of a single kind, with both uniqueness invariants enforced by indexes.

    - `entry_id` is unique.
    - `tfi_id_card_no` is unique only when it is a non-empty string (partial index),
      so blank and missing values never collide.
    """

    def __init__(self, collection: AsyncCollection[dict[str, Any]], entry_model: type[Entry]) -> None:
        self._collection = collection
        self._entry_model = entry_model

    async def ensure_indexes(self) -> None:
        await self._collection.create_index([("entry_id", 1)], unique=True, name="entry_id_unique")
        await self._collection.create_index(
            [(EXTERNAL_ID_FIELD, 1)],
            unique=True,
            partialFilterExpression={EXTERNAL_ID_FIELD: {"$exists": True, "$gt": ""}},
            name=f"{EXTERNAL_ID_FIELD}_partial_unique",
        )
        await self._collection.create_index([("created_at", -1)])
        await self._collection.create_index([("name", 1)])

    async def insert(self, entry: Entry) -> Entry:
        """Insert a new entry.

        Raises:
            ConstraintViolationError: Tagged with the violated uniqueness constraint
            DuplicateKeyError: If some other unique index was hit
        """
        try:
            await self._collection.insert_one(entry.to_mongo())
        except DuplicateKeyError as e:
            kind = classify_duplicate_key(e)
            if kind is None:
                raise
            raise ConstraintViolationError(kind, f"Duplicate {kind}: {entry.entry_id}") from e
        logger.debug("entry_inserted", collection=self._collection.name, entry_id=entry.entry_id)
        return entry

    async def find_one_by_external_id(self, value: str) -> Entry | None:
        """Find the entry holding a non-blank TFI ID card number."""
        doc = await self._collection.find_one({EXTERNAL_ID_FIELD: value})
        if doc is None:
            return None
        return self._entry_model.model_validate(doc)

    async def find_by_entry_id(self, entry_id: str) -> Entry | None:
        doc = await self._collection.find_one({"entry_id": entry_id})
        if doc is None:
            return None
        return self._entry_model.model_validate(doc)

    async def list_entries(self, limit: int = 50, offset: int = 0) -> PaginationResult[Entry]:
        """Get entries newest first."""
        total = await self._collection.count_documents({})
        cursor = self._collection.find({}).sort("created_at", -1).skip(offset).limit(limit)
        items = await self._entry_model.list_cursor(cursor)
        return PaginationResult(items=items, total=total, limit=limit, offset=offset)

    async def highest_entry_number(self, prefix: str) -> int:
        """Best-effort seed: highest numeric suffix among the most recent entries.

        Not atomic; only consulted when the counter document does not exist yet.
        """
        cursor = (
            self._collection.find({"entry_id": {"$regex": f"^{re.escape(prefix)}-"}}, {"entry_id": 1})
            .sort("created_at", -1)
            .limit(SEED_SCAN_LIMIT)
        )
        highest = 0
        async for doc in cursor:
            number = parse_entry_number(prefix, doc["entry_id"])
            if number is not None:
                highest = max(highest, number)
        return highest
