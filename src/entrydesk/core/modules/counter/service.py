from typing import Any

import structlog
from pymongo import ReturnDocument
from pymongo.asynchronous.database import AsyncDatabase
from pymongo.errors import DuplicateKeyError

from entrydesk.core.core import Service
from entrydesk.core.modules.counter.models import Counter, SeedFunc

logger = structlog.get_logger(__name__)


class CounterService(Service):
    """Atomic named sequences stored in the `counters` collection."""

    def __init__(self, database: AsyncDatabase[dict[str, Any]]) -> None:
        super().__init__(database)
        self._collection = database.get_collection("counters")

    async def increment_and_get(self, name: str, compute_initial: SeedFunc | None = None) -> int:
        """Atomically increment the named counter and return the new value.

        A missing counter is created with `compute_initial() + 1`. When two callers race
        to create it, the loser falls back to the increment path.
        """
        while True:
            doc = await self._collection.find_one_and_update(
                {"_id": name},
                {"$inc": {"seq": 1}},
                return_document=ReturnDocument.AFTER,
            )
            if doc is not None:
                return Counter.model_validate(doc).seq

            counter = Counter(name=name, seq=await self._compute_seed(name, compute_initial) + 1)
            try:
                await self._collection.insert_one(counter.model_dump(by_alias=True))
            except DuplicateKeyError:
                logger.debug("counter_create_race_lost", name=name)
                continue

            logger.info("counter_created", name=name, seq=counter.seq)
            return counter.seq

    async def _compute_seed(self, name: str, compute_initial: SeedFunc | None) -> int:
        if compute_initial is None:
            return 0
        try:
            seed = await compute_initial()
        except Exception:
            logger.exception("counter_seed_failed", name=name)
            return 0
        return max(seed, 0)
