from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from entrydesk.config import Config
from entrydesk.core.core import Core
from entrydesk.core.modules.entry.models import Entry, EntryKind
from entrydesk.core.modules.submission.models import CadetSubmission, PoomsaeSubmission, SubmissionResult
from entrydesk.core.pagination import PaginationResult


class App:
    """Facade for all application operations, delegates to Core services."""

    def __init__(self, config: Config) -> None:
        self._core = Core(config)

    @asynccontextmanager
    async def lifespan(self) -> AsyncGenerator[None]:
        """Application lifespan management - delegates to Core."""
        async with self._core.lifespan():
            yield

    async def submit_cadet_entry(self, submission: CadetSubmission) -> SubmissionResult:
        """Register a cadet championship participant."""
        return await self._core.services.submission.submit(EntryKind.CADET, submission)

    async def submit_poomsae_entry(self, submission: PoomsaeSubmission) -> SubmissionResult:
        """Register a poomsae championship participant."""
        return await self._core.services.submission.submit(EntryKind.POOMSAE, submission)

    async def get_entry(self, kind: EntryKind, entry_id: str) -> Entry:
        """Get an entry by its entry ID."""
        return await self._core.services.entry.get_entry(kind, entry_id)

    async def list_entries(self, kind: EntryKind, limit: int = 50, offset: int = 0) -> PaginationResult[Entry]:
        """Get paginated entries, newest first."""
        return await self._core.services.entry.list_entries(kind, limit, offset)
