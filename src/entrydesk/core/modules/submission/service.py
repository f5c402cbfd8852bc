from typing import Any

from pymongo.asynchronous.database import AsyncDatabase

from entrydesk.core.core import Service
from entrydesk.core.modules.entry.models import ENTRY_KINDS, EntryKind
from entrydesk.core.modules.submission.models import EntrySubmission, SubmissionResult
from entrydesk.core.modules.submission.orchestrator import SubmissionOrchestrator


class SubmissionService(Service):
    """Wires one SubmissionOrchestrator per registration kind from the shared services."""

    def __init__(self, database: AsyncDatabase[dict[str, Any]]) -> None:
        super().__init__(database)
        self._orchestrators: dict[EntryKind, SubmissionOrchestrator] = {}

    def orchestrator(self, kind: EntryKind) -> SubmissionOrchestrator:
        if kind not in self._orchestrators:
            services = self.core.services
            self._orchestrators[kind] = SubmissionOrchestrator(
                ENTRY_KINDS[kind],
                counter=services.counter,
                records=services.entry.store(kind),
                renderer=services.form.renderer(kind),
                max_attempts=self.core.config.max_submit_attempts,
                render_timeout=self.core.config.render_timeout,
            )
        return self._orchestrators[kind]

    async def submit(self, kind: EntryKind, submission: EntrySubmission) -> SubmissionResult:
        return await self.orchestrator(kind).submit(submission)
