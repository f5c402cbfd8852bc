"""Registration submission pipeline: validate, pre-check, then allocate/render/persist with bounded retries."""

import asyncio
from functools import partial
from typing import Any, Protocol

import structlog

from entrydesk.core.modules.counter.identifiers import format_entry_id
from entrydesk.core.modules.counter.models import SeedFunc
from entrydesk.core.modules.entry.models import Entry, EntryKindConfig
from entrydesk.core.modules.form.models import RenderResult
from entrydesk.core.modules.submission.models import EntrySubmission, SubmissionResult, SubmissionState
from entrydesk.errors import (
    ConstraintKind,
    ConstraintViolationError,
    IdentifierCollisionExhaustedError,
    RenderingError,
    ValidationError,
)
from entrydesk.utils import is_blank

logger = structlog.get_logger(__name__)

DUPLICATE_EXTERNAL_ID_MESSAGE = "TFI ID card number already exists"


class SequenceCounter(Protocol):
    async def increment_and_get(self, name: str, compute_initial: SeedFunc | None = None) -> int: ...


class EntryRecords(Protocol):
    async def insert(self, entry: Entry) -> Entry: ...

    async def find_one_by_external_id(self, value: str) -> Entry | None: ...

    async def highest_entry_number(self, prefix: str) -> int: ...


class FormRenderer(Protocol):
    async def render(self, entry_id: str, payload: dict[str, Any]) -> RenderResult: ...


class SubmissionOrchestrator:
    """Creates exactly one entry per successful submission.

    Correctness under concurrency rests on the counter's atomic increment and the
    record store's unique indexes; no locks are taken here. Each attempt consumes a
    counter value even when it is discarded, leaving a sequence gap.
    """

    def __init__(
        self,
        kind: EntryKindConfig,
        counter: SequenceCounter,
        records: EntryRecords,
        renderer: FormRenderer,
        max_attempts: int = 3,
        render_timeout: float = 30.0,
    ) -> None:
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        self._kind = kind
        self._counter = counter
        self._records = records
        self._renderer = renderer
        self._max_attempts = max_attempts
        self._render_timeout = render_timeout

    async def submit(self, submission: EntrySubmission) -> SubmissionResult:
        """Validate, allocate an entry ID, render the form and persist the entry.

        Raises:
            ValidationError: Malformed input or duplicate TFI ID card number
            RenderingError: Form rendering failed or timed out
            IdentifierCollisionExhaustedError: Every allocated entry ID collided
        """
        log = logger.bind(kind=self._kind.kind)

        log.debug("submission_state", state=SubmissionState.VALIDATING)
        try:
            fields = submission.normalize()
        except ValidationError as e:
            log.info("submission_state", state=SubmissionState.REJECTED, reason=str(e))
            raise

        external_id = fields.get("tfi_id_card_no")
        if not is_blank(external_id):
            log.debug("submission_state", state=SubmissionState.PRECHECKING_UNIQUENESS)
            if await self._records.find_one_by_external_id(external_id) is not None:
                log.info("submission_state", state=SubmissionState.REJECTED, reason="duplicate_external_id")
                raise ValidationError(DUPLICATE_EXTERNAL_ID_MESSAGE)

        last_error: ConstraintViolationError | None = None
        for attempt in range(1, self._max_attempts + 1):
            log.debug("submission_state", state=SubmissionState.ALLOCATING, attempt=attempt)
            entry_id = await self._allocate_entry_id()

            log.debug("submission_state", state=SubmissionState.RENDERING, attempt=attempt, entry_id=entry_id)
            form = await self._render(entry_id, fields)

            log.debug("submission_state", state=SubmissionState.PERSISTING, attempt=attempt, entry_id=entry_id)
            entry = self._kind.entry_model(entry_id=entry_id, form_file_name=form.file_name, **fields)
            try:
                await self._records.insert(entry)
            except ConstraintViolationError as e:
                if e.kind is not ConstraintKind.ENTRY_ID:
                    log.info("submission_state", state=SubmissionState.REJECTED, reason="duplicate_external_id")
                    raise ValidationError(DUPLICATE_EXTERNAL_ID_MESSAGE) from e
                log.warning("entry_id_collision", entry_id=entry_id, attempt=attempt)
                last_error = e
                continue

            log.info("submission_state", state=SubmissionState.COMMITTED, entry_id=entry_id, attempt=attempt)
            return SubmissionResult(
                entry_id=entry_id,
                application_number=entry_id,
                file_name=form.file_name,
                form_path=form.file_path or f"/forms/{form.file_name}",
                entry=entry,
            )

        log.error("submission_state", state=SubmissionState.EXHAUSTED, attempts=self._max_attempts)
        raise IdentifierCollisionExhaustedError(self._max_attempts) from last_error

    async def _allocate_entry_id(self) -> str:
        seed = partial(self._records.highest_entry_number, self._kind.prefix)
        value = await self._counter.increment_and_get(self._kind.counter_name, seed)
        return format_entry_id(self._kind.prefix, value)

    async def _render(self, entry_id: str, fields: dict[str, Any]) -> RenderResult:
        """Render once; any failure, exception or timeout aborts the submission."""
        try:
            async with asyncio.timeout(self._render_timeout):
                result = await self._renderer.render(entry_id, dict(fields))
        except TimeoutError as e:
            logger.warning("form_render_timeout", entry_id=entry_id, timeout=self._render_timeout)
            raise RenderingError(f"Form rendering timed out for {entry_id}") from e
        except Exception as e:
            logger.exception("form_render_error", entry_id=entry_id)
            raise RenderingError from e

        if not result.success or not result.file_name:
            logger.warning("form_render_failed", entry_id=entry_id, message=result.message)
            raise RenderingError(result.message or "Failed to generate application form")
        return result
