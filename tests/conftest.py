"""Shared pytest fixtures and in-memory stand-ins for MongoDB and the form renderer."""

import asyncio
from typing import Any

import pytest
from pymongo import ReturnDocument
from pymongo.errors import DuplicateKeyError

from entrydesk.core.modules.counter.service import CounterService
from entrydesk.core.modules.entry.models import ENTRY_KINDS, Entry, EntryKind
from entrydesk.core.modules.form.models import RenderResult
from entrydesk.core.modules.submission.models import CadetSubmission, PoomsaeSubmission
from entrydesk.core.modules.submission.orchestrator import SubmissionOrchestrator
from entrydesk.errors import ConstraintKind, ConstraintViolationError


class FakeCounterCollection:
    """Mimics the `counters` collection; every call yields to the event loop to allow interleaving."""

    def __init__(self) -> None:
        self.docs: dict[str, dict[str, Any]] = {}
        self.insert_calls = 0

    async def find_one_and_update(
        self, filter: dict[str, Any], update: dict[str, Any], return_document: ReturnDocument = ReturnDocument.BEFORE
    ) -> dict[str, Any] | None:
        await asyncio.sleep(0)
        doc = self.docs.get(filter["_id"])
        if doc is None:
            return None
        doc["seq"] += update["$inc"]["seq"]
        return dict(doc)

    async def insert_one(self, document: dict[str, Any]) -> None:
        await asyncio.sleep(0)
        self.insert_calls += 1
        if document["_id"] in self.docs:
            raise DuplicateKeyError("E11000 duplicate key error collection: counters index: _id_", 11000)
        self.docs[document["_id"]] = dict(document)


class FakeDatabase:
    def __init__(self) -> None:
        self.collections: dict[str, FakeCounterCollection] = {}

    def get_collection(self, name: str) -> FakeCounterCollection:
        return self.collections.setdefault(name, FakeCounterCollection())


class InMemoryEntryStore:
    """Record store enforcing both uniqueness constraints in memory."""

    def __init__(self, collide_on_entry_id: bool = False, fail_with: Exception | None = None) -> None:
        self.entries: list[Entry] = []
        self.insert_attempts: list[str] = []
        self.collide_on_entry_id = collide_on_entry_id
        self.fail_with = fail_with
        self.external_id_race: str | None = None  # Becomes taken right after the pre-check

    async def insert(self, entry: Entry) -> Entry:
        await asyncio.sleep(0)
        self.insert_attempts.append(entry.entry_id)
        if self.fail_with is not None:
            raise self.fail_with
        if self.collide_on_entry_id or any(e.entry_id == entry.entry_id for e in self.entries):
            raise ConstraintViolationError(ConstraintKind.ENTRY_ID)
        if entry.tfi_id_card_no and (
            entry.tfi_id_card_no == self.external_id_race
            or any(e.tfi_id_card_no == entry.tfi_id_card_no for e in self.entries)
        ):
            raise ConstraintViolationError(ConstraintKind.EXTERNAL_ID)
        self.entries.append(entry)
        return entry

    async def find_one_by_external_id(self, value: str) -> Entry | None:
        await asyncio.sleep(0)
        return next((e for e in self.entries if e.tfi_id_card_no == value), None)

    async def highest_entry_number(self, prefix: str) -> int:
        return 0


class StubRenderer:
    """Returns queued results (or raises queued exceptions); succeeds once the queue is empty."""

    def __init__(self, *outcomes: RenderResult | Exception, delay: float = 0) -> None:
        self.outcomes = list(outcomes)
        self.delay = delay
        self.calls: list[str] = []

    async def render(self, entry_id: str, payload: dict[str, Any]) -> RenderResult:
        self.calls.append(entry_id)
        await asyncio.sleep(self.delay)
        if self.outcomes:
            outcome = self.outcomes.pop(0)
            if isinstance(outcome, Exception):
                raise outcome
            return outcome
        return RenderResult.ok(f"form_{entry_id}.png")


@pytest.fixture
def counter_database():
    """Fake database holding the counters collection."""
    return FakeDatabase()


@pytest.fixture
def counter_service(counter_database):
    return CounterService(counter_database)  # type: ignore[arg-type]


@pytest.fixture
def counters(counter_database):
    """Raw counter documents keyed by name."""
    return counter_database.get_collection("counters").docs


@pytest.fixture
def entry_store():
    return InMemoryEntryStore()


@pytest.fixture
def renderer():
    return StubRenderer()


@pytest.fixture
def make_orchestrator(counter_service, entry_store, renderer):
    """Build a cadet orchestrator; keyword arguments replace the default collaborators."""

    def factory(**overrides: Any) -> SubmissionOrchestrator:
        params: dict[str, Any] = {
            "counter": counter_service,
            "records": entry_store,
            "renderer": renderer,
            "max_attempts": 3,
            "render_timeout": 1.0,
        }
        params.update(overrides)
        return SubmissionOrchestrator(ENTRY_KINDS[EntryKind.CADET], **params)

    return factory


@pytest.fixture
def cadet_submission():
    return CadetSubmission(
        gender="male",
        name="  arjun rao ",
        date_of_birth="2012-04-18",
        age="13",
        weight="38.5",
        weight_category="Under 41 kg",
        parent_guardian_name="K. Rao",
        state="Andhra Pradesh",
        district="Guntur",
        present_belt_grade="Blue",
        tfi_id_card_no="TFI-0042",
    )


@pytest.fixture
def poomsae_submission():
    return PoomsaeSubmission(
        division="Under 30",
        category="individual",
        gender="female",
        name="Meera Iyer",
        state_org="Telangana Taekwondo Association",
        date_of_birth="1999-11-02",
        age=25,
        weight=54.2,
        parent_guardian_name="S. Iyer",
        mobile_no="9876543210",
        current_belt_grade="1st Dan",
        dan_certificate_no="DAN-7781",
        academic_qualification="B.Sc",
        name_of_college="City College",
        name_of_board_university="Osmania University",
    )


@pytest.fixture
def make_entry_store():
    """InMemoryEntryStore class, for tests that need a store with non-default behaviour."""
    return InMemoryEntryStore


@pytest.fixture
def make_renderer():
    return StubRenderer
