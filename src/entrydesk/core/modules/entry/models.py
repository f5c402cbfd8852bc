from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum
from typing import ClassVar

from pydantic import Field

from entrydesk.core.db import MongoModel
from entrydesk.core.modules.counter.models import CounterName
from entrydesk.utils import now


class EntryKind(StrEnum):
    """Registration types accepted by the system."""

    CADET = "cadet"
    POOMSAE = "poomsae"


class ApplicationStatus(StrEnum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class CadetGender(StrEnum):
    MALE = "male"
    FEMALE = "female"
    OTHER = "other"


class PoomsaeGender(StrEnum):
    MALE = "Male"
    FEMALE = "Female"


class PoomsaeDivision(StrEnum):
    UNDER_30 = "Under 30"
    UNDER_40 = "Under 40"
    UNDER_50 = "Under 50"
    UNDER_60 = "Under 60"
    UNDER_65 = "Under 65"
    OVER_30 = "Over 30"
    OVER_65 = "Over 65"


class PoomsaeCategory(StrEnum):
    INDIVIDUAL = "Individual"
    PAIR = "Pair"
    GROUP = "Group"


class Entry(MongoModel):
    """Persisted participant registration, created once per successful submission."""

    entry_id: str  # PREFIX-000001, unique across the collection
    name: str  # Upper-cased
    date_of_birth: datetime
    age: int
    tfi_id_card_no: str | None = None  # Unique among non-blank values
    form_file_name: str  # Rendered application form
    application_status: ApplicationStatus = ApplicationStatus.PENDING
    created_at: datetime = Field(default_factory=now)

    sparse_fields: ClassVar[frozenset[str]] = frozenset({"tfi_id_card_no"})


class CadetEntry(Entry):
    gender: CadetGender
    weight_category: str | None = None
    weight: float | None = None
    parent_guardian_name: str | None = None
    state: str
    district: str
    present_belt_grade: str
    academic_qualification: str | None = None
    school_name: str | None = None


class PoomsaeEntry(Entry):
    division: PoomsaeDivision
    category: PoomsaeCategory
    gender: PoomsaeGender
    state_org: str
    weight: float
    parent_guardian_name: str
    mobile_no: str
    current_belt_grade: str
    dan_certificate_no: str
    academic_qualification: str
    name_of_college: str
    name_of_board_university: str


@dataclass(frozen=True)
class EntryKindConfig:
    """Storage and numbering settings for one registration kind."""

    kind: EntryKind
    title: str  # Heading printed on the application form
    counter_name: CounterName
    prefix: str
    collection: str
    entry_model: type[Entry]


ENTRY_KINDS: dict[EntryKind, EntryKindConfig] = {
    EntryKind.CADET: EntryKindConfig(
        kind=EntryKind.CADET,
        title="Cadet Championship Application Form",
        counter_name=CounterName.CADET,
        prefix="CAD",
        collection="cadet_entries",
        entry_model=CadetEntry,
    ),
    EntryKind.POOMSAE: EntryKindConfig(
        kind=EntryKind.POOMSAE,
        title="Poomsae Championship Application Form",
        counter_name=CounterName.POOMSAE,
        prefix="PMS",
        collection="poomsae_entries",
        entry_model=PoomsaeEntry,
    ),
}
