from abc import ABC, abstractmethod
from enum import StrEnum
from typing import Any

from pydantic import BaseModel, Field

from entrydesk.core.modules.entry.models import (
    CadetEntry,
    CadetGender,
    PoomsaeCategory,
    PoomsaeDivision,
    PoomsaeEntry,
    PoomsaeGender,
)
from entrydesk.core.modules.submission.validators import (
    RawValue,
    parse_choice,
    parse_date,
    parse_float,
    parse_int,
    parse_mobile_no,
    parse_name,
    parse_text,
)


class SubmissionState(StrEnum):
    """Lifecycle of a single submission; REJECTED, COMMITTED and EXHAUSTED are terminal."""

    VALIDATING = "validating"
    PRECHECKING_UNIQUENESS = "prechecking_uniqueness"
    ALLOCATING = "allocating"
    RENDERING = "rendering"
    PERSISTING = "persisting"
    REJECTED = "rejected"
    COMMITTED = "committed"
    EXHAUSTED = "exhausted"


class EntrySubmission(BaseModel, ABC):
    """Raw registration request; values arrive as strings or numbers from the form."""

    name: str = ""
    date_of_birth: str = ""
    age: RawValue = None
    tfi_id_card_no: str | None = None

    @abstractmethod
    def normalize(self) -> dict[str, Any]:
        """Validate and convert to entry fields.

        Raises:
            ValidationError: If any field is missing or malformed
        """


class CadetSubmission(EntrySubmission):
    gender: str = ""
    weight_category: str | None = None
    weight: RawValue = None
    parent_guardian_name: str | None = None
    state: str = ""
    district: str = ""
    present_belt_grade: str = ""
    academic_qualification: str | None = None
    school_name: str | None = None

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "gender": "male",
                    "name": "Arjun Rao",
                    "date_of_birth": "2012-04-18",
                    "age": "13",
                    "weight": "38.5",
                    "weight_category": "Under 41 kg",
                    "parent_guardian_name": "K. Rao",
                    "state": "Andhra Pradesh",
                    "district": "Guntur",
                    "present_belt_grade": "Blue",
                    "tfi_id_card_no": "TFI-2024-0042",
                }
            ]
        }
    }

    def normalize(self) -> dict[str, Any]:
        return {
            "gender": parse_choice("gender", self.gender, CadetGender),
            "weight_category": parse_text("weight_category", self.weight_category, required=False),
            "name": parse_name("name", self.name),
            "date_of_birth": parse_date("date_of_birth", self.date_of_birth),
            "age": parse_int("age", self.age, min_value=5, max_value=50),
            "weight": parse_float("weight", self.weight, required=False, min_value=10, max_value=150),
            "parent_guardian_name": parse_text("parent_guardian_name", self.parent_guardian_name, required=False),
            "state": parse_text("state", self.state),
            "district": parse_text("district", self.district),
            "present_belt_grade": parse_text("present_belt_grade", self.present_belt_grade),
            "tfi_id_card_no": parse_text("tfi_id_card_no", self.tfi_id_card_no, required=False),
            "academic_qualification": parse_text("academic_qualification", self.academic_qualification, required=False),
            "school_name": parse_text("school_name", self.school_name, required=False),
        }


class PoomsaeSubmission(EntrySubmission):
    division: str = ""
    category: str = ""
    gender: str = ""
    state_org: str = ""
    weight: RawValue = None
    parent_guardian_name: str = ""
    mobile_no: str = ""
    current_belt_grade: str = ""
    dan_certificate_no: str = ""
    academic_qualification: str = ""
    name_of_college: str = ""
    name_of_board_university: str = ""

    def normalize(self) -> dict[str, Any]:
        return {
            "division": parse_choice("division", self.division, PoomsaeDivision),
            "category": parse_choice("category", self.category, PoomsaeCategory),
            "gender": parse_choice("gender", self.gender, PoomsaeGender),
            "name": parse_name("name", self.name),
            "state_org": parse_text("state_org", self.state_org),
            "date_of_birth": parse_date("date_of_birth", self.date_of_birth),
            "age": parse_int("age", self.age, min_value=0, max_value=120),
            "weight": parse_float("weight", self.weight),
            "parent_guardian_name": parse_text("parent_guardian_name", self.parent_guardian_name),
            "mobile_no": parse_mobile_no("mobile_no", self.mobile_no),
            "current_belt_grade": parse_text("current_belt_grade", self.current_belt_grade),
            "tfi_id_card_no": parse_text("tfi_id_card_no", self.tfi_id_card_no, required=False),
            "dan_certificate_no": parse_text("dan_certificate_no", self.dan_certificate_no),
            "academic_qualification": parse_text("academic_qualification", self.academic_qualification),
            "name_of_college": parse_text("name_of_college", self.name_of_college),
            "name_of_board_university": parse_text("name_of_board_university", self.name_of_board_university),
        }


class SubmissionResult(BaseModel):
    """Successful submission: the assigned entry ID, the rendered form and the stored entry."""

    entry_id: str
    application_number: str = Field(..., description="Same as entry_id, printed on the form")
    file_name: str
    form_path: str = Field(..., description="Public path of the rendered form, e.g. /forms/<file_name>")
    download_url: str | None = Field(default=None, description="Absolute URL of the rendered form")
    entry: CadetEntry | PoomsaeEntry
