from typing import Annotated

from fastapi import APIRouter, Query, Request

from entrydesk.core.modules.entry.models import CadetEntry, Entry, EntryKind
from entrydesk.core.modules.submission.models import CadetSubmission, SubmissionResult
from entrydesk.core.pagination import PaginationResult
from entrydesk.web.deps import AppDep
from entrydesk.web.openapi import ErrorResponse

router: APIRouter = APIRouter(tags=["cadets"])


def with_download_url(request: Request, result: SubmissionResult) -> SubmissionResult:
    """Attach the absolute URL of the rendered form."""
    return result.model_copy(update={"download_url": str(request.base_url).rstrip("/") + result.form_path})


@router.post(
    "/cadets",
    summary="Submit cadet entry",
    description=(
        "Register a cadet championship participant. Assigns the next `CAD-######` entry ID, "
        "renders the application form and stores the entry.\n\n"
        "`age` and `weight` may be sent as numbers or numeric strings. "
        "`tfi_id_card_no` is optional but must be unique when provided."
    ),
    operation_id="submitCadetEntry",
    status_code=201,
    responses={
        201: {"description": "Entry created, form rendered"},
        400: {"model": ErrorResponse, "description": "Invalid input or duplicate TFI ID card number"},
        502: {"model": ErrorResponse, "description": "Application form could not be rendered"},
        503: {"model": ErrorResponse, "description": "No unique entry ID could be allocated, retry later"},
    },
)
async def submit_cadet_entry(submission: CadetSubmission, request: Request, app: AppDep) -> SubmissionResult:
    result = await app.submit_cadet_entry(submission)
    return with_download_url(request, result)


@router.get(
    "/cadets",
    summary="List cadet entries",
    description="Get paginated cadet entries, newest first.",
    operation_id="listCadetEntries",
    response_model=PaginationResult[CadetEntry],
    responses={200: {"description": "Paginated list of cadet entries"}},
)
async def list_cadet_entries(
    app: AppDep,
    limit: Annotated[int, Query(ge=1, le=100, description="Maximum items to return")] = 10,
    offset: Annotated[int, Query(ge=0, description="Number of items to skip")] = 0,
) -> PaginationResult[Entry]:
    return await app.list_entries(EntryKind.CADET, limit, offset)


@router.get(
    "/cadets/{entry_id}",
    summary="Get cadet entry",
    description="Get a cadet entry by its entry ID, e.g. `CAD-000042`.",
    operation_id="getCadetEntry",
    response_model=CadetEntry,
    responses={
        200: {"description": "Cadet entry"},
        404: {"model": ErrorResponse, "description": "Entry not found"},
    },
)
async def get_cadet_entry(entry_id: str, app: AppDep) -> Entry:
    return await app.get_entry(EntryKind.CADET, entry_id)
