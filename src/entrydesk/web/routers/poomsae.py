from typing import Annotated

from fastapi import APIRouter, Query, Request

from entrydesk.core.modules.entry.models import Entry, EntryKind, PoomsaeEntry
from entrydesk.core.modules.submission.models import PoomsaeSubmission, SubmissionResult
from entrydesk.core.pagination import PaginationResult
from entrydesk.web.deps import AppDep
from entrydesk.web.openapi import ErrorResponse
from entrydesk.web.routers.cadets import with_download_url

router: APIRouter = APIRouter(tags=["poomsae"])


@router.post(
    "/poomsae",
    summary="Submit poomsae entry",
    description=(
        "Register a poomsae championship participant. Assigns the next `PMS-######` entry ID, "
        "renders the application form and stores the entry."
    ),
    operation_id="submitPoomsaeEntry",
    status_code=201,
    responses={
        201: {"description": "Entry created, form rendered"},
        400: {"model": ErrorResponse, "description": "Invalid input or duplicate TFI ID card number"},
        502: {"model": ErrorResponse, "description": "Application form could not be rendered"},
        503: {"model": ErrorResponse, "description": "No unique entry ID could be allocated, retry later"},
    },
)
async def submit_poomsae_entry(submission: PoomsaeSubmission, request: Request, app: AppDep) -> SubmissionResult:
    result = await app.submit_poomsae_entry(submission)
    return with_download_url(request, result)


@router.get(
    "/poomsae",
    summary="List poomsae entries",
    description="Get paginated poomsae entries, newest first.",
    operation_id="listPoomsaeEntries",
    response_model=PaginationResult[PoomsaeEntry],
    responses={200: {"description": "Paginated list of poomsae entries"}},
)
async def list_poomsae_entries(
    app: AppDep,
    limit: Annotated[int, Query(ge=1, le=100, description="Maximum items to return")] = 10,
    offset: Annotated[int, Query(ge=0, description="Number of items to skip")] = 0,
) -> PaginationResult[Entry]:
    return await app.list_entries(EntryKind.POOMSAE, limit, offset)


@router.get(
    "/poomsae/{entry_id}",
    summary="Get poomsae entry",
    description="Get a poomsae entry by its entry ID, e.g. `PMS-000007`.",
    operation_id="getPoomsaeEntry",
    response_model=PoomsaeEntry,
    responses={
        200: {"description": "Poomsae entry"},
        404: {"model": ErrorResponse, "description": "Entry not found"},
    },
)
async def get_poomsae_entry(entry_id: str, app: AppDep) -> Entry:
    return await app.get_entry(EntryKind.POOMSAE, entry_id)
