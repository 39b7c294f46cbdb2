"""Notes API endpoints."""

from uuid import UUID

from fastapi import APIRouter, Depends, Query

from ..core.schemas.notes import NoteCreate, NoteListResponse, NoteResponse, NoteUpdate
from ..core.services import NoteService
from ..middleware.auth import get_current_user_id
from ..middleware.rate_limit import RateLimit
from .deps import PageParams, get_note_service, get_page_params

router = APIRouter(
    prefix="/notes",
    tags=["notes"],
    dependencies=[Depends(RateLimit("notes"))],
)


@router.post("", response_model=NoteResponse, status_code=201)
async def create_note(
    request: NoteCreate,
    current_user_id: UUID = Depends(get_current_user_id),
    note_service: NoteService = Depends(get_note_service),
):
    """Create a new note."""
    return await note_service.create_note(current_user_id, request)


@router.get("", response_model=NoteListResponse)
async def list_notes(
    current_user_id: UUID = Depends(get_current_user_id),
    paging: PageParams = Depends(get_page_params),
    note_service: NoteService = Depends(get_note_service),
):
    """List the caller's notes, newest first."""
    return await note_service.list_notes(current_user_id, page=paging.page, per_page=paging.per_page)


# registered before /{note_id} so "search" is not parsed as an id
@router.get("/search", response_model=NoteListResponse)
async def search_notes(
    q: str = Query("", description="Search query"),
    current_user_id: UUID = Depends(get_current_user_id),
    paging: PageParams = Depends(get_page_params),
    note_service: NoteService = Depends(get_note_service),
):
    """Search the caller's notes by title and content."""
    return await note_service.search_notes(
        current_user_id, q, page=paging.page, per_page=paging.per_page
    )


@router.get("/{note_id}", response_model=NoteResponse)
async def get_note(
    note_id: UUID,
    current_user_id: UUID = Depends(get_current_user_id),
    note_service: NoteService = Depends(get_note_service),
):
    """Get a specific note."""
    return await note_service.get_note(current_user_id, note_id)


@router.put("/{note_id}", response_model=NoteResponse)
async def update_note(
    note_id: UUID,
    request: NoteUpdate,
    current_user_id: UUID = Depends(get_current_user_id),
    note_service: NoteService = Depends(get_note_service),
):
    """Update a note."""
    return await note_service.update_note(current_user_id, note_id, request)


@router.delete("/{note_id}", response_model=NoteResponse)
async def delete_note(
    note_id: UUID,
    current_user_id: UUID = Depends(get_current_user_id),
    note_service: NoteService = Depends(get_note_service),
):
    """Delete a note, returning it."""
    return await note_service.delete_note(current_user_id, note_id)
