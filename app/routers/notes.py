# =============================================================================
# app/routers/notes.py - Note Endpoints
# =============================================================================
# Notes about the business or one of its records, plus the tag palette.
# All endpoints require authentication and a business profile.
# =============================================================================

from typing import Annotated

from fastapi import APIRouter, Path, Query, status

from app.dependencies import BusinessProfileDep, CurrentUserDep
from core.models.note import NoteCreate, NoteEntityType, NoteTagCreate, NoteUpdate
from core.services.note_service import NoteService

router = APIRouter()

NoteId = Annotated[str, Path(description="Note id")]


def _list_payload(notes: list[dict]) -> dict:
    return {"notes": notes, "total": len(notes)}


# =============================================================================
# Collection Endpoints
# =============================================================================

@router.get("")
async def list_notes(
    business_profile_id: BusinessProfileDep,
    entity_type: Annotated[NoteEntityType | None, Query()] = None,
    entity_id: Annotated[str | None, Query(description="Id of the inventory item, supplier or sale")] = None,
    tag: Annotated[str | None, Query(description="Only notes carrying this tag")] = None,
):
    """List notes, newest first, optionally narrowed by entity and tag."""
    notes = NoteService.list_notes(
        business_profile_id,
        entity_type=entity_type.value if entity_type else None,
        entity_id=entity_id,
        tag=tag,
    )
    return _list_payload(notes)


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_note(
    request: NoteCreate,
    business_profile_id: BusinessProfileDep,
    user: CurrentUserDep,
):
    return NoteService.create_note(
        business_profile_id, str(user.id), request.model_dump(mode="json")
    )


@router.get("/by-entity/{entity_type}")
async def list_notes_by_entity(
    entity_type: NoteEntityType,
    business_profile_id: BusinessProfileDep,
    entity_id: Annotated[str | None, Query(description="Narrow to one record")] = None,
):
    notes = NoteService.list_by_entity(business_profile_id, entity_type.value, entity_id)
    return _list_payload(notes)


@router.get("/by-tag/{tag}")
async def list_notes_by_tag(
    tag: Annotated[str, Path(description="Tag name")],
    business_profile_id: BusinessProfileDep,
):
    return _list_payload(NoteService.list_by_tag(business_profile_id, tag))


# =============================================================================
# Tag Endpoints
# =============================================================================

@router.get("/tags")
async def list_tags(business_profile_id: BusinessProfileDep):
    return NoteService.list_tags(business_profile_id)


@router.post("/tags", status_code=status.HTTP_201_CREATED)
async def create_tag(request: NoteTagCreate, business_profile_id: BusinessProfileDep):
    """
    Add a tag to the business's palette.

    Errors:
        409: a tag with the same name already exists
    """
    return NoteService.create_tag(business_profile_id, request.model_dump(mode="json"))


# =============================================================================
# Single Note Endpoints
# =============================================================================

@router.get("/{note_id}")
async def get_note(note_id: NoteId, business_profile_id: BusinessProfileDep):
    return NoteService.get_note(business_profile_id, note_id)


@router.patch("/{note_id}")
async def update_note(
    note_id: NoteId,
    request: NoteUpdate,
    business_profile_id: BusinessProfileDep,
):
    return NoteService.update_note(
        business_profile_id,
        note_id,
        request.model_dump(mode="json", exclude_unset=True),
    )


@router.delete("/{note_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_note(note_id: NoteId, business_profile_id: BusinessProfileDep):
    NoteService.delete_note(business_profile_id, note_id)
