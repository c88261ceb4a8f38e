"""Learning notes API endpoints."""

import logging

from fastapi import APIRouter, Response, status

from web3journey.auth import OptionalUserId
from web3journey.database.session import DbSession

from .schemas import NoteReferenceType, NoteResponse, NoteSave
from .service import NotesService


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/notes", tags=["notes"])


@router.get("")
async def list_notes(
    user_id: OptionalUserId,
    db: DbSession,
    reference_type: NoteReferenceType | None = None,
) -> list[NoteResponse]:
    if user_id is None:
        return []
    return await NotesService(db).list_notes(user_id, reference_type)


@router.get("/{reference_type}/{reference_id}")
async def get_note(
    reference_type: NoteReferenceType,
    reference_id: str,
    user_id: OptionalUserId,
    db: DbSession,
) -> NoteResponse | None:
    """The user's note on a module, topic or project, or null if there is none."""
    if user_id is None:
        return None
    return await NotesService(db).get_note(user_id, reference_type, reference_id)


@router.put("/{reference_type}/{reference_id}")
async def save_note(
    reference_type: NoteReferenceType,
    reference_id: str,
    data: NoteSave,
    user_id: OptionalUserId,
    db: DbSession,
) -> NoteResponse | None:
    """Create or replace a note. Anonymous visitors get null and nothing is stored."""
    if user_id is None:
        return None
    return await NotesService(db).save_note(user_id, reference_type, reference_id, data)


@router.delete("/{reference_type}/{reference_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_note(
    reference_type: NoteReferenceType,
    reference_id: str,
    user_id: OptionalUserId,
    db: DbSession,
) -> Response:
    if user_id is not None:
        deleted = await NotesService(db).delete_note(user_id, reference_type, reference_id)
        if deleted:
            logger.info("Deleted note on %s %s for user %s", reference_type, reference_id, user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
