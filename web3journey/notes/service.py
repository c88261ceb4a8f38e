"""Business logic for learning notes."""

import logging
from uuid import UUID

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from .models import LearningNote
from .schemas import NoteReferenceType, NoteResponse, NoteSave, count_words


logger = logging.getLogger(__name__)


class NotesService:
    """One note per (user, reference_type, reference_id)."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def _get_row(self, user_id: UUID, reference_type: str, reference_id: str) -> LearningNote | None:
        result = await self.session.execute(
            select(LearningNote).where(
                LearningNote.user_id == user_id,
                LearningNote.reference_type == reference_type,
                LearningNote.reference_id == reference_id,
            )
        )
        return result.scalar_one_or_none()

    async def get_note(self, user_id: UUID, reference_type: NoteReferenceType, reference_id: str) -> NoteResponse | None:
        note = await self._get_row(user_id, reference_type, reference_id)
        return NoteResponse.model_validate(note) if note else None

    async def list_notes(self, user_id: UUID, reference_type: NoteReferenceType | None = None) -> list[NoteResponse]:
        """Pinned notes first, then most recently updated."""
        query = select(LearningNote).where(LearningNote.user_id == user_id)
        if reference_type is not None:
            query = query.where(LearningNote.reference_type == reference_type)
        query = query.order_by(LearningNote.is_pinned.desc(), LearningNote.updated_at.desc())
        result = await self.session.execute(query)
        return [NoteResponse.model_validate(note) for note in result.scalars()]

    async def save_note(
        self, user_id: UUID, reference_type: NoteReferenceType, reference_id: str, data: NoteSave
    ) -> NoteResponse:
        """Create the note or replace the existing one's contents."""
        note = await self._get_row(user_id, reference_type, reference_id)
        if note is None:
            note = LearningNote(user_id=user_id, reference_type=reference_type, reference_id=reference_id)
            self.session.add(note)

        note.parent_id = data.parent_id
        note.title = data.title
        note.content = data.content
        note.tags = list(data.tags)
        note.is_pinned = data.is_pinned
        note.word_count = count_words(data.content)

        await self.session.commit()
        await self.session.refresh(note)
        logger.info("Saved note on %s %s for user %s (%d words)", reference_type, reference_id, user_id, note.word_count)
        return NoteResponse.model_validate(note)

    async def delete_note(self, user_id: UUID, reference_type: NoteReferenceType, reference_id: str) -> bool:
        result = await self.session.execute(
            delete(LearningNote).where(
                LearningNote.user_id == user_id,
                LearningNote.reference_type == reference_type,
                LearningNote.reference_id == reference_id,
            )
        )
        await self.session.commit()
        return result.rowcount > 0
