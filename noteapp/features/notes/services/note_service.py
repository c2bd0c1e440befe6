from typing import List

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from noteapp.features.auth.models.user import User
from noteapp.features.notes.models.note import Note
from noteapp.features.notes.schemas.note import NoteCreate
from noteapp.platform.exceptions import Forbidden, NoteNotFound, UnknownUser
from noteapp.platform.logger import get_logger

logger = get_logger(__name__)


async def get_user_profile(db: AsyncSession, user_id: str) -> User:
    result = await db.execute(select(User).where(User.id == user_id))
    user = result.scalar_one_or_none()
    if not user:
        raise UnknownUser()
    return user


async def list_notes_for_owner(db: AsyncSession, owner_id: str) -> List[Note]:
    """All notes belonging to the owner, newest first"""
    result = await db.execute(
        select(Note)
        .where(Note.owner_id == owner_id)
        .order_by(Note.created_at.desc(), Note.id.desc())
    )
    return list(result.scalars().all())


async def create_note(db: AsyncSession, owner_id: str, note_data: NoteCreate) -> Note:
    note = Note(owner_id=owner_id, title=note_data.title, content=note_data.content)
    db.add(note)
    try:
        await db.commit()
        await db.refresh(note)
    except Exception:
        await db.rollback()
        raise
    logger.info(f"Note created - note: {note.id}, owner: {owner_id}")
    return note


async def delete_note_for_owner(db: AsyncSession, note_id: str, owner_id: str) -> bool:
    """Delete a note if it belongs to the owner.

    Raises NoteNotFound for an unknown id and Forbidden when someone else owns it.
    """
    result = await db.execute(select(Note).where(Note.id == note_id))
    note = result.scalar_one_or_none()

    if not note:
        raise NoteNotFound()

    if note.owner_id != owner_id:
        logger.warning(f"Note delete rejected - note: {note_id}, caller: {owner_id}")
        raise Forbidden()

    await db.delete(note)
    await db.commit()
    logger.info(f"Note deleted - note: {note_id}, owner: {owner_id}")
    return True
