import pytest
from unittest.mock import AsyncMock, MagicMock

from noteapp.features.notes.models.note import Note
from noteapp.features.notes.services import note_service
from noteapp.platform.exceptions import Forbidden, NoteNotFound, UnknownUser


def _db_returning(obj):
    mock_db = AsyncMock()
    mock_result = MagicMock()
    mock_result.scalar_one_or_none.return_value = obj
    mock_db.execute.return_value = mock_result
    return mock_db


@pytest.mark.asyncio
async def test_delete_note_service_success():
    mock_note = Note(id="note_123", owner_id="user_123", title="t", content="c")
    mock_db = _db_returning(mock_note)

    result = await note_service.delete_note_for_owner(mock_db, "note_123", "user_123")

    assert result is True
    mock_db.delete.assert_called_once_with(mock_note)
    mock_db.commit.assert_called_once()


@pytest.mark.asyncio
async def test_delete_note_service_not_found():
    mock_db = _db_returning(None)

    with pytest.raises(NoteNotFound) as exc:
        await note_service.delete_note_for_owner(mock_db, "note_123", "user_123")

    assert exc.value.status_code == 404
    mock_db.delete.assert_not_called()


@pytest.mark.asyncio
async def test_delete_note_service_forbidden():
    mock_note = Note(id="note_123", owner_id="user_456", title="t", content="c")
    mock_db = _db_returning(mock_note)

    with pytest.raises(Forbidden) as exc:
        await note_service.delete_note_for_owner(mock_db, "note_123", "user_123")

    assert exc.value.status_code == 403
    mock_db.delete.assert_not_called()
    mock_db.commit.assert_not_called()


@pytest.mark.asyncio
async def test_get_user_profile_missing_user():
    mock_db = _db_returning(None)

    with pytest.raises(UnknownUser):
        await note_service.get_user_profile(mock_db, "ghost")
