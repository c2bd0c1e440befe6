from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from noteapp.features.auth.dependencies.session import get_current_identity
from noteapp.features.auth.models.token import TokenData
from noteapp.features.auth.schemas.auth import UserResponse
from noteapp.features.notes.schemas.note import NoteCreate, NoteResponse
from noteapp.features.notes.services import note_service
from noteapp.platform.db.session import get_db
from noteapp.platform.response import api_response

router = APIRouter(prefix="/notes", tags=["Notes"])


@router.get(
    "/me",
    response_model=dict,
    status_code=status.HTTP_200_OK,
    summary="List my notes",
    description="Retrieve the current user's profile and all of their notes",
)
async def get_my_notes(
    identity: TokenData = Depends(get_current_identity),
    db: AsyncSession = Depends(get_db),
):
    user = await note_service.get_user_profile(db, identity.user_id)
    notes = await note_service.list_notes_for_owner(db, identity.user_id)

    return api_response(
        data={
            "notes": [NoteResponse.model_validate(note).model_dump() for note in notes],
            "user": UserResponse.model_validate(user).model_dump(),
        },
        message="Notes retrieved successfully",
    )


@router.post(
    "",
    response_model=dict,
    status_code=status.HTTP_201_CREATED,
    summary="Create a note",
)
async def create_note(
    request: NoteCreate,
    identity: TokenData = Depends(get_current_identity),
    db: AsyncSession = Depends(get_db),
):
    note = await note_service.create_note(db, identity.user_id, request)

    return api_response(
        data={"note": NoteResponse.model_validate(note).model_dump()},
        message="Note created successfully",
        status_code=status.HTTP_201_CREATED,
    )


@router.delete(
    "/{note_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a note",
    description="Delete a note owned by the current user",
)
async def delete_note(
    note_id: str,
    identity: TokenData = Depends(get_current_identity),
    db: AsyncSession = Depends(get_db),
):
    await note_service.delete_note_for_owner(db, note_id, identity.user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
