from fastapi import APIRouter, Depends, HTTPException, status

from routers.auth import current_user_id
from routers.deps import get_user_service, require_language
from schemas.entries import WordBookEntryIn, WordBookEntryOut
from services.user_service import UserService

router = APIRouter(prefix="/wordbook", tags=["wordbook"])


@router.get("/", response_model=list[WordBookEntryOut])
async def list_entries(
    user_id: str = Depends(current_user_id),
    svc: UserService = Depends(get_user_service),
):
    return svc.get_word_book(user_id)


@router.post("/", response_model=WordBookEntryOut, status_code=status.HTTP_201_CREATED)
async def add_entry(
    data: WordBookEntryIn,
    user_id: str = Depends(current_user_id),
    svc: UserService = Depends(get_user_service),
):
    language = require_language(data.language)
    word = data.model_dump(exclude={"language"}, exclude_none=True)
    return svc.add_word_to_book(user_id, word, language)


@router.delete("/{entry_id}")
async def delete_entry(
    entry_id: str,
    user_id: str = Depends(current_user_id),
    svc: UserService = Depends(get_user_service),
):
    if not svc.delete_word_from_word_book(user_id, entry_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Entry not found")
    return {"detail": "Entry removed."}
