from fastapi import APIRouter, Depends, HTTPException, status

from routers.auth import current_user_id
from routers.deps import get_user_service
from schemas.entries import HistoryEntryOut
from services.user_service import UserService

router = APIRouter(prefix="/history", tags=["history"])


@router.get("/", response_model=list[HistoryEntryOut])
async def list_history(
    user_id: str = Depends(current_user_id),
    svc: UserService = Depends(get_user_service),
):
    return svc.get_history(user_id)


@router.delete("/{history_id}")
async def delete_history_item(
    history_id: str,
    user_id: str = Depends(current_user_id),
    svc: UserService = Depends(get_user_service),
):
    if not svc.delete_history_item(user_id, history_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="History item not found")
    return {"detail": "History item removed."}
