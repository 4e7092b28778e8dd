from fastapi import APIRouter, Depends, HTTPException, status

from domain.user import User
from routers.auth import current_user_id
from repositories.local_profile_repo import LocalProfileRepository
from routers.deps import get_local_profile_repository, get_user_service, require_language
from schemas.profile import ProfileNameIn, ProfileOut, TeachingLanguageIn
from services.user_service import UserService

router = APIRouter(prefix="/profile", tags=["profile"])


def _load(svc: UserService, user_id: str) -> User:
    user = svc.get_user(user_id)
    if user is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Profile not found")
    return user


@router.get("/", response_model=ProfileOut)
async def get_profile(
    user_id: str = Depends(current_user_id),
    svc: UserService = Depends(get_user_service),
):
    return ProfileOut.of(_load(svc, user_id))


@router.put("/name", response_model=ProfileOut)
async def update_name(
    data: ProfileNameIn,
    user_id: str = Depends(current_user_id),
    svc: UserService = Depends(get_user_service),
):
    user = _load(svc, user_id)
    user.name = data.name
    svc.update_user(user)
    return ProfileOut.of(user)


@router.put("/teaching-language", response_model=ProfileOut)
async def set_teaching_language(
    data: TeachingLanguageIn,
    user_id: str = Depends(current_user_id),
    svc: UserService = Depends(get_user_service),
):
    user = _load(svc, user_id)
    user.teaching_language = require_language(data.code)
    svc.update_user(user)
    return ProfileOut.of(user)


@router.post("/learning-languages/{code}", response_model=ProfileOut)
async def add_learning_language(
    code: str,
    user_id: str = Depends(current_user_id),
    svc: UserService = Depends(get_user_service),
):
    user = _load(svc, user_id)
    user.add_learning_language(require_language(code))
    svc.update_user(user)
    return ProfileOut.of(user)


@router.delete("/learning-languages/{code}", response_model=ProfileOut)
async def remove_learning_language(
    code: str,
    user_id: str = Depends(current_user_id),
    svc: UserService = Depends(get_user_service),
):
    user = _load(svc, user_id)
    user.remove_learning_language(code)
    svc.update_user(user)
    return ProfileOut.of(user)


# signed-out variant: a single on-device profile kept in the record store


@router.get("/local", response_model=ProfileOut)
async def get_local_profile(repo: LocalProfileRepository = Depends(get_local_profile_repository)):
    return ProfileOut.of(repo.load_or_create_default())


@router.put("/local/teaching-language", response_model=ProfileOut)
async def set_local_teaching_language(
    data: TeachingLanguageIn,
    repo: LocalProfileRepository = Depends(get_local_profile_repository),
):
    user = repo.load_or_create_default()
    user.teaching_language = require_language(data.code)
    repo.save(user)
    return ProfileOut.of(user)
