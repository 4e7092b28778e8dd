from fastapi import APIRouter, HTTPException, status

from domain import language as languages
from schemas.profile import LanguageOut

router = APIRouter(prefix="/languages", tags=["languages"])


@router.get("/", response_model=list[LanguageOut])
async def list_languages():
    return [LanguageOut.of(lang) for lang in languages.all_languages()]


@router.get("/{code}", response_model=LanguageOut)
async def get_language(code: str):
    language = languages.find_by_code(code)
    if language is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Language not found")
    return LanguageOut.of(language)
