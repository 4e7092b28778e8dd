from fastapi import Depends, HTTPException, Request, status
from sqlalchemy.orm import Session

from core.database import get_db
from domain import language as languages
from domain.language import Language
from repositories.local_profile_repo import LocalProfileRepository
from repositories.record_store import SqlRecordStore
from repositories.wordbook_repo import WordBookRepository
from services.content_service import ContentService
from services.gemini_service import TextGenerator
from services.lesson_service import LessonCatalog
from services.user_service import UserService


def require_language(code: str) -> Language:
    language = languages.find_by_code(code)
    if language is None:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=f"Unknown language: {code}")
    return language


def get_text_generator(request: Request) -> TextGenerator:
    generator = getattr(request.app.state, "generator", None)
    if generator is None:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail="Gemini key not configured")
    return generator


def get_content_service(generator: TextGenerator = Depends(get_text_generator)) -> ContentService:
    return ContentService(generator)


def get_lesson_catalog(request: Request) -> LessonCatalog:
    return request.app.state.lesson_catalog


def get_user_service(db: Session = Depends(get_db)) -> UserService:
    return UserService(db)


def get_wordbook_repository(db: Session = Depends(get_db)) -> WordBookRepository:
    return WordBookRepository(SqlRecordStore(db))


def get_local_profile_repository(db: Session = Depends(get_db)) -> LocalProfileRepository:
    return LocalProfileRepository(SqlRecordStore(db))
