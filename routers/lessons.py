from fastapi import APIRouter, Depends, HTTPException, status

from domain.vocabulary import Difficulty, VocabularyManager
from routers.auth import current_user_id
from routers.deps import get_content_service, get_lesson_catalog, require_language
from schemas.generation import LessonGenerateIn
from schemas.lesson import LessonOut
from services.content_service import ContentService
from services.gemini_service import GenerationError
from services.lesson_service import LessonCatalog, LessonService

router = APIRouter(prefix="/lessons", tags=["lessons"])


def get_manager(
    user_id: str = Depends(current_user_id),
    catalog: LessonCatalog = Depends(get_lesson_catalog),
) -> VocabularyManager:
    return catalog.for_user(user_id)


@router.post("/generate", response_model=LessonOut, status_code=status.HTTP_201_CREATED)
async def generate_lesson(
    data: LessonGenerateIn,
    manager: VocabularyManager = Depends(get_manager),
    content: ContentService = Depends(get_content_service),
):
    target, teaching = require_language(data.target_language), require_language(data.teaching_language)
    svc = LessonService(content, manager)
    try:
        lesson = await svc.generate_lesson(
            topic=data.topic,
            target_language=target,
            teaching_language=teaching,
            difficulty=data.difficulty,
            word_count=data.word_count,
            category=data.category,
        )
    except GenerationError as exc:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(exc)) from exc
    return LessonOut.of(lesson)


@router.get("/", response_model=list[LessonOut])
async def list_lessons(
    lang: str | None = None,
    category: str | None = None,
    difficulty: Difficulty | None = None,
    manager: VocabularyManager = Depends(get_manager),
):
    lessons = manager.get_all_lessons()
    if lang:
        lessons = [lesson for lesson in manager.get_lessons_by_language(lang) if lesson in lessons]
    if category:
        lessons = [lesson for lesson in manager.get_lessons_by_category(category) if lesson in lessons]
    if difficulty:
        lessons = [lesson for lesson in manager.get_lessons_by_difficulty(difficulty) if lesson in lessons]
    return [LessonOut.of(lesson) for lesson in lessons]


@router.get("/{lesson_id}", response_model=LessonOut)
async def get_lesson(lesson_id: str, manager: VocabularyManager = Depends(get_manager)):
    lesson = manager.get_lesson(lesson_id)
    if lesson is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Lesson not found")
    return LessonOut.of(lesson)


@router.delete("/")
async def clear_lessons(manager: VocabularyManager = Depends(get_manager)):
    manager.clear_lessons()
    return {"detail": "Lessons cleared."}
