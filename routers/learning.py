from typing import Any

from fastapi import APIRouter, Depends, HTTPException, status

from domain import language as languages
from routers.auth import current_user_id
from routers.deps import get_content_service, get_text_generator, get_user_service, require_language
from schemas.generation import (
    ChatIn,
    CheckAnswerIn,
    ContentIn,
    Exercise,
    ExamplesIn,
    ExercisesIn,
    Generated,
    MistakeAnalysis,
    ModelIn,
    PronunciationIn,
    SentenceIn,
    SentenceTranslation,
    WordDetails,
    WordDetailsIn,
    WordQueryIn,
)
from services.content_service import ContentService
from services.gemini_service import GenerationError
from services.practice_service import PracticeOutcome, PracticeService
from services.user_service import UserService

router = APIRouter(prefix="/learning", tags=["learning"], dependencies=[Depends(current_user_id)])


def _bad_gateway(exc: GenerationError) -> HTTPException:
    return HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(exc))


@router.post("/translate")
async def translate_word(data: WordQueryIn, content: ContentService = Depends(get_content_service)):
    source, target = require_language(data.word_language), require_language(data.target_language)
    try:
        return {"translation": await content.translate_word(data.word, source, target)}
    except GenerationError as exc:
        raise _bad_gateway(exc) from exc


@router.post("/explain")
async def explain_word(data: WordQueryIn, content: ContentService = Depends(get_content_service)):
    source, target = require_language(data.word_language), require_language(data.target_language)
    try:
        return {"explanation": await content.explain_word(data.word, source, target)}
    except GenerationError as exc:
        raise _bad_gateway(exc) from exc


@router.post("/examples")
async def generate_examples(data: ExamplesIn, content: ContentService = Depends(get_content_service)):
    source, target = require_language(data.word_language), require_language(data.target_language)
    try:
        return {"examples": await content.generate_examples(data.word, source, target, data.count)}
    except GenerationError as exc:
        raise _bad_gateway(exc) from exc


@router.post("/details", response_model=WordDetails)
async def word_details(
    data: WordDetailsIn,
    user_id: str = Depends(current_user_id),
    content: ContentService = Depends(get_content_service),
    users: UserService = Depends(get_user_service),
):
    source, target = require_language(data.word_language), require_language(data.target_language)
    if data.teaching_language:
        teaching = require_language(data.teaching_language)
    else:
        profile = users.get_user(user_id)
        teaching = profile.teaching_language if profile else languages.DEFAULT_TEACHING_LANGUAGE
    try:
        return await content.get_word_details(data.word, source, target, teaching)
    except GenerationError as exc:
        raise _bad_gateway(exc) from exc


@router.post("/pronunciation")
async def pronunciation(data: PronunciationIn, content: ContentService = Depends(get_content_service)):
    language = require_language(data.language)
    try:
        return {"pronunciation": await content.get_pronunciation(data.word, language)}
    except GenerationError as exc:
        raise _bad_gateway(exc) from exc


@router.post("/chat")
async def chat(data: ChatIn, content: ContentService = Depends(get_content_service)):
    learning, teaching = require_language(data.learning_language), require_language(data.teaching_language)
    try:
        return {"reply": await content.chat_with_tutor(data.message, learning, teaching)}
    except GenerationError as exc:
        raise _bad_gateway(exc) from exc


@router.post("/content", response_model=Generated[Any])
async def learning_content(data: ContentIn, content: ContentService = Depends(get_content_service)):
    learning, teaching = require_language(data.learning_language), require_language(data.teaching_language)
    try:
        return await content.generate_learning_content(learning, teaching, data.level, data.topic, data.content_type)
    except GenerationError as exc:
        raise _bad_gateway(exc) from exc


@router.post("/sentence", response_model=Generated[SentenceTranslation])
async def translate_sentence(data: SentenceIn, content: ContentService = Depends(get_content_service)):
    source, target = require_language(data.from_language), require_language(data.to_language)
    try:
        return await content.translate_sentence(data.sentence, source, target, data.include_analysis)
    except GenerationError as exc:
        raise _bad_gateway(exc) from exc


@router.post("/exercises", response_model=Generated[list[Exercise]])
async def exercises(data: ExercisesIn, content: ContentService = Depends(get_content_service)):
    learning, teaching = require_language(data.learning_language), require_language(data.teaching_language)
    try:
        return await content.generate_exercises(learning, teaching, data.level, data.topic, data.exercise_type)
    except GenerationError as exc:
        raise _bad_gateway(exc) from exc


@router.post("/mistake", response_model=Generated[MistakeAnalysis])
async def analyze_mistake(data: CheckAnswerIn, content: ContentService = Depends(get_content_service)):
    learning, teaching = require_language(data.learning_language), require_language(data.teaching_language)
    try:
        return await content.analyze_mistake(data.user_answer, data.correct_answer, data.question, learning, teaching)
    except GenerationError as exc:
        raise _bad_gateway(exc) from exc


@router.post("/check", response_model=PracticeOutcome)
async def check_answer(
    data: CheckAnswerIn,
    user_id: str = Depends(current_user_id),
    content: ContentService = Depends(get_content_service),
    users: UserService = Depends(get_user_service),
):
    learning, teaching = require_language(data.learning_language), require_language(data.teaching_language)
    svc = PracticeService(content, users)
    try:
        return await svc.check_answer(
            user_id=user_id,
            question=data.question,
            user_answer=data.user_answer,
            correct_answer=data.correct_answer,
            learning_language=learning,
            teaching_language=teaching,
        )
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc


@router.get("/model")
async def current_model(generator=Depends(get_text_generator)):
    return {"model": getattr(generator, "current_model", None)}


@router.put("/model")
async def switch_model(data: ModelIn, generator=Depends(get_text_generator)):
    if not hasattr(generator, "switch_model"):
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Model switching not supported")
    generator.switch_model(data.model)
    return {"model": generator.current_model}
