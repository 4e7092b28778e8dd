import logging

from fastapi import APIRouter, Depends, HTTPException, Query, Request, status

from domain import language as languages
from domain.word import Word
from domain.wordbook import WordBook
from repositories.wordbook_repo import WordBookRepository
from routers.auth import current_user_id
from routers.deps import get_text_generator, get_user_service, get_wordbook_repository
from schemas.word import WordCountOut, WordCreateIn, WordOut
from services.content_service import ContentService
from services.gemini_service import GenerationError
from services.user_service import UserService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/words", tags=["words"])


def get_word_book(
    user_id: str = Depends(current_user_id),
    repo: WordBookRepository = Depends(get_wordbook_repository),
) -> WordBook:
    return repo.load(user_id)


def _get_or_404(book: WordBook, word_id: str) -> Word:
    word = book.get_word(word_id)
    if word is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Word not found")
    return word


@router.get("/", response_model=list[WordOut])
async def list_words(
    lang: str | None = None,
    q: str | None = None,
    book: WordBook = Depends(get_word_book),
):
    words = book.search_words(q) if q is not None else book.get_all_words()
    if lang:
        words = [word for word in words if word.language_code == lang]
    return [WordOut.of(word) for word in words]


@router.get("/recent", response_model=list[WordOut])
async def recent_words(
    limit: int = Query(10, ge=1, le=100),
    book: WordBook = Depends(get_word_book),
):
    return [WordOut.of(word) for word in book.get_recent_words(limit)]


@router.get("/review", response_model=list[WordOut])
async def words_needing_review(book: WordBook = Depends(get_word_book)):
    return [WordOut.of(word) for word in book.get_words_needing_review()]


@router.get("/count", response_model=WordCountOut)
async def count_words(book: WordBook = Depends(get_word_book)):
    return WordCountOut(
        total=book.get_total_word_count(),
        needing_review=len(book.get_words_needing_review()),
    )


@router.get("/{word_id}", response_model=WordOut)
async def get_word(word_id: str, book: WordBook = Depends(get_word_book)):
    return WordOut.of(_get_or_404(book, word_id))


@router.post("/", response_model=WordOut, status_code=status.HTTP_201_CREATED)
async def add_word(
    data: WordCreateIn,
    request: Request,
    user_id: str = Depends(current_user_id),
    book: WordBook = Depends(get_word_book),
    users: UserService = Depends(get_user_service),
):
    word = Word(data.text, data.language_code, data.translation, data.explanation, data.examples)

    needs_details = not (data.translation and data.explanation and data.examples)
    if data.enrich and needs_details:
        word_language = languages.find_by_code(data.language_code)
        if word_language is None:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=f"Unknown language: {data.language_code}")
        profile = users.get_user(user_id)
        teaching = profile.teaching_language if profile else languages.DEFAULT_TEACHING_LANGUAGE
        content = ContentService(get_text_generator(request))
        try:
            details = await content.get_word_details(data.text, word_language, teaching, teaching)
        except GenerationError as exc:
            raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(exc)) from exc
        word.translation = word.translation or details.translation
        word.explanation = word.explanation or details.explanation
        if not word.examples:
            for example in details.examples:
                word.add_example(example)

    book.add_word(word)
    logger.info("Added word %s to wordbook of %s", word.id, user_id)
    return WordOut.of(word)


@router.post("/{word_id}/review", response_model=WordOut)
async def mark_reviewed(
    word_id: str,
    book: WordBook = Depends(get_word_book),
):
    word = _get_or_404(book, word_id)
    word.mark_as_reviewed()
    # review bookkeeping lives inside the word, so re-adding persists it
    book.add_word(word)
    return WordOut.of(word)


@router.delete("/{word_id}")
async def delete_word(word_id: str, book: WordBook = Depends(get_word_book)):
    if not book.remove_word(word_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Word not found")
    return {"detail": "Word removed."}
