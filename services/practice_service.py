import logging

from pydantic import BaseModel

from domain.language import Language
from schemas.generation import MistakeAnalysis
from services.content_service import ContentService
from services.gemini_service import GenerationError
from services.user_service import UserService

logger = logging.getLogger(__name__)


class PracticeOutcome(BaseModel):
    is_correct: bool
    correct_answer: str
    analysis: MistakeAnalysis | None = None
    message: str | None = None
    history_id: str | None = None


def answers_match(user_answer: str, correct_answer: str) -> bool:
    return user_answer.strip().lower() == correct_answer.strip().lower()


class PracticeService:
    def __init__(self, content: ContentService, users: UserService):
        self.content = content
        self.users = users

    async def check_answer(
        self,
        *,
        user_id: str,
        question: str,
        user_answer: str,
        correct_answer: str,
        learning_language: Language,
        teaching_language: Language,
    ) -> PracticeOutcome:
        if not user_answer.strip():
            raise ValueError("Answer is required")

        if answers_match(user_answer, correct_answer):
            outcome = PracticeOutcome(is_correct=True, correct_answer=correct_answer, message="Correct! Well done!")
        else:
            outcome = PracticeOutcome(is_correct=False, correct_answer=correct_answer)
            try:
                result = await self.content.analyze_mistake(
                    user_answer,
                    correct_answer,
                    question,
                    learning_language,
                    teaching_language,
                )
            except GenerationError:
                outcome.message = "Could not analyze mistake."
            else:
                outcome.analysis = result.value or MistakeAnalysis(analysis=result.raw_text)

        entry = {
            "type": "practice" if outcome.is_correct else "mistake",
            "question": question,
            "userAnswer": user_answer,
            "correctAnswer": correct_answer,
            "isCorrect": outcome.is_correct,
        }
        if outcome.analysis is not None:
            entry["analysis"] = outcome.analysis.model_dump(by_alias=True)
        saved = self.users.add_history(user_id, entry)
        outcome.history_id = saved["id"]
        logger.info("Recorded %s for %s", entry["type"], user_id)
        return outcome
