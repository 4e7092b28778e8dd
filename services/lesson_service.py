from domain.language import Language
from domain.vocabulary import Difficulty, VocabularyLesson, VocabularyManager
from services.content_service import ContentService


class LessonCatalog:
    """One in-memory VocabularyManager per signed-in user, for the life of the process."""

    def __init__(self):
        self._managers: dict[str, VocabularyManager] = {}

    def for_user(self, user_id: str) -> VocabularyManager:
        manager = self._managers.get(user_id)
        if manager is None:
            manager = self._managers[user_id] = VocabularyManager()
        return manager


class LessonService:
    def __init__(self, content: ContentService, manager: VocabularyManager):
        self.content = content
        self.manager = manager

    async def generate_lesson(
        self,
        *,
        topic: str,
        target_language: Language,
        teaching_language: Language,
        difficulty: Difficulty = Difficulty.BEGINNER,
        word_count: int = 10,
        category: str | None = None,
    ) -> VocabularyLesson:
        items = await self.content.generate_vocabulary_lesson(
            topic, target_language, teaching_language, difficulty, word_count
        )
        lesson = VocabularyLesson(
            title=topic,
            description=f"{len(items)} {target_language.name} words about {topic}",
            category=category or topic,
            language_code=target_language.code,
            difficulty=difficulty,
        )
        for item in items:
            lesson.add_item(item)
        self.manager.add_lesson(lesson)
        return lesson
