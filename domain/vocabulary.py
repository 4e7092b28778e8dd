from dataclasses import dataclass
from enum import Enum
from typing import Any

from domain.ids import generate_id
from schemas.records import VocabularyLessonRecord


class Difficulty(str, Enum):
    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"


@dataclass(frozen=True)
class VocabularyItem:
    word: str
    translation: str
    phonetic: str | None = None
    part_of_speech: str | None = None


class VocabularyLesson:
    def __init__(
        self,
        title: str,
        description: str,
        category: str,
        language_code: str,
        difficulty: Difficulty = Difficulty.BEGINNER,
        *,
        lesson_id: str | None = None,
    ):
        self._id = lesson_id or generate_id()
        self.title = title
        self.description = description
        self.category = category
        self.language_code = language_code
        self.difficulty = Difficulty(difficulty)
        self._items: list[VocabularyItem] = []

    @property
    def id(self) -> str:
        return self._id

    @property
    def items(self) -> tuple[VocabularyItem, ...]:
        return tuple(self._items)

    @property
    def item_count(self) -> int:
        return len(self._items)

    def add_item(self, item: VocabularyItem) -> None:
        self._items.append(item)

    def to_record(self) -> dict[str, Any]:
        return {
            "id": self._id,
            "title": self.title,
            "description": self.description,
            "category": self.category,
            "languageCode": self.language_code,
            "difficulty": self.difficulty.value,
            "items": [
                {
                    "word": item.word,
                    "translation": item.translation,
                    "phonetic": item.phonetic,
                    "partOfSpeech": item.part_of_speech,
                }
                for item in self._items
            ],
        }

    @classmethod
    def from_record(cls, data: dict[str, Any]) -> "VocabularyLesson":
        record = VocabularyLessonRecord.model_validate(data)
        lesson = cls(
            record.title,
            record.description,
            record.category,
            record.language_code,
            Difficulty(record.difficulty),
            lesson_id=record.id,
        )
        for item in record.items:
            lesson.add_item(VocabularyItem(**item.model_dump()))
        return lesson


class VocabularyManager:
    """In-memory lesson catalog; filters never touch the lessons themselves."""

    def __init__(self):
        self._lessons: dict[str, VocabularyLesson] = {}

    def add_lesson(self, lesson: VocabularyLesson) -> None:
        self._lessons[lesson.id] = lesson

    def get_lesson(self, lesson_id: str) -> VocabularyLesson | None:
        return self._lessons.get(lesson_id)

    def get_all_lessons(self) -> list[VocabularyLesson]:
        return list(self._lessons.values())

    def get_lessons_by_language(self, language_code: str) -> list[VocabularyLesson]:
        return [lesson for lesson in self._lessons.values() if lesson.language_code == language_code]

    def get_lessons_by_category(self, category: str) -> list[VocabularyLesson]:
        return [lesson for lesson in self._lessons.values() if lesson.category == category]

    def get_lessons_by_difficulty(self, difficulty: Difficulty | str) -> list[VocabularyLesson]:
        wanted = Difficulty(difficulty)
        return [lesson for lesson in self._lessons.values() if lesson.difficulty is wanted]

    def clear_lessons(self) -> None:
        self._lessons.clear()
