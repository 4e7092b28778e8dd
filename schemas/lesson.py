from pydantic import BaseModel

from domain.vocabulary import Difficulty, VocabularyLesson


class VocabularyItemOut(BaseModel):
    word: str
    translation: str
    phonetic: str | None = None
    part_of_speech: str | None = None


class LessonOut(BaseModel):
    id: str
    title: str
    description: str
    category: str
    language_code: str
    difficulty: Difficulty
    item_count: int
    items: list[VocabularyItemOut]

    @classmethod
    def of(cls, lesson: VocabularyLesson) -> "LessonOut":
        return cls(
            id=lesson.id,
            title=lesson.title,
            description=lesson.description,
            category=lesson.category,
            language_code=lesson.language_code,
            difficulty=lesson.difficulty,
            item_count=lesson.item_count,
            items=[
                VocabularyItemOut(
                    word=item.word,
                    translation=item.translation,
                    phonetic=item.phonetic,
                    part_of_speech=item.part_of_speech,
                )
                for item in lesson.items
            ],
        )
