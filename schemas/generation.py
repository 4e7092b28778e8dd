from typing import Generic, Literal, TypeVar, Union

from pydantic import BaseModel, ConfigDict, Field, constr, field_validator
from pydantic.alias_generators import to_camel

from domain.vocabulary import Difficulty

T = TypeVar("T")

Level = Literal["beginner", "intermediate", "advanced"]
ContentType = Literal["vocabulary", "sentences", "grammar"]
ExerciseType = Literal["translation", "fillInBlank", "multipleChoice"]


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Generated(BaseModel, Generic[T]):
    """Outcome of a structured generation call.

    ``value`` is None when the model's text held no usable JSON; ``raw_text``
    always carries what the model said.
    """

    value: T | None = None
    raw_text: str = ""
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


class WordDetails(BaseModel):
    translation: str
    explanation: str
    examples: list[str]


class VocabularyEntry(CamelModel):
    word: str
    translation: str
    example: str | None = None


class SentenceEntry(CamelModel):
    sentence: str
    translation: str
    grammar: str = ""
    vocabulary: list[str] = Field(default_factory=list)


class GrammarLesson(CamelModel):
    title: str
    explanation: str
    examples: list[str] = Field(default_factory=list)
    mistakes: list[str] = Field(default_factory=list)


class WordTranslation(CamelModel):
    word: str
    translation: str


class SentenceTranslation(CamelModel):
    translation: str
    analysis: str | None = None
    word_by_word: list[WordTranslation] = Field(default_factory=list)


class MistakeAnalysis(CamelModel):
    analysis: str
    grammar_issues: list[str] = Field(default_factory=list)
    vocabulary_issues: list[str] = Field(default_factory=list)
    suggestions: str = ""


class TranslationExercise(CamelModel):
    kind: Literal["translation"] = "translation"
    question: str
    answer: str
    hint: str | None = None


class FillInBlankExercise(CamelModel):
    kind: Literal["fillInBlank"] = "fillInBlank"
    sentence: str
    answer: str
    options: list[str] = Field(default_factory=list)
    explanation: str = ""


class MultipleChoiceExercise(CamelModel):
    kind: Literal["multipleChoice"] = "multipleChoice"
    question: str
    options: list[str]
    correct_answer: str
    explanation: str = ""


Exercise = Union[TranslationExercise, FillInBlankExercise, MultipleChoiceExercise]

EXERCISE_MODELS: dict[str, type[CamelModel]] = {
    "translation": TranslationExercise,
    "fillInBlank": FillInBlankExercise,
    "multipleChoice": MultipleChoiceExercise,
}


# request bodies


class LanguagePairIn(BaseModel):
    learning_language: str
    teaching_language: str


class WordQueryIn(BaseModel):
    word: constr(strip_whitespace=True, min_length=1, max_length=200)
    word_language: str
    target_language: str


class WordDetailsIn(WordQueryIn):
    # explanation and examples language; the learner's profile decides when omitted
    teaching_language: str | None = None


class ExamplesIn(WordQueryIn):
    count: int = Field(default=3, ge=1, le=10)


class PronunciationIn(BaseModel):
    word: constr(strip_whitespace=True, min_length=1, max_length=200)
    language: str


class ChatIn(LanguagePairIn):
    message: constr(strip_whitespace=True, min_length=1, max_length=2000)


class ContentIn(LanguagePairIn):
    level: Level = "beginner"
    topic: constr(strip_whitespace=True, min_length=1, max_length=200)
    content_type: ContentType = "vocabulary"


class SentenceIn(BaseModel):
    sentence: constr(strip_whitespace=True, min_length=1, max_length=2000)
    from_language: str
    to_language: str
    include_analysis: bool = True


class ExercisesIn(LanguagePairIn):
    level: Level = "beginner"
    topic: constr(strip_whitespace=True, min_length=1, max_length=200)
    exercise_type: ExerciseType = "translation"


class CheckAnswerIn(LanguagePairIn):
    question: constr(strip_whitespace=True, min_length=1)
    user_answer: constr(strip_whitespace=True, min_length=1)
    correct_answer: constr(strip_whitespace=True, min_length=1)


class ModelIn(BaseModel):
    model: Literal["gemini-2.5-flash", "gemini-2.5-pro"]


class LessonGenerateIn(BaseModel):
    topic: constr(strip_whitespace=True, min_length=1, max_length=200)
    target_language: str
    teaching_language: str
    difficulty: Difficulty = Difficulty.BEGINNER
    word_count: int = Field(default=10, ge=1, le=50)
    category: str | None = None

    @field_validator("category", mode="before")
    @classmethod
    def _empty_category_to_none(cls, value: str | None):
        if value is None:
            return None
        if isinstance(value, str):
            trimmed = value.strip()
            return trimmed or None
        return value
