"""Plain-record shapes used to persist domain entities as JSON."""
from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from domain.timestamps import as_utc


class CamelRecord(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class UserRecord(CamelRecord):
    id: str = Field(min_length=1)
    name: str
    teaching_language: str | None = None
    learning_languages: list[str] = Field(default_factory=list)
    created_at: datetime | None = None

    @field_validator("learning_languages", mode="before")
    @classmethod
    def _none_to_empty(cls, value):
        return [] if value is None else value

    @field_validator("created_at")
    @classmethod
    def _utc(cls, value: datetime | None):
        return as_utc(value) if value else value


class WordRecord(CamelRecord):
    id: str = Field(min_length=1)
    text: str
    language_code: str
    translation: str = ""
    explanation: str = ""
    examples: list[str] = Field(default_factory=list)
    created_at: datetime
    last_reviewed: datetime | None = None
    review_count: int = Field(default=0, ge=0)

    @field_validator("translation", "explanation", mode="before")
    @classmethod
    def _none_to_blank(cls, value):
        return "" if value is None else value

    @field_validator("examples", mode="before")
    @classmethod
    def _none_to_list(cls, value):
        return [] if value is None else value

    @field_validator("review_count", mode="before")
    @classmethod
    def _none_to_zero(cls, value):
        return 0 if value is None else value

    @field_validator("created_at", "last_reviewed")
    @classmethod
    def _utc(cls, value: datetime | None):
        return as_utc(value) if value else value


class WordBookRecord(CamelRecord):
    user_id: str
    # validated one by one so a single bad entry does not sink the book
    words: list[Any] = Field(default_factory=list)


class VocabularyItemRecord(CamelRecord):
    word: str
    translation: str
    phonetic: str | None = None
    part_of_speech: str | None = None


class VocabularyLessonRecord(CamelRecord):
    id: str = Field(min_length=1)
    title: str
    description: str = ""
    category: str = ""
    language_code: str
    difficulty: str = "beginner"
    items: list[VocabularyItemRecord] = Field(default_factory=list)
