from datetime import datetime

from pydantic import BaseModel, Field, constr, field_validator

from domain import language as languages
from domain.word import Word


class WordCreateIn(BaseModel):
    text: constr(strip_whitespace=True, min_length=1, max_length=200)
    language_code: str
    translation: constr(strip_whitespace=True, max_length=500) = ""
    explanation: constr(strip_whitespace=True, max_length=4000) = ""
    examples: list[str] = Field(default_factory=list)
    # ask the tutor for translation/explanation/examples when they are missing
    enrich: bool = False

    @field_validator("examples", mode="before")
    @classmethod
    def _drop_blank_examples(cls, value):
        if value is None:
            return []
        return [item.strip() for item in value if isinstance(item, str) and item.strip()]


class WordOut(BaseModel):
    id: str
    text: str
    language_code: str
    language_name: str
    translation: str
    explanation: str
    examples: list[str]
    created_at: datetime
    last_reviewed: datetime | None = None
    review_count: int

    @classmethod
    def of(cls, word: Word) -> "WordOut":
        return cls(
            id=word.id,
            text=word.text,
            language_code=word.language_code,
            language_name=languages.display_name(word.language_code),
            translation=word.translation,
            explanation=word.explanation,
            examples=list(word.examples),
            created_at=word.created_at,
            last_reviewed=word.last_reviewed,
            review_count=word.review_count,
        )


class WordCountOut(BaseModel):
    total: int
    needing_review: int
