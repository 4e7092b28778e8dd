from typing import Any, Literal

from pydantic import BaseModel, constr, field_validator


class WordBookEntryIn(BaseModel):
    word: constr(strip_whitespace=True, min_length=1, max_length=200)
    translation: constr(strip_whitespace=True, min_length=1, max_length=500)
    example: constr(strip_whitespace=True, min_length=1, max_length=1000) | None = None
    language: str

    @field_validator("example", mode="before")
    @classmethod
    def _empty_example_to_none(cls, value: str | None):
        if value is None:
            return None
        if isinstance(value, str):
            trimmed = value.strip()
            return trimmed or None
        return value


class WordBookEntryOut(BaseModel):
    id: str
    word: str
    translation: str
    example: str | None = None
    language: str
    createdAt: str


class HistoryEntryOut(BaseModel):
    id: str
    type: Literal["practice", "mistake"]
    question: str
    userAnswer: str
    correctAnswer: str
    isCorrect: bool
    analysis: dict[str, Any] | None = None
    createdAt: str
