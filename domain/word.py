from datetime import datetime
from typing import Any, Iterable

from domain.ids import generate_id
from domain.timestamps import as_utc, to_iso, utcnow
from schemas.records import WordRecord


class Word:
    """A vocabulary entry the user saved, with its review bookkeeping."""

    def __init__(
        self,
        text: str,
        language_code: str,
        translation: str = "",
        explanation: str = "",
        examples: Iterable[str] = (),
        *,
        word_id: str | None = None,
        created_at: datetime | None = None,
    ):
        self._id = word_id or generate_id()
        self._text = text
        self._language_code = language_code
        self.translation = translation
        self.explanation = explanation
        self._examples = list(examples)
        self._created_at = as_utc(created_at) if created_at else utcnow()
        self._last_reviewed: datetime | None = None
        self._review_count = 0

    @property
    def id(self) -> str:
        return self._id

    @property
    def text(self) -> str:
        return self._text

    @property
    def language_code(self) -> str:
        return self._language_code

    @property
    def examples(self) -> tuple[str, ...]:
        return tuple(self._examples)

    @property
    def created_at(self) -> datetime:
        return self._created_at

    @property
    def last_reviewed(self) -> datetime | None:
        return self._last_reviewed

    @property
    def review_count(self) -> int:
        return self._review_count

    def add_example(self, example: str) -> None:
        self._examples.append(example)

    def mark_as_reviewed(self, at: datetime | None = None) -> None:
        self._last_reviewed = as_utc(at) if at else utcnow()
        self._review_count += 1

    def to_record(self) -> dict[str, Any]:
        record = {
            "id": self._id,
            "text": self._text,
            "languageCode": self._language_code,
            "translation": self.translation,
            "explanation": self.explanation,
            "examples": list(self._examples),
            "createdAt": to_iso(self._created_at),
            "reviewCount": self._review_count,
        }
        if self._last_reviewed is not None:
            record["lastReviewed"] = to_iso(self._last_reviewed)
        return record

    @classmethod
    def from_record(cls, data: dict[str, Any]) -> "Word":
        record = WordRecord.model_validate(data)
        word = cls(
            record.text,
            record.language_code,
            record.translation,
            record.explanation,
            record.examples,
            word_id=record.id,
            created_at=record.created_at,
        )
        word._last_reviewed = record.last_reviewed
        word._review_count = record.review_count
        return word

    def __repr__(self) -> str:
        return f"Word(id={self._id!r}, text={self._text!r}, lang={self._language_code!r})"
