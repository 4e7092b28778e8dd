from datetime import datetime
from typing import Any, Iterable

from domain import language as languages
from domain.ids import generate_id
from domain.language import Language
from domain.timestamps import as_utc, to_iso, utcnow
from schemas.records import UserRecord


class User:
    """A learner with one teaching language and any number of learning languages."""

    def __init__(
        self,
        name: str,
        teaching_language: Language,
        learning_languages: Iterable[Language] = (),
        *,
        user_id: str | None = None,
        created_at: datetime | None = None,
    ):
        self._id = user_id or generate_id("user")
        self.name = name
        self.teaching_language = teaching_language
        self._learning_languages: list[Language] = []
        for lang in learning_languages:
            self.add_learning_language(lang)
        self._created_at = as_utc(created_at) if created_at else utcnow()

    @property
    def id(self) -> str:
        return self._id

    @property
    def created_at(self) -> datetime:
        return self._created_at

    @property
    def learning_languages(self) -> tuple[Language, ...]:
        return tuple(self._learning_languages)

    def add_learning_language(self, language: Language) -> None:
        if any(lang.code == language.code for lang in self._learning_languages):
            return
        self._learning_languages.append(language)

    def remove_learning_language(self, code: str) -> None:
        self._learning_languages = [lang for lang in self._learning_languages if lang.code != code]

    def to_record(self) -> dict[str, Any]:
        return {
            "id": self._id,
            "name": self.name,
            "teachingLanguage": self.teaching_language.code,
            "learningLanguages": [lang.code for lang in self._learning_languages],
            "createdAt": to_iso(self._created_at),
        }

    @classmethod
    def from_record(cls, data: dict[str, Any]) -> "User":
        record = UserRecord.model_validate(data)
        teaching = languages.find_by_code(record.teaching_language) or languages.DEFAULT_TEACHING_LANGUAGE
        learning = [lang for lang in map(languages.find_by_code, record.learning_languages) if lang is not None]
        return cls(
            record.name,
            teaching,
            learning,
            user_id=record.id,
            created_at=record.created_at,
        )

    def __repr__(self) -> str:
        return f"User(id={self._id!r}, name={self.name!r}, teaching={self.teaching_language.code!r})"
