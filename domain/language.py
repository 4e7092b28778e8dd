"""Closed registry of the languages the app can teach and be taught in."""
from dataclasses import dataclass


@dataclass(frozen=True)
class Language:
    code: str
    name: str
    native_name: str

    def __str__(self) -> str:
        return self.name


ENGLISH = Language("en", "English", "English")
CHINESE = Language("zh", "Chinese", "中文")
GERMAN = Language("de", "German", "Deutsch")

_ALL = (ENGLISH, CHINESE, GERMAN)
_BY_CODE = {language.code: language for language in _ALL}

DEFAULT_TEACHING_LANGUAGE = CHINESE
UNKNOWN_LANGUAGE_LABEL = "Unknown"


def all_languages() -> tuple[Language, ...]:
    return _ALL


def find_by_code(code: str | None) -> Language | None:
    if code is None:
        return None
    return _BY_CODE.get(code)


def display_name(code: str | None) -> str:
    language = find_by_code(code)
    return language.name if language else UNKNOWN_LANGUAGE_LABEL
