from datetime import datetime, timedelta
from typing import Protocol

from domain.timestamps import as_utc, utcnow
from domain.word import Word

STALENESS_WINDOW = timedelta(days=3)


class WordBookPersistence(Protocol):
    def save(self, user_id: str, words: list[Word]) -> None:
        ...


class WordBook:
    """A user's saved words, keyed by word id.

    Every mutation writes the whole collection through the attached
    persistence hook, if any.
    """

    def __init__(self, user_id: str, persistence: WordBookPersistence | None = None):
        self._user_id = user_id
        self._words: dict[str, Word] = {}
        self._persistence = persistence

    @property
    def user_id(self) -> str:
        return self._user_id

    def add_word(self, word: Word) -> None:
        self._words[word.id] = word
        self._save()

    def remove_word(self, word_id: str) -> bool:
        if self._words.pop(word_id, None) is None:
            return False
        self._save()
        return True

    def get_word(self, word_id: str) -> Word | None:
        return self._words.get(word_id)

    def get_all_words(self) -> list[Word]:
        return list(self._words.values())

    def get_words_by_language(self, language_code: str) -> list[Word]:
        return [word for word in self._words.values() if word.language_code == language_code]

    def search_words(self, query: str) -> list[Word]:
        # "" is a substring of everything, so the empty query returns every word
        needle = query.lower()
        return [
            word
            for word in self._words.values()
            if needle in word.text.lower() or needle in word.translation.lower()
        ]

    def get_recent_words(self, limit: int = 10) -> list[Word]:
        ordered = sorted(self._words.values(), key=lambda word: word.created_at, reverse=True)
        return ordered[:max(limit, 0)]

    def get_words_needing_review(self, now: datetime | None = None) -> list[Word]:
        cutoff = (as_utc(now) if now else utcnow()) - STALENESS_WINDOW
        return [
            word
            for word in self._words.values()
            if word.last_reviewed is None or word.last_reviewed < cutoff
        ]

    def get_total_word_count(self) -> int:
        return len(self._words)

    def clear(self) -> None:
        self._words.clear()
        self._save()

    def _restore(self, words: list[Word]) -> None:
        for word in words:
            self._words[word.id] = word

    def _save(self) -> None:
        if self._persistence is not None:
            self._persistence.save(self._user_id, self.get_all_words())
