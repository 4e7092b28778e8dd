import json
import logging

from pydantic import ValidationError

from domain.word import Word
from domain.wordbook import WordBook
from repositories.record_store import RecordStore
from schemas.records import WordBookRecord

logger = logging.getLogger(__name__)


class WordBookRepository:
    KEY_PREFIX = "wordbook_"

    def __init__(self, store: RecordStore):
        self.store = store

    def key_for(self, user_id: str) -> str:
        return f"{self.KEY_PREFIX}{user_id}"

    def save(self, user_id: str, words: list[Word]) -> None:
        payload = {"userId": user_id, "words": [word.to_record() for word in words]}
        self.store.set(self.key_for(user_id), json.dumps(payload, ensure_ascii=False))

    def load(self, user_id: str) -> WordBook:
        book = WordBook(user_id, persistence=self)
        stored = self.store.get(self.key_for(user_id))
        if not stored:
            return book

        try:
            record = WordBookRecord.model_validate(json.loads(stored))
        except (ValueError, ValidationError) as exc:
            logger.warning("Failed to load wordbook for %s, starting empty: %s", user_id, exc)
            return book

        words = []
        for index, entry in enumerate(record.words):
            try:
                words.append(Word.from_record(entry))
            except ValidationError as exc:
                logger.warning("Skipping unreadable word #%s in wordbook for %s: %s", index, user_id, exc)
        book._restore(words)
        return book
