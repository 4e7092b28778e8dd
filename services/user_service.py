import logging
from typing import Any

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from domain import language as languages
from domain.language import Language
from domain.user import User
from repositories.document_repo import (
    HistoryEntryRepository,
    ProfileDocumentRepository,
    WordBookEntryRepository,
)

logger = logging.getLogger(__name__)


class UserService:
    """Remote profile, word-book entries and practice history for one account store."""

    def __init__(self, db: Session):
        self.db = db
        self.profiles = ProfileDocumentRepository(db)
        self.wordbook = WordBookEntryRepository(db)
        self.history = HistoryEntryRepository(db)

    def _fail(self, action: str, exc: Exception) -> None:
        self.db.rollback()
        logger.error("Error %s: %s", action, exc)

    def get_user(self, user_id: str) -> User | None:
        try:
            data = self.profiles.get(user_id)
        except SQLAlchemyError as exc:
            self._fail("getting user", exc)
            raise
        return User.from_record(data) if data else None

    def create_user(self, user: User) -> None:
        try:
            self.profiles.set(user.id, user.to_record())
        except SQLAlchemyError as exc:
            self._fail("creating user", exc)
            raise

    def update_user(self, user: User) -> None:
        try:
            self.profiles.update(user.id, user.to_record())
        except SQLAlchemyError as exc:
            self._fail("updating user", exc)
            raise

    def delete_user(self, user_id: str) -> bool:
        try:
            return self.profiles.delete(user_id)
        except SQLAlchemyError as exc:
            self._fail("deleting user", exc)
            raise

    def ensure_profile(self, user_id: str, name: str) -> User:
        user = self.get_user(user_id)
        if user is not None:
            return user
        user = User(
            name,
            languages.DEFAULT_TEACHING_LANGUAGE,
            [languages.ENGLISH],
            user_id=user_id,
        )
        self.create_user(user)
        logger.info("Created profile for %s", user_id)
        return user

    def add_word_to_book(self, user_id: str, word: dict[str, Any], language: Language) -> dict:
        try:
            return self.wordbook.add(user_id=user_id, data={**word, "language": language.code})
        except SQLAlchemyError as exc:
            self._fail("adding word to book", exc)
            raise

    def get_word_book(self, user_id: str) -> list[dict]:
        try:
            return self.wordbook.list_for_user(user_id)
        except SQLAlchemyError as exc:
            self._fail("getting word book", exc)
            raise

    def delete_word_from_word_book(self, user_id: str, entry_id: str) -> bool:
        try:
            return self.wordbook.delete(user_id=user_id, entry_id=entry_id)
        except SQLAlchemyError as exc:
            self._fail("deleting word from word book", exc)
            raise

    def add_history(self, user_id: str, item: dict[str, Any]) -> dict:
        try:
            return self.history.add(user_id=user_id, data=item)
        except SQLAlchemyError as exc:
            self._fail("adding history", exc)
            raise

    def get_history(self, user_id: str) -> list[dict]:
        try:
            return self.history.list_for_user(user_id)
        except SQLAlchemyError as exc:
            self._fail("getting history", exc)
            raise

    def delete_history_item(self, user_id: str, history_id: str) -> bool:
        try:
            return self.history.delete(user_id=user_id, entry_id=history_id)
        except SQLAlchemyError as exc:
            self._fail("deleting history item", exc)
            raise
