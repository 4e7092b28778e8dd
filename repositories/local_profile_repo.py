import json
import logging

from pydantic import ValidationError

from domain import language as languages
from domain.user import User
from repositories.record_store import RecordStore

logger = logging.getLogger(__name__)

DEFAULT_USER_NAME = "Language Learner"


class LocalProfileRepository:
    KEY = "user"

    def __init__(self, store: RecordStore):
        self.store = store

    def load(self) -> User | None:
        stored = self.store.get(self.KEY)
        if not stored:
            return None
        try:
            return User.from_record(json.loads(stored))
        except (ValueError, ValidationError) as exc:
            logger.warning("Failed to load stored user profile: %s", exc)
            return None

    def save(self, user: User) -> None:
        self.store.set(self.KEY, json.dumps(user.to_record(), ensure_ascii=False))

    def load_or_create_default(self) -> User:
        user = self.load()
        if user is not None:
            return user
        user = User(
            DEFAULT_USER_NAME,
            languages.CHINESE,
            [languages.ENGLISH, languages.GERMAN],
        )
        self.save(user)
        logger.info("Created default local profile %s", user.id)
        return user
