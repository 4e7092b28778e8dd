"""Remote profile and per-user collection tests"""
import pytest

from domain import language as languages
from domain.user import User
from services.user_service import UserService


@pytest.fixture
def svc(db_session) -> UserService:
    return UserService(db_session)


class TestProfiles:
    def test_get_missing(self, svc):
        assert svc.get_user("nobody") is None

    def test_create_and_get(self, svc):
        user = User("Mia", languages.GERMAN, [languages.ENGLISH, languages.CHINESE], user_id="u1")
        svc.create_user(user)

        loaded = svc.get_user("u1")
        assert loaded.name == "Mia"
        assert loaded.teaching_language == languages.GERMAN
        assert loaded.learning_languages == (languages.ENGLISH, languages.CHINESE)
        assert loaded.created_at == user.created_at

    def test_update_merges(self, svc):
        user = User("Mia", languages.CHINESE, user_id="u1")
        svc.create_user(user)
        user.name = "Mia B."
        user.add_learning_language(languages.GERMAN)
        svc.update_user(user)

        loaded = svc.get_user("u1")
        assert loaded.name == "Mia B."
        assert [lang.code for lang in loaded.learning_languages] == ["de"]

    def test_update_missing_profile(self, svc):
        with pytest.raises(LookupError):
            svc.update_user(User("Ghost", languages.CHINESE, user_id="ghost"))

    def test_delete(self, svc):
        svc.create_user(User("Mia", languages.CHINESE, user_id="u1"))
        assert svc.delete_user("u1") is True
        assert svc.delete_user("u1") is False
        assert svc.get_user("u1") is None

    def test_ensure_profile_is_idempotent(self, svc):
        first = svc.ensure_profile("u1", "Mia")
        second = svc.ensure_profile("u1", "Someone else")
        assert first.teaching_language == languages.DEFAULT_TEACHING_LANGUAGE
        assert second.name == "Mia"
        assert second.id == "u1"


class TestWordBookEntries:
    def test_add_and_list_newest_first(self, svc):
        first = svc.add_word_to_book("u1", {"word": "Haus", "translation": "house"}, languages.GERMAN)
        second = svc.add_word_to_book("u1", {"word": "猫", "translation": "cat"}, languages.CHINESE)

        assert first["language"] == "de"
        assert "createdAt" in first
        entries = svc.get_word_book("u1")
        assert [entry["id"] for entry in entries] == [second["id"], first["id"]]

    def test_entries_are_per_user(self, svc):
        svc.add_word_to_book("u1", {"word": "Haus", "translation": "house"}, languages.GERMAN)
        assert svc.get_word_book("u2") == []

    def test_delete_entry(self, svc):
        entry = svc.add_word_to_book("u1", {"word": "Haus", "translation": "house"}, languages.GERMAN)
        assert svc.delete_word_from_word_book("u2", entry["id"]) is False
        assert svc.delete_word_from_word_book("u1", entry["id"]) is True
        assert svc.delete_word_from_word_book("u1", entry["id"]) is False
        assert svc.delete_word_from_word_book("u1", "not-a-number") is False


class TestHistory:
    def test_add_list_delete(self, svc):
        item = svc.add_history("u1", {"type": "practice", "question": "q", "isCorrect": True})
        assert item["type"] == "practice"

        history = svc.get_history("u1")
        assert len(history) == 1
        assert history[0]["id"] == item["id"]

        assert svc.delete_history_item("u1", item["id"]) is True
        assert svc.get_history("u1") == []
