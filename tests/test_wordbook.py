"""WordBook collection and persistence tests"""
import json
import logging
from datetime import datetime, timedelta, timezone

import pytest

from domain.word import Word
from domain.wordbook import STALENESS_WINDOW, WordBook
from repositories.record_store import JsonFileRecordStore, SqlRecordStore
from repositories.wordbook_repo import WordBookRepository

NOW = datetime(2024, 6, 10, 12, 0, tzinfo=timezone.utc)


class RecordingPersistence:
    def __init__(self):
        self.saves: list[list[str]] = []

    def save(self, user_id, words):
        self.saves.append([word.id for word in words])


@pytest.fixture
def book() -> WordBook:
    book = WordBook("u1")
    book.add_word(Word("hello", "en", "你好", word_id="w1", created_at=NOW - timedelta(days=2)))
    book.add_word(Word("world", "en", "世界", word_id="w2", created_at=NOW - timedelta(days=1)))
    book.add_word(Word("Welt", "de", "World", word_id="w3", created_at=NOW))
    return book


class TestWordBook:
    def test_add_is_upsert_by_id(self, book):
        book.add_word(Word("hello!", "en", "你好!", word_id="w1"))
        assert book.get_total_word_count() == 3
        assert book.get_word("w1").text == "hello!"

    def test_remove_missing_returns_false(self, book):
        assert book.remove_word("nope") is False
        assert book.get_total_word_count() == 3

    def test_remove_present_returns_true(self, book):
        assert book.remove_word("w2") is True
        assert book.get_total_word_count() == 2
        assert book.get_word("w2") is None

    def test_get_all_words_is_a_snapshot(self, book):
        words = book.get_all_words()
        words.clear()
        assert book.get_total_word_count() == 3

    def test_words_by_language(self, book):
        assert [w.id for w in book.get_words_by_language("de")] == ["w3"]
        assert book.get_words_by_language("xx") == []

    def test_search_matches_text_or_translation_case_insensitively(self, book):
        assert {w.id for w in book.search_words("WOR")} == {"w2", "w3"}
        assert [w.id for w in book.search_words("你好")] == ["w1"]
        assert book.search_words("zzz") == []

    def test_empty_search_returns_everything(self, book):
        assert [w.id for w in book.search_words("")] == ["w1", "w2", "w3"]

    def test_recent_words_newest_first(self, book):
        assert [w.id for w in book.get_recent_words(2)] == ["w3", "w2"]
        assert len(book.get_recent_words()) == 3

    def test_words_needing_review(self, book):
        book.get_word("w1").mark_as_reviewed(at=NOW - timedelta(hours=1))
        book.get_word("w2").mark_as_reviewed(at=NOW - timedelta(days=4))
        due = {w.id for w in book.get_words_needing_review(now=NOW)}
        # w3 was never reviewed
        assert due == {"w2", "w3"}

    def test_naive_datetimes_are_read_as_utc(self, book):
        naive_now = NOW.replace(tzinfo=None)
        book.add_word(Word("Baum", "de", "tree", word_id="w4", created_at=naive_now + timedelta(hours=1)))
        book.get_word("w2").mark_as_reviewed(at=NOW - timedelta(days=1))

        assert book.get_word("w4").created_at.tzinfo is not None
        assert [w.id for w in book.get_recent_words(1)] == ["w4"]
        assert {w.id for w in book.get_words_needing_review(now=naive_now)} == {"w1", "w3", "w4"}

    def test_staleness_window_is_three_days(self):
        assert STALENESS_WINDOW == timedelta(days=3)

    def test_mutations_persist_whole_collection(self):
        persistence = RecordingPersistence()
        book = WordBook("u1", persistence=persistence)
        book.add_word(Word("a", "en", word_id="a"))
        book.add_word(Word("b", "en", word_id="b"))
        book.remove_word("missing")
        book.remove_word("a")
        assert persistence.saves == [["a"], ["a", "b"], ["b"]]


class TestWordBookRepository:
    def test_round_trip_through_json_file(self, tmp_path):
        repo = WordBookRepository(JsonFileRecordStore(tmp_path / "storage.json"))
        book = repo.load("u1")
        book.add_word(Word("hello", "en", "你好"))
        book.add_word(Word("world", "en", "世界"))
        assert book.get_total_word_count() == 2

        reloaded = WordBookRepository(JsonFileRecordStore(tmp_path / "storage.json")).load("u1")
        original = {(w.id, w.text, w.translation) for w in book.get_all_words()}
        assert {(w.id, w.text, w.translation) for w in reloaded.get_all_words()} == original

    def test_round_trip_through_database(self, db_session):
        repo = WordBookRepository(SqlRecordStore(db_session))
        book = repo.load("u1")
        word = Word("hello", "en", "你好")
        book.add_word(word)
        word.mark_as_reviewed()
        book.add_word(word)

        reloaded = WordBookRepository(SqlRecordStore(db_session)).load("u1").get_word(word.id)
        assert reloaded.review_count == 1
        assert reloaded.last_reviewed == word.last_reviewed

    def test_books_are_scoped_per_user(self, tmp_path):
        repo = WordBookRepository(JsonFileRecordStore(tmp_path / "storage.json"))
        repo.load("u1").add_word(Word("hello", "en"))
        assert repo.load("u2").get_total_word_count() == 0
        stored = json.loads((tmp_path / "storage.json").read_text(encoding="utf-8"))
        assert set(stored) == {"wordbook_u1"}
        assert json.loads(stored["wordbook_u1"])["userId"] == "u1"

    def test_corrupt_blob_loads_as_empty(self, tmp_path, caplog):
        store = JsonFileRecordStore(tmp_path / "storage.json")
        store.set("wordbook_u1", "{not json")
        book = WordBookRepository(store).load("u1")
        assert book.get_total_word_count() == 0
        assert "Failed to load wordbook" in caplog.text

    def test_unreadable_store_file_loads_as_empty(self, tmp_path, caplog):
        path = tmp_path / "storage.json"
        path.write_text("{not json", encoding="utf-8")
        with caplog.at_level(logging.WARNING):
            book = WordBookRepository(JsonFileRecordStore(path)).load("u1")
        assert book.get_total_word_count() == 0
        assert "unreadable" in caplog.text

        book.add_word(Word("hello", "en", "你好"))
        assert WordBookRepository(JsonFileRecordStore(path)).load("u1").get_total_word_count() == 1

    def test_bad_entries_are_skipped(self, tmp_path, caplog):
        store = JsonFileRecordStore(tmp_path / "storage.json")
        good = Word("hello", "en", "你好").to_record()
        store.set("wordbook_u1", json.dumps({"userId": "u1", "words": [good, {"id": "broken"}, "junk"]}))
        book = WordBookRepository(store).load("u1")
        assert [w.id for w in book.get_all_words()] == [good["id"]]
        assert "Skipping unreadable word" in caplog.text

    def test_loaded_book_keeps_persisting(self, tmp_path):
        repo = WordBookRepository(JsonFileRecordStore(tmp_path / "storage.json"))
        repo.load("u1").add_word(Word("hello", "en", word_id="w1"))
        book = repo.load("u1")
        assert book.remove_word("w1") is True
        assert repo.load("u1").get_total_word_count() == 0
