"""Word entity tests"""
from datetime import datetime, timedelta, timezone

import pytest
from pydantic import ValidationError

from domain.word import Word


class TestWord:
    def test_defaults(self):
        word = Word("hello", "en")
        assert word.translation == ""
        assert word.explanation == ""
        assert word.examples == ()
        assert word.review_count == 0
        assert word.last_reviewed is None

    def test_examples_is_a_copy(self):
        examples = ["Hello there."]
        word = Word("hello", "en", examples=examples)
        examples.append("changed outside")
        word.add_example("Hello, world.")
        assert word.examples == ("Hello there.", "Hello, world.")

    @pytest.mark.parametrize("times", [1, 2, 5])
    def test_mark_as_reviewed_counts_every_call(self, times):
        word = Word("hello", "en")
        start = datetime(2024, 1, 1, tzinfo=timezone.utc)
        for i in range(times):
            word.mark_as_reviewed(at=start + timedelta(hours=i))
        assert word.review_count == times
        assert word.last_reviewed == start + timedelta(hours=times - 1)

    def test_mark_as_reviewed_defaults_to_now(self):
        word = Word("hello", "en")
        before = datetime.now(timezone.utc)
        word.mark_as_reviewed()
        assert before <= word.last_reviewed <= datetime.now(timezone.utc)


class TestWordRecord:
    def test_round_trip(self):
        word = Word("Haus", "de", "房子", "a building people live in", ["Das Haus ist groß."])
        word.mark_as_reviewed()
        word.mark_as_reviewed()
        restored = Word.from_record(word.to_record())
        assert restored.id == word.id
        assert restored.text == word.text
        assert restored.language_code == word.language_code
        assert restored.translation == word.translation
        assert restored.explanation == word.explanation
        assert restored.examples == word.examples
        assert restored.review_count == 2
        assert restored.last_reviewed == word.last_reviewed
        assert restored.created_at == word.created_at

    def test_unreviewed_word_omits_last_reviewed(self):
        assert "lastReviewed" not in Word("hello", "en").to_record()

    def test_from_record_defaults(self):
        word = Word.from_record({
            "id": "w1",
            "text": "hello",
            "languageCode": "en",
            "translation": "你好",
            "explanation": "",
            "createdAt": "2024-03-01T10:00:00.000Z",
        })
        assert word.review_count == 0
        assert word.examples == ()
        assert word.last_reviewed is None
        assert word.created_at == datetime(2024, 3, 1, 10, 0, tzinfo=timezone.utc)

    def test_from_record_rejects_missing_text(self):
        with pytest.raises(ValidationError):
            Word.from_record({"id": "w1", "languageCode": "en", "createdAt": "2024-03-01T10:00:00Z"})
