"""Content generation tests against a scripted generator"""
import json

import pytest

from domain import language as languages
from domain.vocabulary import Difficulty, VocabularyItem
from schemas.generation import FillInBlankExercise, MultipleChoiceExercise, TranslationExercise
from services.content_service import ContentService
from services.gemini_service import GenerationError
from tests.conftest import FakeGenerator

EN, ZH, DE = languages.ENGLISH, languages.CHINESE, languages.GERMAN


class TestPlainText:
    @pytest.mark.asyncio
    async def test_translate_word_strips_and_names_languages(self):
        gen = FakeGenerator("  Haus \n")
        assert await ContentService(gen).translate_word("house", EN, DE) == "Haus"
        assert "English" in gen.prompts[0] and "German" in gen.prompts[0]
        assert '"house"' in gen.prompts[0]

    @pytest.mark.asyncio
    async def test_generate_examples_parses_numbered_lines(self):
        gen = FakeGenerator("1. One.\n2. Two.\n3. Three.\n4. Four.")
        assert await ContentService(gen).generate_examples("word", EN, ZH, count=3) == ["One.", "Two.", "Three."]

    @pytest.mark.asyncio
    async def test_word_details_combines_three_calls(self):
        def responder(prompt: str) -> str:
            if prompt.startswith("Translate"):
                return "你好"
            if "explanation" in prompt:
                return "A greeting."
            return "1. Hello!\n2. Hello there."

        gen = FakeGenerator(responder=responder)
        details = await ContentService(gen).get_word_details("hello", EN, ZH, ZH)
        assert details.translation == "你好"
        assert details.explanation == "A greeting."
        assert details.examples == ["Hello!", "Hello there."]
        assert len(gen.prompts) == 3

    @pytest.mark.asyncio
    async def test_vocabulary_lesson_items(self):
        gen = FakeGenerator("apple | 苹果\nbanana | 香蕉\nnot a pair")
        items = await ContentService(gen).generate_vocabulary_lesson("fruit", EN, ZH, Difficulty.BEGINNER, 5)
        assert items == [VocabularyItem("apple", "苹果"), VocabularyItem("banana", "香蕉")]
        assert "beginner" in gen.prompts[0]

    @pytest.mark.asyncio
    async def test_service_errors_propagate(self):
        gen = FakeGenerator(GenerationError("down"))
        with pytest.raises(GenerationError):
            await ContentService(gen).get_pronunciation("house", EN)


class TestStructured:
    @pytest.mark.asyncio
    async def test_vocabulary_content(self):
        payload = [{"word": "Apfel", "translation": "apple", "example": "Der Apfel ist rot."}]
        gen = FakeGenerator("Here:\n" + json.dumps(payload))
        result = await ContentService(gen).generate_learning_content(DE, EN, "beginner", "food", "vocabulary")
        assert result.ok
        assert result.value[0].word == "Apfel"

    @pytest.mark.asyncio
    async def test_grammar_content(self):
        payload = {"title": "Dative", "explanation": "...", "examples": ["mit dem Auto"], "mistakes": []}
        gen = FakeGenerator(json.dumps(payload))
        result = await ContentService(gen).generate_learning_content(DE, EN, "intermediate", "cases", "grammar")
        assert result.value.title == "Dative"

    @pytest.mark.asyncio
    async def test_missing_json_is_not_an_exception(self):
        gen = FakeGenerator("Sorry, I cannot help with that.")
        result = await ContentService(gen).generate_learning_content(DE, EN, "beginner", "food", "sentences")
        assert not result.ok
        assert result.value is None
        assert result.raw_text == "Sorry, I cannot help with that."

    @pytest.mark.asyncio
    async def test_wrong_shape_is_not_an_exception(self):
        gen = FakeGenerator('[{"sentence": "Hallo"}]')
        result = await ContentService(gen).generate_learning_content(DE, EN, "beginner", "food", "sentences")
        assert result.error == "Response JSON had an unexpected shape"

    @pytest.mark.asyncio
    async def test_sentence_translation_with_analysis(self):
        payload = {"translation": "I am here", "analysis": "SVO", "wordByWord": [{"word": "Ich", "translation": "I"}]}
        gen = FakeGenerator(json.dumps(payload))
        result = await ContentService(gen).translate_sentence("Ich bin hier", DE, EN)
        assert result.value.word_by_word[0].word == "Ich"

    @pytest.mark.asyncio
    async def test_sentence_translation_without_analysis_uses_text(self):
        gen = FakeGenerator("I am here")
        result = await ContentService(gen).translate_sentence("Ich bin hier", DE, EN, include_analysis=False)
        assert result.value.translation == "I am here"
        assert "Only provide the translation" in gen.prompts[0]

    @pytest.mark.asyncio
    async def test_mistake_analysis(self):
        payload = {"analysis": "Wrong article", "grammarIssues": ["der/die"], "vocabularyIssues": [], "suggestions": "Learn genders"}
        gen = FakeGenerator("```json\n" + json.dumps(payload) + "\n```")
        result = await ContentService(gen).analyze_mistake("der Katze", "die Katze", "Translate: the cat", DE, EN)
        assert result.value.grammar_issues == ["der/die"]

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "exercise_type,payload,model",
        [
            ("translation", {"question": "Translate to German: house", "answer": "Haus", "hint": "H..."}, TranslationExercise),
            ("fillInBlank", {"sentence": "Ich ___ hier", "answer": "bin", "options": ["bin", "bist"], "explanation": "1st person"}, FillInBlankExercise),
            ("multipleChoice", {"question": "Haus?", "options": ["A. house", "B. mouse"], "correctAnswer": "A", "explanation": ""}, MultipleChoiceExercise),
        ],
    )
    async def test_exercises(self, exercise_type, payload, model):
        gen = FakeGenerator(json.dumps([payload]))
        result = await ContentService(gen).generate_exercises(DE, EN, "beginner", "home", exercise_type)
        assert result.ok
        assert isinstance(result.value[0], model)

    @pytest.mark.asyncio
    async def test_exercises_without_array(self):
        gen = FakeGenerator('{"question": "only one"}')
        result = await ContentService(gen).generate_exercises(DE, EN, "beginner", "home", "translation")
        assert result.value is None
        assert not result.ok
