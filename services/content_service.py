"""Prompt construction and response parsing for every AI-backed feature.

Plain-text features return ``str``. Features that ask the model for JSON
return a ``Generated`` envelope instead of raising when the answer cannot be
parsed. Only transport failures raise (``GenerationError``).
"""
import asyncio
import logging
from typing import Any

from pydantic import TypeAdapter, ValidationError

from domain.language import Language
from domain.vocabulary import Difficulty, VocabularyItem
from schemas.generation import (
    EXERCISE_MODELS,
    ContentType,
    Exercise,
    ExerciseType,
    Generated,
    GrammarLesson,
    Level,
    MistakeAnalysis,
    SentenceEntry,
    SentenceTranslation,
    VocabularyEntry,
    WordDetails,
)
from services.gemini_service import TextGenerator
from services.text_extraction import extract_json, parse_numbered_lines, parse_pipe_pairs

logger = logging.getLogger(__name__)

_VOCABULARY_LIST = TypeAdapter(list[VocabularyEntry])
_SENTENCE_LIST = TypeAdapter(list[SentenceEntry])
_GRAMMAR = TypeAdapter(GrammarLesson)


def _structured(text: str, adapter: TypeAdapter, openers: str, label: str) -> Generated:
    data = extract_json(text, openers)
    if data is None:
        logger.warning("No JSON found in %s response", label)
        return Generated(raw_text=text, error="Response did not contain JSON")
    try:
        value = adapter.validate_python(data)
    except ValidationError as exc:
        logger.warning("Malformed %s response: %s", label, exc.error_count())
        return Generated(raw_text=text, error="Response JSON had an unexpected shape")
    return Generated(value=value, raw_text=text)


class ContentService:
    def __init__(self, generator: TextGenerator):
        self.generator = generator

    async def translate_word(self, word: str, from_language: Language, to_language: Language) -> str:
        prompt = (
            f"Translate the following {from_language.name} word or phrase to {to_language.name}. "
            f'Only provide the translation, nothing else: "{word}"'
        )
        return (await self.generator.generate(prompt)).strip()

    async def explain_word(self, word: str, word_language: Language, explanation_language: Language) -> str:
        prompt = (
            f'Provide a clear and concise explanation of the {word_language.name} word "{word}" '
            f"in {explanation_language.name}. Include its meaning, usage, and context. "
            "Keep it brief but informative."
        )
        return (await self.generator.generate(prompt)).strip()

    async def generate_examples(
        self,
        word: str,
        word_language: Language,
        example_language: Language,
        count: int = 3,
    ) -> list[str]:
        prompt = (
            f'Generate {count} example sentences using the {word_language.name} word "{word}". '
            f"Provide the examples in {example_language.name}. "
            "Format each example on a new line, numbered 1., 2., 3., etc."
        )
        text = await self.generator.generate(prompt)
        return parse_numbered_lines(text, limit=count)

    async def get_word_details(
        self,
        word: str,
        word_language: Language,
        target_language: Language,
        teaching_language: Language,
    ) -> WordDetails:
        translation, explanation, examples = await asyncio.gather(
            self.translate_word(word, word_language, target_language),
            self.explain_word(word, word_language, teaching_language),
            self.generate_examples(word, word_language, teaching_language, 3),
        )
        return WordDetails(translation=translation, explanation=explanation, examples=examples)

    async def generate_vocabulary_lesson(
        self,
        topic: str,
        target_language: Language,
        teaching_language: Language,
        difficulty: Difficulty | str,
        word_count: int = 10,
    ) -> list[VocabularyItem]:
        level = Difficulty(difficulty).value
        prompt = (
            f'Generate a vocabulary list for {level} level learners. Topic: "{topic}".\n'
            f"Target language: {target_language.name}.\n"
            f"Teaching language: {teaching_language.name}.\n"
            f"Provide {word_count} words with their translations.\n"
            "Format each entry as: word | translation\n"
            "One entry per line."
        )
        text = await self.generator.generate(prompt)
        items = [VocabularyItem(word=w, translation=t) for w, t in parse_pipe_pairs(text, limit=word_count)]
        if not items:
            logger.warning("Vocabulary lesson for %r came back without any 'word | translation' lines", topic)
        return items

    async def get_pronunciation(self, word: str, language: Language) -> str:
        prompt = (
            f'Provide the phonetic pronunciation (IPA) for the {language.name} word "{word}". '
            "Only return the IPA transcription in forward slashes, like /wɜːrd/."
        )
        return (await self.generator.generate(prompt)).strip()

    async def chat_with_tutor(self, message: str, learning_language: Language, teaching_language: Language) -> str:
        prompt = (
            f"You are a language tutor. The student is learning {learning_language.name}, "
            f"and you should teach in {teaching_language.name}.\n\n"
            f'Student\'s message: "{message}"\n\n'
            "Provide a helpful, encouraging response. Be concise but informative."
        )
        return (await self.generator.generate(prompt)).strip()

    async def generate_learning_content(
        self,
        learning_language: Language,
        teaching_language: Language,
        level: Level,
        topic: str,
        content_type: ContentType,
    ) -> Generated[Any]:
        if content_type == "vocabulary":
            prompt = (
                f'Generate 8 {level} level vocabulary words in {learning_language.name} related to "{topic}".\n'
                "For each word provide:\n"
                f"- The word in {learning_language.name}\n"
                f"- Translation in {teaching_language.name}\n"
                "- A simple example sentence\n\n"
                'Format as JSON array: [{"word": "...", "translation": "...", "example": "..."}]'
            )
            adapter, openers = _VOCABULARY_LIST, "["
        elif content_type == "sentences":
            prompt = (
                f'Generate 5 common {level} level sentences in {learning_language.name} about "{topic}".\n'
                "For each sentence provide:\n"
                f"- The sentence in {learning_language.name}\n"
                f"- Translation in {teaching_language.name}\n"
                f"- Grammar explanation in {teaching_language.name}\n"
                "- Key vocabulary words used\n\n"
                'Format as JSON array: [{"sentence": "...", "translation": "...", "grammar": "...", "vocabulary": ["..."]}]'
            )
            adapter, openers = _SENTENCE_LIST, "["
        elif content_type == "grammar":
            prompt = (
                f'Explain a key {level} level grammar concept in {learning_language.name} related to "{topic}".\n'
                "Provide:\n"
                "- Grammar rule title\n"
                f"- Clear explanation in {teaching_language.name}\n"
                "- 3 example sentences\n"
                "- Common mistakes to avoid\n\n"
                'Format as JSON: {"title": "...", "explanation": "...", "examples": [...], "mistakes": [...]}'
            )
            adapter, openers = _GRAMMAR, "{"
        else:
            raise ValueError(f"Unknown content type: {content_type}")

        text = (await self.generator.generate(prompt)).strip()
        return _structured(text, adapter, openers, f"{content_type} content")

    async def translate_sentence(
        self,
        sentence: str,
        from_language: Language,
        to_language: Language,
        include_analysis: bool = True,
    ) -> Generated[SentenceTranslation]:
        if not include_analysis:
            prompt = (
                f'Translate this {from_language.name} sentence to {to_language.name}: "{sentence}"\n\n'
                "Only provide the translation, nothing else."
            )
            text = (await self.generator.generate(prompt)).strip()
            return Generated[SentenceTranslation](value=SentenceTranslation(translation=text), raw_text=text)

        prompt = (
            f"Translate this {from_language.name} sentence to {to_language.name} and provide analysis:\n\n"
            f'Sentence: "{sentence}"\n\n'
            "Provide:\n"
            "1. Translation\n"
            "2. Word-by-word breakdown\n"
            "3. Grammar structure explanation\n\n"
            'Format as JSON: {"translation": "...", "analysis": "...", '
            '"wordByWord": [{"word": "...", "translation": "..."}]}'
        )
        text = (await self.generator.generate(prompt)).strip()
        return _structured(text, TypeAdapter(SentenceTranslation), "{", "sentence translation")

    async def analyze_mistake(
        self,
        user_answer: str,
        correct_answer: str,
        question: str,
        learning_language: Language,
        teaching_language: Language,
    ) -> Generated[MistakeAnalysis]:
        prompt = (
            f"Analyze the student's language mistake in {learning_language.name}. "
            f"Provide feedback in {teaching_language.name}.\n\n"
            f"Question/Task: {question}\n"
            f'Student\'s answer: "{user_answer}"\n'
            f'Correct answer: "{correct_answer}"\n\n'
            "Provide:\n"
            "1. Overall analysis of the mistake\n"
            "2. Specific grammar issues (if any)\n"
            "3. Vocabulary issues (word choice, spelling, etc.)\n"
            "4. Helpful suggestions for improvement\n\n"
            "Format as JSON: {\n"
            '  "analysis": "...",\n'
            '  "grammarIssues": ["..."],\n'
            '  "vocabularyIssues": ["..."],\n'
            '  "suggestions": "..."\n'
            "}"
        )
        text = (await self.generator.generate(prompt)).strip()
        return _structured(text, TypeAdapter(MistakeAnalysis), "{", "mistake analysis")

    async def generate_exercises(
        self,
        learning_language: Language,
        teaching_language: Language,
        level: Level,
        topic: str,
        exercise_type: ExerciseType,
    ) -> Generated[list[Exercise]]:
        if exercise_type == "translation":
            prompt = (
                f"Generate 5 {level} level translation exercises for {learning_language.name} learners "
                f'about "{topic}". Write hints in {teaching_language.name}.\n\n'
                "Format as JSON array: [\n"
                "  {\n"
                f'    "question": "Translate to {learning_language.name}: ...",\n'
                '    "answer": "...",\n'
                '    "hint": "..."\n'
                "  }\n"
                "]"
            )
        elif exercise_type == "fillInBlank":
            prompt = (
                f"Generate 5 {level} level fill-in-the-blank exercises in {learning_language.name} "
                f'about "{topic}". Write explanations in {teaching_language.name}.\n\n'
                "Format as JSON array: [\n"
                "  {\n"
                '    "sentence": "... ___ ...",\n'
                '    "answer": "...",\n'
                '    "options": ["...", "...", "..."],\n'
                '    "explanation": "..."\n'
                "  }\n"
                "]"
            )
        elif exercise_type == "multipleChoice":
            prompt = (
                f"Generate 5 {level} level multiple choice questions for {learning_language.name} "
                f'about "{topic}". Write explanations in {teaching_language.name}.\n\n'
                "Format as JSON array: [\n"
                "  {\n"
                '    "question": "...",\n'
                '    "options": ["A. ...", "B. ...", "C. ...", "D. ..."],\n'
                '    "correctAnswer": "A",\n'
                '    "explanation": "..."\n'
                "  }\n"
                "]"
            )
        else:
            raise ValueError(f"Unknown exercise type: {exercise_type}")

        text = (await self.generator.generate(prompt)).strip()
        adapter = TypeAdapter(list[EXERCISE_MODELS[exercise_type]])
        result = _structured(text, adapter, "[", f"{exercise_type} exercises")
        return Generated[list[Exercise]](value=result.value, raw_text=result.raw_text, error=result.error)
