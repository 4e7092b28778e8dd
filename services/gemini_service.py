import logging
from typing import Literal, Protocol

import httpx

logger = logging.getLogger(__name__)

GeminiModel = Literal["gemini-2.5-flash", "gemini-2.5-pro"]
SUPPORTED_MODELS: tuple[str, ...] = ("gemini-2.5-flash", "gemini-2.5-pro")


class GenerationError(RuntimeError):
    """The generative-text service could not be reached or gave no text."""


class TextGenerator(Protocol):
    async def generate(self, prompt: str) -> str:
        ...


class GeminiClient:
    def __init__(
        self,
        api_key: str,
        model: str = "gemini-2.5-flash",
        *,
        base_url: str = "https://generativelanguage.googleapis.com/v1beta",
        timeout: float = 60.0,
        http_client: httpx.AsyncClient | None = None,
    ):
        if not api_key:
            raise ValueError("Gemini API key is required")
        self._api_key = api_key
        self._base_url = base_url.rstrip("/")
        self._model = model
        self._owns_client = http_client is None
        self._client = http_client or httpx.AsyncClient(timeout=timeout)

    @property
    def current_model(self) -> str:
        return self._model

    def switch_model(self, model: str) -> None:
        if model not in SUPPORTED_MODELS:
            raise ValueError(f"Unsupported model: {model}")
        logger.info("Switching Gemini model %s -> %s", self._model, model)
        self._model = model

    async def generate(self, prompt: str) -> str:
        url = f"{self._base_url}/models/{self._model}:generateContent"
        try:
            r = await self._client.post(
                url,
                headers={
                    "x-goog-api-key": self._api_key,
                    "Content-Type": "application/json",
                },
                json={"contents": [{"parts": [{"text": prompt}]}]},
            )
            r.raise_for_status()
        except httpx.HTTPError as exc:
            logger.error("Gemini request failed (%s): %s", self._model, exc)
            raise GenerationError("Gemini request failed") from exc

        try:
            data = r.json()
        except ValueError as exc:
            raise GenerationError("Unexpected Gemini response") from exc
        text = self._extract_text(data)
        if not text:
            logger.error("Gemini returned no text: %s", data.get("promptFeedback") if isinstance(data, dict) else data)
            raise GenerationError("Unexpected Gemini response")
        return text

    @staticmethod
    def _extract_text(data) -> str:
        # any shape other than candidates[0].content.parts[*].text counts as no answer
        if not isinstance(data, dict):
            return ""
        candidates = data.get("candidates")
        if not isinstance(candidates, list) or not candidates or not isinstance(candidates[0], dict):
            return ""
        content = candidates[0].get("content")
        if not isinstance(content, dict):
            return ""
        parts = content.get("parts")
        if not isinstance(parts, list):
            return ""
        texts = [part.get("text") for part in parts if isinstance(part, dict)]
        return "".join(text for text in texts if isinstance(text, str)).strip()

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()
