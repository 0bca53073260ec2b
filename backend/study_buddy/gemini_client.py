"""
Google Gemini wrapper for chat answers and image text extraction.
Blocking SDK calls run in a worker thread under an overall timeout;
every failure surfaces as GeminiError so callers can fall back.
"""
import asyncio
from typing import Optional

import google.generativeai as genai

from .config import (
    GEMINI_API_KEY, GEMINI_MODEL, GEMINI_MAX_TOKENS, GEMINI_TEMPERATURE, GEMINI_TIMEOUT
)
from .logger import get_logger

logger = get_logger(__name__)

STUDY_PROMPT = (
    "You are a concise study assistant for students. Provide direct, clear answers to this "
    "question in 3-5 sentences maximum. Be precise and focused. Don't include unnecessary "
    "introduction or conclusion: {content}"
)

EXTRACTION_PROMPT = (
    "Extract all text from this image. If it's a question, just provide the complete "
    "question without any additional commentary."
)


class GeminiError(Exception):
    """Gemini could not produce an answer (no key, timeout, API error, empty response)."""


def response_text(response) -> Optional[str]:
    """Text of a generate_content response, falling back to the first candidate part."""
    try:
        text = response.text
    except (ValueError, AttributeError):
        # .text raises ValueError when the response was blocked or has several candidates
        text = None
    if text:
        return text

    for candidate in getattr(response, 'candidates', None) or []:
        content = getattr(candidate, 'content', None)
        for part in getattr(content, 'parts', None) or []:
            part_text = getattr(part, 'text', None)
            if part_text:
                return part_text
    return None


class GeminiClient:
    """Thin async wrapper around google.generativeai."""

    def __init__(
        self,
        api_key: str = GEMINI_API_KEY,
        model_name: str = GEMINI_MODEL,
        max_tokens: int = GEMINI_MAX_TOKENS,
        temperature: float = GEMINI_TEMPERATURE,
        timeout: float = GEMINI_TIMEOUT,
    ):
        self.api_key = api_key
        self.model_name = model_name.replace('models/', '') if model_name.startswith('models/') else model_name
        self.max_tokens = max_tokens
        self.temperature = temperature
        self.timeout = timeout

    @property
    def configured(self) -> bool:
        return bool(self.api_key and self.api_key.strip())

    def _model(self):
        genai.configure(api_key=self.api_key)
        return genai.GenerativeModel(self.model_name)

    def _generate(self, contents, generation_config=None):
        """Blocking call; runs inside a worker thread."""
        return self._model().generate_content(
            contents,
            generation_config=generation_config,
            request_options={"timeout": self.timeout},
        )

    async def _call(self, contents, generation_config=None) -> str:
        if not self.configured:
            raise GeminiError("GEMINI_API_KEY missing")

        try:
            response = await asyncio.wait_for(
                asyncio.to_thread(self._generate, contents, generation_config),
                timeout=self.timeout,
            )
        except asyncio.TimeoutError as e:
            raise GeminiError(f"Gemini API timeout after {self.timeout:g} seconds") from e
        except Exception as e:
            raise GeminiError(f"Gemini API error ({type(e).__name__}): {e}") from e

        text = response_text(response)
        if not text or not text.strip():
            raise GeminiError("Gemini response has no text")
        return text

    async def generate_answer(self, content: str) -> str:
        """Short study answer for a question."""
        prompt = STUDY_PROMPT.format(content=content)
        logger.debug("Calling Gemini with %d char prompt", len(prompt))

        text = await self._call(
            prompt,
            genai.types.GenerationConfig(
                max_output_tokens=self.max_tokens,
                temperature=self.temperature,
            ),
        )
        logger.info("Generated response from Gemini: %d chars", len(text))
        return text

    async def extract_text(self, image: bytes, mime_type: str = "image/jpeg") -> str:
        """Text read from an image (OCR is entirely Gemini's)."""
        image_part = {"mime_type": mime_type, "data": image}
        text = await self._call([EXTRACTION_PROMPT, image_part])
        logger.info("Generated OCR response from image: %d chars", len(text))
        return text


# Global instance
_gemini_client = None


def get_gemini_client() -> GeminiClient:
    """Get or create global Gemini client."""
    global _gemini_client
    if _gemini_client is None:
        _gemini_client = GeminiClient()
    return _gemini_client
