import logging

import httpx
from django.conf import settings
from google import genai
from google.genai import errors, types

from draftdesk.exceptions import ConfigMissing, RateLimited, TransportError, UpstreamError


logger = logging.getLogger(__name__)


class GeminiDraftModel:
    """Structured-output wrapper around the Gemini generate_content call."""

    def __init__(self, api_key: str, model: str = 'gemini-2.5-pro', temperature: float = 0.7,
                 timeout_ms: int = 60000, retry_after: int = 60, client=None):
        if client is None:
            if not api_key:
                raise ConfigMissing('GEMINI_API_KEY is not set.')
            client = genai.Client(api_key=api_key)

        self.client = client
        self.model = model
        self.temperature = temperature
        self.timeout_ms = timeout_ms
        self.retry_after = retry_after

    def generate(self, prompt: str, schema) -> str:
        """
        Return the raw JSON text of the model response.

        Raises:
            RateLimited: quota exhausted (429) or the call ran past its deadline
            UpstreamError: any other provider failure
        """
        config = types.GenerateContentConfig(
            response_mime_type='application/json',
            response_schema=schema,
            temperature=self.temperature,
            http_options=types.HttpOptions(timeout=self.timeout_ms),
        )

        logger.info(f"Calling {self.model}...")

        try:
            response = self.client.models.generate_content(
                model=self.model,
                contents=prompt,
                config=config,
            )
        except errors.APIError as e:
            if e.code == 429:
                logger.warning(f"Gemini API quota exceeded - will retry later: {e}")
                raise RateLimited('Gemini API quota exceeded.', retry_after=self.retry_after) from e
            logger.error(f"Gemini API Error: {e}")
            raise UpstreamError(f"Gemini API error {e.code}: {e}") from e
        except httpx.TimeoutException as e:
            logger.warning(f"Gemini call exceeded {self.timeout_ms}ms deadline")
            raise RateLimited('Gemini call timed out.', retry_after=self.retry_after) from e
        except httpx.TransportError as e:
            logger.error(f"Gemini transport error: {e}")
            raise TransportError(f"Gemini transport error: {e}") from e

        logger.info("Gemini API call successful")
        return response.text or ''


def get_draft_model() -> GeminiDraftModel:
    return GeminiDraftModel(
        api_key=settings.GEMINI_API_KEY,
        model=settings.GEMINI_MODEL,
        temperature=settings.GEMINI_TEMPERATURE,
        timeout_ms=settings.GEMINI_TIMEOUT_MS,
        retry_after=settings.GEMINI_RETRY_AFTER,
    )
