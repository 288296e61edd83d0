"""
Thin async client for the generative AI provider (OpenAI-compatible).
"""

from typing import Optional

from loguru import logger
from openai import APIError, AsyncOpenAI, RateLimitError

from .config import Settings, get_settings
from .errors import ProviderError, QuotaExceeded

SYSTEM_PROMPT = (
    "You are an expert technical recruiter. "
    "Respond ONLY with valid JSON in the exact format requested. No other text."
)


class LLMClient:
    """Sends free-text prompts and returns the provider's free-text answer."""

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or get_settings()
        self._client: Optional[AsyncOpenAI] = None

    @property
    def client(self) -> AsyncOpenAI:
        """Get or create OpenAI client."""
        if self._client is None:
            self._client = AsyncOpenAI(
                api_key=self.settings.openai_api_key.get_secret_value(),
                base_url=self.settings.openai_base_url,
            )
        return self._client

    async def complete(self, prompt: str) -> str:
        """
        Send a prompt and return the raw response text.

        Raises:
            QuotaExceeded: provider rejected the call with a rate limit
            ProviderError: any other API or transport failure
        """
        logger.debug(f"Sending prompt to {self.settings.openai_model}: {prompt[:200]}...")
        try:
            response = await self.client.chat.completions.create(
                model=self.settings.openai_model,
                messages=[
                    {"role": "system", "content": SYSTEM_PROMPT},
                    {"role": "user", "content": prompt},
                ],
                temperature=self.settings.llm_temperature,
                max_tokens=self.settings.llm_max_tokens,
            )
        except RateLimitError as e:
            raise QuotaExceeded(self._retry_after_ms(e), str(e)) from e
        except APIError as e:
            raise ProviderError(f"AI provider request failed: {e}") from e

        content = response.choices[0].message.content or ""
        logger.debug(f"Provider response: {content[:200]}...")
        return content

    def _retry_after_ms(self, error: RateLimitError) -> int:
        header = error.response.headers.get("retry-after") if error.response is not None else None
        try:
            return int(float(header) * 1000)
        except (TypeError, ValueError):
            return self.settings.quota_retry_ms

    async def close(self) -> None:
        if self._client is not None:
            await self._client.close()
            self._client = None
