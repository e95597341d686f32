"""OpenAI-compatible generation client implementation."""

import asyncio
import logging
from typing import Any

from openai import AsyncOpenAI, OpenAIError

from lunch_nutritionist.config import get_settings
from lunch_nutritionist.errors import GenerationError
from lunch_nutritionist.llm.base import GenerationClient

logger = logging.getLogger(__name__)

DEFAULT_TEMPERATURE = 0.7


def parse_temperature(temperature: str) -> float:
    """Text temperature to float. Empty or malformed falls back to the default."""
    if not temperature:
        return DEFAULT_TEMPERATURE
    try:
        return float(temperature)
    except ValueError:
        logger.warning("Invalid temperature %r, using %s", temperature, DEFAULT_TEMPERATURE)
        return DEFAULT_TEMPERATURE


class OpenAIClient(GenerationClient):
    """OpenAI API client - works with OpenAI or compatible endpoints (e.g. DeepSeek)."""

    def __init__(
        self,
        *,
        api_key: str | None = None,
        base_url: str | None = None,
        model: str | None = None,
        timeout: float | None = None,
        client: AsyncOpenAI | None = None,
    ) -> None:
        settings = get_settings()
        self._api_key = api_key or settings.llm_api_key
        self._base_url = base_url or settings.llm_base_url
        self._model = model or settings.llm_model
        self._timeout = timeout if timeout is not None else settings.llm_request_timeout_seconds
        if client is None and not self._api_key:
            raise GenerationError("LLM API key is required")
        self._client = client

    def _get_client(self) -> AsyncOpenAI:
        """Lazy-init OpenAI client."""
        if self._client is None:
            client_kwargs: dict[str, Any] = {"api_key": self._api_key, "timeout": self._timeout}
            if self._base_url:
                client_kwargs["base_url"] = self._base_url
            self._client = AsyncOpenAI(**client_kwargs)
        return self._client

    async def generate(
        self,
        system_prompt: str,
        user_prompt: str,
        temperature: str = "",
    ) -> str:
        """Call OpenAI-compatible chat completion, bounded by the request timeout."""
        messages = [
            {"role": "system", "content": system_prompt},
            {"role": "user", "content": user_prompt},
        ]
        try:
            response = await asyncio.wait_for(
                self._get_client().chat.completions.create(
                    model=self._model,
                    messages=messages,
                    temperature=parse_temperature(temperature),
                ),
                timeout=self._timeout,
            )
        except asyncio.TimeoutError as e:
            raise GenerationError(f"LLM request timed out after {self._timeout}s") from e
        except OpenAIError as e:
            raise GenerationError(f"LLM request failed: {e}") from e
        if not response.choices:
            return ""
        return response.choices[0].message.content or ""
