"""
Chat-completion providers for idea analysis.

Both vendors expose an OpenAI-compatible /chat/completions endpoint, so each
provider is the OpenAI SDK pointed at a different base URL with a different
model and key. Which one is used is decided once, from settings:
Together.ai first, then Groq.

Every call is a single attempt (SDK retries are off).
"""

import logging
from typing import Optional

import httpx
from openai import AsyncOpenAI, APIStatusError, APIError

from idea_validator.config import Settings

logger = logging.getLogger(__name__)

MAX_TOKENS = 1000
TEMPERATURE = 0.7


class AnalysisError(Exception):
    """Base class for faults the analyze endpoint turns into a 500."""


class ProviderNotConfiguredError(AnalysisError):
    def __init__(self):
        super().__init__(
            "No API key configured. Please set TOGETHER_API_KEY or GROQ_API_KEY in your .env file"
        )


class ProviderCallError(AnalysisError):
    pass


class ChatProvider:
    """Sends one user prompt and returns the raw text of the first choice."""

    name: str = ""
    base_url: str = ""
    model: str = ""

    def __init__(
        self,
        api_key: str,
        timeout: float = 60.0,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        self._client = AsyncOpenAI(
            api_key=api_key,
            base_url=self.base_url,
            timeout=timeout,
            max_retries=0,
            http_client=http_client,
        )

    async def complete(self, prompt: str) -> str:
        try:
            completion = await self._client.chat.completions.create(
                model=self.model,
                messages=[{"role": "user", "content": prompt}],
                max_tokens=MAX_TOKENS,
                temperature=TEMPERATURE,
            )
        except APIStatusError as e:
            logger.error(f"{self.name} API error: HTTP {e.status_code} {e.response.text[:500]}")
            raise ProviderCallError(f"Failed to get analysis from {self.name}") from e
        except APIError as e:
            logger.error(f"{self.name} API error: {e}")
            raise ProviderCallError(f"Failed to get analysis from {self.name}") from e

        try:
            content = completion.choices[0].message.content
        except (AttributeError, TypeError, IndexError) as e:
            logger.error(f"{self.name} API error: unexpected response {str(completion)[:500]!r}")
            raise ProviderCallError(f"Failed to get analysis from {self.name}") from e

        usage = getattr(completion, "usage", None)
        if usage:
            logger.info(
                f"{self.name} tokens: {usage.prompt_tokens}+{usage.completion_tokens}={usage.total_tokens}"
            )
        return content if isinstance(content, str) else ""

    async def aclose(self) -> None:
        await self._client.close()


class TogetherProvider(ChatProvider):
    name = "Together.ai"
    base_url = "https://api.together.xyz/v1"
    model = "mistralai/Mistral-7B-Instruct-v0.1"


class GroqProvider(ChatProvider):
    name = "Groq"
    base_url = "https://api.groq.com/openai/v1"
    model = "mixtral-8x7b-32768"


def select_provider(
    settings: Settings, http_client: Optional[httpx.AsyncClient] = None
) -> Optional[ChatProvider]:
    """Pick the provider whose key is configured, Together.ai taking precedence.
    Returns None when neither key is set."""
    if settings.together_api_key.strip():
        return TogetherProvider(
            settings.together_api_key.strip(), settings.provider_timeout, http_client
        )
    if settings.groq_api_key.strip():
        return GroqProvider(settings.groq_api_key.strip(), settings.provider_timeout, http_client)
    return None
