"""LLM client for OpenAI-compatible chat-completion providers.

Provides the single-call interface used by the /chat proxy. The default
provider is OpenRouter, which exposes an OpenAI-compatible API; any other
compatible endpoint can be configured through base_url.

No retries, no streaming: one request, one reply.
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Any, Literal

import openai
import structlog
from openai import OpenAI

from newgen.config.app_config import LLMProviderConfig

logger = structlog.get_logger(__name__)


# =============================================================================
# DATA CLASSES
# =============================================================================


@dataclass
class LLMConfig:
    """Configuration for LLM client."""

    base_url: str = "https://openrouter.ai/api/v1"
    model: str = "openai/gpt-4o"
    max_tokens: int = 500
    timeout: int = 30
    api_key: str | None = None

    @classmethod
    def from_provider(cls, provider: LLMProviderConfig) -> LLMConfig:
        """Build client settings from the application config section."""
        return cls(
            base_url=provider.base_url,
            model=provider.model,
            max_tokens=provider.max_tokens,
            timeout=provider.timeout,
            api_key=provider.get_api_key(),
        )


@dataclass
class Message:
    """A chat message."""

    role: Literal["system", "user", "assistant"]
    content: str

    def to_dict(self) -> dict[str, str]:
        """Convert to dictionary for API call."""
        return {"role": self.role, "content": self.content}


@dataclass
class LLMResponse:
    """Response from LLM."""

    content: str
    model: str
    usage: dict[str, int] = field(default_factory=dict)
    latency_ms: int = 0

    @property
    def total_tokens(self) -> int:
        """Get total token count."""
        return self.usage.get("total_tokens", 0)


class LLMError(Exception):
    """Error during LLM interaction."""

    pass


class LLMConnectionError(LLMError):
    """Error connecting to the provider (DNS, refused, timeout)."""

    pass


class LLMResponseError(LLMError):
    """Provider answered with an error status or an unusable body."""

    pass


# =============================================================================
# LLM CLIENT
# =============================================================================


class LLMClient:
    """Client for one OpenAI-compatible chat-completion endpoint."""

    def __init__(self, config: LLMConfig | None = None):
        """Initialize LLM client.

        Args:
            config: LLM configuration (defaults if not provided)
        """
        self.config = config or LLMConfig()

        self._client = OpenAI(
            base_url=self.config.base_url,
            api_key=self.config.api_key or "not-configured",
            timeout=self.config.timeout,
            max_retries=0,
        )

        logger.info(
            "llm_client_initialized",
            model=self.config.model,
            base_url=self.config.base_url,
            has_api_key=bool(self.config.api_key),
        )

    def chat(
        self,
        messages: list[Message],
        max_tokens: int | None = None,
    ) -> LLMResponse:
        """Send chat completion request.

        Args:
            messages: List of messages in conversation
            max_tokens: Override default max tokens

        Returns:
            LLMResponse with content and metadata

        Raises:
            LLMConnectionError: If the provider cannot be reached in time
            LLMResponseError: If the provider fails or returns no reply
        """
        if max_tokens is None:
            max_tokens = self.config.max_tokens

        request_kwargs: dict[str, Any] = {
            "model": self.config.model,
            "messages": [m.to_dict() for m in messages],
            "max_tokens": max_tokens,
        }

        start_time = time.time()

        try:
            response = self._client.chat.completions.create(**request_kwargs)
        except (openai.APIConnectionError, openai.APITimeoutError) as e:
            raise LLMConnectionError(
                f"Could not reach provider at {self.config.base_url}: {e}"
            ) from e
        except openai.APIStatusError as e:
            raise LLMResponseError(
                f"Provider returned HTTP {e.status_code}: {e.message}"
            ) from e
        except openai.OpenAIError as e:
            raise LLMError(f"LLM call failed: {e}") from e

        latency_ms = int((time.time() - start_time) * 1000)

        if not response.choices:
            raise LLMResponseError("Empty response from provider")

        content = response.choices[0].message.content
        if not content:
            raise LLMResponseError("Provider reply has no content")

        usage = {}
        if response.usage:
            usage = {
                "prompt_tokens": response.usage.prompt_tokens,
                "completion_tokens": response.usage.completion_tokens,
                "total_tokens": response.usage.total_tokens,
            }

        result = LLMResponse(
            content=content,
            model=response.model,
            usage=usage,
            latency_ms=latency_ms,
        )

        logger.debug(
            "llm_response",
            model=result.model,
            tokens=result.total_tokens,
            latency_ms=latency_ms,
        )

        return result

    def simple_chat(
        self,
        system_prompt: str,
        user_message: str,
        max_tokens: int | None = None,
    ) -> str:
        """Simple chat with system prompt and user message.

        Convenience method for single-turn conversations.

        Returns:
            Response content as string
        """
        messages = [
            Message(role="system", content=system_prompt),
            Message(role="user", content=user_message),
        ]

        response = self.chat(messages=messages, max_tokens=max_tokens)

        return response.content
