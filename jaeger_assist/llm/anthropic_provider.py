"""Claude API completion provider."""

from __future__ import annotations

import logging
from typing import Any

import anthropic

from jaeger_assist.config import LLMConfig
from jaeger_assist.errors import ConfigurationError, ProviderError
from jaeger_assist.llm.models import CompletionMetadata, CompletionRequest, CompletionResponse
from jaeger_assist.llm.provider import CompletionProvider

logger = logging.getLogger(__name__)

PROVIDER_NAME = "anthropic"


class AnthropicCompletionProvider(CompletionProvider):
    """Sends prompts to the Anthropic Messages API.

    Timeouts and retries are delegated to the SDK client, configured from
    LLMConfig. The returned text is passed through unchanged; callers are
    responsible for recovering JSON from it.
    """

    def __init__(
        self,
        config: LLMConfig,
        api_key: str,
        client: anthropic.AsyncAnthropic | None = None,
    ) -> None:
        self.config = config
        self.api_key = api_key
        self._client = client

    @property
    def client(self) -> anthropic.AsyncAnthropic:
        if self._client is None:
            if not self.is_configured():
                raise ConfigurationError(PROVIDER_NAME, "ANTHROPIC_API_KEY is not set")
            self._client = anthropic.AsyncAnthropic(
                api_key=self.api_key,
                timeout=self.config.timeout,
                max_retries=self.config.max_retries,
            )
        return self._client

    async def complete(self, request: CompletionRequest) -> CompletionResponse:
        model = request.model or self.config.model
        kwargs: dict[str, Any] = {
            "model": model,
            "max_tokens": request.max_tokens or self.config.query_max_tokens,
            "temperature": (
                request.temperature if request.temperature is not None else self.config.temperature
            ),
            "messages": [{"role": "user", "content": request.prompt}],
        }

        logger.debug("Sending %d-char prompt to %s", len(request.prompt), model)

        try:
            response = await self.client.messages.create(**kwargs)
        except anthropic.APIError as e:
            logger.error("Anthropic request failed: %s", e)
            raise ProviderError(PROVIDER_NAME, str(e)) from e

        text = "".join(block.text for block in response.content if block.type == "text")
        usage = response.usage
        tokens_used = usage.input_tokens + usage.output_tokens

        logger.debug("Response: stop=%s, tokens=%d", response.stop_reason, tokens_used)

        return CompletionResponse(
            content=text,
            metadata=CompletionMetadata(model=model, tokens_used=tokens_used, provider=PROVIDER_NAME),
        )

    def is_configured(self) -> bool:
        return bool(self.api_key) or self._client is not None

    def get_provider(self) -> str:
        return PROVIDER_NAME
