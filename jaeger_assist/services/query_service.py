"""Query translation service.

Orchestrates prompt construction, the completion provider and result
validation to turn natural language into Jaeger search parameters.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field, replace
from typing import Any

from jaeger_assist.config import LLMConfig
from jaeger_assist.engines.query_translation import UNKNOWN_SERVICE
from jaeger_assist.errors import ConfigurationError, ValidationError
from jaeger_assist.llm.models import CompletionRequest, RequestKind
from jaeger_assist.llm.parsing import extract_json
from jaeger_assist.llm.provider import CompletionProvider
from jaeger_assist.prompts.query import build_query_translation_prompt
from jaeger_assist.schemas.search_params import SearchParameters, build_search_params

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ResponseMetadata:
    provider: str
    processing_time_ms: float

    def to_dict(self) -> dict[str, Any]:
        return {"provider": self.provider, "processingTimeMs": self.processing_time_ms}


@dataclass(frozen=True)
class TranslateQueryRequest:
    """A natural-language query plus optional hints.

    ``context`` may carry ``recentServices`` (list of names) and
    ``defaultService``.
    """

    query: str
    context: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class TranslateQueryResponse:
    params: SearchParameters
    original_query: str
    metadata: ResponseMetadata

    def to_dict(self) -> dict[str, Any]:
        return {
            "params": self.params.to_dict(),
            "originalQuery": self.original_query,
            "metadata": self.metadata.to_dict(),
        }


class QueryService:
    """Converts natural-language queries into structured Jaeger search parameters."""

    def __init__(self, provider: CompletionProvider, config: LLMConfig | None = None) -> None:
        self.provider = provider
        self.config = config or LLMConfig()

    async def translate_query(self, request: TranslateQueryRequest) -> TranslateQueryResponse:
        """Translate natural language to Jaeger search parameters.

        Raises:
            ValidationError: If the query is empty or no service was extracted.
            ConfigurationError: If the provider is not configured.
            ParseError: If the provider output is not JSON.
        """
        start = time.perf_counter()

        logger.info("Translating query: %r", request.query)

        if not isinstance(request.query, str) or not request.query.strip():
            raise ValidationError("Query cannot be empty", field="query")

        if not self.provider.is_configured():
            raise ConfigurationError(self.provider.get_provider(), "Provider is not configured")

        prompt = build_query_translation_prompt(request.query, request.context)
        response = await self.provider.complete(
            CompletionRequest(
                prompt=prompt,
                temperature=self.config.temperature,
                max_tokens=self.config.query_max_tokens,
                kind=RequestKind.QUERY_TRANSLATION,
            )
        )

        raw = extract_json(response.content)
        try:
            params = build_search_params(raw)
        except ValidationError:
            logger.error("Invalid search parameters generated: %s", raw)
            raise

        default_service = (request.context or {}).get("defaultService")
        if params.service == UNKNOWN_SERVICE and default_service:
            logger.info("No service recognised, using default service %s", default_service)
            params = replace(params, service=default_service)

        processing_time_ms = (time.perf_counter() - start) * 1000

        logger.info(
            "Query translated successfully (service=%s, %.1fms)",
            params.service,
            processing_time_ms,
        )

        return TranslateQueryResponse(
            params=params,
            original_query=request.query,
            metadata=ResponseMetadata(
                provider=self.provider.get_provider(),
                processing_time_ms=processing_time_ms,
            ),
        )
