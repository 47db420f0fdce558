"""Deterministic completion provider backed by the rule engines.

Answers prompts the way a language model would, returning a JSON string,
but without any network calls. Useful for development without API keys,
deterministic tests and demos.
"""

from __future__ import annotations

import json
import logging
import re
from typing import Any

from jaeger_assist.engines.query_translation import QueryTranslationEngine
from jaeger_assist.engines.span_explanation import SpanExplanationEngine
from jaeger_assist.llm.models import (
    SPAN_DATA_MARKER,
    CompletionMetadata,
    CompletionRequest,
    CompletionResponse,
    RequestKind,
)
from jaeger_assist.llm.provider import CompletionProvider
from jaeger_assist.schemas.explanation import DEFAULT_EXPLANATION, ExplanationResult
from jaeger_assist.schemas.span import SpanRecord

logger = logging.getLogger(__name__)

MOCK_MODEL = "mock-llm-v1"
MOCK_PROVIDER = "mock"

USER_QUERY_PATTERN = re.compile(r'User Query: "(.*?)"\s*(?:\n|$)', re.DOTALL)


class MockCompletionProvider(CompletionProvider):
    """Rule-based stand-in for a language model.

    The request kind comes from ``request.kind`` when set. Otherwise the
    prompt is treated as a span explanation if it contains "Span Data:",
    and as a query translation if not.
    """

    def __init__(
        self,
        query_engine: QueryTranslationEngine | None = None,
        span_engine: SpanExplanationEngine | None = None,
    ) -> None:
        self.query_engine = query_engine or QueryTranslationEngine()
        self.span_engine = span_engine or SpanExplanationEngine()

    async def complete(self, request: CompletionRequest) -> CompletionResponse:
        kind = request.resolved_kind
        logger.info("MockCompletionProvider: generating simulated %s response", kind.value)

        if kind == RequestKind.SPAN_EXPLANATION:
            explanation = self.explain(request.prompt)
            return CompletionResponse(
                content=json.dumps(explanation.to_dict()),
                metadata=CompletionMetadata(model=MOCK_MODEL, tokens_used=100, provider=MOCK_PROVIDER),
            )

        params = self.query_engine.extract(self.extract_user_query(request.prompt))
        return CompletionResponse(
            content=json.dumps(params.to_dict()),
            metadata=CompletionMetadata(model=MOCK_MODEL, tokens_used=50, provider=MOCK_PROVIDER),
        )

    def is_configured(self) -> bool:
        return True

    def get_provider(self) -> str:
        return MOCK_PROVIDER

    def extract_user_query(self, prompt: str) -> str:
        """Pull the quoted user query out of a translation prompt."""
        match = USER_QUERY_PATTERN.search(prompt)
        return match.group(1).lower() if match else prompt.lower()

    def explain(self, prompt: str) -> ExplanationResult:
        """Analyze the span embedded in an explanation prompt."""
        span_data = self._extract_span_data(prompt)
        if span_data is None:
            logger.warning("No parsable span data in prompt, returning default explanation")
            return DEFAULT_EXPLANATION
        return self.span_engine.analyze(SpanRecord.from_dict(span_data))

    def _extract_span_data(self, prompt: str) -> dict[str, Any] | None:
        _, marker, tail = prompt.partition(SPAN_DATA_MARKER)
        start = tail.find("{")
        end = tail.rfind("}")
        if not marker or start == -1 or end < start:
            return None

        try:
            data = json.loads(tail[start:end + 1])
        except json.JSONDecodeError:
            return None
        return data if isinstance(data, dict) else None
