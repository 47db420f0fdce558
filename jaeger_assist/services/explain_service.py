"""Span explanation service."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Any

from jaeger_assist.config import LLMConfig
from jaeger_assist.errors import ConfigurationError, ParseError
from jaeger_assist.llm.models import CompletionRequest, RequestKind
from jaeger_assist.llm.parsing import extract_json
from jaeger_assist.llm.provider import CompletionProvider
from jaeger_assist.prompts.explain import build_explain_span_prompt
from jaeger_assist.schemas.explanation import ExplanationResult
from jaeger_assist.schemas.span import validate_span
from jaeger_assist.services.query_service import ResponseMetadata

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("summary", "spanType", "performance")


@dataclass(frozen=True)
class ExplainSpanRequest:
    """Raw span object as received from the caller."""

    span: Any


@dataclass(frozen=True)
class ExplainSpanResponse:
    explanation: ExplanationResult
    span_id: str
    trace_id: str
    metadata: ResponseMetadata

    def to_dict(self) -> dict[str, Any]:
        return {
            "explanation": self.explanation.to_dict(),
            "spanContext": {"spanID": self.span_id, "traceID": self.trace_id},
            "metadata": self.metadata.to_dict(),
        }


class ExplainService:
    """Generates technical explanations for Jaeger spans."""

    def __init__(self, provider: CompletionProvider, config: LLMConfig | None = None) -> None:
        self.provider = provider
        self.config = config or LLMConfig()

    async def explain_span(self, request: ExplainSpanRequest) -> ExplainSpanResponse:
        """Generate an explanation for a span.

        Raises:
            ValidationError: If the span is missing required fields.
            ConfigurationError: If the provider is not configured.
            ParseError: If the provider output is not a valid explanation.
        """
        start = time.perf_counter()

        span = validate_span(request.span)

        logger.info(
            "Explaining span %s (trace=%s, operation=%s)",
            span.span_id,
            span.trace_id,
            span.operation_name,
        )

        if not self.provider.is_configured():
            raise ConfigurationError(self.provider.get_provider(), "Provider is not configured")

        response = await self.provider.complete(
            CompletionRequest(
                prompt=build_explain_span_prompt(span),
                temperature=self.config.temperature,
                max_tokens=self.config.explain_max_tokens,
                kind=RequestKind.SPAN_EXPLANATION,
            )
        )

        explanation = self.parse_explanation(response.content)
        processing_time_ms = (time.perf_counter() - start) * 1000

        logger.info(
            "Span %s explained successfully (type=%s, error=%s, %.1fms)",
            span.span_id,
            explanation.span_type,
            explanation.error_info is not None and explanation.error_info.has_error,
            processing_time_ms,
        )

        return ExplainSpanResponse(
            explanation=explanation,
            span_id=span.span_id,
            trace_id=span.trace_id,
            metadata=ResponseMetadata(
                provider=self.provider.get_provider(),
                processing_time_ms=processing_time_ms,
            ),
        )

    def parse_explanation(self, raw_response: str) -> ExplanationResult:
        """Parse provider output into an ExplanationResult.

        Raises:
            ParseError: If the output is not JSON or lacks required fields.
        """
        data = extract_json(raw_response)

        if not isinstance(data, dict) or not all(data.get(f) for f in REQUIRED_FIELDS):
            logger.error("Explanation missing required fields: %r", raw_response)
            raise ParseError("Missing required fields in explanation", raw_response=raw_response)

        if not isinstance(data["performance"], dict):
            raise ParseError("Explanation performance must be an object", raw_response=raw_response)

        try:
            return ExplanationResult.from_dict(data)
        except (KeyError, ValueError) as e:
            logger.error("Invalid explanation: %s", e)
            raise ParseError(f"Invalid explanation: {e}", raw_response=raw_response) from e
