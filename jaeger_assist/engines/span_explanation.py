"""Rule-based diagnostic explanation of Jaeger spans."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from jaeger_assist.schemas.explanation import (
    MAX_KEY_DETAILS,
    Assessment,
    ErrorInfo,
    ExplanationResult,
    PerformanceInfo,
)
from jaeger_assist.schemas.span import (
    SpanLog,
    SpanRecord,
    find_tag,
    format_tag_value,
    get_tag_value,
    has_error,
)

logger = logging.getLogger(__name__)

MAX_STATEMENT_LENGTH = 100


@dataclass(frozen=True)
class Thresholds:
    """Upper bounds (exclusive, in ms) of the fast, normal and slow buckets."""

    fast: float
    normal: float
    slow: float

    def assess(self, duration_ms: float) -> Assessment:
        if duration_ms < self.fast:
            return Assessment.FAST
        if duration_ms < self.normal:
            return Assessment.NORMAL
        if duration_ms < self.slow:
            return Assessment.SLOW
        return Assessment.CRITICAL


DEFAULT_THRESHOLDS = Thresholds(fast=100, normal=500, slow=2000)
DATABASE_THRESHOLDS = Thresholds(fast=50, normal=200, slow=1000)
RPC_THRESHOLDS = Thresholds(fast=50, normal=300, slow=1000)

# Tag key -> label used in key details.
DETAIL_LABELS = {
    "http.method": "http.method",
    "http.status_code": "http.status_code",
    "db.type": "Database",
    "db.statement": "Query",
    "span.kind": "Span kind",
    "component": "Component",
}


class SpanExplanationEngine:
    """Explains a span by classifying it and applying latency/error rules."""

    def analyze(self, span: SpanRecord) -> ExplanationResult:
        """Build a structured explanation for ``span``.

        Args:
            span: The span to explain. Duration is in microseconds.

        Returns:
            ExplanationResult describing type, latency, errors and key tags.
        """
        duration_ms = span.duration / 1000

        span_type = self.detect_span_type(span)
        error_info = self.extract_error_info(span)

        result = ExplanationResult(
            summary=self.build_summary(span, span_type, error_info),
            span_type=span_type,
            performance=PerformanceInfo(
                duration=format_duration_ms(duration_ms),
                assessment=self.assess_performance(span_type, duration_ms),
            ),
            error_info=error_info,
            key_details=self.extract_key_details(span),
        )

        logger.debug(
            "Analyzed span %s: type=%s, assessment=%s, error=%s",
            span.span_id or span.operation_name,
            span_type,
            result.performance.assessment.value,
            error_info is not None,
        )
        return result

    def detect_span_type(self, span: SpanRecord) -> str:
        if find_tag(span.tags, "http.method"):
            return "HTTP Server" if get_tag_value(span, "span.kind") == "server" else "HTTP Client"

        if find_tag(span.tags, "db.type", "db.statement"):
            return "Database Query"

        if find_tag(span.tags, "rpc.service") or "grpc" in span.operation_name.lower():
            return "gRPC Call"

        return span.operation_name or "Unknown Operation"

    def assess_performance(self, span_type: str, duration_ms: float) -> Assessment:
        thresholds = DEFAULT_THRESHOLDS
        if "Database" in span_type:
            thresholds = DATABASE_THRESHOLDS
        elif "RPC" in span_type or "gRPC" in span_type:
            thresholds = RPC_THRESHOLDS
        return thresholds.assess(duration_ms)

    def extract_error_info(self, span: SpanRecord) -> ErrorInfo | None:
        if not has_error(span):
            return None

        status_tag = find_tag(span.tags, "http.status_code")
        if status_tag:
            error_type = f"HTTP {format_tag_value(status_tag.value)}"
        else:
            error_type = "Error"

        return ErrorInfo(
            has_error=True,
            error_type=error_type,
            error_message=self._find_error_message(span.logs or ()),
        )

    def _find_error_message(self, logs: tuple[SpanLog, ...]) -> str | None:
        for log in logs:
            field = find_tag(log.fields, "message") or find_tag(log.fields, "error")
            if field is None:
                continue
            if field.value in ("", None):
                return None
            return format_tag_value(field.value)
        return None

    def extract_key_details(self, span: SpanRecord) -> tuple[str, ...]:
        details: list[str] = []

        for tag in span.tags:
            label = DETAIL_LABELS.get(tag.key)
            if label is None:
                continue
            value = format_tag_value(tag.value)
            if tag.key == "db.statement" and len(value) >= MAX_STATEMENT_LENGTH:
                continue
            details.append(f"{label}: {value}")

        if span.service_name:
            details.append(f"Service: {span.service_name}")

        return tuple(details[:MAX_KEY_DETAILS])

    def build_summary(self, span: SpanRecord, span_type: str, error_info: ErrorInfo | None) -> str:
        service = span.service_name or "unknown service"
        operation = span.operation_name or "operation"
        status = "with errors" if error_info else "completed successfully"
        return f"{span_type}: {operation} from {service}, {status}"


def format_duration_ms(duration_ms: float) -> str:
    """Format a millisecond duration as μs, ms or s with two decimals."""
    if duration_ms < 1:
        return f"{duration_ms * 1000:.2f}μs"
    if duration_ms < 1000:
        return f"{duration_ms:.2f}ms"
    return f"{duration_ms / 1000:.2f}s"
