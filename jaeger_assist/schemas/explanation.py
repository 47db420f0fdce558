"""Structured span explanation returned to callers."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

MAX_KEY_DETAILS = 5


class Assessment(str, Enum):
    """Coarse latency bucket for a span."""

    FAST = "fast"
    NORMAL = "normal"
    SLOW = "slow"
    CRITICAL = "critical"


@dataclass(frozen=True)
class PerformanceInfo:
    duration: str
    assessment: Assessment

    def to_dict(self) -> dict[str, Any]:
        return {"duration": self.duration, "assessment": self.assessment.value}


@dataclass(frozen=True)
class ErrorInfo:
    has_error: bool
    error_type: str | None = None
    error_message: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "hasError": self.has_error,
            "errorType": self.error_type,
            "errorMessage": self.error_message,
        }


@dataclass(frozen=True)
class ExplanationResult:
    """Diagnostic explanation of a single span."""

    summary: str
    span_type: str
    performance: PerformanceInfo
    error_info: ErrorInfo | None = None
    key_details: tuple[str, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict[str, Any]:
        return {
            "summary": self.summary,
            "spanType": self.span_type,
            "performance": self.performance.to_dict(),
            "errorInfo": self.error_info.to_dict() if self.error_info else None,
            "keyDetails": list(self.key_details),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ExplanationResult:
        """Build from decoded provider output.

        Raises:
            KeyError: If summary, spanType or performance is missing.
            ValueError: If the assessment is not a known bucket.
        """
        performance = data["performance"]
        error_info = data.get("errorInfo")
        details = data.get("keyDetails") or []

        return cls(
            summary=str(data["summary"]),
            span_type=str(data["spanType"]),
            performance=PerformanceInfo(
                duration=str(performance.get("duration", "")),
                assessment=Assessment(performance.get("assessment", Assessment.NORMAL.value)),
            ),
            error_info=(
                ErrorInfo(
                    has_error=bool(error_info.get("hasError", True)),
                    error_type=error_info.get("errorType"),
                    error_message=error_info.get("errorMessage"),
                )
                if isinstance(error_info, dict)
                else None
            ),
            key_details=tuple(str(d) for d in details)[:MAX_KEY_DETAILS],
        )


# Returned when span data in a prompt cannot be parsed at all. Kept literal
# rather than derived from the threshold rules.
DEFAULT_EXPLANATION = ExplanationResult(
    summary="Unable to analyze span data",
    span_type="Unknown",
    performance=PerformanceInfo(duration="0ms", assessment=Assessment.NORMAL),
    error_info=None,
    key_details=(),
)
