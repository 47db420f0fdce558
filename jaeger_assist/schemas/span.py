"""Jaeger span data model.

Mirrors the span structure returned by Jaeger's query API. Times and
durations are in microseconds. Tag keys are not unique; lookups return the
first matching tag.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from enum import Enum
from typing import Any, Union

from jaeger_assist.errors import ValidationError

TagValue = Union[str, int, float, bool]

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


class RefType(str, Enum):
    """Relationship between two spans."""

    CHILD_OF = "CHILD_OF"
    FOLLOWS_FROM = "FOLLOWS_FROM"


@dataclass(frozen=True)
class SpanTag:
    """A key/value attribute on a span or log event."""

    key: str
    value: TagValue

    def to_dict(self) -> dict[str, Any]:
        return {"key": self.key, "value": self.value}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> SpanTag:
        return cls(key=str(data.get("key", "")), value=data.get("value", ""))


@dataclass(frozen=True)
class SpanLog:
    """A timestamped event recorded inside a span."""

    timestamp: int
    fields: tuple[SpanTag, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {
            "timestamp": self.timestamp,
            "fields": [f.to_dict() for f in self.fields],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> SpanLog:
        return cls(
            timestamp=data.get("timestamp", 0),
            fields=_tags_from_list(data.get("fields")),
        )


@dataclass(frozen=True)
class SpanReference:
    """Reference to another span (parent or predecessor)."""

    ref_type: RefType
    trace_id: str
    span_id: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "refType": self.ref_type.value,
            "traceID": self.trace_id,
            "spanID": self.span_id,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> SpanReference:
        return cls(
            ref_type=RefType(data.get("refType", RefType.CHILD_OF.value)),
            trace_id=str(data.get("traceID", "")),
            span_id=str(data.get("spanID", "")),
        )


@dataclass(frozen=True)
class SpanProcess:
    """Process information attached to a span."""

    service_name: str
    tags: tuple[SpanTag, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {
            "serviceName": self.service_name,
            "tags": [t.to_dict() for t in self.tags],
        }


@dataclass(frozen=True)
class SpanRecord:
    """A single timed operation within a distributed trace."""

    span_id: str = ""
    trace_id: str = ""
    operation_name: str = ""
    service_name: str = ""
    start_time: int = 0
    duration: float = 0
    tags: tuple[SpanTag, ...] = ()
    logs: tuple[SpanLog, ...] | None = None
    references: tuple[SpanReference, ...] | None = None
    process: SpanProcess | None = None

    @property
    def duration_ms(self) -> float:
        """Duration in milliseconds."""
        return self.duration / 1000

    def to_dict(self) -> dict[str, Any]:
        """Serialize to Jaeger's camelCase JSON form."""
        data: dict[str, Any] = {
            "spanID": self.span_id,
            "traceID": self.trace_id,
            "operationName": self.operation_name,
            "serviceName": self.service_name,
            "startTime": self.start_time,
            "duration": self.duration,
            "tags": [t.to_dict() for t in self.tags],
        }
        if self.logs is not None:
            data["logs"] = [log.to_dict() for log in self.logs]
        if self.references is not None:
            data["references"] = [r.to_dict() for r in self.references]
        if self.process is not None:
            data["process"] = self.process.to_dict()
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> SpanRecord:
        """Build a span leniently, defaulting anything that is missing.

        Use validate_span() for input that must be well-formed.
        """
        logs = data.get("logs")
        references = data.get("references")
        process = data.get("process")
        duration = data.get("duration")
        if isinstance(duration, bool) or not isinstance(duration, (int, float)):
            duration = 0

        return cls(
            span_id=str(data.get("spanID") or ""),
            trace_id=str(data.get("traceID") or ""),
            operation_name=str(data.get("operationName") or ""),
            service_name=str(data.get("serviceName") or ""),
            start_time=data.get("startTime") or 0,
            duration=duration,
            tags=_tags_from_list(data.get("tags")),
            logs=(
                tuple(SpanLog.from_dict(log) for log in logs if isinstance(log, dict))
                if isinstance(logs, list)
                else None
            ),
            references=(
                tuple(SpanReference.from_dict(r) for r in references if isinstance(r, dict))
                if isinstance(references, list)
                else None
            ),
            process=(
                SpanProcess(
                    service_name=str(process.get("serviceName", "")),
                    tags=_tags_from_list(process.get("tags")),
                )
                if isinstance(process, dict)
                else None
            ),
        )


def _tags_from_list(items: Any) -> tuple[SpanTag, ...]:
    if not isinstance(items, list):
        return ()
    return tuple(SpanTag.from_dict(item) for item in items if isinstance(item, dict))


def validate_span(data: Any) -> SpanRecord:
    """Validate raw span input and build a SpanRecord.

    Args:
        data: Decoded JSON object for a single span.

    Returns:
        The validated span.

    Raises:
        ValidationError: If a required field is missing or malformed.
    """
    if not isinstance(data, dict):
        raise ValidationError("Span object is required", field="span")

    for key in ("spanID", "traceID", "operationName", "serviceName"):
        if not data.get(key):
            raise ValidationError(f"Span field '{key}' is required", field=key)

    duration = data.get("duration")
    if isinstance(duration, bool) or not isinstance(duration, (int, float)):
        raise ValidationError("Span field 'duration' must be a number", field="duration")
    if duration < 0:
        raise ValidationError("Span field 'duration' must not be negative", field="duration")

    tags = data.get("tags")
    if not isinstance(tags, list):
        raise ValidationError("Span field 'tags' must be a list", field="tags")
    for tag in tags:
        if not isinstance(tag, dict) or "key" not in tag:
            raise ValidationError("Each span tag must be an object with a 'key'", field="tags")

    logs = data.get("logs")
    if logs is not None and not isinstance(logs, list):
        raise ValidationError("Span field 'logs' must be a list", field="logs")

    try:
        return SpanRecord.from_dict(data)
    except ValueError as e:
        raise ValidationError(f"Invalid span structure: {e}", field="references") from e


def find_tag(tags: tuple[SpanTag, ...], *keys: str) -> SpanTag | None:
    """Return the first tag whose key is one of ``keys``."""
    for tag in tags:
        if tag.key in keys:
            return tag
    return None


def get_tag_value(span: SpanRecord, key: str) -> TagValue | None:
    """Return the value of the first tag with ``key``, or None."""
    tag = find_tag(span.tags, key)
    return tag.value if tag else None


def parse_status_code(value: TagValue | None) -> int | None:
    """Parse an HTTP status code tag value given as a number or numeric string."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, float):
        return int(value) if math.isfinite(value) else None
    if isinstance(value, int):
        return value
    match = _LEADING_INT.match(str(value))
    return int(match.group(1)) if match else None


def is_truthy_error(value: TagValue | None) -> bool:
    return value is True or value == "true"


def has_error(span: SpanRecord) -> bool:
    """Whether the span is flagged as an error or returned a 5xx status."""
    if is_truthy_error(get_tag_value(span, "error")):
        return True
    status = parse_status_code(get_tag_value(span, "http.status_code"))
    return status is not None and status >= 500


def format_tag_value(value: Any) -> str:
    """Render a tag value the way it appears in Jaeger's JSON (``true``, ``200``, ``null``)."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)

