"""Jaeger search parameters.

Matches the parameters accepted by Jaeger's trace search API.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any

from jaeger_assist.errors import ValidationError

DEFAULT_LOOKBACK = "1h"
DEFAULT_LIMIT = 20

DURATION_PATTERN = re.compile(r"^\d+(ms|s|m)$")
LOOKBACK_PATTERN = re.compile(r"^\d+(h|d)$")


@dataclass(frozen=True)
class SearchParameters:
    """Structured Jaeger trace search query."""

    service: str
    operation: str | None = None
    tags: dict[str, str] = field(default_factory=dict)
    min_duration: str | None = None
    max_duration: str | None = None
    lookback: str = DEFAULT_LOOKBACK
    limit: int = DEFAULT_LIMIT

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the camelCase JSON form Jaeger clients expect."""
        return {
            "service": self.service,
            "operation": self.operation,
            "tags": dict(self.tags),
            "minDuration": self.min_duration,
            "maxDuration": self.max_duration,
            "lookback": self.lookback,
            "limit": self.limit,
        }


def build_search_params(data: Any) -> SearchParameters:
    """Apply defaults to decoded provider output and validate it.

    Args:
        data: Decoded JSON object returned by a completion provider.

    Returns:
        Validated SearchParameters.

    Raises:
        ValidationError: If ``service`` is missing or a field is malformed.
    """
    if not isinstance(data, dict):
        raise ValidationError("Search parameters must be a JSON object")

    service = data.get("service")
    if not isinstance(service, str) or not service.strip():
        raise ValidationError("Service name is required but was not extracted", field="service")

    operation = data.get("operation") or None
    if operation is not None and not isinstance(operation, str):
        raise ValidationError("Operation must be a string", field="operation")

    tags = data.get("tags") or {}
    if not isinstance(tags, dict):
        raise ValidationError("Tags must be an object", field="tags")

    min_duration = data.get("minDuration") or None
    max_duration = data.get("maxDuration") or None
    for name, value in (("minDuration", min_duration), ("maxDuration", max_duration)):
        if value is not None and not (isinstance(value, str) and DURATION_PATTERN.match(value)):
            raise ValidationError(f"Invalid {name} '{value}', expected e.g. 500ms, 2s, 5m", field=name)

    lookback = data.get("lookback") or DEFAULT_LOOKBACK
    if not (isinstance(lookback, str) and LOOKBACK_PATTERN.match(lookback)):
        raise ValidationError(f"Invalid lookback '{lookback}', expected e.g. 1h, 7d", field="lookback")

    limit = data.get("limit")
    if limit is None:
        limit = DEFAULT_LIMIT
    if isinstance(limit, bool) or not isinstance(limit, int) or limit <= 0:
        raise ValidationError(f"Invalid limit '{limit}', expected a positive integer", field="limit")

    return SearchParameters(
        service=service,
        operation=operation,
        tags={str(k): _tag_string(v) for k, v in tags.items()},
        min_duration=min_duration,
        max_duration=max_duration,
        lookback=lookback,
        limit=limit,
    )


def _tag_string(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)
