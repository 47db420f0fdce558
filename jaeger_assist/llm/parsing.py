"""Recover JSON from free-form model output."""

from __future__ import annotations

import json
import logging
from typing import Any

from jaeger_assist.errors import ParseError

logger = logging.getLogger(__name__)

_FENCE_MARKERS = ("```json", "```")


def extract_json(raw: str) -> Any:
    """Parse the JSON object embedded in a model response.

    Strips markdown code fences, then takes everything from the first ``{``
    to the last ``}`` as the candidate. The span is greedy, not
    brace-balanced: prose containing braces, or several JSON objects in one
    response, will produce an invalid candidate.

    Args:
        raw: Text returned by a completion provider.

    Returns:
        The decoded JSON value.

    Raises:
        ParseError: If no valid JSON can be recovered.
    """
    cleaned = raw.strip()
    for marker in _FENCE_MARKERS:
        cleaned = cleaned.replace(marker, "")

    start = cleaned.find("{")
    end = cleaned.rfind("}")
    if start != -1 and end > start:
        cleaned = cleaned[start:end + 1]

    try:
        return json.loads(cleaned)
    except json.JSONDecodeError as e:
        logger.error("Failed to parse LLM response: %s (response=%r)", e, raw)
        raise ParseError("Failed to parse LLM response as JSON", raw_response=raw) from e
