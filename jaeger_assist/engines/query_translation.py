"""Rule-based translation of natural-language queries into Jaeger search parameters."""

from __future__ import annotations

import logging
import re

from jaeger_assist.schemas.search_params import DEFAULT_LIMIT, DEFAULT_LOOKBACK, SearchParameters

logger = logging.getLogger(__name__)

UNKNOWN_SERVICE = "unknown-service"

# Tried in order, first match wins.
SERVICE_PATTERNS = [
    # "errors in user-api", "calls from auth-service"
    re.compile(r"\b(?:in|from|for)\s+(\w+-\w+)"),
    # "payment service", "auth-gateway", "frontend"
    re.compile(r"\b(payment|user|frontend|backend|api|database|auth)(?:-(\w+)|\s+(service)\b)?"),
]

HTTP_METHODS = ["get", "post", "put", "delete", "patch"]
DATABASE_KEYWORDS = ["select", "database", "db"]

DURATION_KEYWORDS = ["slow", "long"]
SLOW_THRESHOLD = "500ms"
DURATION_PATTERN = re.compile(r"(\d+)\s*(ms|millisecond|second|s|minute|m)")

# Checked in this order, first phrase found wins.
LOOKBACK_PHRASES = {
    "last hour": "1h",
    "past hour": "1h",
    "last 24 hours": "24h",
    "last day": "24h",
    "last week": "7d",
    "past week": "7d",
}
LOOKBACK_PATTERN = re.compile(r"(\d+)\s*(hour|h|day|d|week)")

REQUEST_PATTERN = re.compile(r"\b(?:http|request)\b")


class QueryTranslationEngine:
    """Converts free-form text into SearchParameters using pattern matching.

    Each field is extracted by an independent rule. Unmatched rules fall back
    to defaults ("unknown-service", no operation, "1h" lookback), so a result
    is always produced.
    """

    def extract(self, query: str) -> SearchParameters:
        """Extract search parameters from a natural-language query.

        Args:
            query: The user's query, in any case.

        Returns:
            A complete SearchParameters instance.
        """
        text = query.lower()

        params = SearchParameters(
            service=self.extract_service(text),
            operation=self.extract_operation(text),
            tags=self.extract_tags(text),
            min_duration=self.extract_min_duration(text),
            max_duration=None,
            lookback=self.extract_lookback(text) or DEFAULT_LOOKBACK,
            limit=DEFAULT_LIMIT,
        )

        logger.debug("Extracted %s from %r", params, query)
        return params

    def extract_service(self, text: str) -> str:
        for pattern in SERVICE_PATTERNS:
            match = pattern.search(text)
            if match:
                suffix = next((g for g in match.groups()[1:] if g), None)
                return f"{match.group(1)}-{suffix}" if suffix else match.group(1)
        return UNKNOWN_SERVICE

    def extract_operation(self, text: str) -> str | None:
        for method in HTTP_METHODS:
            if method in text:
                return f"HTTP {method.upper()}"

        if any(keyword in text for keyword in DATABASE_KEYWORDS):
            return "Database Query"

        return None

    def extract_tags(self, text: str) -> dict[str, str]:
        tags: dict[str, str] = {}

        if "error" in text or "fail" in text or "5xx" in text:
            tags["error"] = "true"

        if "database" in text or "db" in text:
            tags["db.type"] = "postgres"

        if REQUEST_PATTERN.search(text):
            tags["span.kind"] = "client"

        if "500" in text or "5xx" in text:
            tags["http.status_code"] = "500"

        # Runs last so it overrides a 500 match.
        if "404" in text:
            tags["http.status_code"] = "404"

        return tags

    def extract_min_duration(self, text: str) -> str | None:
        if any(keyword in text for keyword in DURATION_KEYWORDS):
            return SLOW_THRESHOLD

        match = DURATION_PATTERN.search(text)
        if not match:
            return None

        value, unit = match.group(1), match.group(2)
        if unit.startswith("m") and not unit.startswith("ms"):
            return f"{value}m"
        if unit.startswith("s"):
            return f"{value}s"
        return f"{value}ms"

    def extract_lookback(self, text: str) -> str | None:
        for phrase, lookback in LOOKBACK_PHRASES.items():
            if phrase in text:
                return lookback

        match = LOOKBACK_PATTERN.search(text)
        if not match:
            return None

        value, unit = match.group(1), match.group(2)
        if unit.startswith("w"):
            return f"{int(value) * 7}d"
        if unit.startswith("d"):
            return f"{value}d"
        return f"{value}h"
