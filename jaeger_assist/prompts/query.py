"""Prompt for translating natural language into Jaeger search parameters."""

from __future__ import annotations

from typing import Any

QUERY_TRANSLATION_SYSTEM_PROMPT = """You are a Jaeger trace query translator.
Your ONLY job is to convert natural language into valid Jaeger search parameters.

RULES:
1. Output ONLY valid JSON matching the schema below
2. NO explanations, NO markdown, NO conversational text
3. If you cannot determine a field, use null
4. Always extract the service name (required)
5. Infer operation names from verbs (e.g., "GET", "POST", "SELECT")
6. Extract tags from context (e.g., "errors" -> {"error": "true"})
7. Parse duration hints (e.g., "slow" -> minDuration: "500ms")
8. Default lookback to "1h" if not specified
9. Default limit to 20 if not specified

SCHEMA:
{
  "service": string (required),
  "operation": string | null,
  "tags": object,
  "minDuration": string | null,
  "maxDuration": string | null,
  "lookback": string,
  "limit": number
}

DURATION FORMAT: Use "ms", "s", "m" (e.g., "500ms", "2s", "5m")
LOOKBACK FORMAT: Use "h", "d" (e.g., "1h", "24h", "7d")

EXAMPLES:

Input: "show me slow requests in payment service"
Output: {"service":"payment-service","operation":null,"tags":{},"minDuration":"500ms","maxDuration":null,"lookback":"1h","limit":20}

Input: "errors in user-api from the last hour"
Output: {"service":"user-api","operation":null,"tags":{"error":"true"},"minDuration":null,"maxDuration":null,"lookback":"1h","limit":20}

Input: "GET requests to frontend that failed"
Output: {"service":"frontend","operation":"HTTP GET","tags":{"error":"true"},"minDuration":null,"maxDuration":null,"lookback":"1h","limit":20}

Remember: Output ONLY JSON. No other text."""


def build_query_translation_prompt(user_query: str, context: dict[str, Any] | None = None) -> str:
    """Construct the full prompt for a user query.

    Args:
        user_query: The natural-language query.
        context: Optional hints, ``recentServices`` and ``defaultService``.
    """
    hints = []
    if context:
        recent = context.get("recentServices") or []
        if recent:
            hints.append(f"Recent Services: {', '.join(recent)}")
        if context.get("defaultService"):
            hints.append(f"Default Service: {context['defaultService']}")

    sections = [QUERY_TRANSLATION_SYSTEM_PROMPT]
    if hints:
        sections.append("\n".join(hints))
    sections.append(f'User Query: "{user_query}"')
    sections.append("JSON Output:")
    return "\n\n".join(sections)
