"""Prompt for generating technical explanations of Jaeger spans."""

from __future__ import annotations

import json

from jaeger_assist.llm.models import SPAN_DATA_MARKER
from jaeger_assist.schemas.span import SpanRecord

EXPLAIN_SPAN_SYSTEM_PROMPT = """You are a Jaeger trace span analyzer.
Your ONLY job is to generate technical summaries of trace spans.

RULES:
1. Output ONLY valid JSON matching the schema below
2. NO assumptions about data not provided
3. NO guessing or hallucinating information
4. Be technical and concise
5. NO markdown, NO explanatory text outside JSON
6. If a field has no data, use null or empty array
7. Base all analysis ONLY on provided span data

SCHEMA:
{
  "summary": string,
  "spanType": string,
  "performance": {
    "duration": string,
    "assessment": "fast" | "normal" | "slow" | "critical"
  },
  "errorInfo": {
    "hasError": boolean,
    "errorType": string | null,
    "errorMessage": string | null
  } | null,
  "keyDetails": string[]
}

PERFORMANCE ASSESSMENT RULES (duration is in microseconds):
- HTTP calls: <100ms=fast, 100-500ms=normal, 500ms-2s=slow, >2s=critical
- Database: <50ms=fast, 50-200ms=normal, 200ms-1s=slow, >1s=critical
- RPC/gRPC: <50ms=fast, 50-300ms=normal, 300ms-1s=slow, >1s=critical
- Other: <100ms=fast, 100-500ms=normal, 500ms-2s=slow, >2s=critical

SPAN TYPE DETECTION:
- If tags contain "http.method" -> "HTTP Client" or "HTTP Server"
- If tags contain "db.type" or "db.statement" -> "Database Query"
- If tags contain "rpc.service" or operationName contains "grpc" -> "gRPC Call"
- Otherwise use operationName or "Unknown Operation"

EXAMPLE:

Input:
{
  "operationName": "HTTP GET /api/users",
  "serviceName": "frontend",
  "duration": 45000,
  "tags": [
    {"key": "http.method", "value": "GET"},
    {"key": "http.status_code", "value": 200},
    {"key": "span.kind", "value": "client"}
  ]
}

Output:
{"summary":"HTTP Client: HTTP GET /api/users from frontend, completed successfully","spanType":"HTTP Client","performance":{"duration":"45.00ms","assessment":"fast"},"errorInfo":null,"keyDetails":["http.method: GET","http.status_code: 200","Span kind: client","Service: frontend"]}

Remember: Output ONLY JSON. No other text."""


def build_explain_span_prompt(span: SpanRecord) -> str:
    """Construct the full prompt for explaining ``span``."""
    span_data = {
        "operationName": span.operation_name,
        "serviceName": span.service_name,
        "duration": span.duration,
        "tags": [t.to_dict() for t in span.tags],
    }
    if span.logs is not None:
        span_data["logs"] = [log.to_dict() for log in span.logs]

    return (
        f"{EXPLAIN_SPAN_SYSTEM_PROMPT}\n\n"
        f"{SPAN_DATA_MARKER}\n{json.dumps(span_data, indent=2, ensure_ascii=False)}\n\n"
        "JSON Output:"
    )
