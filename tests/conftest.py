"""Shared test fixtures for the jaeger-assist test suite."""

from __future__ import annotations

import pytest

from jaeger_assist.config import LLMConfig, LoggingConfig, Settings
from jaeger_assist.llm.mock import MockCompletionProvider
from jaeger_assist.llm.models import CompletionRequest, CompletionResponse
from jaeger_assist.llm.provider import CompletionProvider


class StubProvider(CompletionProvider):
    """Provider returning canned content and recording requests."""

    def __init__(self, content: str = "{}", configured: bool = True) -> None:
        self.content = content
        self.configured = configured
        self.requests: list[CompletionRequest] = []

    async def complete(self, request: CompletionRequest) -> CompletionResponse:
        self.requests.append(request)
        return CompletionResponse(content=self.content)

    def is_configured(self) -> bool:
        return self.configured

    def get_provider(self) -> str:
        return "stub"


@pytest.fixture
def test_settings():
    """Create test settings with sensible defaults."""
    return Settings(
        llm=LLMConfig(provider="mock", query_max_tokens=256, explain_max_tokens=512),
        logging=LoggingConfig(level="DEBUG"),
        anthropic_api_key="test-key",
    )


@pytest.fixture
def mock_provider():
    return MockCompletionProvider()


@pytest.fixture
def http_client_span():
    """Fast successful HTTP client call."""
    return {
        "spanID": "abc123def456",
        "traceID": "trace-001-http-success",
        "operationName": "HTTP GET /api/users",
        "serviceName": "frontend",
        "startTime": 1675234567000000,
        "duration": 45000,
        "tags": [
            {"key": "http.method", "value": "GET"},
            {"key": "http.status_code", "value": 200},
            {"key": "span.kind", "value": "client"},
        ],
        "logs": [],
    }


@pytest.fixture
def server_error_span():
    """HTTP 500 from a server span with an error log."""
    return {
        "spanID": "err500internal",
        "traceID": "trace-004-http-error",
        "operationName": "HTTP POST /api/payment",
        "serviceName": "payment-service",
        "startTime": 1675234570000000,
        "duration": 85000,
        "tags": [
            {"key": "http.method", "value": "POST"},
            {"key": "http.url", "value": "https://api.example.com/api/payment"},
            {"key": "http.status_code", "value": 500},
            {"key": "span.kind", "value": "server"},
            {"key": "error", "value": True},
            {"key": "component", "value": "express"},
        ],
        "logs": [
            {
                "timestamp": 1675234570080000,
                "fields": [
                    {"key": "event", "value": "error"},
                    {"key": "error.kind", "value": "InternalServerError"},
                    {"key": "message", "value": "Database connection timeout"},
                ],
            },
        ],
    }


@pytest.fixture
def slow_db_span():
    """Slow PostgreSQL query."""
    return {
        "spanID": "db-slow-noindex",
        "traceID": "trace-102-db-slow",
        "operationName": "SELECT orders WHERE customer_email = ?",
        "serviceName": "order-service",
        "startTime": 1675234568000000,
        "duration": 850000,
        "tags": [
            {"key": "db.type", "value": "postgres"},
        ],
    }
