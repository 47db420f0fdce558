"""Tests for the deterministic completion provider."""

import asyncio
import json

from jaeger_assist.llm.models import CompletionRequest, RequestKind
from jaeger_assist.prompts.explain import build_explain_span_prompt
from jaeger_assist.prompts.query import build_query_translation_prompt
from jaeger_assist.schemas.span import SpanRecord


def complete(provider, **kwargs):
    return asyncio.run(provider.complete(CompletionRequest(**kwargs)))


class TestQueryTranslation:
    def test_translates_user_query(self, mock_provider):
        prompt = build_query_translation_prompt("errors in user-api from the last hour")
        response = complete(mock_provider, prompt=prompt)

        params = json.loads(response.content)
        assert params["service"] == "user-api"
        assert params["tags"] == {"error": "true"}
        assert response.metadata.model == "mock-llm-v1"
        assert response.metadata.tokens_used == 50
        assert response.metadata.provider == "mock"

    def test_ignores_system_prompt_text(self, mock_provider):
        # The system prompt mentions "slow", "errors" and "GET"; only the query counts.
        prompt = build_query_translation_prompt("traces in checkout-api")
        params = json.loads(complete(mock_provider, prompt=prompt).content)
        assert params == {
            "service": "checkout-api",
            "operation": None,
            "tags": {},
            "minDuration": None,
            "maxDuration": None,
            "lookback": "1h",
            "limit": 20,
        }

    def test_bare_prompt_used_as_query(self, mock_provider):
        params = json.loads(complete(mock_provider, prompt="Slow Requests in Payment Service").content)
        assert params["service"] == "payment-service"
        assert params["minDuration"] == "500ms"

    def test_extract_user_query(self, mock_provider):
        prompt = 'System text\n\nUser Query: "Show the "Fast" path"\n\nJSON Output:'
        assert mock_provider.extract_user_query(prompt) == 'show the "fast" path'


class TestSpanExplanation:
    def test_dispatch_on_marker(self, mock_provider, server_error_span):
        prompt = build_explain_span_prompt(SpanRecord.from_dict(server_error_span))
        response = complete(mock_provider, prompt=prompt)

        explanation = json.loads(response.content)
        assert explanation["spanType"] == "HTTP Server"
        assert explanation["errorInfo"]["errorType"] == "HTTP 500"
        assert explanation["errorInfo"]["errorMessage"] == "Database connection timeout"
        assert response.metadata.tokens_used == 100

    def test_unparsable_span_data(self, mock_provider):
        response = complete(mock_provider, prompt="Span Data:\n{not json}\n\nJSON Output:")
        assert json.loads(response.content) == {
            "summary": "Unable to analyze span data",
            "spanType": "Unknown",
            "performance": {"duration": "0ms", "assessment": "normal"},
            "errorInfo": None,
            "keyDetails": [],
        }

    def test_missing_fields_default(self, mock_provider):
        response = complete(mock_provider, prompt='Span Data: {"tags": []}')
        explanation = json.loads(response.content)
        assert explanation["spanType"] == "Unknown Operation"
        assert explanation["summary"] == (
            "Unknown Operation: operation from unknown service, completed successfully"
        )
        assert explanation["keyDetails"] == []

    def test_non_finite_status_code(self, mock_provider):
        prompt = (
            'Span Data: {"operationName": "GET /", "serviceName": "s", "duration": 1000, '
            '"tags": [{"key": "http.status_code", "value": NaN}]}'
        )
        explanation = json.loads(complete(mock_provider, prompt=prompt).content)
        assert explanation["errorInfo"] is None
        assert explanation["performance"]["assessment"] == "fast"


class TestExplicitKind:
    def test_kind_overrides_marker(self, mock_provider):
        prompt = build_query_translation_prompt("Span Data: errors in user-api")
        response = complete(mock_provider, prompt=prompt, kind=RequestKind.QUERY_TRANSLATION)
        assert json.loads(response.content)["service"] == "user-api"

    def test_marker_alone_routes_to_explanation(self, mock_provider):
        prompt = build_query_translation_prompt("Span Data: errors in user-api")
        response = complete(mock_provider, prompt=prompt)
        assert "spanType" in json.loads(response.content)

    def test_explanation_kind_without_span(self, mock_provider):
        response = complete(mock_provider, prompt="no span here", kind=RequestKind.SPAN_EXPLANATION)
        assert json.loads(response.content)["summary"] == "Unable to analyze span data"


class TestProviderInfo:
    def test_always_configured(self, mock_provider):
        assert mock_provider.is_configured()
        assert mock_provider.get_provider() == "mock"
