"""Tests for the rule-based query translation engine."""

import pytest

from jaeger_assist.engines.query_translation import QueryTranslationEngine


@pytest.fixture
def engine():
    return QueryTranslationEngine()


class TestExamples:
    def test_slow_requests_in_payment_service(self, engine):
        params = engine.extract("show me slow requests in payment service")
        assert params.to_dict() == {
            "service": "payment-service",
            "operation": None,
            "tags": {},
            "minDuration": "500ms",
            "maxDuration": None,
            "lookback": "1h",
            "limit": 20,
        }

    def test_errors_in_user_api_last_hour(self, engine):
        params = engine.extract("errors in user-api from the last hour")
        assert params.to_dict() == {
            "service": "user-api",
            "operation": None,
            "tags": {"error": "true"},
            "minDuration": None,
            "maxDuration": None,
            "lookback": "1h",
            "limit": 20,
        }

    def test_get_requests_that_failed(self, engine):
        params = engine.extract("GET requests to frontend that failed")
        assert params.service == "frontend"
        assert params.operation == "HTTP GET"
        assert params.tags == {"error": "true"}

    def test_post_requests_last_24_hours(self, engine):
        params = engine.extract("POST requests in auth-service from the last 24 hours")
        assert params.service == "auth-service"
        assert params.operation == "HTTP POST"
        assert params.lookback == "24h"
        assert params.min_duration is None

    def test_database_calls_over_500ms(self, engine):
        params = engine.extract("database calls taking more than 500ms")
        assert params.service == "database"
        assert params.operation == "Database Query"
        assert params.tags["db.type"] == "postgres"
        assert params.min_duration == "500ms"

    def test_idempotent(self, engine):
        query = "slow POST calls in checkout-api with 500 errors in the past week"
        assert engine.extract(query) == engine.extract(query)


class TestService:
    def test_preposition_with_hyphenated_name(self, engine):
        assert engine.extract_service("traces for order-processor") == "order-processor"

    def test_keyword_with_hyphen_segment(self, engine):
        assert engine.extract_service("auth-gateway timeouts") == "auth-gateway"

    def test_keyword_alone(self, engine):
        assert engine.extract_service("backend latency") == "backend"

    def test_preposition_wins_over_keyword(self, engine):
        assert engine.extract_service("api calls in billing-svc") == "billing-svc"

    def test_unknown_service(self, engine):
        assert engine.extract("anything interesting lately?").service == "unknown-service"


class TestOperation:
    @pytest.mark.parametrize("verb", ["get", "post", "put", "delete", "patch"])
    def test_http_verbs(self, engine, verb):
        assert engine.extract_operation(f"{verb} calls") == f"HTTP {verb.upper()}"

    def test_first_verb_in_list_wins(self, engine):
        assert engine.extract_operation("post then get") == "HTTP GET"

    def test_database_query(self, engine):
        assert engine.extract_operation("select statements") == "Database Query"
        assert engine.extract_operation("slow db calls") == "Database Query"

    def test_no_operation(self, engine):
        assert engine.extract_operation("errors in user-api") is None


class TestTags:
    def test_error_keywords(self, engine):
        assert engine.extract_tags("failures")["error"] == "true"

    def test_5xx_sets_error_and_status(self, engine):
        assert engine.extract_tags("5xx responses") == {"error": "true", "http.status_code": "500"}

    def test_http_sets_client_kind(self, engine):
        assert engine.extract_tags("http calls")["span.kind"] == "client"

    def test_404_overrides_500(self, engine):
        tags = engine.extract_tags("500 and 404 responses")
        assert tags["http.status_code"] == "404"

    def test_db_tag(self, engine):
        assert engine.extract_tags("db timeouts")["db.type"] == "postgres"

    def test_empty(self, engine):
        assert engine.extract_tags("show me everything") == {}


class TestMinDuration:
    @pytest.mark.parametrize("query", ["slow checkout", "long running jobs taking 3 seconds"])
    def test_keyword_wins(self, engine, query):
        assert engine.extract(query).min_duration == "500ms"

    @pytest.mark.parametrize(
        "query,expected",
        [
            ("over 250ms", "250ms"),
            ("over 250 milliseconds", "250m"),
            ("more than 2 seconds", "2s"),
            ("above 3s", "3s"),
            ("over 5 minutes", "5m"),
            ("over 10m", "10m"),
        ],
    )
    def test_explicit_duration(self, engine, query, expected):
        assert engine.extract_min_duration(query) == expected

    def test_no_duration(self, engine):
        assert engine.extract_min_duration("errors everywhere") is None


class TestLookback:
    @pytest.mark.parametrize(
        "query,expected",
        [
            ("errors in the past hour", "1h"),
            ("errors in the last day", "24h"),
            ("errors in the last week", "7d"),
            ("errors in the past week", "7d"),
            ("errors in the last 3 days", "3d"),
            ("errors over 2 weeks", "14d"),
            ("errors in 12 hours", "12h"),
        ],
    )
    def test_lookback(self, engine, query, expected):
        assert engine.extract_lookback(query) == expected

    def test_default_lookback(self, engine):
        params = engine.extract("errors")
        assert params.lookback == "1h"
        assert params.limit == 20
