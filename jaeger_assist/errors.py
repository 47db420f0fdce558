"""Exception hierarchy shared by the engines, providers and services."""

from __future__ import annotations


class JaegerAssistError(Exception):
    """Base exception for all jaeger-assist errors."""


class ValidationError(JaegerAssistError):
    """Raised when a required field is missing or malformed."""

    def __init__(self, message: str, field: str | None = None) -> None:
        self.field = field
        super().__init__(message)


class ParseError(JaegerAssistError):
    """Raised when provider output cannot be recovered as JSON."""

    def __init__(self, message: str, raw_response: str) -> None:
        self.raw_response = raw_response
        super().__init__(message)


class ConfigurationError(JaegerAssistError):
    """Raised when a completion provider is missing or not configured."""

    def __init__(self, provider: str, message: str) -> None:
        self.provider = provider
        super().__init__(f"[{provider}] {message}")


class ProviderError(JaegerAssistError):
    """Raised when a network-backed provider fails to produce a completion."""

    def __init__(self, provider: str, message: str, details: dict | None = None) -> None:
        self.provider = provider
        self.details = details or {}
        super().__init__(f"[{provider}] {message}")
