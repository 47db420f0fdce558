"""Data models for completion requests and responses."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

# Prompts for span explanation embed the span JSON after this marker.
SPAN_DATA_MARKER = "Span Data:"


class RequestKind(str, Enum):
    """What a completion request is asking for."""

    QUERY_TRANSLATION = "query_translation"
    SPAN_EXPLANATION = "span_explanation"


@dataclass(frozen=True)
class CompletionRequest:
    """A prompt sent to a completion provider.

    ``kind`` is optional; providers that need to know the request type fall
    back to inspecting the prompt for SPAN_DATA_MARKER when it is not set.
    """

    prompt: str
    temperature: float | None = None
    max_tokens: int | None = None
    model: str | None = None
    kind: RequestKind | None = None

    @property
    def resolved_kind(self) -> RequestKind:
        if self.kind is not None:
            return self.kind
        if SPAN_DATA_MARKER in self.prompt:
            return RequestKind.SPAN_EXPLANATION
        return RequestKind.QUERY_TRANSLATION


@dataclass(frozen=True)
class CompletionMetadata:
    """Provider-specific response metadata."""

    model: str | None = None
    tokens_used: int | None = None
    provider: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "model": self.model,
            "tokensUsed": self.tokens_used,
            "provider": self.provider,
        }


@dataclass(frozen=True)
class CompletionResponse:
    """Raw text returned by a provider, expected to contain JSON."""

    content: str
    metadata: CompletionMetadata | None = None
