"""Completion provider interface.

Every provider, deterministic or network-backed, implements this interface so
the services can be wired to either without changes.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from jaeger_assist.llm.models import CompletionRequest, CompletionResponse


class CompletionProvider(ABC):
    """Abstract base for completion providers."""

    @abstractmethod
    async def complete(self, request: CompletionRequest) -> CompletionResponse:
        """Generate a completion for ``request``."""

    @abstractmethod
    def is_configured(self) -> bool:
        """Whether the provider has everything it needs to serve requests."""

    @abstractmethod
    def get_provider(self) -> str:
        """Short provider name reported in response metadata."""
