"""LLM provider protocol definition."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from skillmatch.models.provider import LLMConfig, LLMMessage, LLMResponse


@runtime_checkable
class LLMProvider(Protocol):
    """Protocol for LLM providers.

    Any exception raised by ``complete`` is treated as a failed call.
    """

    async def complete(
        self,
        messages: list[LLMMessage],
        config: LLMConfig | None = None,
    ) -> LLMResponse:
        """Generate a completion from the model."""
        ...

    async def close(self) -> None:
        """Release the underlying HTTP client."""
        ...
