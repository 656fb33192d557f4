"""Service layer helpers for the story relay."""

from __future__ import annotations

from .completion import (  # noqa: F401
    CompletionProviderError,
    OpenAIStoryStreamer,
    get_completion_client,
)

__all__ = [
    "CompletionProviderError",
    "OpenAIStoryStreamer",
    "get_completion_client",
]
