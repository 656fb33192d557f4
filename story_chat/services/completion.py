"""Streaming wrapper around the OpenAI chat completions API."""

from __future__ import annotations

from typing import Any, Iterable, Iterator, Mapping, Optional, Sequence, Tuple

import openai
from flask import current_app

CLIENT_EXTENSION_KEY = "completion_client"


class CompletionProviderError(RuntimeError):
    """Raised when the completion provider cannot be configured."""


class OpenAIStoryStreamer:
    """
    Relays a chat history to a chat-completions model in streaming mode and
    yields the text of each delta as it arrives.

    Compatible with OpenAI Python SDK >= 1.0.
    """

    def __init__(self, model_name: str, api_key: str, *, client: Optional[Any] = None) -> None:
        self.model_name = (model_name or "").strip()
        self.api_key = (api_key or "").strip()
        if not self.model_name:
            raise CompletionProviderError("A model name is required.")
        if client is None:
            if not self.api_key:
                raise CompletionProviderError("OPENAI_API_KEY is not configured.")
            client = openai.OpenAI(api_key=self.api_key)
        self._client = client

    def stream_chat(self, messages: Sequence[Mapping[str, str]]) -> Iterator[str]:
        """Open a streaming completion and return an iterator over its text.

        The request is sent before this returns, so a provider that rejects it
        raises here rather than from the first ``next()`` call.
        """

        stream = self._client.chat.completions.create(
            model=self.model_name,
            messages=list(messages),
            stream=True,
        )
        return self._iter_fragments(stream)

    def _iter_fragments(self, stream: Iterable[Any]) -> Iterator[str]:
        for chunk in stream:
            content = self._extract_delta_text(chunk)
            if content:
                yield content

    def signature(self) -> Tuple[str, str]:
        # Never return raw secrets
        redacted = (self.api_key[:4] + "…" + self.api_key[-4:]) if self.api_key else ""
        return (self.model_name, redacted)

    # ---------------- extractors ----------------
    @staticmethod
    def _extract_delta_text(chunk: Any) -> str:
        choices = getattr(chunk, "choices", None) or []
        if not choices:
            return ""
        delta = getattr(choices[0], "delta", None)
        if isinstance(delta, dict):
            content = delta.get("content")
        else:
            content = getattr(delta, "content", None)
        return str(content or "")


def get_completion_client() -> OpenAIStoryStreamer:
    """Return the app's streamer, creating it on first use."""

    app = current_app
    client = app.extensions.get(CLIENT_EXTENSION_KEY)
    if client is not None:
        return client

    client = OpenAIStoryStreamer(
        app.config.get("OPENAI_MODEL") or "",
        app.config.get("OPENAI_API_KEY") or "",
    )
    model_name, redacted_key = client.signature()
    app.logger.info("Initialised OpenAI streamer for model %s (key %s)", model_name, redacted_key)
    app.extensions[CLIENT_EXTENSION_KEY] = client
    return client
