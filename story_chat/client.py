"""Conversation client for the story relay.

:class:`ConversationClient` keeps the whole conversation in memory, posts the
history to ``/api/chat`` and appends the streamed reply to an assistant
message as each fragment arrives. Only one request may be in flight at a
time; the ``loading`` flag is the sole guard, exactly as a disabled input box
would be in the browser.
"""

from __future__ import annotations

import logging
from typing import Callable, List, Optional

import httpx

from .config import DEFAULT_SERVER_URL
from .models import Character, Message, new_message_id
from .prompts import build_character_introduction

LOGGER = logging.getLogger(__name__)

CHAT_PATH = "/api/chat"

FragmentCallback = Callable[[str], None]


class RelayRequestError(RuntimeError):
    """Raised when the relay answers with anything but a 2xx status."""

    def __init__(self, status_code: int) -> None:
        super().__init__(f"Failed to send message (HTTP {status_code})")
        self.status_code = status_code


class ConversationClient:
    def __init__(
        self,
        base_url: str = DEFAULT_SERVER_URL,
        *,
        http_client: Optional[httpx.Client] = None,
        on_fragment: Optional[FragmentCallback] = None,
    ) -> None:
        self.messages: List[Message] = []
        self.input = ""
        self.character: Optional[Character] = None
        self.loading = False
        self.on_fragment = on_fragment
        self._http = http_client or httpx.Client(base_url=base_url, timeout=None)

    def close(self) -> None:
        self._http.close()

    def __enter__(self) -> "ConversationClient":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def create_character(
        self,
        name: str,
        description: Optional[str] = None,
        personality: Optional[str] = None,
    ) -> Optional[Message]:
        """Start a new story around a character and request the opening reply.

        Returns the assistant message, or ``None`` when the name is blank or
        no reply could be streamed.
        """

        if not (name or "").strip() or self.loading:
            return None

        self.character = Character.create(name, description=description, personality=personality)
        opening = Message(
            id=new_message_id(),
            role="user",
            content=build_character_introduction(self.character),
        )
        self.messages = [opening]
        return self._request_reply([opening], opening.id)

    def submit(self, text: Optional[str] = None) -> Optional[Message]:
        """Send the pending input and stream the reply into a new assistant message.

        Blank input, or a request already in flight, is ignored and returns
        ``None``.
        """

        if text is not None:
            self.input = text
        if not self.input.strip() or self.loading:
            return None

        user_message = Message(id=new_message_id(), role="user", content=self.input)
        self.messages.append(user_message)
        self.input = ""
        return self._request_reply(list(self.messages), user_message.id)

    def _request_reply(self, history: List[Message], user_message_id: str) -> Optional[Message]:
        self.loading = True
        assistant: Optional[Message] = None
        try:
            payload = {
                "messages": [message.to_wire() for message in history],
                "character": self.character.to_wire() if self.character else None,
            }
            with self._http.stream("POST", CHAT_PATH, json=payload) as response:
                if not response.is_success:
                    raise RelayRequestError(response.status_code)

                assistant = Message(id=str(int(user_message_id) + 1), role="assistant")
                self.messages.append(assistant)

                for fragment in response.iter_text():
                    if not fragment:
                        continue
                    assistant.append(fragment)
                    if self.on_fragment is not None:
                        self.on_fragment(fragment)
        except Exception:
            LOGGER.exception("Story request failed")
        finally:
            self.loading = False
        return assistant
