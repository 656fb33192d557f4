"""In-memory conversation records shared by the relay and the clients.

Nothing here is persisted: a conversation lives as long as the client that
holds it. The wire form of a message is ``{"role", "content"}``; ids only
exist on the client side.
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional

ROLES = ("user", "assistant")


class InvalidPayloadError(ValueError):
    """Raised when a chat payload cannot be interpreted."""


def new_message_id(offset: int = 0) -> str:
    return str(int(time.time() * 1000) + offset)


@dataclass
class Message:
    id: str
    role: str
    content: str = ""

    def __post_init__(self) -> None:
        if self.role not in ROLES:
            raise InvalidPayloadError(f"Unsupported message role: {self.role!r}")

    def append(self, fragment: str) -> None:
        self.content += fragment

    def to_wire(self) -> Dict[str, str]:
        return {"role": self.role, "content": self.content}

    @classmethod
    def from_wire(cls, data: Any, *, index: int = 0) -> "Message":
        if not isinstance(data, Mapping):
            raise InvalidPayloadError(f"Message {index} must be an object.")
        role = data.get("role")
        content = data.get("content")
        if not isinstance(content, str):
            raise InvalidPayloadError(f"Message {index} is missing text content.")
        return cls(id=str(index), role=str(role), content=content)


@dataclass(frozen=True)
class Character:
    name: str
    description: Optional[str] = None
    personality: Optional[str] = None

    def __post_init__(self) -> None:
        if not (self.name or "").strip():
            raise InvalidPayloadError("A character needs a name.")

    def to_wire(self) -> Dict[str, str]:
        return {
            "name": self.name,
            "description": self.description or "",
            "personality": self.personality or "",
        }

    @classmethod
    def create(
        cls,
        name: str,
        description: Optional[str] = None,
        personality: Optional[str] = None,
    ) -> "Character":
        """Build a character from raw form values, dropping blank optional fields."""

        return cls(
            name=(name or "").strip(),
            description=(description or "").strip() or None,
            personality=(personality or "").strip() or None,
        )

    @classmethod
    def from_wire(cls, data: Any) -> Optional["Character"]:
        # The browser posts its empty form draft before a character exists.
        if data is None:
            return None
        if not isinstance(data, Mapping):
            raise InvalidPayloadError("Character must be an object.")
        name = data.get("name")
        if not isinstance(name, str) or not name.strip():
            return None
        return cls.create(
            name,
            description=_optional_text(data.get("description")),
            personality=_optional_text(data.get("personality")),
        )


def parse_history(raw: Any) -> List[Message]:
    if not isinstance(raw, list):
        raise InvalidPayloadError("'messages' must be a list.")
    return [Message.from_wire(item, index=index) for index, item in enumerate(raw)]


def _optional_text(value: Any) -> Optional[str]:
    if value is None:
        return None
    if not isinstance(value, str):
        raise InvalidPayloadError("Character fields must be text.")
    return value
