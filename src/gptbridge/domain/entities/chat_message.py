"""Chat message entity."""

from dataclasses import dataclass
from enum import Enum


class Role(Enum):
    """Author role of a chat message in the completion transcript."""

    SYSTEM = "system"
    USER = "user"
    ASSISTANT = "assistant"


@dataclass(frozen=True)
class ChatMessage:
    """One entry of a conversation transcript.

    Attributes:
        role: Who authored the message.
        content: Text payload.
    """

    role: Role
    content: str

    def to_dict(self) -> dict[str, str]:
        """Serialize to the provider's `{role, content}` shape."""
        return {"role": self.role.value, "content": self.content}

    @classmethod
    def from_dict(cls, data: dict[str, str]) -> "ChatMessage":
        """Parse the provider's `{role, content}` shape.

        Raises:
            ValueError: If the role is not a known role.
            KeyError: If a field is missing.
        """
        return cls(role=Role(data["role"]), content=data["content"])

    @classmethod
    def system(cls, content: str) -> "ChatMessage":
        return cls(role=Role.SYSTEM, content=content)

    @classmethod
    def user(cls, content: str) -> "ChatMessage":
        return cls(role=Role.USER, content=content)

    @classmethod
    def assistant(cls, content: str) -> "ChatMessage":
        return cls(role=Role.ASSISTANT, content=content)
