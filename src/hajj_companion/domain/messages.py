from typing import Dict, Literal, Optional, Sequence

from pydantic import BaseModel, ConfigDict, Field

Role = Literal["user", "assistant", "system"]


class ChatMessage(BaseModel):
    """A single role/content turn in a conversation."""

    role: Role = Field(description="Author of the message.")
    content: str = Field(description="Message text.")

    model_config = ConfigDict(frozen=True)

    def to_payload(self) -> Dict[str, str]:
        """Returns the OpenAI-style dictionary for this message."""

        return {"role": self.role, "content": self.content}


def last_user_message(messages: Sequence[ChatMessage]) -> Optional[ChatMessage]:
    """
    Finds the most recent user message.

    Args:
        messages: Conversation messages in chronological order.

    Returns:
        The last message authored by the user, or None.
    """
    return next(
        (message for message in reversed(messages) if message.role == "user"),
        None,
    )
