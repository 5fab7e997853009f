import time
import uuid
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class ChatRole(str, Enum):
    USER = "user"
    ASSISTANT = "assistant"


class ChatMessage(BaseModel):
    """A single turn in the chat transcript."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., description="Unique message ID")
    role: ChatRole = Field(..., description="Who sent the message")
    content: str = Field(..., description="Message text")
    timestamp: Optional[int] = Field(None, description="Creation time in epoch milliseconds")


def create_chat_message(role: ChatRole, content: str) -> ChatMessage:
    """
    Create a chat message with a fresh ID and the current timestamp.

    Args:
        role: Sender of the message
        content: Message text

    Returns:
        ChatMessage ready to append to a transcript
    """
    return ChatMessage(
        id=str(uuid.uuid4()),
        role=role,
        content=content,
        timestamp=int(time.time() * 1000),
    )
