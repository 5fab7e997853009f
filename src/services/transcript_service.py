from typing import List

import structlog

from src.models.chat.chat_message import ChatMessage, ChatRole, create_chat_message
from src.services.transcript_store import TranscriptStore

logger = structlog.get_logger(__name__)

GREETING = (
    "Hello! I'm your weather assistant. "
    "Please enter a location to get the current weather information."
)


class ChatTranscript:
    """
    Ordered log of user and assistant turns.

    Messages are only ever appended; ``clear`` is the one operation that
    removes them, and it leaves the greeting behind. Every change is saved
    to the injected store.
    """

    def __init__(self, store: TranscriptStore):
        self.store = store
        stored = store.load()
        if stored:
            self._messages: List[ChatMessage] = list(stored)
        else:
            self._messages = [self._greeting()]

    @staticmethod
    def _greeting() -> ChatMessage:
        return create_chat_message(ChatRole.ASSISTANT, GREETING)

    @property
    def messages(self) -> List[ChatMessage]:
        return list(self._messages)

    def __len__(self):
        return len(self._messages)

    def _replace(self, messages: List[ChatMessage]) -> None:
        # Memory only changes once the store has accepted the new list
        self.store.save(messages)
        self._messages = messages

    def append(self, message: ChatMessage) -> ChatMessage:
        self._replace(self._messages + [message])
        return message

    def clear(self) -> List[ChatMessage]:
        """Reset the transcript to a single greeting."""
        logger.info("Clearing transcript", discarded=len(self._messages))
        self._replace([self._greeting()])
        return self.messages
