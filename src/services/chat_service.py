from typing import Awaitable, Callable, List, Optional

import structlog

from assistant.weather_assistant import WeatherAssistant, weather_assistant
from src.config.config import config
from src.exceptions.transcript import TranscriptBusyError
from src.models.chat.chat_message import ChatMessage, ChatRole, create_chat_message
from src.services.transcript_service import ChatTranscript
from src.services.transcript_store import JsonFileTranscriptStore, TranscriptStore

logger = structlog.get_logger(__name__)

SUBMIT_FAILED_MESSAGE = "Sorry, something went wrong. Please try again later."


class ChatService:
    """
    Runs user submissions against a single chat transcript.

    Only one submission may be in flight at a time: the user message is
    appended, the assistant is awaited, and its reply is appended before the
    next submission is accepted.
    """

    def __init__(self, transcript: ChatTranscript, assistant: Optional[WeatherAssistant] = None):
        self.transcript = transcript
        self.assistant = assistant or weather_assistant
        self._in_flight = False

    @property
    def is_busy(self) -> bool:
        return self._in_flight

    def get_messages(self) -> List[ChatMessage]:
        return self.transcript.messages

    def clear(self) -> List[ChatMessage]:
        if self._in_flight:
            raise TranscriptBusyError("Cannot clear the transcript while a query is in flight")
        return self.transcript.clear()

    async def _submit(self, text: str, answer: Callable[[str], Awaitable[ChatMessage]]) -> ChatMessage:
        if not text or not text.strip():
            raise ValueError("Message text must not be empty")
        if self._in_flight:
            raise TranscriptBusyError("A query is already being processed")

        self._in_flight = True
        try:
            self.transcript.append(create_chat_message(ChatRole.USER, text))
            try:
                reply = await answer(text.strip())
            except Exception as e:
                logger.error("Assistant failed to answer", error=str(e), error_type=type(e).__name__)
                reply = create_chat_message(ChatRole.ASSISTANT, SUBMIT_FAILED_MESSAGE)
            self.transcript.append(reply)
        finally:
            self._in_flight = False

        logger.info("Chat turn completed", transcript_length=len(self.transcript))
        return reply

    async def submit_query(self, text: str) -> ChatMessage:
        """
        Answer a free-text weather question and record both turns.

        Args:
            text: The user's message

        Returns:
            The assistant's reply

        Raises:
            ValueError: If the text is blank
            TranscriptBusyError: If another submission is still in flight
            TranscriptStoreError: If the transcript cannot be saved
        """
        return await self._submit(text, self.assistant.process_query)

    async def submit_location(self, text: str) -> ChatMessage:
        """Look the text up as a place name and record both turns."""
        return await self._submit(text, self.assistant.describe_location)


def create_chat_service(store: Optional[TranscriptStore] = None) -> ChatService:
    """Build a chat service backed by the configured transcript file unless a store is given."""
    if store is None:
        store = JsonFileTranscriptStore(config.get_transcript_path(), config.transcript_storage_key)
    return ChatService(ChatTranscript(store))
