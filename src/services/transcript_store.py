import json
from abc import ABC, abstractmethod
from pathlib import Path
from typing import List, Optional

import structlog
from pydantic import TypeAdapter, ValidationError

from src.exceptions.transcript import TranscriptStoreError
from src.models.chat.chat_message import ChatMessage

logger = structlog.get_logger(__name__)

_messages_adapter = TypeAdapter(List[ChatMessage])


class TranscriptStore(ABC):
    """Key-value persistence for the chat transcript."""

    @abstractmethod
    def load(self) -> Optional[List[ChatMessage]]:
        """Return the stored transcript, or None when nothing has been saved."""

    @abstractmethod
    def save(self, messages: List[ChatMessage]) -> None:
        """Replace the stored transcript."""


class InMemoryTranscriptStore(TranscriptStore):
    def __init__(self, messages: Optional[List[ChatMessage]] = None):
        self._messages = list(messages) if messages is not None else None

    def load(self) -> Optional[List[ChatMessage]]:
        return list(self._messages) if self._messages is not None else None

    def save(self, messages: List[ChatMessage]) -> None:
        self._messages = list(messages)


class JsonFileTranscriptStore(TranscriptStore):
    """
    Transcript stored as a JSON array under a fixed key of a JSON document.

    Other keys in the document are left untouched when saving. Reads and
    writes are synchronous and run on the caller's thread, so a save inside
    a request handler blocks the event loop for the duration of the write.
    The file holds a single transcript and stays small.
    """

    def __init__(self, path: Path, key: str):
        self.path = Path(path)
        self.key = key

    def _read_document(self) -> dict:
        if not self.path.exists():
            return {}
        try:
            document = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            raise TranscriptStoreError(f"Could not read transcript file {self.path}: {str(e)}") from e
        if not isinstance(document, dict):
            raise TranscriptStoreError(f"Transcript file {self.path} does not hold a JSON object")
        return document

    def load(self) -> Optional[List[ChatMessage]]:
        document = self._read_document()
        if self.key not in document:
            return None
        try:
            messages = _messages_adapter.validate_python(document[self.key])
        except ValidationError as e:
            raise TranscriptStoreError(f"Stored transcript under '{self.key}' is invalid: {str(e)}") from e
        logger.info("Loaded transcript", path=str(self.path), message_count=len(messages))
        return messages

    def save(self, messages: List[ChatMessage]) -> None:
        document = self._read_document()
        document[self.key] = _messages_adapter.dump_python(messages, mode="json")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(json.dumps(document, ensure_ascii=False, indent=2), encoding="utf-8")
        except OSError as e:
            raise TranscriptStoreError(f"Could not write transcript file {self.path}: {str(e)}") from e
