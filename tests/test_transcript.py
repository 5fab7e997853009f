import asyncio
import json
from unittest.mock import AsyncMock, MagicMock

import pytest

from src.exceptions.transcript import TranscriptBusyError, TranscriptStoreError
from src.models.chat.chat_message import ChatRole, create_chat_message
from src.services.chat_service import SUBMIT_FAILED_MESSAGE, ChatService
from src.services.transcript_service import GREETING, ChatTranscript
from src.services.transcript_store import InMemoryTranscriptStore, JsonFileTranscriptStore


class TestChatTranscript:
    """Test cases for the ChatTranscript class."""

    def test_starts_with_greeting(self, transcript_store):
        transcript = ChatTranscript(transcript_store)

        messages = transcript.messages
        assert len(messages) == 1
        assert messages[0].role == ChatRole.ASSISTANT
        assert messages[0].content == GREETING

    def test_append_keeps_order_and_saves(self, transcript_store):
        transcript = ChatTranscript(transcript_store)
        question = create_chat_message(ChatRole.USER, "Paris")
        answer = create_chat_message(ChatRole.ASSISTANT, "Sunny")

        transcript.append(question)
        transcript.append(answer)

        assert [m.content for m in transcript.messages] == [GREETING, "Paris", "Sunny"]
        assert transcript_store.load() == transcript.messages

    def test_messages_is_a_copy(self, transcript_store):
        transcript = ChatTranscript(transcript_store)

        transcript.messages.append(create_chat_message(ChatRole.USER, "Paris"))

        assert len(transcript) == 1

    def test_clear_resets_to_single_greeting(self, transcript_store):
        transcript = ChatTranscript(transcript_store)
        transcript.append(create_chat_message(ChatRole.USER, "Paris"))
        transcript.append(create_chat_message(ChatRole.ASSISTANT, "Sunny"))

        messages = transcript.clear()

        assert len(messages) == 1
        assert messages[0].role == ChatRole.ASSISTANT
        assert messages[0].content == GREETING
        assert transcript_store.load() == messages

    def test_loads_existing_transcript(self):
        stored = [
            create_chat_message(ChatRole.ASSISTANT, GREETING),
            create_chat_message(ChatRole.USER, "Tokyo"),
        ]

        transcript = ChatTranscript(InMemoryTranscriptStore(stored))

        assert transcript.messages == stored

    def test_failed_append_leaves_transcript_unchanged(self, transcript_store):
        transcript = ChatTranscript(transcript_store)
        before = transcript.messages
        transcript_store.save = MagicMock(side_effect=TranscriptStoreError("disk full"))

        with pytest.raises(TranscriptStoreError):
            transcript.append(create_chat_message(ChatRole.USER, "Paris"))

        assert transcript.messages == before

    def test_failed_clear_keeps_history(self, transcript_store):
        transcript = ChatTranscript(transcript_store)
        transcript.append(create_chat_message(ChatRole.USER, "Paris"))
        before = transcript.messages
        transcript_store.save = MagicMock(side_effect=TranscriptStoreError("disk full"))

        with pytest.raises(TranscriptStoreError):
            transcript.clear()

        assert transcript.messages == before
        assert transcript_store.load() == before


class TestJsonFileTranscriptStore:
    """Test cases for the JSON file transcript store."""

    def test_missing_file_loads_none(self, tmp_path):
        store = JsonFileTranscriptStore(tmp_path / "transcript.json", "weather-chat-messages")

        assert store.load() is None

    def test_save_and_load(self, tmp_path):
        path = tmp_path / "nested" / "transcript.json"
        store = JsonFileTranscriptStore(path, "weather-chat-messages")
        messages = [
            create_chat_message(ChatRole.ASSISTANT, GREETING),
            create_chat_message(ChatRole.USER, "Zürich"),
        ]

        store.save(messages)

        document = json.loads(path.read_text(encoding="utf-8"))
        assert [m["content"] for m in document["weather-chat-messages"]] == [GREETING, "Zürich"]
        assert document["weather-chat-messages"][1]["role"] == "user"
        assert store.load() == messages

    def test_other_keys_are_preserved(self, tmp_path):
        path = tmp_path / "transcript.json"
        path.write_text(json.dumps({"theme": "dark"}), encoding="utf-8")
        store = JsonFileTranscriptStore(path, "weather-chat-messages")

        assert store.load() is None
        store.save([create_chat_message(ChatRole.USER, "Oslo")])

        document = json.loads(path.read_text(encoding="utf-8"))
        assert document["theme"] == "dark"
        assert len(document["weather-chat-messages"]) == 1

    def test_corrupt_file(self, tmp_path):
        path = tmp_path / "transcript.json"
        path.write_text("{not json", encoding="utf-8")
        store = JsonFileTranscriptStore(path, "weather-chat-messages")

        with pytest.raises(TranscriptStoreError):
            store.load()

    def test_invalid_messages(self, tmp_path):
        path = tmp_path / "transcript.json"
        path.write_text(json.dumps({"weather-chat-messages": [{"role": "robot"}]}), encoding="utf-8")
        store = JsonFileTranscriptStore(path, "weather-chat-messages")

        with pytest.raises(TranscriptStoreError):
            store.load()

    def test_transcript_survives_restart(self, tmp_path):
        path = tmp_path / "transcript.json"
        transcript = ChatTranscript(JsonFileTranscriptStore(path, "weather-chat-messages"))
        transcript.append(create_chat_message(ChatRole.USER, "Lima"))

        reloaded = ChatTranscript(JsonFileTranscriptStore(path, "weather-chat-messages"))

        assert reloaded.messages == transcript.messages


class TestChatService:
    """Test cases for the ChatService class."""

    @pytest.mark.asyncio
    async def test_submit_query_appends_both_turns(self, chat_service):
        reply = await chat_service.submit_query("What's the weather in Paris?")

        messages = chat_service.get_messages()
        assert len(messages) == 3
        assert messages[1].role == ChatRole.USER
        assert messages[1].content == "What's the weather in Paris?"
        assert messages[2] == reply
        assert reply.role == ChatRole.ASSISTANT

    @pytest.mark.asyncio
    async def test_submit_location_uses_weather_card(self, chat_service):
        reply = await chat_service.submit_location("Paris")

        assert reply.content.startswith("Weather in Paris")
        assert len(chat_service.get_messages()) == 3

    @pytest.mark.asyncio
    @pytest.mark.parametrize("text", ["", "   "])
    async def test_blank_text_is_rejected(self, chat_service, text):
        with pytest.raises(ValueError):
            await chat_service.submit_query(text)

        assert len(chat_service.get_messages()) == 1

    @pytest.mark.asyncio
    async def test_one_query_in_flight(self, transcript_store, assistant):
        """Test that a second submission is refused while the first is running."""
        release = asyncio.Event()
        original = assistant.process_query

        async def slow_process_query(query):
            await release.wait()
            return await original(query)

        assistant.process_query = AsyncMock(side_effect=slow_process_query)
        service = ChatService(ChatTranscript(transcript_store), assistant=assistant)

        first = asyncio.create_task(service.submit_query("Paris"))
        await asyncio.sleep(0)

        assert service.is_busy is True
        with pytest.raises(TranscriptBusyError):
            await service.submit_query("London")
        with pytest.raises(TranscriptBusyError):
            service.clear()

        release.set()
        await first

        assert service.is_busy is False
        assert [m.role for m in service.get_messages()] == [ChatRole.ASSISTANT, ChatRole.USER, ChatRole.ASSISTANT]

    @pytest.mark.asyncio
    async def test_assistant_failure_appends_apology(self, transcript_store, assistant):
        """Test that a failing assistant still ends the turn with an assistant reply."""
        assistant.process_query = AsyncMock(side_effect=RuntimeError("boom"))
        service = ChatService(ChatTranscript(transcript_store), assistant=assistant)

        reply = await service.submit_query("Paris")

        assert service.is_busy is False
        assert reply.role == ChatRole.ASSISTANT
        assert reply.content == SUBMIT_FAILED_MESSAGE
        messages = service.get_messages()
        assert [m.role for m in messages] == [ChatRole.ASSISTANT, ChatRole.USER, ChatRole.ASSISTANT]
        assert messages[1].content == "Paris"
        assert transcript_store.load() == messages

    def test_clear(self, chat_service):
        messages = chat_service.clear()

        assert len(messages) == 1
        assert messages[0].content == GREETING
