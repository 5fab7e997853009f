from src.models.chat.chat_message import ChatMessage, ChatRole, create_chat_message
from src.models.chat.chat_request import ChatMode, ChatQueryRequest

__all__ = ["ChatMessage", "ChatRole", "create_chat_message", "ChatMode", "ChatQueryRequest"]
