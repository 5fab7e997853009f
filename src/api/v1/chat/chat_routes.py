from typing import List

import structlog
from fastapi import APIRouter, Depends, HTTPException, Request, status

from src.exceptions.transcript import TranscriptBusyError, TranscriptStoreError
from src.models.chat import ChatMessage, ChatMode, ChatQueryRequest
from src.services.chat_service import ChatService

logger = structlog.get_logger(__name__)


# Create router
router = APIRouter(prefix="/chat", tags=["Chat"])


def get_chat_service(request: Request) -> ChatService:
    return request.app.state.chat_service


@router.get("/messages", response_model=List[ChatMessage], summary="Get Transcript")
async def get_messages(chat_service: ChatService = Depends(get_chat_service)):
    """Get the chat transcript in insertion order."""
    return chat_service.get_messages()


@router.post("/messages", response_model=ChatMessage, summary="Send Message")
async def send_message(
    request: ChatQueryRequest,
    chat_service: ChatService = Depends(get_chat_service),
):
    """Append a user message to the transcript and return the assistant's reply.

    In ``query`` mode the text is interpreted as a weather question; in
    ``location`` mode it is looked up directly as a place name.

    Args:
        request: The message text and how to interpret it.

    Returns:
        The assistant message that was appended to the transcript.

    Raises:
        HTTPException: 400 for blank text, 409 while another message is being
            processed, 500 if the transcript cannot be saved.
    """
    logger.info("Processing chat message", query=request.query, mode=request.mode.value)
    try:
        if request.mode == ChatMode.LOCATION:
            return await chat_service.submit_location(request.query)
        return await chat_service.submit_query(request.query)

    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

    except TranscriptBusyError as e:
        logger.warning("Chat message rejected while busy", query=request.query)
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))

    except TranscriptStoreError as e:
        logger.error("Failed to save transcript", error=str(e))
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to save the chat transcript",
        )


@router.delete("/messages", response_model=List[ChatMessage], summary="Clear Transcript")
async def clear_messages(chat_service: ChatService = Depends(get_chat_service)):
    """Reset the transcript to the assistant greeting."""
    try:
        return chat_service.clear()
    except TranscriptBusyError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
