from src.exceptions.transcript.transcript_busy_error import TranscriptBusyError
from src.exceptions.transcript.transcript_error import TranscriptError
from src.exceptions.transcript.transcript_store_error import TranscriptStoreError

__all__ = ["TranscriptError", "TranscriptBusyError", "TranscriptStoreError"]
