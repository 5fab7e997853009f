from src.exceptions.transcript.transcript_error import TranscriptError


class TranscriptStoreError(TranscriptError):
    """Exception for failures reading or writing the persisted transcript."""

    pass
