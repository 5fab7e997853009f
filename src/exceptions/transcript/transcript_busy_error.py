from src.exceptions.transcript.transcript_error import TranscriptError


class TranscriptBusyError(TranscriptError):
    """Raised when a query is submitted while another one is still in flight."""

    pass
