"""Exceptions raised by the session event log and compaction."""


class ValidationError(ValueError):
    """
    Exception raised when a malformed event is appended to an event log.
    """

    def __init__(self, reason: str, event: object | None = None):
        self.reason = reason
        self.event = event
        super().__init__(reason)


class SummarizationError(Exception):
    """
    Exception raised when a summarizer fails or times out during a compaction pass.

    The event log is left unmodified whenever this is raised.
    """

    def __init__(
        self,
        reason: str,
        cause: BaseException | None = None,
        timeout_seconds: float | None = None,
    ):
        self.reason = reason
        self.cause = cause
        self.timeout_seconds = timeout_seconds
        super().__init__(reason)
