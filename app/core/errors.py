"""
Application errors for clean API error handling.

Everything below the reply orchestrator raises one of the specific errors;
the orchestrator collapses them into GenerationError so the API returns a
single generic 500 message while logs keep the real cause.
"""

GENERIC_FAILURE_MESSAGE = "Failed to generate a response."


class ReplyServiceError(Exception):
    """Base class for errors raised while producing a reply."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class DownloadError(ReplyServiceError):
    """Raised when the company knowledge file cannot be fetched."""

    def __init__(self, url: str, status_code: int | None = None, reason: str = "") -> None:
        self.url = url
        self.status_code = status_code
        detail = f"HTTP {status_code}" if status_code is not None else "request failed"
        if reason:
            detail = f"{detail}: {reason}"
        super().__init__(f"Failed to download {url} ({detail})")


class PlatformError(ReplyServiceError):
    """Raised when a call to the assistants platform fails."""

    def __init__(self, operation: str, message: str) -> None:
        self.operation = operation
        super().__init__(f"{operation} failed: {message}")


class NoResponseError(ReplyServiceError):
    """Raised when a completed run left no assistant message on the thread."""

    def __init__(self, thread_id: str) -> None:
        self.thread_id = thread_id
        super().__init__("No response from Assistant.")


class RunFailedError(ReplyServiceError):
    """Raised when a run ends in failed, cancelled, expired or incomplete."""

    def __init__(self, run_id: str, status: str, last_error: str | None = None) -> None:
        self.run_id = run_id
        self.status = status
        self.last_error = last_error
        msg = f"Run {run_id} ended with status {status}"
        if last_error:
            msg = f"{msg}: {last_error}"
        super().__init__(msg)


class RunTimeoutError(ReplyServiceError):
    """Raised when a run does not finish within the configured timeout."""

    def __init__(self, run_id: str, timeout: float) -> None:
        self.run_id = run_id
        self.timeout = timeout
        super().__init__(f"Run {run_id} did not finish within {timeout:g}s")


class GenerationError(ReplyServiceError):
    """
    The only error that leaves the reply pipeline.

    str() is always the generic failure message; the underlying error is kept
    on .cause for logging.
    """

    def __init__(self, cause: BaseException | None = None) -> None:
        self.cause = cause
        super().__init__(GENERIC_FAILURE_MESSAGE)
