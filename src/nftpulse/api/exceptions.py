"""Errors raised by the events API client."""


class EventsAPIError(Exception):
    """Base class for every failure surfaced by the events client."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class TransportError(EventsAPIError):
    """The request never produced an HTTP response (connect failure, timeout, ...)."""


class RemoteError(EventsAPIError):
    """The service answered with a non-2xx status."""

    def __init__(
        self,
        message: str,
        status_code: int,
        retry_after: int | None = None,
    ):
        self.status_code = status_code
        self.retry_after = retry_after  # seconds, from the Retry-After header
        super().__init__(f"HTTP {status_code}: {message}")

    @property
    def retryable(self) -> bool:
        return self.status_code == 429 or self.status_code >= 500


class DecodeError(EventsAPIError):
    """The response body does not have the shape the client expects."""

    def __init__(self, message: str, payload: object = None):
        self.payload = payload
        super().__init__(message)
