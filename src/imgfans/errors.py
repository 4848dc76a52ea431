"""Error family raised by the Imgfans client.

Every failure surfaces as an :class:`ImgfansError` (or one of its
subclasses) carrying a human-readable message plus, where available, the
HTTP status code, the raw server payload and the underlying exception.
"""

from __future__ import annotations

from typing import Any

import httpx

GENERIC_FAILURE = "Upload failed for unknown reason"
UNEXPECTED_ERROR = "An unexpected error occurred"

STATUS_MESSAGES: dict[int, str] = {
    413: "The image file is too large. Please try a smaller file.",
    415: "The file type is not supported. Please upload a valid image file.",
    401: "Invalid or missing API token. Please check your credentials.",
}

CONNECTIVITY_MESSAGE = (
    "Unable to connect to Imgfans server. Please check your internet connection."
)


class ImgfansError(Exception):
    """Base error for everything raised by this package."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        response: Any = None,
        cause: BaseException | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.response = response
        self.cause = cause

    def __str__(self) -> str:
        if self.status_code is not None:
            return f"[{self.status_code}] {self.message}"
        return self.message


class ConfigurationError(ImgfansError):
    """Client constructed without a usable token."""


class InvalidInputError(ImgfansError):
    """String input is neither a URL, a base64 data URI nor an existing file."""


class UnsupportedInputTypeError(ImgfansError):
    """Input object of a type the client cannot turn into bytes."""


class TransportError(ImgfansError):
    """Non-2xx response or network-level failure."""

    @classmethod
    def from_http_error(cls, exc: httpx.HTTPError) -> TransportError:
        status_code: int | None = None
        payload: Any = None
        if isinstance(exc, httpx.HTTPStatusError):
            status_code = exc.response.status_code
            payload = response_payload(exc.response)

        message = readable_error_message(
            status_code,
            payload,
            connection_refused=isinstance(exc, httpx.ConnectError),
            detail=str(exc),
        )
        return cls(message, status_code=status_code, response=payload, cause=exc)


class InvalidResponseError(ImgfansError):
    """Server answered with a body that lacks the expected structure."""


def response_payload(response: httpx.Response) -> Any:
    """Decoded JSON body of *response*, falling back to its text."""
    try:
        return response.json()
    except ValueError:
        return response.text or None


def readable_error_message(
    status_code: int | None,
    payload: Any = None,
    *,
    connection_refused: bool = False,
    detail: str | None = None,
) -> str:
    """
    Translate a failed request into a message meant for humans.

    Known status codes win over everything else, then a refused
    connection, then the ``message`` field of the server payload, then
    *detail* (usually the text of the underlying exception), and finally
    a generic failure string. The function never raises.
    """
    if status_code in STATUS_MESSAGES:
        return STATUS_MESSAGES[status_code]
    if connection_refused:
        return CONNECTIVITY_MESSAGE
    if isinstance(payload, dict):
        server_message = payload.get("message")
        if isinstance(server_message, str) and server_message:
            return server_message
    return detail or GENERIC_FAILURE
