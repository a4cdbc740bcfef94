"""Base exception for errors reported to API clients."""

from collections.abc import Mapping
from http import HTTPStatus
from types import MappingProxyType
from typing import ClassVar


class ApiError(Exception):
    """Error that maps onto an HTTP response.

    Subclasses set ``status_code`` and ``default_message``; the
    message passed to the constructor (if any) wins.
    """

    status_code: ClassVar[int] = HTTPStatus.BAD_REQUEST
    default_message: ClassVar[str] = 'Bad request'
    headers: ClassVar[Mapping[str, str]] = MappingProxyType({})

    def __init__(self, message: str | None = None) -> None:
        """Initialize ApiError.

        Args:
            message: Human readable message, sent to the client.
        """
        self.message = message or self.default_message
        super().__init__(self.message)

    @property
    def is_server_error(self) -> bool:
        """Whether the error is the server's fault (5xx)."""
        return self.status_code >= HTTPStatus.INTERNAL_SERVER_ERROR


class MalformedRequestError(ApiError):
    """Raised when the request body or parameters cannot be parsed."""

    default_message = 'Malformed request'
