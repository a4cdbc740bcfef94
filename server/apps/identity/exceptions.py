"""Exceptions for identity app."""

from http import HTTPStatus
from types import MappingProxyType

from server.apps.common.exceptions import ApiError

_BEARER_CHALLENGE = MappingProxyType({'WWW-Authenticate': 'Bearer'})


class AuthRequiredError(ApiError):
    """Raised when a protected endpoint is called without a token."""

    status_code = HTTPStatus.UNAUTHORIZED
    default_message = 'Access denied: no token provided'
    headers = _BEARER_CHALLENGE


class InvalidTokenError(ApiError):
    """Raised for unknown, revoked or expired tokens."""

    status_code = HTTPStatus.UNAUTHORIZED
    default_message = 'Invalid token'
    headers = _BEARER_CHALLENGE


class InvalidCredentialsError(ApiError):
    """Raised when username and password do not match an active user."""

    default_message = 'Invalid credentials'


class UsernameTakenError(ApiError):
    """Raised on signup with a username that already exists."""

    def __init__(self, username: str) -> None:
        """Initialize UsernameTakenError.

        Args:
            username: The requested username.
        """
        self.username = username
        super().__init__(f'Username already taken: {username}')
