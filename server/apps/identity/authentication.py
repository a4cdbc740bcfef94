"""Bearer token authentication for API views.

Reads ``Authorization: Bearer <token>``, resolves the token through
the token manager and exposes the user as ``view.api_user``.
"""

import logging
from typing import TYPE_CHECKING, Final

from django.http import HttpRequest

from server.apps.common.views import ApiView
from server.apps.identity.exceptions import AuthRequiredError, InvalidTokenError
from server.apps.identity.logic.token_manager import validate_token

if TYPE_CHECKING:
    from django.contrib.auth.models import User

logger = logging.getLogger(__name__)

# Auth schemes are case-insensitive
_BEARER_SCHEME: Final = 'bearer'


def get_bearer_token(request: HttpRequest) -> str:
    """Extract the raw token from the Authorization header.

    The scheme is matched in any case, and a bare token without
    a scheme is accepted as well.

    Args:
        request: Incoming request.

    Returns:
        Raw token string.

    Raises:
        AuthRequiredError: If the header is missing.
        InvalidTokenError: If the header carries no token.
    """
    header = request.headers.get('Authorization')
    if not header:
        raise AuthRequiredError()

    scheme, _, credentials = header.partition(' ')
    if scheme.lower() == _BEARER_SCHEME:
        token = credentials.strip()
    else:
        token = header.strip()
    if not token:
        raise InvalidTokenError()
    return token


class TokenAuthenticatedView(ApiView):
    """API view that requires a valid bearer token.

    All authenticated endpoints act on behalf of ``api_user`` only.
    """

    api_user: 'User'
    api_token: str

    def prepare_request(self, request: HttpRequest) -> None:
        """Authenticate the request before dispatching.

        Args:
            request: Incoming request.

        Raises:
            AuthRequiredError: If no token was sent.
            InvalidTokenError: If the token is not valid.
        """
        self.api_token = get_bearer_token(request)
        self.api_user = validate_token(self.api_token)
        logger.debug(
            'Request %s %s authenticated as %s',
            request.method,
            request.path,
            self.api_user.username,
        )
