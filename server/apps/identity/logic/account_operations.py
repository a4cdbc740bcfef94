"""Business logic for user accounts."""

import logging
from typing import TYPE_CHECKING

from django.contrib.auth import authenticate, get_user_model
from django.contrib.auth.password_validation import validate_password
from django.db import IntegrityError, transaction
from django.http import HttpRequest

from server.apps.identity.exceptions import (
    InvalidCredentialsError,
    UsernameTakenError,
)

if TYPE_CHECKING:
    from django.contrib.auth.models import User

logger = logging.getLogger(__name__)


def register_user(username: str, password: str, email: str) -> 'User':
    """Create a new user account.

    The password is checked against ``AUTH_PASSWORD_VALIDATORS`` and
    stored hashed. Users are immutable after signup.

    Args:
        username: Unique login name.
        password: Plain text password.
        email: Contact email.

    Returns:
        Created user.

    Raises:
        UsernameTakenError: If the username already exists.
        ValidationError: If the password fails validation.
    """
    user_model = get_user_model()
    if user_model.objects.filter(username=username).exists():
        logger.warning('Signup with taken username: %s', username)
        raise UsernameTakenError(username)

    validate_password(
        password,
        user=user_model(username=username, email=email),
    )

    try:
        with transaction.atomic():
            user = user_model.objects.create_user(
                username=username,
                password=password,
                email=email,
            )
    except IntegrityError as error:
        # Lost a race against a concurrent signup
        logger.warning('Signup race on username: %s', username)
        raise UsernameTakenError(username) from error

    logger.info('User created: %s (ID: %d)', username, user.id)
    return user


def verify_credentials(
    username: str,
    password: str,
    request: HttpRequest | None = None,
) -> 'User':
    """Check username and password against Django's auth backends.

    Args:
        username: Login name.
        password: Plain text password.
        request: Optional current request, passed to auth backends.

    Returns:
        Authenticated, active user.

    Raises:
        InvalidCredentialsError: If authentication fails.
    """
    user: User | None = authenticate(
        request=request,
        username=username,
        password=password,
    )

    if user is None:
        logger.warning('Authentication failed for user: %s', username)
        raise InvalidCredentialsError()

    if not user.is_active:
        logger.warning('Inactive user attempted login: %s', username)
        raise InvalidCredentialsError()

    logger.info('User authenticated successfully: %s', username)
    return user
