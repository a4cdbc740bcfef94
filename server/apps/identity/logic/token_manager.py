"""Bearer token management for the JSON API.

Tokens are opaque random strings. The database keeps only their
SHA256 digest, so a leaked table does not leak usable tokens.
"""

import hashlib
import logging
import secrets
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import TYPE_CHECKING, Final, final

from django.conf import settings
from django.db import transaction
from django.db.models import QuerySet
from django.utils import timezone

from server.apps.identity.exceptions import InvalidTokenError
from server.apps.identity.models import AccessToken

if TYPE_CHECKING:
    from django.contrib.auth.models import User

logger = logging.getLogger(__name__)

# Token length in bytes (generates 43 urlsafe chars)
_TOKEN_BYTES: Final = 32


@final
@dataclass(frozen=True, slots=True)
class IssuedToken:
    """Raw token handed to the client, with its expiry."""

    token: str
    expires_at: datetime


def get_token_ttl() -> int:
    """Get token lifetime in seconds.

    Returns:
        TTL from settings or default of 86400 (24 hours).
    """
    return getattr(settings, 'API_TOKEN_TTL', 86400)


def get_token_limit() -> int:
    """Get maximum live tokens per user.

    Returns:
        Token limit from settings or default of 5.
    """
    return getattr(settings, 'API_TOKEN_LIMIT', 5)


def hash_token(token: str) -> str:
    """Compute the stored digest of a raw token.

    Args:
        token: Raw bearer token.

    Returns:
        Hex-encoded SHA256 digest.
    """
    return hashlib.sha256(token.encode()).hexdigest()


def issue_token(user: 'User') -> IssuedToken:
    """Issue a new bearer token for the user.

    Cleans expired tokens first, then revokes the user's oldest
    tokens so that at most ``API_TOKEN_LIMIT`` stay alive.

    Args:
        user: Authenticated user.

    Returns:
        IssuedToken with the raw token and its expiry.
    """
    cleanup_expired_tokens()

    with transaction.atomic():
        # Row-level locking keeps concurrent logins from overshooting
        live_ids = list(
            AccessToken.objects.select_for_update()
            .filter(user=user)
            .order_by('-created_at', '-id')
            .values_list('id', flat=True),
        )
        # A limit below one still keeps the token being issued
        keep = max(get_token_limit() - 1, 0)
        stale_ids = live_ids[keep:]
        if stale_ids:
            AccessToken.objects.filter(id__in=stale_ids).delete()
            logger.info(
                'Rotated out %d tokens for user %s',
                len(stale_ids),
                user.username,
            )

        token = secrets.token_urlsafe(_TOKEN_BYTES)
        expires_at = timezone.now() + timedelta(seconds=get_token_ttl())
        access_token = AccessToken.objects.create(
            user=user,
            token_digest=hash_token(token),
            expires_at=expires_at,
        )

    logger.info(
        'Token issued for user %s: %s',
        user.username,
        access_token.token_digest[:8],
    )
    return IssuedToken(token=token, expires_at=expires_at)


def validate_token(token: str) -> 'User':
    """Resolve a raw token to its user.

    Expired tokens are deleted on sight.

    Args:
        token: Raw bearer token from the request.

    Returns:
        Owner of the token.

    Raises:
        InvalidTokenError: If the token is unknown, expired or its user
            is inactive.
    """
    digest = hash_token(token)
    try:
        access_token = AccessToken.objects.select_related('user').get(
            token_digest=digest,
        )
    except AccessToken.DoesNotExist as error:
        logger.warning('Unknown token: %s', digest[:8])
        raise InvalidTokenError() from error

    if access_token.is_expired():
        access_token.delete()
        logger.info('Expired token rejected: %s', digest[:8])
        raise InvalidTokenError('Token expired')

    user = access_token.user
    if not user.is_active:
        logger.warning('Token of inactive user %s rejected', user.username)
        raise InvalidTokenError()

    AccessToken.objects.filter(id=access_token.id).update(
        last_used_at=timezone.now(),
    )
    return user


def revoke_token(token: str) -> bool:
    """Revoke a single token.

    Args:
        token: Raw bearer token.

    Returns:
        True if the token was found and deleted, False otherwise.
    """
    digest = hash_token(token)
    deleted, _ = AccessToken.objects.filter(token_digest=digest).delete()

    if deleted:
        logger.info('Token revoked: %s', digest[:8])

    return deleted > 0


def revoke_user_tokens(user: 'User') -> int:
    """Revoke every token of a user.

    Args:
        user: Token owner.

    Returns:
        Number of tokens revoked.
    """
    deleted, _ = AccessToken.objects.filter(user=user).delete()
    logger.info('Revoked %d tokens for user %s', deleted, user.username)
    return deleted


def expired_tokens() -> QuerySet[AccessToken]:
    """Tokens whose lifetime is over, oldest first."""
    return AccessToken.objects.filter(
        expires_at__lte=timezone.now(),
    ).order_by('expires_at')


def cleanup_expired_tokens() -> int:
    """Remove tokens past their expiry.

    Returns:
        Number of tokens cleaned up.
    """
    deleted, _ = expired_tokens().delete()

    if deleted:
        logger.info('Cleaned up %d expired tokens', deleted)

    return deleted


def get_user_tokens(user: 'User') -> list[AccessToken]:
    """Get all live tokens of a user.

    Args:
        user: Token owner.

    Returns:
        List of AccessToken instances, newest first.
    """
    return list(
        AccessToken.objects.filter(
            user=user,
            expires_at__gt=timezone.now(),
        ).order_by('-created_at'),
    )
