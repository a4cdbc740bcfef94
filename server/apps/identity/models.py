"""Database models for API token management."""

from typing import ClassVar, Final, final

from typing_extensions import override

from django.conf import settings
from django.db import models
from django.utils import timezone

# SHA256 hex length
_TOKEN_DIGEST_MAX_LENGTH: Final = 64


@final
class AccessToken(models.Model):
    """Bearer token issued at login.

    Only the SHA256 digest of the token is stored, the raw token is
    returned to the client once and never persisted. Tokens expire
    at ``expires_at`` or when revoked (row deleted).
    """

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='access_tokens',
        db_index=True,
    )

    token_digest = models.CharField(
        max_length=_TOKEN_DIGEST_MAX_LENGTH,
        unique=True,
        help_text='SHA256 hex digest of the bearer token',
    )

    created_at = models.DateTimeField(
        auto_now_add=True,
        help_text='Token issue time',
    )

    expires_at = models.DateTimeField(
        db_index=True,
        help_text='Token is rejected after this moment',
    )

    last_used_at = models.DateTimeField(
        null=True,
        blank=True,
        help_text='Last authenticated request',
    )

    class Meta:
        """Model metadata."""

        verbose_name = 'Access Token'  # type: ignore[mutable-override]
        verbose_name_plural = 'Access Tokens'  # type: ignore[mutable-override]
        ordering: ClassVar[list[str]] = ['-created_at']

        indexes: ClassVar[list[models.Index]] = [
            models.Index(
                fields=['user', '-created_at'],
                name='identity_user_created_idx',
            ),
        ]

    @override
    def __str__(self) -> str:
        """String representation."""
        return f'{self.user.username} ({self.token_digest[:8]})'

    def is_expired(self) -> bool:
        """Check whether the token lifetime is over.

        Returns:
            True if ``expires_at`` is in the past.
        """
        return self.expires_at <= timezone.now()
