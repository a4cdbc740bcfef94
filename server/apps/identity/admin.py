"""Django admin configuration for identity app."""

from typing_extensions import override

from django.contrib import admin
from django.db.models import QuerySet
from django.http import HttpRequest

from server.apps.identity.models import AccessToken


@admin.register(AccessToken)
class AccessTokenAdmin(admin.ModelAdmin[AccessToken]):
    """Admin interface for AccessToken model.

    Tokens can be inspected and revoked (deleted) here, but never
    created or edited: they only come from logins.
    """

    list_display = [
        'digest_short',
        'user',
        'created_at',
        'expires_at',
        'last_used_at',
    ]

    list_filter = [
        'created_at',
        'expires_at',
    ]

    search_fields = [
        'token_digest',
        'user__username',
    ]

    readonly_fields = [
        'user',
        'token_digest',
        'created_at',
        'expires_at',
        'last_used_at',
    ]

    def digest_short(self, obj: AccessToken) -> str:
        """Display truncated token digest.

        Args:
            obj: AccessToken instance.

        Returns:
            First 8 characters of the digest.
        """
        return obj.token_digest[:8]
    digest_short.short_description = 'Token'  # type: ignore[attr-defined]

    @override
    def get_queryset(self, request: HttpRequest) -> QuerySet[AccessToken]:
        """Optimize queryset with select_related.

        Args:
            request: HTTP request.

        Returns:
            Optimized QuerySet.
        """
        return super().get_queryset(request).select_related('user')

    @override
    def has_add_permission(self, request: HttpRequest) -> bool:
        """Disable adding tokens via admin.

        Args:
            request: HTTP request.

        Returns:
            False - tokens are issued at login only.
        """
        return False

    @override
    def has_change_permission(
        self,
        request: HttpRequest,
        obj: AccessToken | None = None,
    ) -> bool:
        """Disable editing tokens via admin.

        Args:
            request: HTTP request.
            obj: Optional AccessToken instance.

        Returns:
            False - tokens cannot be edited.
        """
        return False
