"""Management command to purge expired API tokens."""

import logging
from typing import Any

from typing_extensions import override

from django.core.management.base import BaseCommand

from server.apps.identity.logic.token_manager import (
    cleanup_expired_tokens,
    expired_tokens,
)

logger = logging.getLogger(__name__)


class Command(BaseCommand):
    """Delete API tokens whose lifetime is over."""

    help = 'Delete expired API tokens'

    @override
    def add_arguments(self, parser: Any) -> None:
        """Add command line arguments.

        Args:
            parser: Argument parser.
        """
        parser.add_argument(
            '--dry-run',
            action='store_true',
            help='Show what would be deleted without deleting',
        )

    @override
    def handle(self, *args: Any, **options: Any) -> None:
        """Execute the cleanup command.

        Args:
            args: Positional arguments (unused).
            options: Command options.
        """
        if options['dry_run']:
            stale = expired_tokens().select_related('user')
            for access_token in stale:
                self.stdout.write(
                    f'Would delete: {access_token.token_digest[:8]} '
                    f'(user: {access_token.user.username}, '
                    f'expired: {access_token.expires_at})',
                )
            self.stdout.write(
                self.style.SUCCESS(f'Would purge {len(stale)} tokens'),
            )
            return

        count = cleanup_expired_tokens()
        logger.info('Token cleanup finished: %d purged', count)
        self.stdout.write(self.style.SUCCESS(f'Purged {count} tokens'))
