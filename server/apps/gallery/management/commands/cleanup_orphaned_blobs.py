"""Management command to delete blobs no image record references.

Uploads store the blob before the record and deletes remove the blob
before the record, so failures leave unreferenced blobs behind rather
than records pointing at nothing. This command reclaims them.
"""

import logging
from datetime import timedelta
from typing import TYPE_CHECKING, Any, Final

from typing_extensions import override

from django.core.files.storage import default_storage
from django.core.management.base import BaseCommand
from django.utils import timezone

from server.apps.gallery.models import Image

if TYPE_CHECKING:
    from server.apps.gallery.infrastructure.storage import ImageStorage

_DEFAULT_BATCH_SIZE: Final = 1000
# Skip fresh blobs: their upload may still be creating the record
_DEFAULT_MIN_AGE_MINUTES: Final = 60

logger = logging.getLogger(__name__)


class Command(BaseCommand):
    """Delete stored blobs that have no matching image record."""

    help = 'Delete stored blobs that no image record references'

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
        parser.add_argument(
            '--batch-size',
            type=int,
            default=_DEFAULT_BATCH_SIZE,
            help=f'Keys checked per query (default: {_DEFAULT_BATCH_SIZE})',
        )
        parser.add_argument(
            '--min-age-minutes',
            type=int,
            default=_DEFAULT_MIN_AGE_MINUTES,
            help=(
                'Only consider blobs older than this '
                f'(default: {_DEFAULT_MIN_AGE_MINUTES})'
            ),
        )
        parser.add_argument(
            '--prefix',
            default='',
            help='Only consider keys under this prefix, e.g. a user ID',
        )

    @override
    def handle(self, *args: Any, **options: Any) -> None:
        """Execute the cleanup command.

        Args:
            args: Positional arguments (unused).
            options: Command options.
        """
        storage: ImageStorage = default_storage  # type: ignore[assignment]
        dry_run = options['dry_run']
        batch_size = options['batch_size']
        cutoff = timezone.now() - timedelta(
            minutes=options['min_age_minutes'],
        )

        self.stdout.write(
            f'Looking for unreferenced blobs stored before {cutoff}',
        )

        batch: list[str] = []
        orphaned: list[str] = []
        for key, last_modified in storage.iter_objects(options['prefix']):
            if last_modified > cutoff:
                continue
            batch.append(key)
            if len(batch) >= batch_size:
                orphaned.extend(_unreferenced(batch))
                batch = []
        orphaned.extend(_unreferenced(batch))

        count = 0
        failed = 0
        for key in orphaned:
            if dry_run:
                self.stdout.write(f'Would delete: {key}')
                count += 1
                continue

            try:
                storage.delete(key)
            except Exception as exc:
                self.stderr.write(f'Failed to delete {key}: {exc}')
                logger.exception('Failed to delete orphaned blob: %s', key)
                failed += 1
            else:
                logger.info('Deleted orphaned blob: %s', key)
                count += 1

        if dry_run:
            self.stdout.write(
                self.style.SUCCESS(f'Would delete {count} orphaned blobs'),
            )
        else:
            self.stdout.write(
                self.style.SUCCESS(
                    f'Deleted {count} orphaned blobs, {failed} failed',
                ),
            )


def _unreferenced(keys: list[str]) -> list[str]:
    if not keys:
        return []
    referenced = set(
        Image.objects.filter(storage_key__in=keys).values_list(
            'storage_key',
            flat=True,
        ),
    )
    return [key for key in keys if key not in referenced]
