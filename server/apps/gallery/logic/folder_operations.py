"""Business logic for folder tree operations."""

import logging
from dataclasses import dataclass
from typing import Any, Final, final

from django.conf import settings
from django.db import transaction
from django.db.models import QuerySet, RestrictedError

from server.apps.gallery.exceptions import (
    CorruptHierarchyError,
    FolderNotEmptyError,
    FolderNotFoundError,
    InvalidParentError,
)
from server.apps.gallery.models import Folder, Image

# User type for Django's dynamic user model
_User = Any

logger = logging.getLogger(__name__)

# Marker for "no parent filter" in list_folders, distinct from None (root)
ALL_FOLDERS: Final = object()


@final
@dataclass(frozen=True, slots=True)
class PathEntry:
    """One breadcrumb step; ``id`` is None for the root entry."""

    id: int | None  # noqa: WPS125
    name: str


def get_root_label() -> str:
    """Get the label of the root breadcrumb entry.

    Returns:
        Root label from settings or default of 'My Drive'.
    """
    return getattr(settings, 'DRIVE_ROOT_LABEL', 'My Drive')


def get_folder(user: _User, folder_id: int) -> Folder:
    """Get a folder owned by the user.

    Args:
        user: Folder owner.
        folder_id: ID of the folder.

    Returns:
        Folder instance.

    Raises:
        FolderNotFoundError: If no such folder is owned by the user.
    """
    try:
        return Folder.objects.get(id=folder_id, user=user)
    except Folder.DoesNotExist as error:
        raise FolderNotFoundError(folder_id) from error


def list_folders(
    user: _User,
    parent_folder_id: int | None | object = ALL_FOLDERS,
) -> QuerySet[Folder]:
    """List folders owned by the user.

    Args:
        user: Folder owner.
        parent_folder_id: Only folders directly under this parent.
            None lists root-level folders. Omit to list every folder.

    Returns:
        QuerySet of Folder objects.
    """
    folders = Folder.objects.filter(user=user)
    if parent_folder_id is ALL_FOLDERS:
        return folders
    return folders.filter(parent_folder_id=parent_folder_id)


def create_folder(
    user: _User,
    name: str,
    parent_folder_id: int | None = None,
) -> Folder:
    """Create a folder, at the root or under a parent.

    The parent row is locked until the new folder is inserted, so a
    concurrent ``delete_folder`` of the parent waits for us and then
    sees the new child.

    Sibling names may repeat.

    Args:
        user: Owner of the new folder.
        name: Folder name.
        parent_folder_id: Parent folder ID, None for root.

    Returns:
        Created Folder instance.

    Raises:
        InvalidParentError: If the parent is missing or not owned by user.
    """
    with transaction.atomic():
        if parent_folder_id is not None:
            parent_exists = (
                Folder.objects.select_for_update()
                .filter(id=parent_folder_id, user=user)
                .exists()
            )
            if not parent_exists:
                logger.warning(
                    'Invalid parent folder %d for user %s',
                    parent_folder_id,
                    user.username,
                )
                raise InvalidParentError(parent_folder_id)

        folder = Folder.objects.create(
            user=user,
            name=name,
            parent_folder_id=parent_folder_id,
        )

    logger.info(
        'Folder created: %s (ID: %d, parent: %s)',
        name,
        folder.id,
        parent_folder_id,
    )
    return folder


def delete_folder(user: _User, folder_id: int) -> None:
    """Delete an empty folder.

    Deletion never cascades: the folder must have no child folders
    and no images. The emptiness check and the delete run in one
    transaction holding the folder's row lock, which creators of
    children take as well.

    Args:
        user: Folder owner.
        folder_id: ID of folder to delete.

    Raises:
        FolderNotFoundError: If no such folder is owned by the user.
        FolderNotEmptyError: If the folder has contents.
    """
    with transaction.atomic():
        try:
            folder = Folder.objects.select_for_update().get(
                id=folder_id,
                user=user,
            )
        except Folder.DoesNotExist as error:
            logger.warning(
                'Folder not found: ID=%d, user=%s',
                folder_id,
                user.username,
            )
            raise FolderNotFoundError(folder_id) from error

        child_count = Folder.objects.filter(parent_folder=folder).count()
        image_count = Image.objects.filter(folder=folder).count()
        if child_count or image_count:
            logger.warning(
                'Refusing to delete non-empty folder: ID=%d '
                '(%d folders, %d images)',
                folder_id,
                child_count,
                image_count,
            )
            raise FolderNotEmptyError(folder_id, child_count, image_count)

        try:
            folder.delete()
        except RestrictedError as error:
            # Contents appeared despite the lock (e.g. written outside
            # these operations); the RESTRICT foreign keys caught it
            logger.warning('Folder gained contents before delete: %d', folder_id)
            raise FolderNotEmptyError(
                folder_id,
                Folder.objects.filter(parent_folder_id=folder_id).count(),
                Image.objects.filter(folder_id=folder_id).count(),
            ) from error

    logger.info('Folder deleted: ID=%d', folder_id)


def resolve_path(user: _User, folder_id: int | None = None) -> list[PathEntry]:
    """Build the breadcrumb from the root to a folder.

    Loads the user's folder tree once and walks parent pointers up
    from the target. A folder met twice means the tree has a cycle,
    which is reported instead of looping forever.

    Args:
        user: Folder owner.
        folder_id: Target folder ID, None for the root itself.

    Returns:
        List of PathEntry, root entry first, target last.

    Raises:
        FolderNotFoundError: If the target is not owned by the user.
        CorruptHierarchyError: If the parent chain is cyclic.
    """
    root = PathEntry(id=None, name=get_root_label())
    if folder_id is None:
        return [root]

    parents: dict[int, tuple[str, int | None]] = {
        row_id: (name, parent_id)
        for row_id, name, parent_id in Folder.objects.filter(
            user=user,
        ).values_list('id', 'name', 'parent_folder_id')
    }
    if folder_id not in parents:
        raise FolderNotFoundError(folder_id)

    path: list[PathEntry] = []
    visited: set[int] = set()
    current_id: int | None = folder_id
    while current_id is not None:
        if current_id in visited:
            logger.error(
                'Cycle in folder tree of user %s at folder %d',
                user.username,
                current_id,
            )
            raise CorruptHierarchyError(current_id)
        visited.add(current_id)

        if current_id not in parents:
            # Parent owned by another user or gone: treat as corrupt too
            logger.error(
                'Folder %d of user %s has a foreign parent',
                folder_id,
                user.username,
            )
            raise CorruptHierarchyError(current_id)

        name, parent_id = parents[current_id]
        path.append(PathEntry(id=current_id, name=name))
        current_id = parent_id

    path.append(root)
    path.reverse()
    return path
