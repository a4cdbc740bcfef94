"""JSON representations of gallery models."""

from typing import Any

from server.apps.gallery.logic.folder_operations import PathEntry
from server.apps.gallery.models import Folder, Image


def serialize_folder(folder: Folder) -> dict[str, Any]:
    """Render a folder for API responses."""
    return {
        'id': folder.id,
        'name': folder.name,
        'user_id': folder.user_id,
        'parent_folder_id': folder.parent_folder_id,
        'created_at': folder.created_at.isoformat(),
    }


def serialize_image(image: Image) -> dict[str, Any]:
    """Render an image for API responses.

    The storage key is internal and not exposed.
    """
    return {
        'id': image.id,
        'name': image.name,
        'url': image.url,
        'folder_id': image.folder_id,
        'user_id': image.user_id,
        'content_type': image.content_type,
        'size_bytes': image.size_bytes,
        'created_at': image.created_at.isoformat(),
    }


def serialize_path_entry(entry: PathEntry) -> dict[str, Any]:
    """Render a breadcrumb step for API responses."""
    return {'id': entry.id, 'name': entry.name}
