"""Exceptions for gallery app."""

from http import HTTPStatus

from server.apps.common.exceptions import ApiError


class InvalidParentError(ApiError):
    """Raised when a parent folder is missing or owned by someone else."""

    default_message = 'Invalid parent folder'

    def __init__(self, parent_folder_id: int) -> None:
        """Initialize InvalidParentError.

        Args:
            parent_folder_id: The rejected parent folder ID.
        """
        self.parent_folder_id = parent_folder_id
        super().__init__()


class InvalidFolderError(ApiError):
    """Raised when an upload targets a missing or foreign folder."""

    default_message = 'Invalid folder'

    def __init__(self, folder_id: int) -> None:
        """Initialize InvalidFolderError.

        Args:
            folder_id: The rejected folder ID.
        """
        self.folder_id = folder_id
        super().__init__()


class FolderNotFoundError(ApiError):
    """Raised when a folder does not exist for the requesting user."""

    status_code = HTTPStatus.NOT_FOUND
    default_message = 'Folder not found'

    def __init__(self, folder_id: int) -> None:
        """Initialize FolderNotFoundError.

        Args:
            folder_id: The requested folder ID.
        """
        self.folder_id = folder_id
        super().__init__()


class ImageNotFoundError(ApiError):
    """Raised when an image does not exist for the requesting user."""

    status_code = HTTPStatus.NOT_FOUND
    default_message = 'Image not found'

    def __init__(self, image_id: int) -> None:
        """Initialize ImageNotFoundError.

        Args:
            image_id: The requested image ID.
        """
        self.image_id = image_id
        super().__init__()


class FolderNotEmptyError(ApiError):
    """Raised when deleting a folder that still has contents."""

    default_message = 'Cannot delete folder with contents'

    def __init__(
        self,
        folder_id: int,
        child_count: int,
        image_count: int,
    ) -> None:
        """Initialize FolderNotEmptyError.

        Args:
            folder_id: The folder that was to be deleted.
            child_count: Number of child folders found.
            image_count: Number of images found.
        """
        self.folder_id = folder_id
        self.child_count = child_count
        self.image_count = image_count
        super().__init__(
            f'Cannot delete folder with contents '
            f'({child_count} folders, {image_count} images)',
        )


class UploadFailedError(ApiError):
    """Raised when storing an image blob fails."""

    status_code = HTTPStatus.INTERNAL_SERVER_ERROR
    default_message = 'Upload failed'


class DeleteFailedError(ApiError):
    """Raised when deleting an image blob fails; the record is kept."""

    status_code = HTTPStatus.INTERNAL_SERVER_ERROR
    default_message = 'Delete failed'


class CorruptHierarchyError(ApiError):
    """Raised when walking up the folder tree revisits a folder."""

    status_code = HTTPStatus.INTERNAL_SERVER_ERROR
    default_message = 'Folder hierarchy is corrupt'

    def __init__(self, folder_id: int) -> None:
        """Initialize CorruptHierarchyError.

        Args:
            folder_id: The folder found twice on the walk to the root.
        """
        self.folder_id = folder_id
        super().__init__(
            f'Folder hierarchy is corrupt: cycle through folder {folder_id}',
        )
