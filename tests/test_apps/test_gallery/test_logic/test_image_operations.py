"""Tests for image business logic."""

from io import BytesIO

import pytest

from server.apps.gallery.exceptions import (
    DeleteFailedError,
    ImageNotFoundError,
    InvalidFolderError,
    UploadFailedError,
)
from server.apps.gallery.logic.image_operations import (
    delete_image,
    get_image,
    list_images,
    upload_image,
)
from server.apps.gallery.models import Image


@pytest.mark.django_db
class TestUploadImage:
    """Tests for upload_image."""

    def test_upload_to_root(self, user, mock_s3, bucket_keys, png_upload):
        """Test successful upload (S3 + DB) at the root."""
        image = upload_image(
            user,
            name='Beach day',
            file_obj=png_upload,
            filename=png_upload.name,
            content_type='image/png',
        )

        assert image.id is not None
        assert image.user == user
        assert image.folder_id is None
        assert image.name == 'Beach day'
        assert image.storage_key.startswith(f'{user.id}/root/')
        assert image.storage_key.endswith('-beach.png')
        assert image.url.endswith(image.storage_key)
        assert image.content_type == 'image/png'
        assert image.size_bytes == png_upload.size
        assert len(image.checksum_sha256) == 64
        assert bucket_keys() == {image.storage_key}

    def test_upload_into_folder(self, user, folder, mock_s3, png_upload):
        """Test storage key is namespaced by folder."""
        image = upload_image(
            user,
            name='beach.png',
            file_obj=png_upload,
            filename=png_upload.name,
            folder_id=folder.id,
        )

        assert image.folder_id == folder.id
        assert image.storage_key.startswith(f'{user.id}/{folder.id}/')

    def test_upload_keys_are_unique(self, user, mock_s3, png_bytes):
        """Test same filename twice gives two blobs."""
        first = upload_image(user, 'a', BytesIO(png_bytes), 'same.png')
        second = upload_image(user, 'b', BytesIO(png_bytes), 'same.png')

        assert first.storage_key != second.storage_key

    def test_upload_guesses_content_type(self, user, mock_s3, png_bytes):
        """Test missing content type is guessed from filename."""
        image = upload_image(user, 'photo', BytesIO(png_bytes), 'photo.jpg')

        assert image.content_type == 'image/jpeg'

    def test_upload_into_foreign_folder(
        self,
        user,
        foreign_folder,
        mock_s3,
        bucket_keys,
        png_upload,
    ):
        """Test folder of another user is rejected before uploading."""
        with pytest.raises(InvalidFolderError):
            upload_image(
                user,
                name='beach.png',
                file_obj=png_upload,
                filename=png_upload.name,
                folder_id=foreign_folder.id,
            )

        assert Image.objects.count() == 0
        assert bucket_keys() == set()

    def test_upload_into_missing_folder(self, user, mock_s3, png_upload):
        """Test nonexistent folder is rejected."""
        with pytest.raises(InvalidFolderError):
            upload_image(
                user,
                name='beach.png',
                file_obj=png_upload,
                filename=png_upload.name,
                folder_id=99999,
            )

    def test_storage_failure_creates_no_record(
        self,
        user,
        broken_storage,
        png_upload,
    ):
        """Test failed blob upload never leaves a record behind."""
        with pytest.raises(UploadFailedError):
            upload_image(
                user,
                name='beach.png',
                file_obj=png_upload,
                filename=png_upload.name,
                storage=broken_storage,
            )

        assert Image.objects.count() == 0

    def test_record_failure_rolls_back_blob(
        self,
        user,
        mock_s3,
        bucket_keys,
        png_upload,
        monkeypatch,
    ):
        """Test blob is deleted when the record cannot be created."""
        def failing_create(**kwargs):
            raise RuntimeError('database is gone')

        monkeypatch.setattr(Image.objects, 'create', failing_create)

        with pytest.raises(RuntimeError):
            upload_image(
                user,
                name='beach.png',
                file_obj=png_upload,
                filename=png_upload.name,
            )

        assert bucket_keys() == set()


@pytest.mark.django_db
class TestListImages:
    """Tests for list_images and get_image."""

    def test_root_listing_excludes_folders(
        self,
        user,
        folder,
        mock_s3,
        png_bytes,
    ):
        """Test None lists exactly the images without a folder."""
        at_root = upload_image(user, 'root', BytesIO(png_bytes), 'r.png')
        upload_image(
            user,
            'nested',
            BytesIO(png_bytes),
            'n.png',
            folder_id=folder.id,
        )

        assert list(list_images(user)) == [at_root]

    def test_folder_listing(self, user, folder, mock_s3, png_bytes):
        """Test listing images of one folder."""
        upload_image(user, 'root', BytesIO(png_bytes), 'r.png')
        nested = upload_image(
            user,
            'nested',
            BytesIO(png_bytes),
            'n.png',
            folder_id=folder.id,
        )

        assert list(list_images(user, folder.id)) == [nested]

    def test_user_isolation(self, user, other_user, mock_s3, png_bytes):
        """Test images of other users are never listed."""
        upload_image(other_user, 'theirs', BytesIO(png_bytes), 't.png')

        assert not list_images(user).exists()

    def test_get_foreign_image(self, user, other_user, mock_s3, png_bytes):
        """Test images of other users are not found."""
        theirs = upload_image(other_user, 'x', BytesIO(png_bytes), 'x.png')

        with pytest.raises(ImageNotFoundError):
            get_image(user, theirs.id)


@pytest.mark.django_db
class TestDeleteImage:
    """Tests for delete_image."""

    def test_delete_removes_blob_and_record(
        self,
        user,
        mock_s3,
        bucket_keys,
        png_upload,
    ):
        """Test successful deletion (S3 + DB)."""
        image = upload_image(user, 'beach', png_upload, png_upload.name)

        delete_image(user, image.id)

        assert not Image.objects.filter(id=image.id).exists()
        assert bucket_keys() == set()

    def test_delete_missing_image(self, user, mock_s3):
        """Test deleting nonexistent image."""
        with pytest.raises(ImageNotFoundError):
            delete_image(user, 99999)

    def test_delete_foreign_image(
        self,
        user,
        other_user,
        mock_s3,
        bucket_keys,
        png_upload,
    ):
        """Test another user's image is neither found nor touched."""
        theirs = upload_image(other_user, 'x', png_upload, png_upload.name)

        with pytest.raises(ImageNotFoundError):
            delete_image(user, theirs.id)

        assert Image.objects.filter(id=theirs.id).exists()
        assert bucket_keys() == {theirs.storage_key}

    def test_blob_failure_keeps_record(
        self,
        user,
        mock_s3,
        png_upload,
        failing_blob_delete,
    ):
        """Test record survives when the blob cannot be deleted."""
        image = upload_image(user, 'beach', png_upload, png_upload.name)

        with pytest.raises(DeleteFailedError):
            delete_image(user, image.id)

        assert Image.objects.filter(id=image.id).exists()
