"""Input forms for folder, image and search requests.

Forms are the only place where raw request values are parsed: an
empty string for an optional id becomes None here, and everything
below the views sees either an int or None.
"""

from django import forms
from django.conf import settings
from django.core.files.uploadedfile import UploadedFile

from server.apps.common.converters import MAX_ID
from server.apps.gallery.models import Folder, Image

_NAME_MAX_LENGTH = Folder._meta.get_field('name').max_length
_IMAGE_NAME_MAX_LENGTH = Image._meta.get_field('name').max_length


def get_max_upload_bytes() -> int:
    """Get the largest accepted upload size.

    Returns:
        Size limit from settings or default of 10 MB.
    """
    return getattr(settings, 'IMAGE_MAX_UPLOAD_BYTES', 10 * 1024 * 1024)


class OptionalIdField(forms.IntegerField):
    """Positive integer id; empty string and null mean "absent".

    Ids above the primary key range are rejected here, the database
    driver would fail on them.
    """

    def __init__(self, **kwargs: object) -> None:
        """Initialize OptionalIdField as a non-required positive int."""
        kwargs.setdefault('required', False)
        kwargs.setdefault('min_value', 1)
        kwargs.setdefault('max_value', MAX_ID)
        super().__init__(**kwargs)


class FolderForm(forms.Form):
    """Payload of folder creation."""

    name = forms.CharField(max_length=_NAME_MAX_LENGTH)
    parent_folder_id = OptionalIdField()


class ImageUploadForm(forms.Form):
    """Multipart payload of image upload."""

    name = forms.CharField(max_length=_IMAGE_NAME_MAX_LENGTH)
    folder_id = OptionalIdField()
    image = forms.ImageField()

    def clean_image(self) -> UploadedFile:
        """Reject uploads above the configured size limit."""
        image = self.cleaned_data['image']
        limit = get_max_upload_bytes()
        if image.size > limit:
            raise forms.ValidationError(
                f'Image is too large ({image.size} bytes, limit {limit})',
            )
        return image


class ParentFilterForm(forms.Form):
    """Query string of image and folder listings."""

    parent_id = OptionalIdField()


class FolderPathForm(forms.Form):
    """Query string of breadcrumb lookups."""

    folder_id = OptionalIdField()


class SearchForm(forms.Form):
    """Query string of image search."""

    q = forms.CharField(required=False)  # noqa: WPS111
