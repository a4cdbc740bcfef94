"""JSON API views for folders, images and search.

Views only parse input, call the logic layer on behalf of
``api_user`` and render the result. Errors raised by the logic
layer are rendered by ``ApiView``.
"""

from http import HTTPStatus

from django.http import HttpRequest, JsonResponse

from server.apps.common.views import json_response, parse_json_body, validated_data
from server.apps.gallery.forms import (
    FolderForm,
    FolderPathForm,
    ImageUploadForm,
    ParentFilterForm,
    SearchForm,
)
from server.apps.gallery.logic.folder_operations import (
    create_folder,
    delete_folder,
    list_folders,
    resolve_path,
)
from server.apps.gallery.logic.image_operations import (
    delete_image,
    list_images,
    upload_image,
)
from server.apps.gallery.logic.search_operations import search_images
from server.apps.gallery.serializers import (
    serialize_folder,
    serialize_image,
    serialize_path_entry,
)
from server.apps.identity.authentication import TokenAuthenticatedView


class FolderCollectionView(TokenAuthenticatedView):
    """List and create folders."""

    def get(self, request: HttpRequest) -> JsonResponse:
        """List all folders, or the children of ``?parent_id=``."""
        if 'parent_id' in request.GET:
            cleaned = validated_data(ParentFilterForm(request.GET))
            folders = list_folders(self.api_user, cleaned['parent_id'])
        else:
            folders = list_folders(self.api_user)
        return json_response([serialize_folder(folder) for folder in folders])

    def post(self, request: HttpRequest) -> JsonResponse:
        """Create a folder."""
        cleaned = validated_data(FolderForm(parse_json_body(request)))
        folder = create_folder(
            self.api_user,
            cleaned['name'],
            cleaned['parent_folder_id'],
        )
        return json_response(
            serialize_folder(folder),
            status=HTTPStatus.CREATED,
        )


class FolderDetailView(TokenAuthenticatedView):
    """Delete a folder."""

    def delete(self, request: HttpRequest, folder_id: int) -> JsonResponse:
        """Delete an empty folder."""
        delete_folder(self.api_user, folder_id)
        return json_response({'detail': 'Folder deleted'})


class FolderPathView(TokenAuthenticatedView):
    """Breadcrumb from the root to a folder."""

    def get(self, request: HttpRequest) -> JsonResponse:
        """Resolve the path of ``?folder_id=`` (root when absent)."""
        cleaned = validated_data(FolderPathForm(request.GET))
        path = resolve_path(self.api_user, cleaned['folder_id'])
        return json_response([serialize_path_entry(entry) for entry in path])


class ImageCollectionView(TokenAuthenticatedView):
    """List and upload images."""

    def get(self, request: HttpRequest) -> JsonResponse:
        """List images in ``?parent_id=`` (root when absent or empty)."""
        cleaned = validated_data(ParentFilterForm(request.GET))
        images = list_images(self.api_user, cleaned['parent_id'])
        return json_response([serialize_image(image) for image in images])

    def post(self, request: HttpRequest) -> JsonResponse:
        """Upload an image from a multipart form."""
        cleaned = validated_data(ImageUploadForm(request.POST, request.FILES))
        uploaded = cleaned['image']
        image = upload_image(
            self.api_user,
            name=cleaned['name'],
            file_obj=uploaded,
            filename=uploaded.name,
            content_type=uploaded.content_type,
            folder_id=cleaned['folder_id'],
        )
        return json_response(
            serialize_image(image),
            status=HTTPStatus.CREATED,
        )


class ImageDetailView(TokenAuthenticatedView):
    """Delete an image."""

    def delete(self, request: HttpRequest, image_id: int) -> JsonResponse:
        """Delete an image and its blob."""
        delete_image(self.api_user, image_id)
        return json_response({'detail': 'Image deleted'})


class SearchView(TokenAuthenticatedView):
    """Search images by name."""

    def get(self, request: HttpRequest) -> JsonResponse:
        """Find images whose name contains ``?q=``."""
        cleaned = validated_data(SearchForm(request.GET))
        images = search_images(self.api_user, cleaned['q'])
        return json_response([serialize_image(image) for image in images])
