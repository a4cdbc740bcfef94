from django.urls import path, register_converter

from server.apps.common.converters import IdConverter
from server.apps.gallery.views import (
    FolderCollectionView,
    FolderDetailView,
    FolderPathView,
    ImageCollectionView,
    ImageDetailView,
    SearchView,
)

register_converter(IdConverter, 'id')

app_name = 'gallery'

urlpatterns = [
    path('folders', FolderCollectionView.as_view(), name='folders'),
    path('folders/path', FolderPathView.as_view(), name='folder_path'),
    path(
        'folders/<id:folder_id>',
        FolderDetailView.as_view(),
        name='folder_detail',
    ),
    path('images', ImageCollectionView.as_view(), name='images'),
    path(
        'images/<id:image_id>',
        ImageDetailView.as_view(),
        name='image_detail',
    ),
    path('search', SearchView.as_view(), name='search'),
]
