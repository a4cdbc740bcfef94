"""
Main URL mapping configuration file.

Include other URLConfs from external apps using method `include()`.

It is also a good practice to keep a single URL to the root index page.

See https://docs.djangoproject.com/en/5.1/topics/http/urls/
"""

from django.contrib import admin
from django.urls import include, path

urlpatterns = [
    # Apps:
    path('', include('server.apps.identity.urls', namespace='identity')),
    path('', include('server.apps.gallery.urls', namespace='gallery')),

    # django-admin:
    path('admin/', admin.site.urls),
]
