"""Business logic for image search."""

import logging
from typing import Any

from django.db.models import QuerySet

from server.apps.gallery.models import Image

# User type for Django's dynamic user model
_User = Any

logger = logging.getLogger(__name__)


def search_images(user: _User, query: str) -> QuerySet[Image]:
    """Find the user's images whose name contains the query.

    Case-insensitive, literal substring match over all of the user's
    images, whatever folder they are in. An empty query matches every
    image of the user.

    Args:
        user: Image owner.
        query: Text to look for in image names.

    Returns:
        QuerySet of matching Image objects.
    """
    query = query.strip()
    logger.debug('Searching images of user %s for %r', user.username, query)

    images = Image.objects.filter(user=user)
    if not query:
        return images
    return images.filter(name__icontains=query)
