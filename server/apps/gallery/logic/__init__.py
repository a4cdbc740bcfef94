"""Business logic layer for gallery app.

This package contains all business logic for the image drive:
- Folder tree: listing, creation, non-cascading deletion, breadcrumbs
- Images: listing, upload, deletion
- Search by image name

Every operation takes the acting user and only ever touches rows
owned by that user. Business logic stays separate from models
(data layer), views (HTTP) and infrastructure (external systems).
"""
