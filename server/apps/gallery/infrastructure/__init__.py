"""Infrastructure layer for gallery app.

This package contains integrations with external systems:
- Custom storage backend for image blobs (S3/MinIO)
- Metadata extraction (content type, checksum, storage keys)

Keep infrastructure concerns separate from business logic.
"""
