"""Image drive settings: API tokens, uploads and folder tree."""

from server.settings.components import config

# API bearer tokens: fixed lifetime from issuance, in seconds
API_TOKEN_TTL = config('API_TOKEN_TTL', cast=int, default=86400)

# Maximum live tokens per user, the oldest ones are revoked on login
API_TOKEN_LIMIT = config('API_TOKEN_LIMIT', cast=int, default=5)

# Label of the root entry in folder breadcrumbs
DRIVE_ROOT_LABEL = config('DRIVE_ROOT_LABEL', default='My Drive')

# Largest accepted image upload: 10 MB
IMAGE_MAX_UPLOAD_BYTES = config(
    'IMAGE_MAX_UPLOAD_BYTES',
    cast=int,
    default=10 * 1024 * 1024,
)
DATA_UPLOAD_MAX_MEMORY_SIZE = IMAGE_MAX_UPLOAD_BYTES
