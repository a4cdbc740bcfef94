"""
Main settings file for the project.

Settings are split into ``components`` (shared by every environment)
and ``environments`` (picked by ``DJANGO_ENV``) with django-split-settings.

To change settings locally, create ``environments/local.py``,
it is ignored by git and included last.
"""

from os import environ

import django_stubs_ext
from split_settings.tools import include, optional

# Runtime support for generics like `admin.ModelAdmin[Image]`
django_stubs_ext.monkeypatch()

# Managing environment via `DJANGO_ENV` variable:
environ.setdefault('DJANGO_ENV', 'development')
_ENV = environ['DJANGO_ENV']

_base_settings = (
    'components/common.py',
    'components/logging.py',
    'components/storages.py',
    'components/drive.py',
    # Select the right env:
    'environments/{0}.py'.format(_ENV),
    # Optionally override some settings:
    optional('environments/local.py'),
)

# Include settings:
include(*_base_settings)
