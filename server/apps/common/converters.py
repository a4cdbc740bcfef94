"""URL path converters shared by the API apps."""

from typing import Final

from typing_extensions import override

from django.urls.converters import IntConverter

# Largest primary key a BigAutoField can hold
MAX_ID: Final = 2**63 - 1


class IdConverter(IntConverter):
    """Primary key in a URL path.

    Values past the primary key range do not match, so they end up
    as a 404 instead of reaching the database driver.
    """

    @override
    def to_python(self, value: str) -> int:
        number = super().to_python(value)
        if number > MAX_ID:
            raise ValueError(value)
        return number
