"""Base class-based view for the JSON API."""

import json
import logging
from typing import Any

from django import forms
from django.http import HttpRequest, HttpResponse, JsonResponse
from django.utils.decorators import method_decorator
from django.views import View
from django.views.decorators.csrf import csrf_exempt

from server.apps.common.exceptions import ApiError, MalformedRequestError

logger = logging.getLogger(__name__)


@method_decorator(csrf_exempt, name='dispatch')
class ApiView(View):
    """JSON API view.

    Runs ``prepare_request`` before the handler and converts any
    ``ApiError`` raised on the way into a ``{"detail": ...}`` response.
    Token-authenticated API, so CSRF protection does not apply.
    """

    def dispatch(
        self,
        request: HttpRequest,
        *args: Any,
        **kwargs: Any,
    ) -> HttpResponse:
        """Dispatch the request, rendering API errors as JSON.

        Args:
            request: Incoming request.
            args: Positional URL arguments.
            kwargs: Keyword URL arguments.

        Returns:
            Handler response or JSON error response.
        """
        try:
            self.prepare_request(request)
            return super().dispatch(request, *args, **kwargs)
        except ApiError as error:
            return _error_response(request, error)

    def prepare_request(self, request: HttpRequest) -> None:
        """Hook run before the handler, e.g. to authenticate.

        Args:
            request: Incoming request.
        """


def json_response(payload: Any, status: int = 200) -> JsonResponse:
    """Render any JSON-serializable payload, lists included."""
    return JsonResponse(payload, status=status, safe=False)


def parse_json_body(request: HttpRequest) -> dict[str, Any]:
    """Decode a JSON object request body.

    Args:
        request: Incoming request.

    Returns:
        Decoded JSON object (empty dict for an empty body).

    Raises:
        MalformedRequestError: If the body is not a JSON object.
    """
    if not request.body:
        return {}
    try:
        payload = json.loads(request.body)
    except (UnicodeDecodeError, json.JSONDecodeError) as error:
        raise MalformedRequestError('Request body is not valid JSON') from error
    if not isinstance(payload, dict):
        raise MalformedRequestError('Request body must be a JSON object')
    return payload


def validated_data(form: forms.Form) -> dict[str, Any]:
    """Validate a bound form and return its cleaned data.

    Args:
        form: Bound Django form.

    Returns:
        ``form.cleaned_data``.

    Raises:
        MalformedRequestError: With the first field error as message.
    """
    if form.is_valid():
        return form.cleaned_data

    field, errors = next(iter(form.errors.items()))
    raise MalformedRequestError(f'{field}: {errors[0]}')


def _error_response(request: HttpRequest, error: ApiError) -> JsonResponse:
    if error.is_server_error:
        logger.exception(
            '%s %s failed: %s',
            request.method,
            request.path,
            error.message,
        )
    else:
        logger.warning(
            '%s %s rejected (%d): %s',
            request.method,
            request.path,
            error.status_code,
            error.message,
        )

    response = json_response(
        {'detail': error.message},
        status=error.status_code,
    )
    for header, header_value in error.headers.items():
        response[header] = header_value
    return response
