"""JSON API views for signup, login and logout."""

from http import HTTPStatus

from django.core.exceptions import ValidationError
from django.http import HttpRequest, JsonResponse

from server.apps.common.exceptions import MalformedRequestError
from server.apps.common.views import (
    ApiView,
    json_response,
    parse_json_body,
    validated_data,
)
from server.apps.identity.authentication import TokenAuthenticatedView
from server.apps.identity.forms import LoginForm, SignupForm
from server.apps.identity.logic.account_operations import (
    register_user,
    verify_credentials,
)
from server.apps.identity.logic.token_manager import issue_token, revoke_token


class SignupView(ApiView):
    """Create a user account."""

    def post(self, request: HttpRequest) -> JsonResponse:
        """Register a new user."""
        cleaned = validated_data(SignupForm(parse_json_body(request)))
        try:
            user = register_user(
                username=cleaned['username'],
                password=cleaned['password'],
                email=cleaned['email'],
            )
        except ValidationError as error:
            raise MalformedRequestError(' '.join(error.messages)) from error

        return json_response(
            {'detail': 'User created', 'id': user.id},
            status=HTTPStatus.CREATED,
        )


class LoginView(ApiView):
    """Exchange credentials for a bearer token."""

    def post(self, request: HttpRequest) -> JsonResponse:
        """Verify credentials and issue a token."""
        cleaned = validated_data(LoginForm(parse_json_body(request)))
        user = verify_credentials(
            cleaned['username'],
            cleaned['password'],
            request=request,
        )
        issued = issue_token(user)
        return json_response({
            'token': issued.token,
            'expires_at': issued.expires_at.isoformat(),
        })


class LogoutView(TokenAuthenticatedView):
    """Revoke the token used for this request."""

    def post(self, request: HttpRequest) -> JsonResponse:
        """Revoke the current token."""
        revoke_token(self.api_token)
        return json_response({'detail': 'Logged out'})
