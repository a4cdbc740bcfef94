"""Input forms for signup and login requests."""

from django import forms
from django.contrib.auth import get_user_model

_USERNAME_MAX_LENGTH = get_user_model()._meta.get_field('username').max_length


class SignupForm(forms.Form):
    """Signup payload."""

    username = forms.CharField(max_length=_USERNAME_MAX_LENGTH)
    password = forms.CharField(strip=False)
    email = forms.EmailField()


class LoginForm(forms.Form):
    """Login payload."""

    username = forms.CharField(max_length=_USERNAME_MAX_LENGTH)
    password = forms.CharField(strip=False)
