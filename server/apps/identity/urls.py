from django.urls import path

from server.apps.identity.views import LoginView, LogoutView, SignupView

app_name = 'identity'

urlpatterns = [
    path('signup', SignupView.as_view(), name='signup'),
    path('login', LoginView.as_view(), name='login'),
    path('logout', LogoutView.as_view(), name='logout'),
]
