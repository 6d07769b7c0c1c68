from django.urls import path
from .views import (
    RegisterView,
    LoginView,
    LogoutView,
    SessionView,
    CurrentUserView,
    UserDetailView,
)

urlpatterns = [
    # Authentication
    path('auth/register', RegisterView.as_view(), name='auth-register'),
    path('auth/login', LoginView.as_view(), name='auth-login'),
    path('auth/logout', LogoutView.as_view(), name='auth-logout'),
    path('auth/session', SessionView.as_view(), name='auth-session'),

    # Users
    path('users/current', CurrentUserView.as_view(), name='user-current'),
    path('users/<int:pk>', UserDetailView.as_view(), name='user-detail'),
]
