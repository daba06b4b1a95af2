from django.urls import path

from .views import (
    BlockUserView,
    CurrentUserView,
    CustomLoginView,
    ForgotPasswordView,
    RegistrationView,
    ResetPasswordView,
    UserListView,
)

urlpatterns = [
    path('register/', RegistrationView.as_view(), name='registration'),
    path('login/', CustomLoginView.as_view(), name='login'),
    path('me/', CurrentUserView.as_view(), name='current-user'),
    path('users/', UserListView.as_view(), name='user-list'),
    path('users/<int:pk>/block/', BlockUserView.as_view(), name='user-block'),
    path('forgot-password/', ForgotPasswordView.as_view(), name='forgot-password'),
    path('reset-password/', ResetPasswordView.as_view(), name='reset-password'),
]
