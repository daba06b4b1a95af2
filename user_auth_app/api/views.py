import logging

from django.conf import settings
from django.contrib.auth.models import User
from django.contrib.auth.tokens import default_token_generator
from django.core.mail import send_mail
from django.utils.encoding import force_bytes
from django.utils.http import urlsafe_base64_encode
from rest_framework import generics, status
from rest_framework.authtoken.models import Token
from rest_framework.authtoken.views import ObtainAuthToken
from rest_framework.exceptions import NotFound, PermissionDenied, ValidationError
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from core.responses import envelope
from user_auth_app.models import UserProfile
from .permissions import IsAdminRole
from .serializers import (
    BlockUserSerializer,
    ForgotPasswordSerializer,
    LoginSerializer,
    RegistrationSerializer,
    ResetPasswordSerializer,
    UserSerializer,
)

logger = logging.getLogger(__name__)


def auth_payload(user, token):
    """The body returned by register and login: the token plus the user's public details."""
    return {
        'token': token.key,
        'id': user.id,
        'name': user.first_name,
        'email': user.email,
        'role': user.profile.role,
    }


class RegistrationView(APIView):
    """
    Handles new user registration.

    This endpoint allows any unauthenticated user to create a new account. Upon successful
    registration it returns an authentication token for immediate login.

    Endpoint:
        POST /api/auth/register/

    Request Body:
        - name (str): The display name.
        - email (str): The user's email address.
        - password (str): The user's password.

    Responses:
        - 201 Created: `{"success": true, "data": {"token", "id", "name", "email", "role"}}`
        - 400 Bad Request: The provided data was invalid (e.g., email already registered,
          password too short).
    """
    permission_classes = [AllowAny]

    def post(self, request):
        serializer = RegistrationSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        user = serializer.save()

        token, created = Token.objects.get_or_create(user=user)
        logger.info("Registered user %s", user.pk)
        return Response(envelope(auth_payload(user, token)), status=status.HTTP_201_CREATED)


class CustomLoginView(ObtainAuthToken):
    """
    Handles user authentication and token generation.

    Endpoint:
        POST /api/auth/login/

    Request Body:
        - email (str): The user's email address.
        - password (str): The user's password.

    Responses:
        - 200 OK: Returns the auth token and basic user details.
        - 401 Unauthorized: The credentials are wrong.
        - 403 Forbidden: The account has been blocked by an admin. The message contains the
          reason.
    """
    permission_classes = [AllowAny]
    serializer_class = LoginSerializer

    def post(self, request):
        serializer = self.serializer_class(data=request.data, context={'request': request})
        serializer.is_valid(raise_exception=True)
        user = serializer.validated_data['user']

        if user.profile.is_blocked:
            raise PermissionDenied(f"Your account has been blocked: {user.profile.blocked_reason}")

        token, created = Token.objects.get_or_create(user=user)
        return Response(envelope(auth_payload(user, token)), status=status.HTTP_200_OK)


class CurrentUserView(APIView):
    """Returns the authenticated user's details (`GET /api/auth/me/`)."""
    permission_classes = [IsAuthenticated]

    def get(self, request):
        return Response(envelope(UserSerializer(request.user).data))


class UserListView(generics.ListAPIView):
    """
    Lists every user with role and blocking state, for the admin panel.

    Endpoint:
        GET /api/auth/users/
    """
    queryset = User.objects.select_related('profile').order_by('id')
    serializer_class = UserSerializer
    permission_classes = [IsAdminRole]
    pagination_class = None

    def list(self, request, *args, **kwargs):
        data = self.get_serializer(self.get_queryset(), many=True).data
        return Response(envelope(data, count=len(data)))


class BlockUserView(APIView):
    """
    Blocks or unblocks a user.

    Endpoint:
        PUT /api/auth/users/{id}/block/

    Request Body:
        - reason (str): Why the user is blocked. An empty reason unblocks the user.

    Blocking revokes the user's token so the block takes effect immediately; the blocked user
    can no longer log in to get a new one. Admins can neither block themselves nor other admins.
    """
    permission_classes = [IsAdminRole]

    def put(self, request, pk):
        target = User.objects.select_related('profile').filter(pk=pk).first()
        if target is None:
            raise NotFound('User not found')

        serializer = BlockUserSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        reason = serializer.validated_data['reason'].strip()

        try:
            profile = target.profile
        except UserProfile.DoesNotExist:
            profile = UserProfile.objects.create(user=target)

        if reason:
            if target == request.user:
                raise ValidationError('You cannot block yourself')
            if profile.is_admin:
                raise ValidationError('Admins cannot be blocked')
            profile.block(reason)
            Token.objects.filter(user=target).delete()
            logger.info("User %s blocked by admin %s", target.pk, request.user.pk)
        else:
            profile.unblock()
            logger.info("User %s unblocked by admin %s", target.pk, request.user.pk)

        return Response(envelope(UserSerializer(target).data))


class ForgotPasswordView(APIView):
    """
    Sends a password-reset link to the given email address.

    The response is the same whether or not an account exists for the address, so the endpoint
    cannot be used to probe for registered emails.

    Endpoint:
        POST /api/auth/forgot-password/
    """
    permission_classes = [AllowAny]

    def post(self, request):
        serializer = ForgotPasswordSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        email = serializer.validated_data['email'].strip().lower()

        user = User.objects.filter(email__iexact=email, is_active=True).first()
        if user is not None:
            uid = urlsafe_base64_encode(force_bytes(user.pk))
            token = default_token_generator.make_token(user)
            link = f"{settings.FRONTEND_URL}/reset-password/{uid}/{token}"
            send_mail(
                subject='Reset your password',
                message=f"Hello {user.first_name},\n\nUse the link below to choose a new password:\n{link}\n",
                from_email=settings.DEFAULT_FROM_EMAIL,
                recipient_list=[user.email],
            )
            logger.info("Password reset link sent to user %s", user.pk)

        return Response({
            'success': True,
            'message': 'If an account exists for this email, a reset link has been sent.'
        })


class ResetPasswordView(APIView):
    """
    Sets a new password using the uid and token from a reset link.

    Endpoint:
        POST /api/auth/reset-password/
    """
    permission_classes = [AllowAny]

    def post(self, request):
        serializer = ResetPasswordSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        user = serializer.save()

        # Existing tokens were issued for the old password.
        Token.objects.filter(user=user).delete()
        return Response({'success': True, 'message': 'Password has been reset.'})
