from django.contrib.auth import authenticate, password_validation
from django.contrib.auth.models import User
from django.contrib.auth.tokens import default_token_generator
from django.utils.encoding import force_str
from django.utils.http import urlsafe_base64_decode
from rest_framework import serializers
from rest_framework.exceptions import AuthenticationFailed


class UserSerializer(serializers.ModelSerializer):
    """
    Read-only representation of a user together with its profile state.

    This is what the admin user list and the `me` endpoint return. The display name is stored in
    the built-in `first_name` field.
    """
    name = serializers.CharField(source='first_name', read_only=True)
    role = serializers.CharField(source='profile.role', read_only=True)
    is_blocked = serializers.BooleanField(source='profile.is_blocked', read_only=True)
    blocked_reason = serializers.CharField(source='profile.blocked_reason', read_only=True)

    class Meta:
        model = User
        fields = ['id', 'name', 'email', 'role', 'is_blocked', 'blocked_reason']


class RegistrationSerializer(serializers.Serializer):
    """
    Handles the registration of a new user.

    Input Fields:
        - name (str): The display name shown next to the user's reviews.
        - email (str): The user's email address. Must be unique (case-insensitive) and doubles as
          the username.
        - password (str): Checked against the configured password validators.

    Output:
        - On successful validation and save, returns the newly created `User` instance. Its
          `UserProfile` (role 'user') is created by the post-save signal.
    """
    name = serializers.CharField(max_length=150)
    email = serializers.EmailField(max_length=150)
    password = serializers.CharField(
        style={'input_type': 'password'},
        write_only=True,
        trim_whitespace=False
    )

    def validate_email(self, value):
        """Normalizes the email and rejects addresses that are already registered."""
        email = value.strip().lower()
        if User.objects.filter(email__iexact=email).exists():
            raise serializers.ValidationError('This email address already exists.')
        return email

    def validate(self, data):
        """Runs Django's password validators against the would-be user."""
        candidate = User(username=data['email'], email=data['email'], first_name=data['name'])
        password_validation.validate_password(data['password'], user=candidate)
        return data

    def create(self, validated_data):
        # `create_user` takes care of hashing the password.
        return User.objects.create_user(
            username=validated_data['email'],
            email=validated_data['email'],
            password=validated_data['password'],
            first_name=validated_data['name']
        )


class LoginSerializer(serializers.Serializer):
    """
    Authenticates a user based on email and password.

    It does not create or update any models. On success the authenticated user is attached to the
    validated data under the key 'user'. Wrong credentials raise `AuthenticationFailed` (401);
    whether the account is blocked is decided by the view.
    """
    email = serializers.EmailField()
    password = serializers.CharField(
        label="Password",
        style={'input_type': 'password'},
        trim_whitespace=False
    )

    def validate(self, attrs):
        email = attrs['email'].strip().lower()
        account = User.objects.filter(email__iexact=email).first()

        user = None
        if account is not None:
            # Pass the request along so authentication backends can inspect it.
            user = authenticate(
                request=self.context.get('request'),
                username=account.username,
                password=attrs['password']
            )

        if not user:
            raise AuthenticationFailed('Invalid email or password')

        attrs['user'] = user
        return attrs


class BlockUserSerializer(serializers.Serializer):
    """An empty reason means 'unblock'."""
    reason = serializers.CharField(max_length=255, allow_blank=True, required=False, default='')


class ForgotPasswordSerializer(serializers.Serializer):
    email = serializers.EmailField()


class ResetPasswordSerializer(serializers.Serializer):
    """
    Sets a new password from a password-reset link.

    The link carries the user's id encoded with `urlsafe_base64_encode` and a token from Django's
    `default_token_generator`. The token becomes invalid as soon as the password changes, so each
    link works once.
    """
    uid = serializers.CharField()
    token = serializers.CharField()
    password = serializers.CharField(
        style={'input_type': 'password'},
        write_only=True,
        trim_whitespace=False
    )

    def validate(self, attrs):
        try:
            user_id = force_str(urlsafe_base64_decode(attrs['uid']))
            user = User.objects.get(pk=user_id)
        except (TypeError, ValueError, OverflowError, User.DoesNotExist):
            user = None

        if user is None or not default_token_generator.check_token(user, attrs['token']):
            raise serializers.ValidationError('The reset link is invalid or has expired.')

        password_validation.validate_password(attrs['password'], user=user)
        attrs['user'] = user
        return attrs

    def save(self, **kwargs):
        user = self.validated_data['user']
        user.set_password(self.validated_data['password'])
        user.save(update_fields=['password'])
        return user
