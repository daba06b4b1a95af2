from rest_framework import permissions

from user_auth_app.models import UserProfile


def is_admin(user):
    """
    Returns True if the given user is authenticated and has the 'admin' role.

    Users without a profile (which should not happen, since one is created for every user) are
    treated as regular users.
    """
    if not user or not user.is_authenticated:
        return False
    try:
        return user.profile.is_admin
    except UserProfile.DoesNotExist:
        return False


class IsAdminRole(permissions.BasePermission):
    """
    Allows access only to users whose profile has the 'admin' role.

    Used for the user management endpoints. Anonymous requests fail this check as well, which DRF
    turns into a 401 response because no authenticator succeeded.
    """
    message = "Only admins can perform this action."

    def has_permission(self, request, view):
        return is_admin(request.user)


class IsAdminOrReadOnly(permissions.BasePermission):
    """
    Read-only access for everyone, write access for admins.

    This is the policy of the style catalog: anyone may browse it, only admins may create, update
    or delete styles.
    """
    message = "Only admins can modify hijab styles."

    def has_permission(self, request, view):
        if request.method in permissions.SAFE_METHODS:
            return True
        return is_admin(request.user)
