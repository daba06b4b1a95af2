from rest_framework import permissions

from user_auth_app.api.permissions import is_admin
from user_auth_app.models import UserProfile


def can_mutate_review(review, user):
    """
    Returns True if `user` may update or delete `review`.

    That is the case for the review's author and for admins. Everyone else is denied, even though
    they can see that the review exists.
    """
    if not user or not user.is_authenticated:
        return False
    return review.user_id == user.id or is_admin(user)


class IsNotBlocked(permissions.BasePermission):
    """
    Denies users who have been blocked by an admin.

    Used for review creation. It first ensures the user is authenticated, so anonymous requests
    still end up as 401 rather than 403.
    """
    message = "Your account has been blocked."

    def has_permission(self, request, view):
        if not request.user or not request.user.is_authenticated:
            return False

        try:
            profile = request.user.profile
        except UserProfile.DoesNotExist:
            return True

        if profile.is_blocked:
            self.message = f"Your account has been blocked: {profile.blocked_reason}"
            return False
        return True


class IsReviewOwnerOrAdmin(permissions.BasePermission):
    """
    Object-level permission for reviews: read access for everyone, write access for the author
    of the review and for admins.

    The denial message names the attempted action, e.g. "Not authorized to delete this review".
    """

    def has_object_permission(self, request, view, obj):
        # `SAFE_METHODS` is a tuple containing ('GET', 'HEAD', 'OPTIONS').
        if request.method in permissions.SAFE_METHODS:
            return True

        if can_mutate_review(obj, request.user):
            return True

        action = 'delete' if request.method == 'DELETE' else 'update'
        self.message = f"Not authorized to {action} this review"
        return False
