from django.db import models
from django.contrib.auth.models import User


class UserProfile(models.Model):
    """
    Extends the built-in Django User model with the application's role and blocking state.

    This model uses a one-to-one relationship to the `User` model, a common pattern in Django for
    adding application-specific fields without creating a fully custom user model. A profile is
    created automatically for every new user (see `user_auth_app.signals`).

    Attributes:
        user (OneToOneField): A required link to an instance of the `auth.User` model. Deleting
            the User will also delete the associated UserProfile.
        role (CharField): Either 'user' or 'admin'. Admins manage the style catalog, users and
            may edit or delete any review.
        is_blocked (BooleanField): Blocked users cannot log in or write reviews.
        blocked_reason (CharField): The reason an admin gave when blocking the user.
    """
    class Role(models.TextChoices):
        """The roles a user can have within the application."""
        USER = 'user', 'User'
        ADMIN = 'admin', 'Admin'

    user = models.OneToOneField(
        User,
        on_delete=models.CASCADE,
        related_name='profile',
        help_text="The user this profile belongs to."
    )
    role = models.CharField(
        max_length=10,
        choices=Role.choices,
        default=Role.USER,
        help_text="The role of the user (user or admin)."
    )
    is_blocked = models.BooleanField(default=False)
    blocked_reason = models.CharField(max_length=255, blank=True, default='')

    def __str__(self):
        """Returns the username of the associated User together with its role."""
        return f"{self.user.username} ({self.role})"

    @property
    def is_admin(self):
        return self.role == self.Role.ADMIN

    def block(self, reason):
        """Blocks the user with the given reason and persists the change."""
        self.is_blocked = True
        self.blocked_reason = reason
        self.save(update_fields=['is_blocked', 'blocked_reason'])

    def unblock(self):
        """Lifts a block and clears its reason."""
        self.is_blocked = False
        self.blocked_reason = ''
        self.save(update_fields=['is_blocked', 'blocked_reason'])
