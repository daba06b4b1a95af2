from django.contrib.auth.models import User
from django.db.models.signals import post_save
from django.dispatch import receiver

from .models import UserProfile


@receiver(post_save, sender=User)
def create_user_profile(sender, instance, created, **kwargs):
    """
    Ensures every user has a UserProfile.

    Superusers created from the command line get the admin role so they can manage the catalog
    through the API straight away.
    """
    if not created:
        return
    role = UserProfile.Role.ADMIN if instance.is_superuser else UserProfile.Role.USER
    UserProfile.objects.get_or_create(user=instance, defaults={'role': role})
