from django.conf import settings
from django.core.validators import MaxValueValidator, MinLengthValidator, MinValueValidator
from django.db import models

from styles_app.models import HijabStyle


class Review(models.Model):
    """
    Represents a user's review of a hijab style.

    A review consists of a star rating and a comment. A key constraint is that a user can only
    leave one review per style, enforced by a unique constraint on the database level. The API
    also checks for an existing review before inserting, so the constraint only matters when two
    requests race.

    Attributes:
        hijab_style (ForeignKey): The style being reviewed. Deleting the style deletes its reviews.
        user (ForeignKey): The author of the review.
        rating (PositiveSmallIntegerField): A star rating from 1 to 5, enforced by validators.
        comment (TextField): The review text, between 10 and 500 characters.
        created_at (DateTimeField): Timestamp automatically set when the review is created.
    """
    hijab_style = models.ForeignKey(
        HijabStyle,
        related_name='reviews',
        on_delete=models.CASCADE,
        help_text="The hijab style being reviewed."
    )

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        related_name='reviews',
        on_delete=models.CASCADE,
        help_text="The user who wrote the review."
    )

    rating = models.PositiveSmallIntegerField(
        validators=[MinValueValidator(1), MaxValueValidator(5)],
        help_text="The rating given, from 1 to 5."
    )

    comment = models.TextField(
        max_length=500,
        validators=[MinLengthValidator(10)],
        help_text="The text content of the review."
    )

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        """Metadata options for the Review model."""

        # Newest reviews first.
        ordering = ['-created_at', '-id']

        # One review per user and style.
        unique_together = ('hijab_style', 'user')

        verbose_name = "Review"
        verbose_name_plural = "Reviews"

    def __str__(self):
        return f"Review by {self.user.username} for {self.hijab_style.name} ({self.rating} stars)"
