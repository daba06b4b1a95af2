from django.db import models


class HijabStyle(models.Model):
    """
    Represents a hijab style in the catalog.

    Styles are created and maintained by admins. Each style has one image, stored through the
    object-storage collaborator (`styles_app.storage.ImageStorage`); the model only keeps the
    storage identifier and the public URL.

    Attributes:
        name (CharField): The style's display name, at most 100 characters.
        description (TextField): A description of at most 500 characters.
        image_public_id (CharField): The storage identifier of the image, needed to delete it.
        image_url (CharField): The public URL of the image.
        average_rating (DecimalField): Mean rating of the style's reviews, one decimal place.
        review_count (PositiveIntegerField): Number of reviews of the style.
        created_at (DateTimeField): Timestamp automatically set when the style is created.

    `average_rating` and `review_count` are derived from the reviews and must not be edited by
    hand; `reviews_app.services.recompute_aggregate` rewrites them after every review change.
    """
    name = models.CharField(max_length=100)
    description = models.TextField(max_length=500)

    image_public_id = models.CharField(max_length=255, blank=True, default='')
    image_url = models.CharField(max_length=500, blank=True, default='')

    average_rating = models.DecimalField(max_digits=2, decimal_places=1, default=0)
    review_count = models.PositiveIntegerField(default=0)

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        # Newest styles first.
        ordering = ['-created_at', '-id']
        verbose_name = "Hijab style"
        verbose_name_plural = "Hijab styles"

    def __str__(self):
        return self.name
