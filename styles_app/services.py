import logging

from django.db import transaction

logger = logging.getLogger(__name__)


def delete_style(style):
    """
    Deletes a style together with all of its reviews.

    The reviews are removed first and explicitly, so the cascade does not depend on the database
    enforcing the foreign key. Both deletes run in one transaction. Returns the number of reviews
    deleted.
    """
    with transaction.atomic():
        review_count, _ = style.reviews.all().delete()
        style_id = style.pk
        style.delete()

    logger.info("Deleted hijab style %s and %s review(s)", style_id, review_count)
    return review_count
