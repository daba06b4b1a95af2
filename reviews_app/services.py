"""
Keeps each style's `average_rating` and `review_count` in sync with its reviews.

The two fields are a cache of an aggregate over the review table. They are recomputed from
scratch (never adjusted incrementally), so running `recompute_aggregate` again for the same set of
reviews always produces the same values. Every code path that creates, updates or deletes a
review calls it explicitly once the write has succeeded.
"""
import logging
from decimal import Decimal, ROUND_HALF_UP

from django.db import DatabaseError, transaction
from django.db.models import Avg, Count

from styles_app.models import HijabStyle
from .models import Review

logger = logging.getLogger(__name__)

ONE_DECIMAL = Decimal('0.1')


def round_rating(value):
    """Rounds a mean rating to one decimal place, halves rounding up (4.25 -> 4.3)."""
    return Decimal(str(value)).quantize(ONE_DECIMAL, rounding=ROUND_HALF_UP)


def compute_aggregate(style_id):
    """
    Returns `(average, count)` over the reviews of the given style.

    The mean and count are calculated by the database. A style without reviews has an average
    of 0.
    """
    stats = Review.objects.filter(hijab_style_id=style_id).aggregate(
        average=Avg('rating'),
        count=Count('id')
    )
    count = stats['count'] or 0
    if count == 0:
        return Decimal('0.0'), 0
    return round_rating(stats['average']), count


def recompute_aggregate(style_id):
    """
    Recomputes and stores the rating aggregate of a style.

    A failure here must not fail the review write that triggered it: the reviews are the source
    of truth and the cached fields are corrected by the next successful run. Database errors are
    therefore logged and swallowed. The work runs in its own savepoint so a failed statement
    does not break a surrounding transaction.
    """
    try:
        with transaction.atomic():
            average, count = compute_aggregate(style_id)
            HijabStyle.objects.filter(pk=style_id).update(
                average_rating=average,
                review_count=count
            )
    except DatabaseError:
        logger.exception("Error updating average rating of hijab style %s", style_id)
        return

    logger.debug("Hijab style %s now has %s reviews, average %s", style_id, count, average)


def styles_reviewed_by(users):
    """
    Returns the ids of the styles reviewed by any of `users`.

    Deleting a user cascades to their reviews; collect these ids before the delete and pass each
    one to `recompute_aggregate` afterwards.
    """
    return set(
        Review.objects.filter(user__in=users).values_list('hijab_style_id', flat=True)
    )
