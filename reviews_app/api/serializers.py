from collections.abc import Mapping

from django.contrib.auth.models import User
from rest_framework import serializers

from ..models import Review


RATING_ERRORS = {
    'invalid': 'Rating must be a whole number between 1 and 5.',
    'min_value': 'Rating must be at least 1',
    'max_value': 'Rating cannot exceed 5',
}

COMMENT_ERRORS = {
    'blank': 'Please add a comment',
    'min_length': 'Comment must be at least 10 characters',
    'max_length': 'Comment cannot exceed 500 characters',
}


class ReviewAuthorSerializer(serializers.ModelSerializer):
    """The author of a review as shown next to it: id and display name only."""
    name = serializers.CharField(source='first_name', read_only=True)

    class Meta:
        model = User
        fields = ['id', 'name']


class ReviewReadSerializer(serializers.ModelSerializer):
    """
    Serializer for the `Review` model, intended for read-only operations.

    The author is nested with its display name so clients can render a review without a second
    request; the style is represented by its primary key.
    """
    user = ReviewAuthorSerializer(read_only=True)

    class Meta:
        model = Review
        fields = [
            'id',
            'hijab_style',
            'user',
            'rating',
            'comment',
            'created_at',
        ]


class StyleReviewSerializer(ReviewReadSerializer):
    """A review nested inside its style; the style id would only repeat the parent's."""

    class Meta(ReviewReadSerializer.Meta):
        fields = ['id', 'user', 'rating', 'comment', 'created_at']


class ReviewCreateSerializer(serializers.ModelSerializer):
    """
    Handles the creation of a new Review instance.

    'user' and 'hijab_style' are intentionally not accepted from the payload: the view sets them
    from the authenticated user and the URL. The style is passed in through the serializer
    context so the duplicate check can run during validation.

    Numeric strings are accepted for the rating ("4"), fractional values are not.
    """
    rating = serializers.IntegerField(min_value=1, max_value=5, error_messages=RATING_ERRORS)
    comment = serializers.CharField(min_length=10, max_length=500, error_messages=COMMENT_ERRORS)

    class Meta:
        model = Review
        fields = ['rating', 'comment']

    def to_internal_value(self, data):
        """Rejects payloads that lack the rating or the comment with a single message."""
        if isinstance(data, Mapping):
            rating = data.get('rating')
            comment = data.get('comment')
            if rating in (None, '') or comment in (None, ''):
                raise serializers.ValidationError('Please provide both rating and comment')
        return super().to_internal_value(data)

    def validate(self, data):
        """
        Enforces the business rule that a user reviews each style at most once.

        The database constraint would reject the insert as well; checking here gives the client a
        readable 400 instead.
        """
        request = self.context.get('request')
        hijab_style = self.context.get('hijab_style')
        if not request or hijab_style is None:
            # This is a safeguard; the view always provides both.
            return data

        if Review.objects.filter(hijab_style=hijab_style, user=request.user).exists():
            raise serializers.ValidationError(
                "You have already submitted a review for this hijab style"
            )

        return data


class ReviewUpdateSerializer(serializers.ModelSerializer):
    """
    Handles updating an existing Review instance.

    Only 'rating' and 'comment' can be changed. Any other field in the request body (such as
    'user' or 'hijab_style') is ignored, so a review can never be moved to another style or
    author.
    """
    rating = serializers.IntegerField(min_value=1, max_value=5, error_messages=RATING_ERRORS)
    comment = serializers.CharField(min_length=10, max_length=500, error_messages=COMMENT_ERRORS)

    class Meta:
        model = Review
        fields = ['rating', 'comment']
