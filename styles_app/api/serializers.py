from rest_framework import serializers

from reviews_app.api.serializers import StyleReviewSerializer
from ..models import HijabStyle


class HijabStyleSerializer(serializers.ModelSerializer):
    """
    Read representation of a hijab style, used by the list and detail endpoints.

    The style's reviews are nested (newest first, each with its author's name), and the stored
    image is exposed as `{"public_id", "url"}`. The rating aggregate is rendered as a number
    rather than DRF's default decimal string.
    """
    image = serializers.SerializerMethodField()
    average_rating = serializers.FloatField(read_only=True)
    reviews = StyleReviewSerializer(many=True, read_only=True)

    class Meta:
        model = HijabStyle
        fields = [
            'id',
            'name',
            'description',
            'image',
            'average_rating',
            'review_count',
            'created_at',
            'reviews',
        ]

    def get_image(self, obj):
        return {'public_id': obj.image_public_id, 'url': obj.image_url}


class HijabStyleWriteSerializer(serializers.ModelSerializer):
    """
    Validates the payload for creating and updating a style.

    `image` carries the raw image payload (a base64 data URI, a bare base64 string or an http(s)
    URL). It is not a model field: the view hands it to the image storage and saves the returned
    identifier and URL on the style. It is required when creating a style and optional when
    updating one.
    """
    name = serializers.CharField(
        max_length=100,
        error_messages={
            'required': 'Please add a name for the hijab style',
            'blank': 'Please add a name for the hijab style',
            'max_length': 'Name cannot exceed 100 characters',
        }
    )
    description = serializers.CharField(
        max_length=500,
        error_messages={
            'required': 'Please add a description',
            'blank': 'Please add a description',
            'max_length': 'Description cannot exceed 500 characters',
        }
    )
    image = serializers.CharField(
        write_only=True,
        trim_whitespace=True,
        error_messages={
            'required': 'Please add an image',
            'blank': 'Please add an image',
        }
    )

    class Meta:
        model = HijabStyle
        fields = ['name', 'description', 'image']
