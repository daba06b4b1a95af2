import django_filters
from ..models import Review


class ReviewFilter(django_filters.FilterSet):
    """
    A FilterSet for the Review model to handle custom query parameter filtering.
    """
    # Exposes the style and author foreign keys under explicit '_id' names.
    hijab_style_id = django_filters.NumberFilter(field_name="hijab_style__id")
    user_id = django_filters.NumberFilter(field_name="user__id")

    class Meta:
        model = Review
        fields = ['hijab_style_id', 'user_id', 'rating']
