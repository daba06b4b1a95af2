from django.http import Http404
from rest_framework import generics, mixins, status, viewsets
from rest_framework.exceptions import NotFound
from rest_framework.filters import OrderingFilter
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView
from django_filters.rest_framework import DjangoFilterBackend

from core.responses import envelope
from styles_app.models import HijabStyle
from ..models import Review
from ..services import recompute_aggregate
from .filters import ReviewFilter
from .permissions import IsNotBlocked, IsReviewOwnerOrAdmin
from .serializers import (
    ReviewCreateSerializer,
    ReviewReadSerializer,
    ReviewUpdateSerializer,
)


def get_style_or_404(style_id):
    try:
        return HijabStyle.objects.get(pk=style_id)
    except HijabStyle.DoesNotExist:
        raise NotFound('Hijab style not found')


class StyleReviewListCreateView(generics.ListCreateAPIView):
    """
    Lists and creates the reviews of one hijab style.

    Endpoints:
    - `GET /api/hijab-styles/{style_id}/reviews/`: Public. The style's reviews, newest first,
      each with its author's display name.
    - `POST /api/hijab-styles/{style_id}/reviews/`: Authenticated, non-blocked users. Creates the
      requesting user's review for the style and refreshes the style's rating aggregate.
    """
    serializer_class = ReviewReadSerializer
    pagination_class = None

    def get_permissions(self):
        """
        Reading is public; writing requires an authenticated user who has not been blocked.
        """
        if self.request.method == 'POST':
            permission_classes = [IsAuthenticated, IsNotBlocked]
        else:
            permission_classes = [AllowAny]
        return [permission() for permission in permission_classes]

    def get_style(self):
        if not hasattr(self, '_style'):
            self._style = get_style_or_404(self.kwargs['style_id'])
        return self._style

    def get_queryset(self):
        return (
            Review.objects.filter(hijab_style=self.get_style())
            .select_related('user')
            .order_by('-created_at', '-id')
        )

    def get_serializer_class(self):
        if self.request.method == 'POST':
            return ReviewCreateSerializer
        return ReviewReadSerializer

    def get_serializer_context(self):
        context = super().get_serializer_context()
        if self.request.method == 'POST':
            context['hijab_style'] = self.get_style()
        return context

    def list(self, request, *args, **kwargs):
        data = self.get_serializer(self.get_queryset(), many=True).data
        return Response(envelope(data, count=len(data)))

    def perform_create(self, serializer):
        """
        Saves the review with the author and style set on the server side, then refreshes the
        style's aggregate.
        """
        review = serializer.save(user=self.request.user, hijab_style=self.get_style())
        recompute_aggregate(review.hijab_style_id)

    def create(self, request, *args, **kwargs):
        # Resolve the style first so a missing style is a 404, not a validation error.
        self.get_style()

        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        self.perform_create(serializer)

        read_serializer = ReviewReadSerializer(serializer.instance, context={'request': request})
        headers = self.get_success_headers(read_serializer.data)
        return Response(envelope(read_serializer.data), status=status.HTTP_201_CREATED,
                        headers=headers)


class MyReviewView(APIView):
    """
    Returns the requesting user's review of a style, if there is one.

    Endpoints:
    - `GET /api/hijab-styles/{style_id}/reviews/check/mine/`
    - `GET /api/hijab-styles/{style_id}/reviews/my-review/`

    Clients use this to decide whether to show the "add review" or the "edit review" form, so a
    missing review is answered with a 404 whose body still follows the envelope.
    """
    permission_classes = [IsAuthenticated]

    def get(self, request, style_id):
        review = (
            Review.objects.select_related('user')
            .filter(hijab_style_id=style_id, user=request.user)
            .first()
        )
        if review is None:
            return Response(
                {'success': False, 'data': None, 'message': 'No review found for this user'},
                status=status.HTTP_404_NOT_FOUND
            )
        return Response(envelope(ReviewReadSerializer(review).data))


class ReviewViewSet(mixins.ListModelMixin,
                    mixins.RetrieveModelMixin,
                    mixins.UpdateModelMixin,
                    mixins.DestroyModelMixin,
                    viewsets.GenericViewSet):
    """
    Reads, updates and deletes individual reviews.

    This ViewSet provides the following endpoints:
    - `GET /api/reviews/`: Lists all reviews, filterable by style, author and rating.
    - `GET /api/reviews/{id}/`: Retrieves a single review.
    - `PUT/PATCH /api/reviews/{id}/`: Updates rating and/or comment.
    - `DELETE /api/reviews/{id}/`: Deletes a review.

    Updates and deletes are also routed under `/api/hijab-styles/{style_id}/reviews/{id}/`;
    there the review must belong to that style. Only the author or an admin may modify a review.
    Every successful update or delete refreshes the style's rating aggregate.
    """
    serializer_class = ReviewReadSerializer
    pagination_class = None

    filter_backends = [DjangoFilterBackend, OrderingFilter]
    filterset_class = ReviewFilter
    ordering_fields = ['created_at', 'rating']
    ordering = ['-created_at', '-id']

    def get_permissions(self):
        """
        - 'update', 'partial_update', 'destroy': the author of the review or an admin.
        - 'list', 'retrieve': public.
        """
        if self.action in ['update', 'partial_update', 'destroy']:
            permission_classes = [IsAuthenticated, IsReviewOwnerOrAdmin]
        else:
            permission_classes = [AllowAny]
        return [permission() for permission in permission_classes]

    def get_queryset(self):
        queryset = Review.objects.select_related('user')
        style_id = self.kwargs.get('style_id')
        if style_id is not None:
            queryset = queryset.filter(hijab_style_id=style_id)
        return queryset

    def get_serializer_class(self):
        if self.action in ['update', 'partial_update']:
            return ReviewUpdateSerializer
        return ReviewReadSerializer

    def get_object(self):
        try:
            return super().get_object()
        except Http404:
            raise NotFound('Review not found')

    def list(self, request, *args, **kwargs):
        queryset = self.filter_queryset(self.get_queryset())
        data = self.get_serializer(queryset, many=True).data
        return Response(envelope(data, count=len(data)))

    def retrieve(self, request, *args, **kwargs):
        return Response(envelope(self.get_serializer(self.get_object()).data))

    def perform_update(self, serializer):
        review = serializer.save()
        recompute_aggregate(review.hijab_style_id)

    def update(self, request, *args, **kwargs):
        """
        Updates rating and/or comment and returns the full review.

        PUT is treated like PATCH: fields missing from the body keep their value.
        """
        kwargs.pop('partial', None)
        instance = self.get_object()

        serializer = self.get_serializer(instance, data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        self.perform_update(serializer)

        read_serializer = ReviewReadSerializer(instance, context={'request': request})
        return Response(envelope(read_serializer.data))

    def perform_destroy(self, instance):
        style_id = instance.hijab_style_id
        instance.delete()
        recompute_aggregate(style_id)

    def destroy(self, request, *args, **kwargs):
        instance = self.get_object()
        self.perform_destroy(instance)
        return Response(envelope({}), status=status.HTTP_200_OK)
