import logging

from django.db.models import Prefetch
from django.http import Http404
from rest_framework import status, viewsets
from rest_framework.exceptions import APIException, NotFound, ValidationError
from rest_framework.response import Response

from core.responses import envelope
from reviews_app.models import Review
from user_auth_app.api.permissions import IsAdminOrReadOnly
from ..models import HijabStyle
from ..services import delete_style
from ..storage import ImageStorage, ImageStorageError, ImageUploadError
from .serializers import HijabStyleSerializer, HijabStyleWriteSerializer

logger = logging.getLogger(__name__)


class HijabStyleViewSet(viewsets.ModelViewSet):
    """
    Manages all CRUD operations for the HijabStyle model.

    This ViewSet provides the following endpoints:
    - `GET /api/hijab-styles/`: Lists all styles with their reviews. Public.
    - `POST /api/hijab-styles/`: Creates a style and uploads its image. Admins only.
    - `GET /api/hijab-styles/{id}/`: Retrieves a single style with its reviews. Public.
    - `PUT/PATCH /api/hijab-styles/{id}/`: Partially updates a style, optionally replacing its
      image. Admins only.
    - `DELETE /api/hijab-styles/{id}/`: Deletes a style, its image and all of its reviews.
      Admins only.

    The image storage is injected through `as_view(image_storage=...)` (see `api/urls.py`).
    """
    permission_classes = [IsAdminOrReadOnly]
    pagination_class = None
    image_storage = None

    def get_image_storage(self):
        if self.image_storage is None:
            self.image_storage = ImageStorage.from_settings()
        return self.image_storage

    def get_queryset(self):
        """
        Styles with their reviews and the reviews' authors prefetched, so listing all styles
        takes a fixed number of queries.
        """
        reviews = Review.objects.select_related('user').order_by('-created_at', '-id')
        return HijabStyle.objects.prefetch_related(Prefetch('reviews', queryset=reviews))

    def get_serializer_class(self):
        if self.action in ['create', 'update', 'partial_update']:
            return HijabStyleWriteSerializer
        return HijabStyleSerializer

    def get_object(self):
        try:
            return super().get_object()
        except Http404:
            raise NotFound('Hijab style not found')

    def upload_image(self, payload):
        """Uploads an image payload, translating storage failures into API errors."""
        try:
            return self.get_image_storage().upload(payload)
        except ImageUploadError as exc:
            raise ValidationError({'image': [str(exc)]})
        except ImageStorageError:
            logger.exception("Image upload failed")
            raise APIException('Image upload failed')

    def destroy_image(self, public_id):
        try:
            self.get_image_storage().destroy(public_id)
        except ImageStorageError:
            logger.exception("Deleting image %s failed", public_id)
            raise APIException('Image deletion failed')

    def render_style(self, pk, status_code=status.HTTP_200_OK):
        """Reloads a style with its reviews and returns it in the response envelope."""
        style = self.get_queryset().get(pk=pk)
        data = HijabStyleSerializer(style, context=self.get_serializer_context()).data
        return Response(envelope(data), status=status_code)

    def list(self, request, *args, **kwargs):
        data = HijabStyleSerializer(self.get_queryset(), many=True,
                                    context=self.get_serializer_context()).data
        return Response(envelope(data, count=len(data)))

    def retrieve(self, request, *args, **kwargs):
        data = HijabStyleSerializer(self.get_object(), context=self.get_serializer_context()).data
        return Response(envelope(data))

    def create(self, request, *args, **kwargs):
        """
        Validates the payload, uploads the image and creates the style.

        The image is uploaded only after the rest of the payload has been validated, so an
        invalid request never leaves an orphaned image behind.
        """
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        stored = self.upload_image(serializer.validated_data.pop('image'))
        style = serializer.save(image_public_id=stored.public_id, image_url=stored.url)

        return self.render_style(style.pk, status_code=status.HTTP_201_CREATED)

    def update(self, request, *args, **kwargs):
        """
        Partially updates a style, for both PUT and PATCH.

        If a new image is supplied, the old one is deleted from storage first and the new one is
        uploaded afterwards. The two steps are not atomic: when the upload fails, the style keeps
        pointing at an image that no longer exists.
        """
        kwargs.pop('partial', None)
        instance = self.get_object()

        serializer = self.get_serializer(instance, data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)

        image_payload = serializer.validated_data.pop('image', None)
        extra = {}
        if image_payload:
            self.destroy_image(instance.image_public_id)
            try:
                stored = self.upload_image(image_payload)
            except APIException:
                logger.warning(
                    "Image of hijab style %s was deleted but its replacement failed to upload",
                    instance.pk
                )
                raise
            extra = {'image_public_id': stored.public_id, 'image_url': stored.url}

        serializer.save(**extra)
        return self.render_style(instance.pk)

    def destroy(self, request, *args, **kwargs):
        """
        Deletes the style's image from storage, then the style and its reviews.
        """
        instance = self.get_object()
        self.destroy_image(instance.image_public_id)
        delete_style(instance)
        return Response(envelope({}), status=status.HTTP_200_OK)
