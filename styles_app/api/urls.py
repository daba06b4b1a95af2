from django.urls import path

from ..storage import ImageStorage
from .views import HijabStyleViewSet

# Built once at startup and handed to the view, rather than looked up on every request.
image_storage = ImageStorage.from_settings()

style_list = HijabStyleViewSet.as_view(
    {'get': 'list', 'post': 'create'},
    image_storage=image_storage,
)
style_detail = HijabStyleViewSet.as_view(
    {'get': 'retrieve', 'put': 'update', 'patch': 'partial_update', 'delete': 'destroy'},
    image_storage=image_storage,
)

urlpatterns = [
    path('hijab-styles/', style_list, name='hijabstyle-list'),
    path('hijab-styles/<int:pk>/', style_detail, name='hijabstyle-detail'),
]
