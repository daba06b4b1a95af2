from django.urls import path, include
from rest_framework.routers import DefaultRouter

from .views import (
    MyReviewView,
    ReviewViewSet,
    StyleReviewListCreateView,
)

router = DefaultRouter()
router.register(r'reviews', ReviewViewSet, basename='review')

# The same update/delete actions, addressed through the review's style.
style_review_detail = ReviewViewSet.as_view({
    'put': 'update',
    'patch': 'partial_update',
    'delete': 'destroy',
})

urlpatterns = [
    path('', include(router.urls)),
    path('hijab-styles/<int:style_id>/reviews/',
         StyleReviewListCreateView.as_view(), name='style-review-list'),
    path('hijab-styles/<int:style_id>/reviews/check/mine/',
         MyReviewView.as_view(), name='style-review-check-mine'),
    path('hijab-styles/<int:style_id>/reviews/my-review/',
         MyReviewView.as_view(), name='style-review-mine'),
    path('hijab-styles/<int:style_id>/reviews/<int:pk>/',
         style_review_detail, name='style-review-detail'),
]
