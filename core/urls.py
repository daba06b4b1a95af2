"""
Root URL configuration.

Every API route lives under `/api/`; each app contributes its own `api/urls.py`.
"""
from django.conf import settings
from django.conf.urls.static import static
from django.contrib import admin
from django.urls import include, path

urlpatterns = [
    path('admin/', admin.site.urls),
    path('api/auth/', include('user_auth_app.api.urls')),
    path('api/', include('styles_app.api.urls')),
    path('api/', include('reviews_app.api.urls')),
]

if settings.DEBUG:
    urlpatterns += static(settings.MEDIA_URL, document_root=settings.MEDIA_ROOT)
