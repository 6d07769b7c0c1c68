# GitMesh/urls.py
"""
Main URL configuration for the GitMesh project.

The `urlpatterns` list routes URLs to views. For more information please see:
    https://docs.djangoproject.com/en/stable/topics/http/urls/

The websocket relay is routed separately in `apps.network.routing`.
"""

from django.contrib import admin
from django.urls import path, include
from rest_framework import permissions
from drf_yasg.views import get_schema_view
from drf_yasg import openapi

# --- API Documentation (Swagger/drf-yasg) ---
# Setup for generating API documentation
schema_view = get_schema_view(
   openapi.Info(
      title="GitMesh API",
      default_version='v1',
      description="REST API of the GitMesh repository hosting service.",
   ),
   public=True,
   permission_classes=(permissions.AllowAny,),
)

urlpatterns = [
    # --- API Docs ---
    # URLs for Swagger and ReDoc API documentation
    path('api/swagger<format>/', schema_view.without_ui(cache_timeout=0), name='schema-json'),
    path('api/swagger/', schema_view.with_ui('swagger', cache_timeout=0), name='schema-swagger-ui'),
    path('api/redoc/', schema_view.with_ui('redoc', cache_timeout=0), name='schema-redoc'),

    # --- Django Admin ---
    # URL for the Django admin interface
    path('api/admin/', admin.site.urls),

    # --- Local App APIs ---
    # Auth and user profiles
    path('api/', include('apps.users.urls')),
    # Repositories, collaborators and tags
    path('api/', include('apps.repositories.urls')),
    # Peers, sharing and network statistics
    path('api/', include('apps.network.urls')),
    # Activity feed
    path('api/', include('apps.activities.urls')),
]
