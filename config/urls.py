"""Root URL configuration for Team Pulse."""

from django.contrib import admin
from django.urls import include, path

urlpatterns = [
    path("admin/", admin.site.urls),
    path("api/", include("pulse.urls")),
]
