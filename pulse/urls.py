"""URL routes for the metrics app."""

from django.urls import path

from . import views

app_name = "pulse"

urlpatterns = [
    path("health/", views.health_check, name="health_check"),
    path("metrics/velocity/", views.velocity_metrics, name="velocity_metrics"),
    path("metrics/bug-rate/", views.bug_rate_metrics, name="bug_rate_metrics"),
    path("metrics/mean-resolution/", views.resolution_time_metrics, name="resolution_time_metrics"),
    path("metrics/performance/", views.team_performance, name="team_performance"),
    path("metrics/all/", views.all_metrics, name="all_metrics"),
    path("metrics/text-query/", views.text_query, name="text_query"),
]
