"""View functions for health checks, structured metrics, and text queries."""

from __future__ import annotations

import functools
import logging

from asgiref.sync import async_to_sync
from django.http import JsonResponse
from rest_framework.decorators import api_view
from rest_framework.response import Response

from pulse.exceptions import TeamNotFound
from pulse.interpreter import process_text_query
from pulse.serializers import (
    MetricsQuerySerializer,
    TeamQuerySerializer,
    TextQuerySerializer,
    VelocityQuerySerializer,
)
from pulse.services import MetricsService

logger = logging.getLogger("pulse.views")


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _validation_error(serializer) -> Response:
    return Response(
        {"success": False, "error": "Validation error", "details": serializer.errors},
        status=400,
    )


def _metrics_response(fetch, label: str) -> Response:
    """Run an async metrics fetch and wrap the outcome in the API envelope."""
    try:
        data = async_to_sync(fetch)()
    except TeamNotFound as exc:
        return Response({"success": False, "error": str(exc)}, status=404)
    except Exception:
        logger.exception("%s metrics error", label.capitalize())
        return Response({"success": False, "error": f"Failed to fetch {label} metrics"}, status=500)
    return Response({"success": True, "data": data})


# ---------------------------------------------------------------------------
# Core views
# ---------------------------------------------------------------------------

def health_check(request):
    """Return a simple health-check response."""
    return JsonResponse({"status": "ok"})


@api_view(["GET"])
def velocity_metrics(request):
    serializer = VelocityQuerySerializer(data=request.query_params)
    if not serializer.is_valid():
        return _validation_error(serializer)
    params = serializer.validated_data
    fetch = functools.partial(
        MetricsService().get_velocity_metrics, params["team"], params.get("sprintId"),
    )
    return _metrics_response(fetch, "velocity")


@api_view(["GET"])
def bug_rate_metrics(request):
    serializer = MetricsQuerySerializer(data=request.query_params)
    if not serializer.is_valid():
        return _validation_error(serializer)
    params = serializer.validated_data
    fetch = functools.partial(MetricsService().get_bug_rate_metrics, params["team"], params["days"])
    return _metrics_response(fetch, "bug rate")


@api_view(["GET"])
def resolution_time_metrics(request):
    serializer = MetricsQuerySerializer(data=request.query_params)
    if not serializer.is_valid():
        return _validation_error(serializer)
    params = serializer.validated_data
    fetch = functools.partial(
        MetricsService().get_resolution_time_metrics, params["team"], params["days"],
    )
    return _metrics_response(fetch, "resolution time")


@api_view(["GET"])
def team_performance(request):
    return _metrics_response(MetricsService().get_team_performance, "team performance")


@api_view(["GET"])
def all_metrics(request):
    serializer = TeamQuerySerializer(data=request.query_params)
    if not serializer.is_valid():
        return _validation_error(serializer)
    fetch = functools.partial(MetricsService().get_all_metrics, serializer.validated_data["team"])
    return _metrics_response(fetch, "all")


@api_view(["POST"])
def text_query(request):
    """Answer a free-text question about team metrics."""
    serializer = TextQuerySerializer(data=request.data)
    if not serializer.is_valid():
        return _validation_error(serializer)

    try:
        envelope = async_to_sync(process_text_query)(serializer.validated_data["query"])
    except Exception:
        logger.exception("Text query error")
        return Response({"success": False, "error": "Failed to process text query"}, status=500)
    return Response({"success": True, "data": envelope})
