"""Request validation for the metrics API."""

from rest_framework import serializers

from pulse.interpreter import MAX_QUERY_LENGTH
from pulse.services import DEFAULT_WINDOW_DAYS


class TeamQuerySerializer(serializers.Serializer):
    team = serializers.CharField(min_length=1, max_length=100)


class VelocityQuerySerializer(TeamQuerySerializer):
    sprintId = serializers.IntegerField(required=False, min_value=1)


class MetricsQuerySerializer(TeamQuerySerializer):
    days = serializers.IntegerField(required=False, min_value=1, max_value=365, default=DEFAULT_WINDOW_DAYS)


class TextQuerySerializer(serializers.Serializer):
    query = serializers.CharField(min_length=1, max_length=MAX_QUERY_LENGTH)
