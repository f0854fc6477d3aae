"""Exceptions raised by the structured metrics services."""

from __future__ import annotations


class MetricsError(Exception):
    """Base class for metrics lookup failures."""


class TeamNotFound(MetricsError):
    """Raised when a requested team name does not match any team."""

    def __init__(self, team_name: str) -> None:
        self.team_name = team_name
        super().__init__(f'Team "{team_name}" not found')
