"""Structured team metrics: velocity, bug rate, resolution time, performance."""

from __future__ import annotations

import asyncio
import logging
import statistics
from datetime import timedelta

from django.utils import timezone

from pulse.exceptions import TeamNotFound
from pulse.handlers.teams import build_performance
from pulse.models import TicketType
from pulse.nlq.intents import ALL_TEAMS
from pulse.numbers import elapsed_days, percentage, round_half_up
from pulse.store import MetricsStore

logger = logging.getLogger("pulse.services")

DEFAULT_WINDOW_DAYS = 30
RECENT_SPRINTS = 5


class MetricsService:
    """Read-only metric aggregations, each scoped to one team or ``"all"``.

    Unknown team names raise :class:`~pulse.exceptions.TeamNotFound` rather
    than silently widening to every team.
    """

    def __init__(self, store=None) -> None:
        self.store = store or MetricsStore()

    async def _team_id(self, team_name: str) -> int | None:
        if team_name == ALL_TEAMS:
            return None
        team = await self.store.find_team_by_name(team_name)
        if team is None:
            logger.info("Metrics requested for unknown team %r", team_name)
            raise TeamNotFound(team_name)
        return team["id"]

    async def get_velocity_metrics(self, team_name: str, sprint_id: int | None = None) -> dict:
        team_id = await self._team_id(team_name)
        total_points, sprints = await asyncio.gather(
            self.store.sum_done_story_points(team_id, sprint_id),
            self.store.list_recent_sprints(team_id, limit=RECENT_SPRINTS),
        )
        velocities = [sprint["done_points"] or 0 for sprint in sprints]
        average = sum(velocities) / len(velocities) if velocities else 0

        return {
            "team": team_name,
            "sprintId": sprint_id,
            "totalStoryPoints": total_points,
            "completedStoryPoints": total_points,
            "velocity": total_points,
            "averageVelocity": round_half_up(average, 2),
        }

    async def get_bug_rate_metrics(self, team_name: str, days: int = DEFAULT_WINDOW_DAYS) -> dict:
        team_id = await self._team_id(team_name)
        since = timezone.now() - timedelta(days=days)
        total_tickets, bug_tickets = await asyncio.gather(
            self.store.count_tickets(team_id, created_after=since),
            self.store.count_tickets(team_id, ticket_type=TicketType.BUG, created_after=since),
        )
        return {
            "team": team_name,
            "period": f"{days} days",
            "totalTickets": total_tickets,
            "bugTickets": bug_tickets,
            "bugRate": percentage(bug_tickets, total_tickets, places=2),
        }

    async def get_resolution_time_metrics(self, team_name: str, days: int = DEFAULT_WINDOW_DAYS) -> dict:
        """Average, median, min and max whole days to resolve tickets created in the window."""
        team_id = await self._team_id(team_name)
        since = timezone.now() - timedelta(days=days)
        tickets = await self.store.list_done_tickets(team_id, created_after=since)
        durations = sorted(
            elapsed_days(t["created_at"], t["resolved_at"])
            for t in tickets
            if t["resolved_at"] is not None
        )

        metrics = {
            "team": team_name,
            "period": f"{days} days",
            "averageResolutionTime": 0,
            "medianResolutionTime": 0,
            "minResolutionTime": 0,
            "maxResolutionTime": 0,
        }
        if not durations:
            return metrics

        metrics.update(
            averageResolutionTime=round_half_up(sum(durations) / len(durations), 2),
            medianResolutionTime=statistics.median(durations),
            minResolutionTime=durations[0],
            maxResolutionTime=durations[-1],
        )
        return metrics

    async def get_team_performance(self) -> list[dict]:
        return build_performance(await self.store.list_teams())

    async def get_all_metrics(self, team_name: str) -> dict:
        velocity, bug_rate, resolution_time = await asyncio.gather(
            self.get_velocity_metrics(team_name),
            self.get_bug_rate_metrics(team_name),
            self.get_resolution_time_metrics(team_name),
        )
        return {
            "velocity": velocity,
            "bugRate": bug_rate,
            "resolutionTime": resolution_time,
            "generatedAt": timezone.now().isoformat(),
        }
