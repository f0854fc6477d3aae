"""Read-only store lookups used by the text-query handlers and metrics services.

Every lookup is a coroutine backed by the Django async ORM and returns plain
dicts, so callers never hold model instances across ``await`` points and test
doubles only need to return dicts of the same shape.
"""

from __future__ import annotations

import logging
from datetime import datetime

from django.db.models import Count, Q, Sum
from django.db.models.functions import Coalesce

from pulse.models import Sprint, Team, Ticket, TicketStatus, TicketType

logger = logging.getLogger("pulse.store")

_DONE = Q(tickets__status=TicketStatus.DONE)


class MetricsStore:
    """Async lookups over teams, sprints and tickets."""

    async def find_team_by_name(self, name: str) -> dict | None:
        """Return the team whose name matches *name* ignoring case, or ``None``."""
        team = await Team.objects.filter(name__iexact=name.strip()).afirst()
        if team is None:
            logger.debug("No team matches %r", name)
            return None
        return {"id": team.id, "name": team.name, "description": team.description}

    async def list_recent_sprints(self, team_id: int | None = None, limit: int = 5) -> list[dict]:
        """Return the *limit* most recently ended sprints, newest first.

        Each sprint carries ``done_points``, the sum of story points of its
        DONE tickets (0 when it has none).
        """
        qs = Sprint.objects.select_related("team").annotate(
            done_points=Coalesce(Sum("tickets__story_points", filter=_DONE), 0),
        )
        if team_id is not None:
            qs = qs.filter(team_id=team_id)
        qs = qs.order_by("-end_date", "-id")[:limit]
        return [
            {
                "id": sprint.id,
                "name": sprint.name,
                "team_id": sprint.team_id,
                "team_name": sprint.team.name,
                "start_date": sprint.start_date,
                "end_date": sprint.end_date,
                "velocity": sprint.velocity,
                "done_points": sprint.done_points,
            }
            async for sprint in qs
        ]

    async def count_tickets(
        self,
        team_id: int | None = None,
        ticket_type: str | None = None,
        created_after: datetime | None = None,
    ) -> int:
        """Count tickets, optionally narrowed by team, type and creation time."""
        qs = Ticket.objects.all()
        if team_id is not None:
            qs = qs.filter(team_id=team_id)
        if ticket_type is not None:
            qs = qs.filter(type=ticket_type)
        if created_after is not None:
            qs = qs.filter(created_at__gte=created_after)
        return await qs.acount()

    async def list_done_tickets(
        self,
        team_id: int | None = None,
        created_after: datetime | None = None,
    ) -> list[dict]:
        """Return DONE tickets with their owning team and assignee names."""
        qs = Ticket.objects.filter(status=TicketStatus.DONE).select_related("team", "assignee")
        if team_id is not None:
            qs = qs.filter(team_id=team_id)
        if created_after is not None:
            qs = qs.filter(created_at__gte=created_after)
        return [
            {
                "id": ticket.id,
                "title": ticket.title,
                "type": ticket.type,
                "story_points": ticket.story_points,
                "created_at": ticket.created_at,
                "resolved_at": ticket.resolved_at,
                "team_id": ticket.team_id,
                "team_name": ticket.team.name,
                "assignee_name": ticket.assignee.name if ticket.assignee else None,
            }
            async for ticket in qs.order_by("id")
        ]

    async def list_teams(self) -> list[dict]:
        """Return every team with its ticket, DONE, BUG and member counts."""
        qs = Team.objects.annotate(
            ticket_count=Count("tickets", distinct=True),
            done_count=Count("tickets", filter=_DONE, distinct=True),
            bug_count=Count("tickets", filter=Q(tickets__type=TicketType.BUG), distinct=True),
            member_count=Count("members", distinct=True),
        ).order_by("name")
        return [
            {
                "id": team.id,
                "name": team.name,
                "ticket_count": team.ticket_count,
                "done_count": team.done_count,
                "bug_count": team.bug_count,
                "member_count": team.member_count,
            }
            async for team in qs
        ]

    async def sum_done_story_points(
        self,
        team_id: int | None = None,
        sprint_id: int | None = None,
    ) -> int:
        """Sum story points over DONE tickets, optionally within one team or sprint."""
        qs = Ticket.objects.filter(status=TicketStatus.DONE, story_points__isnull=False)
        if team_id is not None:
            qs = qs.filter(team_id=team_id)
        if sprint_id is not None:
            qs = qs.filter(sprint_id=sprint_id)
        totals = await qs.aaggregate(total=Sum("story_points"))
        return totals["total"] or 0
