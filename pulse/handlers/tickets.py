"""Ticket-based intent handlers: bug counts, resolution time, completed work."""

from __future__ import annotations

import asyncio
import logging
from datetime import timedelta

from django.utils import timezone

from pulse.envelope import QueryEnvelope, failure, no_data
from pulse.handlers.common import resolve_team, team_label, team_scope
from pulse.models import TicketType
from pulse.numbers import percentage, round_half_up, rounded_days

logger = logging.getLogger("pulse.handlers.tickets")

BUG_WINDOW_DAYS = 90


async def handle_bug_count(store, query: str, team_name: str, *, strict_team_filter: bool = False) -> QueryEnvelope:
    """Bug share of all tickets created in the last quarter."""
    try:
        team, missing = await resolve_team(store, query, team_name)
        if missing is not None:
            return missing

        team_id = team["id"] if team else None
        since = timezone.now() - timedelta(days=BUG_WINDOW_DAYS)
        total_tickets, bug_tickets = await asyncio.gather(
            store.count_tickets(team_id, created_after=since),
            store.count_tickets(team_id, ticket_type=TicketType.BUG, created_after=since),
        )
        rate = bug_tickets / total_tickets * 100 if total_tickets else 0

        return QueryEnvelope(
            query,
            {
                "team": team_label(team),
                "totalTickets": total_tickets,
                "bugTickets": bug_tickets,
                "bugRate": percentage(bug_tickets, total_tickets, places=2),
                "timePeriod": "last quarter",
            },
            f"Found {bug_tickets} bugs out of {total_tickets} total tickets "
            f"{team_scope(team)} in the last quarter ({round_half_up(rate)}% bug rate).",
        )
    except Exception:
        logger.exception("Bug count query failed (team=%s)", team_name)
        return failure(query, "Failed to retrieve bug statistics. Please try again later.")


async def handle_resolution_time(store, query: str, team_name: str, *, strict_team_filter: bool = False) -> QueryEnvelope:
    """Mean days from creation to resolution over resolved tickets.

    Unless *strict_team_filter* is set the requested team is only validated,
    and the average spans every team.
    """
    try:
        team, missing = await resolve_team(store, query, team_name)
        if missing is not None:
            return missing

        team_id = team["id"] if team and strict_team_filter else None
        tickets = await store.list_done_tickets(team_id)
        resolved = [t for t in tickets if t["resolved_at"] is not None]
        if not resolved:
            return no_data(query, "No resolved tickets found to calculate resolution time.")

        days = [rounded_days(t["created_at"], t["resolved_at"]) for t in resolved]
        average = sum(days) / len(days)

        return QueryEnvelope(
            query,
            {
                "averageResolutionTime": round_half_up(average, 2),
                "ticketsAnalyzed": len(resolved),
                "unit": "days",
            },
            f"Average resolution time is {round_half_up(average)} days "
            f"based on {len(resolved)} resolved tickets.",
        )
    except Exception:
        logger.exception("Resolution time query failed (team=%s)", team_name)
        return failure(query, "Failed to retrieve resolution time data. Please try again later.")


async def handle_completed_tickets(store, query: str, team_name: str, *, strict_team_filter: bool = False) -> QueryEnvelope:
    """DONE tickets and their story points, grouped by team."""
    try:
        team, missing = await resolve_team(store, query, team_name)
        if missing is not None:
            return missing

        team_id = team["id"] if team and strict_team_filter else None
        tickets = await store.list_done_tickets(team_id)

        by_team: dict[str, dict] = {}
        for ticket in tickets:
            stats = by_team.setdefault(ticket["team_name"], {"completed": 0, "storyPoints": 0})
            stats["completed"] += 1
            stats["storyPoints"] += ticket["story_points"] or 0

        return QueryEnvelope(
            query,
            {"totalCompleted": len(tickets), "byTeam": by_team},
            f"Found {len(tickets)} completed tickets across {len(by_team)} team(s).",
        )
    except Exception:
        logger.exception("Completed tickets query failed (team=%s)", team_name)
        return failure(query, "Failed to retrieve completed tickets. Please try again later.")
