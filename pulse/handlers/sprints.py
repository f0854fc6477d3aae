"""Sprint-based intent handlers: velocity and quarterly trends."""

from __future__ import annotations

import dataclasses
import logging

from pulse.envelope import QueryEnvelope, failure
from pulse.handlers.common import resolve_team, team_label, team_scope
from pulse.nlq.intents import ALL_TEAMS
from pulse.numbers import round_half_up

logger = logging.getLogger("pulse.handlers.sprints")

RECENT_SPRINTS = 5

TRENDS_INTERPRETATION = (
    "Showing Q1 velocity trends across all teams. "
    "Try being more specific like 'Q2 bugs for Frontend team'"
)


async def handle_velocity(store, query: str, team_name: str, *, strict_team_filter: bool = False) -> QueryEnvelope:
    """Average DONE story points over the most recently ended sprints."""
    try:
        team, missing = await resolve_team(store, query, team_name)
        if missing is not None:
            return missing

        sprints = await store.list_recent_sprints(
            team["id"] if team else None, limit=RECENT_SPRINTS,
        )
        total = sum(sprint["done_points"] or 0 for sprint in sprints)
        average = total / len(sprints) if sprints else 0

        return QueryEnvelope(
            query,
            {
                "team": team_label(team),
                "averageVelocity": round_half_up(average, 2),
                "sprintsAnalyzed": len(sprints),
                "timePeriod": f"last {RECENT_SPRINTS} sprints",
            },
            f"Average velocity {team_scope(team)} is {round_half_up(average)} "
            f"story points per sprint (last {RECENT_SPRINTS} sprints).",
        )
    except Exception:
        logger.exception("Velocity query failed (team=%s)", team_name)
        return failure(query, "Failed to retrieve velocity data. Please try again later.")


async def handle_quarterly_trends(store, query: str, team_name: str = ALL_TEAMS, *, strict_team_filter: bool = False) -> QueryEnvelope:
    """Velocity across all teams with a nudge towards a narrower question."""
    envelope = await handle_velocity(store, query, ALL_TEAMS)
    if envelope.result is None:
        return envelope
    return dataclasses.replace(envelope, interpretation=TRENDS_INTERPRETATION)
