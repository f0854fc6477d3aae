"""Team performance overview handler."""

from __future__ import annotations

import logging

from pulse.envelope import QueryEnvelope, failure
from pulse.nlq.intents import ALL_TEAMS
from pulse.numbers import percentage

logger = logging.getLogger("pulse.handlers.teams")


def build_performance(teams: list[dict]) -> list[dict]:
    """Turn per-team counts into the performance overview rows."""
    return [
        {
            "teamName": team["name"],
            "memberCount": team["member_count"],
            "totalTickets": team["ticket_count"],
            "completedTickets": team["done_count"],
            "completionRate": percentage(team["done_count"], team["ticket_count"]),
            "bugCount": team["bug_count"],
            "bugRate": percentage(team["bug_count"], team["ticket_count"]),
        }
        for team in teams
    ]


async def handle_team_performance(store, query: str, team_name: str = ALL_TEAMS, *, strict_team_filter: bool = False) -> QueryEnvelope:
    """Completion and bug rates for every team; never filtered."""
    try:
        teams = await store.list_teams()
    except Exception:
        logger.exception("Team performance query failed")
        return failure(query, "Failed to retrieve team performance data. Please try again later.")

    return QueryEnvelope(
        query,
        build_performance(teams),
        f"Performance overview for {len(teams)} team(s) showing completion rates, "
        "bug rates, and team sizes.",
    )
