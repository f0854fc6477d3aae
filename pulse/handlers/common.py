"""Team resolution shared by every intent handler."""

from __future__ import annotations

from pulse.envelope import QueryEnvelope, team_not_found
from pulse.nlq.intents import ALL_TEAMS

ALL_TEAMS_LABEL = "All Teams"


async def resolve_team(store, query: str, team_name: str) -> tuple[dict | None, QueryEnvelope | None]:
    """Look up the team named in a query.

    Returns:
        ``(None, None)`` for the all-teams token, ``(team, None)`` when the
        team exists, or ``(None, envelope)`` with a not-found envelope that
        the handler must return as-is.
    """
    if team_name == ALL_TEAMS:
        return None, None

    team = await store.find_team_by_name(team_name)
    if team is None:
        return None, team_not_found(query, team_name)
    return team, None


def team_label(team: dict | None) -> str:
    return ALL_TEAMS_LABEL if team is None else team["name"]


def team_scope(team: dict | None) -> str:
    return "across all teams" if team is None else f"for {team['name']}"
