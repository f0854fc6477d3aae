"""Handler registry: maps intent strings to handler coroutines."""

from pulse.handlers.sprints import handle_quarterly_trends, handle_velocity
from pulse.handlers.teams import handle_team_performance
from pulse.handlers.tickets import (
    handle_bug_count,
    handle_completed_tickets,
    handle_resolution_time,
)
from pulse.nlq import intents

HANDLER_REGISTRY: dict[str, callable] = {
    intents.VELOCITY: handle_velocity,
    intents.BUG_COUNT: handle_bug_count,
    intents.RESOLUTION_TIME: handle_resolution_time,
    intents.COMPLETED_TICKETS: handle_completed_tickets,
    intents.TEAM_PERFORMANCE: handle_team_performance,
    intents.QUARTERLY_TRENDS: handle_quarterly_trends,
}
