"""Intent names shared by the pattern rules, keyword table and handler registry."""

VELOCITY = "velocity"
BUG_COUNT = "bug_count"
RESOLUTION_TIME = "resolution_time"
COMPLETED_TICKETS = "completed_tickets"
TEAM_PERFORMANCE = "team_performance"
QUARTERLY_TRENDS = "quarterly_trends"
UNKNOWN = "unknown"

VALID_INTENTS = {
    VELOCITY, BUG_COUNT, RESOLUTION_TIME, COMPLETED_TICKETS,
    TEAM_PERFORMANCE, QUARTERLY_TRENDS, UNKNOWN,
}

# Team token meaning "do not filter by team".
ALL_TEAMS = "all"
