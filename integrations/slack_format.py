"""Slack Block Kit message formatting helpers."""

from __future__ import annotations

from datetime import datetime, timezone

FIELD_LABELS = {
    "team": "Team",
    "averageVelocity": "Avg velocity",
    "sprintsAnalyzed": "Sprints analyzed",
    "timePeriod": "Period",
    "totalTickets": "Total tickets",
    "bugTickets": "Bug tickets",
    "bugRate": "Bug rate (%)",
    "averageResolutionTime": "Avg resolution",
    "ticketsAnalyzed": "Tickets analyzed",
    "unit": "Unit",
    "totalCompleted": "Completed",
}

# Block Kit allows at most 10 fields per section.
MAX_FIELDS = 10


def _footer() -> dict:
    now = datetime.now(timezone.utc).strftime("%Y-%m-%d %H:%M UTC")
    return {
        "type": "context",
        "elements": [
            {"type": "mrkdwn", "text": f":bar_chart: Team Pulse  |  {now}"},
        ],
    }


def _format_fields(result: dict) -> list[dict]:
    fields = []
    for key, value in result.items():
        if isinstance(value, (dict, list)):
            continue
        label = FIELD_LABELS.get(key, key)
        fields.append({"type": "mrkdwn", "text": f"*{label}:*\n{value}"})
    return fields[:MAX_FIELDS]


def _format_team_breakdown(by_team: dict) -> str:
    lines = [
        f"• *{name}*: {stats['completed']} tickets, {stats['storyPoints']} pts"
        for name, stats in sorted(by_team.items())
    ]
    return "\n".join(lines) if lines else "No completed tickets yet."


def format_team_performance(rows: list[dict]) -> list[dict]:
    """Format team performance rows as one section per team.

    Args:
        rows: Team performance entries.

    Returns:
        A list of Block Kit block dicts.
    """
    blocks = []
    for row in rows:
        blocks.append({
            "type": "section",
            "text": {
                "type": "mrkdwn",
                "text": (
                    f"*{row['teamName']}*  ({row['memberCount']} members)\n"
                    f":white_check_mark: {row['completedTickets']}/{row['totalTickets']} done "
                    f"({row['completionRate']}%)  "
                    f":beetle: {row['bugCount']} bugs ({row['bugRate']}%)"
                ),
            },
        })
    return blocks


def format_error_message(error: str, query: str | None = None) -> list[dict]:
    """Render a warning for a question that produced no result.

    When *query* is given it is echoed in a context block underneath.
    """
    blocks = [{"type": "section", "text": {"type": "mrkdwn", "text": f":warning: {error}"}}]
    if query:
        blocks.append({
            "type": "context",
            "elements": [{"type": "mrkdwn", "text": f"You asked: _{query}_"}],
        })
    return blocks


def format_envelope(envelope: dict) -> list[dict]:
    """Format a text-query envelope as Block Kit blocks.

    Args:
        envelope: A ``{query, result, interpretation}`` dict.

    Returns:
        A list of Block Kit block dicts. Envelopes without a result render
        as a warning section followed by the echoed question.
    """
    result = envelope.get("result")
    if result is None:
        return format_error_message(envelope.get("interpretation", ""), envelope.get("query"))

    blocks: list[dict] = [
        {
            "type": "header",
            "text": {"type": "plain_text", "text": ":bar_chart: Team Metrics", "emoji": True},
        },
        {
            "type": "section",
            "text": {"type": "mrkdwn", "text": envelope.get("interpretation", "")},
        },
    ]

    if isinstance(result, list):
        blocks.extend(format_team_performance(result))
    elif isinstance(result, dict):
        fields = _format_fields(result)
        if fields:
            blocks.append({"type": "section", "fields": fields})
        if "byTeam" in result:
            blocks.append({
                "type": "section",
                "text": {"type": "mrkdwn", "text": _format_team_breakdown(result["byTeam"])},
            })

    blocks.append({"type": "divider"})
    blocks.append(_footer())
    return blocks
