"""Shared fixtures: an in-memory stand-in for the metrics store plus sample data.

Sample data (ages are days before "now"):

    Frontend Team  3 members  sprints ending 1/15/29 days ago with 30/20/10 pts
        BUG      DONE         2 pts  created 10  resolved after 2 days
        FEATURE  DONE         5 pts  created 20  resolved after 4 days
        TASK     IN_PROGRESS  3 pts  created 5
    Backend Team   2 members  sprints ending 3/17 days ago with 6/5 pts
        BUG      TODO         1 pt   created 30
        BUG      DONE         3 pts  created 40  resolved after 6 days
        FEATURE  TODO         8 pts  created 120
    DevOps Team    0 members  one sprint ending 60 days ago with 100 pts, no tickets
"""

from datetime import timedelta

import pytest
from django.utils import timezone

from pulse.interpreter import QueryInterpreter


class FakeStore:
    """Implements the async lookups of ``pulse.store.MetricsStore`` over lists of dicts."""

    def __init__(self, teams=None, sprints=None, tickets=None):
        self.teams = teams or []
        self.sprints = sprints or []
        self.tickets = tickets or []
        self.calls = []

    def _team_name(self, team_id):
        return next(t["name"] for t in self.teams if t["id"] == team_id)

    async def find_team_by_name(self, name):
        self.calls.append(("find_team_by_name", name))
        for team in self.teams:
            if team["name"].lower() == name.strip().lower():
                return {"id": team["id"], "name": team["name"], "description": ""}
        return None

    async def list_recent_sprints(self, team_id=None, limit=5):
        self.calls.append(("list_recent_sprints", team_id, limit))
        sprints = [s for s in self.sprints if team_id is None or s["team_id"] == team_id]
        sprints.sort(key=lambda s: s["end_date"], reverse=True)
        return sprints[:limit]

    async def count_tickets(self, team_id=None, ticket_type=None, created_after=None):
        self.calls.append(("count_tickets", team_id, ticket_type))
        return sum(
            1 for t in self.tickets
            if (team_id is None or t["team_id"] == team_id)
            and (ticket_type is None or t["type"] == ticket_type)
            and (created_after is None or t["created_at"] >= created_after)
        )

    async def list_done_tickets(self, team_id=None, created_after=None):
        self.calls.append(("list_done_tickets", team_id))
        return [
            dict(t, team_name=self._team_name(t["team_id"]))
            for t in self.tickets
            if t["status"] == "DONE"
            and (team_id is None or t["team_id"] == team_id)
            and (created_after is None or t["created_at"] >= created_after)
        ]

    async def list_teams(self):
        self.calls.append(("list_teams",))
        rows = []
        for team in self.teams:
            tickets = [t for t in self.tickets if t["team_id"] == team["id"]]
            rows.append({
                "id": team["id"],
                "name": team["name"],
                "ticket_count": len(tickets),
                "done_count": sum(1 for t in tickets if t["status"] == "DONE"),
                "bug_count": sum(1 for t in tickets if t["type"] == "BUG"),
                "member_count": team["member_count"],
            })
        return rows

    async def sum_done_story_points(self, team_id=None, sprint_id=None):
        self.calls.append(("sum_done_story_points", team_id, sprint_id))
        return sum(
            t["story_points"] or 0 for t in self.tickets
            if t["status"] == "DONE"
            and (team_id is None or t["team_id"] == team_id)
            and (sprint_id is None or t.get("sprint_id") == sprint_id)
        )


def _ticket(team_id, ticket_type, status, points, age_days, resolve_after=None, sprint_id=None):
    now = timezone.now()
    created_at = now - timedelta(days=age_days)
    return {
        "team_id": team_id,
        "type": ticket_type,
        "status": status,
        "story_points": points,
        "created_at": created_at,
        "resolved_at": created_at + timedelta(days=resolve_after) if resolve_after is not None else None,
        "sprint_id": sprint_id,
        "assignee_name": None,
    }


def _sprint(sprint_id, team_id, ended_days_ago, done_points):
    end = timezone.now() - timedelta(days=ended_days_ago)
    return {
        "id": sprint_id,
        "team_id": team_id,
        "name": f"Sprint {sprint_id}",
        "start_date": end - timedelta(days=13),
        "end_date": end,
        "velocity": None,
        "done_points": done_points,
    }


@pytest.fixture
def store():
    return FakeStore(
        teams=[
            {"id": 1, "name": "Frontend Team", "member_count": 3},
            {"id": 2, "name": "Backend Team", "member_count": 2},
            {"id": 3, "name": "DevOps Team", "member_count": 0},
        ],
        sprints=[
            _sprint(11, 1, 1, 30),
            _sprint(12, 1, 15, 20),
            _sprint(13, 1, 29, 10),
            _sprint(21, 2, 3, 6),
            _sprint(22, 2, 17, 5),
            _sprint(31, 3, 60, 100),
        ],
        tickets=[
            _ticket(1, "BUG", "DONE", 2, 10, resolve_after=2, sprint_id=11),
            _ticket(1, "FEATURE", "DONE", 5, 20, resolve_after=4, sprint_id=12),
            _ticket(1, "TASK", "IN_PROGRESS", 3, 5, sprint_id=11),
            _ticket(2, "BUG", "TODO", 1, 30),
            _ticket(2, "BUG", "DONE", 3, 40, resolve_after=6, sprint_id=21),
            _ticket(2, "FEATURE", "TODO", 8, 120),
        ],
    )


@pytest.fixture
def empty_store():
    return FakeStore()


@pytest.fixture
def interpreter(store):
    return QueryInterpreter(store)
