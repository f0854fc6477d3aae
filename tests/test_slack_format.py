from integrations.slack_format import (
    MAX_FIELDS,
    format_envelope,
    format_error_message,
    format_team_performance,
)


def _texts(blocks):
    return [block["text"]["text"] for block in blocks if "text" in block]


def test_null_result_renders_warning():
    blocks = format_envelope({"query": "xyz", "result": None, "interpretation": "Try again."})
    assert blocks == format_error_message("Try again.", "xyz")
    assert blocks[0]["text"]["text"] == ":warning: Try again."
    assert blocks[1]["elements"][0]["text"] == "You asked: _xyz_"


def test_error_message_without_query_is_one_section():
    assert format_error_message("boom") == [
        {"type": "section", "text": {"type": "mrkdwn", "text": ":warning: boom"}},
    ]


def test_scalar_result_renders_fields():
    blocks = format_envelope({
        "query": "q",
        "result": {"team": "Frontend Team", "averageVelocity": 20.0, "sprintsAnalyzed": 3},
        "interpretation": "Average velocity for Frontend Team is 20 story points per sprint.",
    })
    assert [block["type"] for block in blocks] == ["header", "section", "section", "divider", "context"]
    fields = [field["text"] for field in blocks[2]["fields"]]
    assert fields == ["*Team:*\nFrontend Team", "*Avg velocity:*\n20.0", "*Sprints analyzed:*\n3"]


def test_completed_tickets_renders_team_breakdown():
    blocks = format_envelope({
        "query": "q",
        "result": {
            "totalCompleted": 3,
            "byTeam": {
                "Frontend Team": {"completed": 2, "storyPoints": 7},
                "Backend Team": {"completed": 1, "storyPoints": 3},
            },
        },
        "interpretation": "Found 3 completed tickets across 2 team(s).",
    })
    breakdown = blocks[3]["text"]["text"]
    assert breakdown.splitlines() == [
        "• *Backend Team*: 1 tickets, 3 pts",
        "• *Frontend Team*: 2 tickets, 7 pts",
    ]


def test_performance_rows_render_one_section_each():
    rows = [
        {"teamName": "Frontend Team", "memberCount": 3, "totalTickets": 3, "completedTickets": 2,
         "completionRate": 67, "bugCount": 1, "bugRate": 33},
        {"teamName": "DevOps Team", "memberCount": 0, "totalTickets": 0, "completedTickets": 0,
         "completionRate": 0, "bugCount": 0, "bugRate": 0},
    ]
    blocks = format_envelope({"query": "q", "result": rows, "interpretation": "Performance overview"})
    assert blocks[2:4] == format_team_performance(rows)
    assert "2/3 done (67%)" in _texts(blocks)[2]


def test_fields_are_capped():
    result = {f"k{i}": i for i in range(MAX_FIELDS + 5)}
    blocks = format_envelope({"query": "q", "result": result, "interpretation": "many"})
    assert len(blocks[2]["fields"]) == MAX_FIELDS
