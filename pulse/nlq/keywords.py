"""Keyword scoring used when no structural rule matches."""

from __future__ import annotations

from pulse.nlq import intents

# Declaration order doubles as the tie-break order.
KEYWORD_CATEGORIES: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("velocity", ("velocity", "story point", "sprint", "throughput", "capacity")),
    ("bugs", ("bug", "defect", "error", "issue", "failure")),
    ("resolution", ("resolution", "fix", "close", "time", "duration")),
    ("trends", ("trend", "q1", "q2", "q3", "q4", "quarter", "period")),
    ("performance", ("performance", "metric", "statistic", "kpi")),
)

CATEGORY_INTENTS = {
    "velocity": intents.VELOCITY,
    "bugs": intents.BUG_COUNT,
    "resolution": intents.RESOLUTION_TIME,
    "trends": intents.QUARTERLY_TRENDS,
    "performance": intents.TEAM_PERFORMANCE,
}


def score_keywords(text: str) -> list[tuple[str, int]]:
    """Count, per category, how many of its keywords occur in *text*."""
    return [
        (category, sum(1 for keyword in keywords if keyword in text))
        for category, keywords in KEYWORD_CATEGORIES
    ]


def classify_by_keywords(text: str) -> str | None:
    """Return the best-scoring category for *text*, or ``None`` if nothing scores.

    Only a strictly higher score displaces the current best, so ties resolve
    to the category declared first.
    """
    best_category, best_score = None, 0
    for category, score in score_keywords(text):
        if score > best_score:
            best_category, best_score = category, score
    return best_category
