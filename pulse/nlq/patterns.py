"""Ordered structural rules mapping normalised query text to an intent.

Rules are evaluated top to bottom and the first trigger that matches wins;
later rules are never tried once one has matched. Rules that accept a team
clause look for a ``for|of [the] [team] <name>`` clause after the trigger.
The name runs up to the next clause keyword or punctuation delimiter.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from pulse.nlq import intents

_CLAUSE_KEYWORD = re.compile(r"\b(?:for|of)\s+")
_CLAUSE_LEAD = re.compile(r"(?:the\s+)?(?:team\s+)?")
_CLAUSE_END = re.compile(r"[,;:?!.]")

_ALL_TEAM_TOKENS = {"all", "all teams", "every team", "each team"}

# Clauses made only of these words name a time period, not a team.
_PERIOD_WORDS = {
    "q1", "q2", "q3", "q4", "quarter", "month", "week", "year", "sprint", "day",
    "last", "this", "next", "past", "current", "previous", "the",
}


@dataclass(frozen=True)
class Rule:
    intent: str
    trigger: re.Pattern
    captures_team: bool = True


RULES: tuple[Rule, ...] = (
    Rule(
        intents.VELOCITY,
        re.compile(r"(show|display|get|what is|what are|view).*?(velocity|story points|sprint)"),
    ),
    Rule(
        intents.BUG_COUNT,
        re.compile(r"(how many|count|number of|total).*?(bugs|defects|issues)"),
    ),
    Rule(
        intents.RESOLUTION_TIME,
        re.compile(r"(average|mean|median).*?(resolution|fix|close).*?(time|duration)"),
    ),
    Rule(
        intents.COMPLETED_TICKETS,
        re.compile(r"(completed|done|finished).*?(tickets|tasks|items)"),
    ),
    Rule(
        intents.TEAM_PERFORMANCE,
        re.compile(r"(team|squad|group).*?(performance|metrics|stats|statistics)"),
        captures_team=False,
    ),
    Rule(
        intents.QUARTERLY_TRENDS,
        re.compile(r"(q1|q2|q3|q4|quarter|trend|period)"),
        captures_team=False,
    ),
)


def normalize_team(raw: str | None) -> str:
    """Trim a captured team fragment; empty or "all teams" style tokens mean all."""
    team = " ".join((raw or "").split())
    if not team or team in _ALL_TEAM_TOKENS:
        return intents.ALL_TEAMS
    return team


def is_period(fragment: str) -> bool:
    """True when every word of *fragment* is a time-period word or a number."""
    words = fragment.split()
    return bool(words) and all(
        word.isdigit() or word in _PERIOD_WORDS or word.rstrip("s") in _PERIOD_WORDS
        for word in words
    )


def extract_team(remainder: str) -> str:
    """Pull the team name out of the text following a rule's trigger.

    Clauses are tried from last to first. A clause that names a time period
    ("for last month", "of q2") is skipped; if no clause names a team the
    query covers all teams.
    """
    keywords = list(_CLAUSE_KEYWORD.finditer(remainder))
    for index in range(len(keywords) - 1, -1, -1):
        start = keywords[index].end()
        end = keywords[index + 1].start() if index + 1 < len(keywords) else len(remainder)
        clause = _CLAUSE_END.split(remainder[start:end], maxsplit=1)[0]
        clause = clause[_CLAUSE_LEAD.match(clause).end():]
        if not clause.strip() or is_period(clause):
            continue
        return normalize_team(clause)
    return intents.ALL_TEAMS


def match_pattern(text: str, rules: tuple[Rule, ...] = RULES) -> dict | None:
    """Return the first rule matching normalised *text*.

    Args:
        text: Lower-cased, trimmed query text.
        rules: Ordered rules to evaluate.

    Returns:
        ``{"intent": str, "team": str, "rule": int}`` for the first matching
        rule (``rule`` is its 1-based position), or ``None``.
    """
    for position, rule in enumerate(rules, start=1):
        match = rule.trigger.search(text)
        if match is None:
            continue
        team = extract_team(text[match.end():]) if rule.captures_team else intents.ALL_TEAMS
        return {"intent": rule.intent, "team": team, "rule": position}
    return None
