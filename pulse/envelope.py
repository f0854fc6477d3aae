"""The uniform response returned for every text query."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

UNCLASSIFIED_MESSAGE = (
    "I didn't understand your query. Try questions like: "
    "'Show velocity for Frontend team', "
    "'How many bugs in Q2?', or "
    "'Average resolution time last month'"
)

GENERIC_ERROR_MESSAGE = (
    "I encountered an error processing your request. "
    "Please try again or rephrase your question."
)


class Outcome(str, Enum):
    OK = "ok"
    NOT_FOUND = "not_found"
    NO_DATA = "no_data"
    UNCLASSIFIED = "unclassified"
    FAILURE = "failure"


@dataclass(frozen=True)
class QueryEnvelope:
    """Original query, structured payload (or ``None``) and a readable sentence.

    ``outcome`` tags which kind of answer this is; it is not part of the
    serialised envelope.
    """

    query: str
    result: Any
    interpretation: str
    outcome: Outcome = Outcome.OK

    def as_dict(self) -> dict:
        return {
            "query": self.query,
            "result": self.result,
            "interpretation": self.interpretation,
        }


def team_not_found(query: str, team_name: str) -> QueryEnvelope:
    return QueryEnvelope(
        query,
        None,
        f'Team "{team_name}" not found. Try one of our team names.',
        Outcome.NOT_FOUND,
    )


def no_data(query: str, message: str) -> QueryEnvelope:
    return QueryEnvelope(query, None, message, Outcome.NO_DATA)


def unclassified(query: str) -> QueryEnvelope:
    return QueryEnvelope(query, None, UNCLASSIFIED_MESSAGE, Outcome.UNCLASSIFIED)


def failure(query: str, message: str = GENERIC_ERROR_MESSAGE) -> QueryEnvelope:
    return QueryEnvelope(query, None, message, Outcome.FAILURE)
