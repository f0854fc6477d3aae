"""Natural-language query interpreter: classifies a question and dispatches it.

The interpreter never raises: every failure is turned into a
:class:`~pulse.envelope.QueryEnvelope` whose ``result`` is ``None``.
"""

from __future__ import annotations

import logging

from django.conf import settings

from pulse.envelope import QueryEnvelope, failure, unclassified
from pulse.handlers import HANDLER_REGISTRY
from pulse.nlq import classify_intent
from pulse.nlq.intents import ALL_TEAMS
from pulse.store import MetricsStore

logger = logging.getLogger("pulse.interpreter")

MAX_QUERY_LENGTH = 500


class QueryInterpreter:
    """Answer free-text metric questions against an injected store.

    Args:
        store: Object exposing the async lookups of
            :class:`~pulse.store.MetricsStore`.
        strict_team_filter: Scope resolution-time and completed-ticket
            answers to the requested team.
        handlers: Intent-to-handler mapping, defaults to the registry.
    """

    def __init__(self, store, *, strict_team_filter: bool = False, handlers: dict | None = None) -> None:
        self.store = store
        self.strict_team_filter = strict_team_filter
        self.handlers = HANDLER_REGISTRY if handlers is None else handlers

    async def process_text_query(self, query: str) -> QueryEnvelope:
        try:
            classified = classify_intent(query)
            intent = classified["intent"]

            handler = self.handlers.get(intent)
            if handler is None:
                return unclassified(query)

            team_name = classified["params"].get("team", ALL_TEAMS)
            logger.info(
                "Text query %r -> %s (team=%s, via %s)",
                query, intent, team_name, classified["source"],
            )
            return await handler(
                self.store, query, team_name, strict_team_filter=self.strict_team_filter,
            )
        except Exception:
            logger.exception("Error processing text query: %r", query)
            return failure(query)


def get_interpreter() -> QueryInterpreter:
    """Build an interpreter over the ORM store using project settings."""
    return QueryInterpreter(
        MetricsStore(),
        strict_team_filter=getattr(settings, "PULSE_STRICT_TEAM_FILTER", False),
    )


async def process_text_query(query: str) -> dict:
    """Answer *query* and return the ``{query, result, interpretation}`` dict."""
    envelope = await get_interpreter().process_text_query(query)
    return envelope.as_dict()
