"""Intent classification: structural rules first, keyword scoring as fallback."""

from __future__ import annotations

import logging

from pulse.nlq import intents
from pulse.nlq.keywords import CATEGORY_INTENTS, classify_by_keywords
from pulse.nlq.patterns import match_pattern

logger = logging.getLogger("pulse.nlq.classifier")


def normalize_query(message: str) -> str:
    return message.lower().strip()


def classify_intent(message: str) -> dict:
    """Classify a free-text question into an intent with its team parameter.

    Args:
        message: The raw question text.

    Returns:
        A dict with ``"intent"`` (str), ``"params"`` (dict with ``"team"``)
        and ``"source"`` (``"pattern"``, ``"keyword"`` or ``None``) keys.
        Returns the ``"unknown"`` intent when neither rules nor keywords match.
    """
    text = normalize_query(message)

    matched = match_pattern(text)
    if matched is not None:
        logger.debug("Rule %d matched %r -> %s", matched["rule"], text, matched["intent"])
        return {
            "intent": matched["intent"],
            "params": {"team": matched["team"]},
            "source": "pattern",
        }

    category = classify_by_keywords(text)
    if category is not None:
        logger.debug("Keyword category %s chosen for %r", category, text)
        return {
            "intent": CATEGORY_INTENTS[category],
            "params": {"team": intents.ALL_TEAMS},
            "source": "keyword",
        }

    logger.info("Could not classify query: %r", text)
    return {"intent": intents.UNKNOWN, "params": {}, "source": None}
