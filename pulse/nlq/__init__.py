"""Rule-based query understanding: public API for intent classification."""

from pulse.nlq.classifier import classify_intent, normalize_query
from pulse.nlq.keywords import classify_by_keywords
from pulse.nlq.patterns import match_pattern

__all__ = ["classify_by_keywords", "classify_intent", "match_pattern", "normalize_query"]
