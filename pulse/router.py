"""Chat dispatch: answers a natural-language message with metric blocks."""

from __future__ import annotations

import logging
import re

from asgiref.sync import async_to_sync

from integrations.slack_format import format_envelope, format_error_message
from pulse.interpreter import MAX_QUERY_LENGTH, process_text_query

logger = logging.getLogger("pulse.router")

_MENTION_RE = re.compile(r"<@[A-Z0-9]+>")

HELP_TEXT = (
    ":bar_chart: *Hi, I'm Team Pulse!* Ask me about delivery metrics:\n\n"
    "- *Velocity* — \"show velocity for Frontend Team\"\n"
    "- *Bugs* — \"how many bugs for Backend Team?\"\n"
    "- *Resolution time* — \"average resolution time\"\n"
    "- *Completed work* — \"completed tickets\"\n"
    "- *Team performance* — \"team performance stats\"\n"
    "- *Trends* — \"Q1 trends\"\n\n"
    "Just ask naturally and I'll figure out the rest!"
)


def clean_message(text: str) -> str:
    """Strip bot mention markup (e.g. ``<@U12345>``) and surrounding whitespace."""
    return _MENTION_RE.sub("", text or "").strip()


def route(message: str, say) -> None:
    """Answer a message through the text-query interpreter.

    Args:
        message: The raw message text, possibly containing mention markup.
        say: The Slack ``say``/``respond`` callable for responding.
    """
    clean = clean_message(message)
    if not clean:
        say(text=HELP_TEXT)
        return
    if len(clean) > MAX_QUERY_LENGTH:
        say(blocks=format_error_message(
            f"That question is too long. Please keep it under {MAX_QUERY_LENGTH} characters.",
        ))
        return

    try:
        envelope = async_to_sync(process_text_query)(clean)
    except Exception:
        logger.exception("Text query failed for message: %s", clean)
        say(blocks=format_error_message("Something went wrong. Please try again in a moment."))
        return

    say(blocks=format_envelope(envelope), text=envelope["interpretation"])
