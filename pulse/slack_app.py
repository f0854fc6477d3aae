"""Slack Bolt application answering metric questions."""

from django.conf import settings
from slack_bolt import App

from pulse.router import route

app = App(
    token=settings.SLACK_BOT_TOKEN,
    signing_secret=settings.SLACK_SIGNING_SECRET,
    process_before_response=True,
)


# ---------------------------------------------------------------------------
# Slash command (lazy listener pattern)
# ---------------------------------------------------------------------------


def ack_metrics(ack):
    ack()


def lazy_metrics(respond, command):
    route(command.get("text", ""), respond)


app.command("/metrics")(ack=ack_metrics, lazy=[lazy_metrics])


# ---------------------------------------------------------------------------
# Natural-language messages
# ---------------------------------------------------------------------------


def ack_dm(ack):
    ack()


def lazy_dm(event, say):
    """Handle direct messages to the bot."""
    # Ignore bot messages, message_changed events, etc.
    if event.get("subtype"):
        return
    route(event.get("text", ""), say)


app.event("message")(ack=ack_dm, lazy=[lazy_dm])


def ack_mention(ack):
    ack()


def lazy_mention(event, say):
    """Handle @mentions of the bot in channels."""
    route(event.get("text", ""), say)


app.event("app_mention")(ack=ack_mention, lazy=[lazy_mention])
