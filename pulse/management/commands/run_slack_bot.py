"""Management command to serve metric questions on Slack over Socket Mode.

    python manage.py run_slack_bot
    python manage.py run_slack_bot --log-level DEBUG
"""

import logging

from django.conf import settings
from django.core.management.base import BaseCommand, CommandError
from slack_bolt.adapter.socket_mode import SocketModeHandler

logger = logging.getLogger("pulse.slack")

REQUIRED_SETTINGS = ("SLACK_BOT_TOKEN", "SLACK_SIGNING_SECRET", "SLACK_APP_TOKEN")


class Command(BaseCommand):
    help = "Answer /metrics commands, DMs and @mentions on Slack via Socket Mode"

    def add_arguments(self, parser):
        parser.add_argument(
            "--log-level",
            default=None,
            choices=["DEBUG", "INFO", "WARNING", "ERROR"],
            help="Override PULSE_LOG_LEVEL for the pulse loggers.",
        )

    def handle(self, *args, **options):
        missing = [name for name in REQUIRED_SETTINGS if not getattr(settings, name, "")]
        if missing:
            raise CommandError(f"Slack is not configured; set {', '.join(missing)}.")

        if options["log_level"]:
            logging.getLogger("pulse").setLevel(options["log_level"])

        # The Bolt app verifies its token on construction, so import it only
        # once the settings are known to be present.
        from pulse.slack_app import app

        logger.info("Team Pulse listening on Slack (Socket Mode)")
        SocketModeHandler(app, settings.SLACK_APP_TOKEN).start()
