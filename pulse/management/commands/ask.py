"""Management command to ask a metrics question from the terminal.

    python manage.py ask "how many bugs for backend team"
    python manage.py ask            # interactive, 'exit' to quit
"""

import json

from asgiref.sync import async_to_sync
from django.core.management.base import BaseCommand

from pulse.interpreter import process_text_query


class Command(BaseCommand):
    help = "Answer a natural-language metrics question and print the result envelope."

    def add_arguments(self, parser):
        parser.add_argument("question", nargs="*", help="Question text; omit for an interactive prompt.")

    def handle(self, *args, **options):
        question = " ".join(options["question"]).strip()
        if question:
            self._answer(question)
            return

        self.stdout.write("Team Pulse (type 'exit' to quit)\n")
        while True:
            try:
                question = input("You: ").strip()
            except EOFError:
                break
            if question.lower() in ("exit", "quit"):
                break
            if question:
                self._answer(question)

    def _answer(self, question: str) -> None:
        envelope = async_to_sync(process_text_query)(question)
        self.stdout.write(json.dumps(envelope, indent=2, default=str))
