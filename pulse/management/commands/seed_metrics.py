"""Management command to seed demo teams, members, sprints, and tickets.

Creates three teams with three members and five two-week sprints each, then
a batch of randomised tickets per team created over the last 60 days.
"""

import logging
import random
from datetime import timedelta

from django.core.management.base import BaseCommand
from django.db import transaction
from django.utils import timezone

from pulse.models import Member, Priority, Sprint, Team, Ticket, TicketStatus, TicketType

logger = logging.getLogger("pulse.management.seed_metrics")

TEAMS = [
    ("Frontend Team", "Responsible for UI/UX development"),
    ("Backend Team", "API and server-side development"),
    ("DevOps Team", "Infrastructure and deployment"),
]

MEMBER_ROLES = [
    ("Developer 1", "dev1", "Senior Developer"),
    ("Developer 2", "dev2", "Developer"),
    ("Lead", "lead", "Team Lead"),
]

SPRINTS_PER_TEAM = 5
SPRINT_DAYS = 14

TICKET_TYPES = [TicketType.FEATURE, TicketType.BUG, TicketType.TASK]
TICKET_STATUSES = [TicketStatus.TODO, TicketStatus.IN_PROGRESS, TicketStatus.IN_REVIEW, TicketStatus.DONE]
PRIORITIES = [Priority.LOW, Priority.MEDIUM, Priority.HIGH, Priority.CRITICAL]


class Command(BaseCommand):
    help = "Seed the database with demo teams, members, sprints, and tickets."

    def add_arguments(self, parser):
        parser.add_argument("--tickets-per-team", type=int, default=50)
        parser.add_argument("--seed", type=int, default=None, help="Random seed for reproducible data.")
        parser.add_argument("--flush", action="store_true", help="Delete existing metrics data first.")

    def handle(self, *args, **options):
        rng = random.Random(options["seed"])

        with transaction.atomic():
            if options["flush"]:
                Ticket.objects.all().delete()
                Sprint.objects.all().delete()
                Member.objects.all().delete()
                Team.objects.all().delete()
                self.stdout.write("Flushed existing metrics data.")

            if Team.objects.filter(name__in=[name for name, _ in TEAMS]).exists():
                self.stdout.write("Demo teams already exist — use --flush to reseed.")
                return

            now = timezone.now()
            created = 0
            for name, description in TEAMS:
                team = Team.objects.create(name=name, description=description)
                members = self._create_members(team)
                sprints = self._create_sprints(team, now, rng)
                created += self._create_tickets(
                    team, members, sprints, now, rng, options["tickets_per_team"],
                )

        logger.info("Seeded %d teams and %d tickets", len(TEAMS), created)
        self.stdout.write(self.style.SUCCESS(f"Seeded {len(TEAMS)} teams and {created} tickets."))

    def _create_members(self, team: Team) -> list[Member]:
        prefix = team.name.split(" ")[0]
        slug = team.name.lower().replace(" ", "-")
        return [
            Member.objects.create(
                team=team,
                name=f"{prefix} {label}",
                email=f"{handle}-{slug}@company.com",
                role=role,
            )
            for label, handle, role in MEMBER_ROLES
        ]

    def _create_sprints(self, team: Team, now, rng: random.Random) -> list[Sprint]:
        sprints = []
        for i in range(SPRINTS_PER_TEAM):
            start = now - timedelta(days=(i + 1) * SPRINT_DAYS)
            sprints.append(Sprint.objects.create(
                team=team,
                name=f"Sprint {SPRINTS_PER_TEAM - i}",
                start_date=start,
                end_date=start + timedelta(days=SPRINT_DAYS - 1),
                velocity=rng.randint(20, 49),
            ))
        return sprints

    def _create_tickets(self, team, members, sprints, now, rng: random.Random, count: int) -> int:
        for i in range(count):
            ticket_type = rng.choice(TICKET_TYPES)
            status = rng.choice(TICKET_STATUSES)
            created_at = now - timedelta(days=rng.randrange(60))
            is_done = status == TicketStatus.DONE
            Ticket.objects.create(
                team=team,
                assignee=rng.choice(members),
                sprint=rng.choice(sprints),
                title=f"{ticket_type.label} - {team.name} Task {i + 1}",
                description=f"Description for {ticket_type.label.lower()} ticket in {team.name}",
                type=ticket_type,
                status=status,
                priority=rng.choice(PRIORITIES),
                story_points=rng.randint(1, 8),
                estimated_hours=rng.randint(2, 17),
                actual_hours=rng.randint(1, 20) if is_done else None,
                created_at=created_at,
                resolved_at=created_at + timedelta(days=rng.randint(1, 10)) if is_done else None,
            )
        return count
