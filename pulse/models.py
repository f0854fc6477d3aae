"""Data models for teams, members, sprints, and tickets."""

from django.db import models
from django.utils import timezone


class TicketType(models.TextChoices):
    FEATURE = "FEATURE", "Feature"
    BUG = "BUG", "Bug"
    TASK = "TASK", "Task"
    EPIC = "EPIC", "Epic"


class TicketStatus(models.TextChoices):
    TODO = "TODO", "To Do"
    IN_PROGRESS = "IN_PROGRESS", "In Progress"
    IN_REVIEW = "IN_REVIEW", "In Review"
    TESTING = "TESTING", "Testing"
    DONE = "DONE", "Done"


class Priority(models.TextChoices):
    LOW = "LOW", "Low"
    MEDIUM = "MEDIUM", "Medium"
    HIGH = "HIGH", "High"
    CRITICAL = "CRITICAL", "Critical"


class Team(models.Model):
    """A delivery team. Names are unique and looked up case-insensitively."""

    name = models.CharField(max_length=100, unique=True)
    description = models.TextField(blank=True, default="")
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "teams"
        ordering = ["name"]

    def __str__(self) -> str:
        return self.name


class Member(models.Model):
    """A developer belonging to exactly one team."""

    team = models.ForeignKey(Team, related_name="members", on_delete=models.PROTECT)
    name = models.CharField(max_length=100)
    email = models.EmailField(unique=True)
    role = models.CharField(max_length=100, blank=True, null=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "members"

    def __str__(self) -> str:
        return f"{self.name} ({self.email})"


class Sprint(models.Model):
    team = models.ForeignKey(Team, related_name="sprints", on_delete=models.PROTECT)
    name = models.CharField(max_length=100)
    start_date = models.DateTimeField()
    end_date = models.DateTimeField()
    # Precomputed by pulse.tasks.refresh_sprint_velocity
    velocity = models.IntegerField(blank=True, null=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "sprints"
        ordering = ["-end_date"]

    def __str__(self) -> str:
        return f"{self.name} ({self.team_id})"


class Ticket(models.Model):
    """A unit of work. ``resolved_at`` is set if and only if the ticket is DONE."""

    team = models.ForeignKey(Team, related_name="tickets", on_delete=models.PROTECT)
    assignee = models.ForeignKey(
        Member, related_name="tickets", blank=True, null=True, on_delete=models.SET_NULL,
    )
    sprint = models.ForeignKey(
        Sprint, related_name="tickets", blank=True, null=True, on_delete=models.SET_NULL,
    )
    title = models.CharField(max_length=255)
    description = models.TextField(blank=True, default="")
    type = models.CharField(max_length=10, choices=TicketType.choices, default=TicketType.FEATURE)
    status = models.CharField(max_length=12, choices=TicketStatus.choices, default=TicketStatus.TODO)
    priority = models.CharField(max_length=10, choices=Priority.choices, default=Priority.MEDIUM)
    story_points = models.IntegerField(blank=True, null=True)
    estimated_hours = models.FloatField(blank=True, null=True)
    actual_hours = models.FloatField(blank=True, null=True)
    created_at = models.DateTimeField(default=timezone.now)
    updated_at = models.DateTimeField(auto_now=True)
    resolved_at = models.DateTimeField(blank=True, null=True)

    class Meta:
        db_table = "tickets"
        indexes = [
            models.Index(fields=["team", "created_at"], name="tickets_team_created_idx"),
            models.Index(fields=["status"], name="tickets_status_idx"),
        ]

    def __str__(self) -> str:
        return self.title

    def save(self, *args, **kwargs):
        if self.status == TicketStatus.DONE:
            if self.resolved_at is None:
                self.resolved_at = timezone.now()
        else:
            self.resolved_at = None
        super().save(*args, **kwargs)
